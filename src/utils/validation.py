"""Validation of the query parameters shared by listings and reports.

Validators never raise. Each one returns ``None`` (or the parsed value) when
the input is acceptable and an ``Invalid`` describing the offending fields
otherwise, leaving it to the route to turn that into a 400 response.
"""

import re
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict


DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class FieldError(BaseModel):
    field: str
    message: str


class Invalid(BaseModel):
    errors: List[FieldError]

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]


class AggregationWindow(BaseModel):
    """Inclusive date interval a report is scoped to."""

    model_config = ConfigDict(frozen=True)

    date_from: date
    date_to: date

    @property
    def is_empty(self) -> bool:
        # A window whose start postdates its end is valid but matches nothing
        return self.date_from > self.date_to

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.date_from, time.min)

    @property
    def ends_before(self) -> Optional[datetime]:
        # Exclusive upper bound so every timestamp on date_to is included.
        # None when date_to is the last representable day.
        if self.date_to == date.max:
            return None
        return datetime.combine(self.date_to + timedelta(days=1), time.min)


def _invalid(field: str, message: str) -> Invalid:
    return Invalid(errors=[FieldError(field=field, message=message)])


def merge_invalid(*outcomes) -> Optional[Invalid]:
    """Combine the ``Invalid`` outcomes among ``outcomes`` into one, or return None."""
    errors = []
    for outcome in outcomes:
        if isinstance(outcome, Invalid):
            errors.extend(outcome.errors)

    if not errors:
        return None
    return Invalid(errors=errors)


def validate_bounded_limit(limit: int, minimum: int = 1, maximum: Optional[int] = None) -> Optional[Invalid]:
    if limit < minimum:
        return _invalid("limit", f"limit must be greater than or equal to {minimum}")
    if maximum is not None and limit > maximum:
        return _invalid("limit", f"limit must be between {minimum} and {maximum}")
    return None


def validate_pagination(page: int, limit: int) -> Optional[Invalid]:
    """Both ``page`` and ``limit`` must be at least 1; neither has an upper bound."""
    page_outcome = None
    if page < 1:
        page_outcome = _invalid("page", "page must be greater than or equal to 1")

    return merge_invalid(page_outcome, validate_bounded_limit(limit))


def parse_date(raw: Optional[str], field: str) -> Union[date, Invalid]:
    """Parse a strict ``YYYY-MM-DD`` calendar date."""
    if raw is None or not _DATE_PATTERN.fullmatch(raw):
        return _invalid(field, f"{field} must be a date in YYYY-MM-DD format")

    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError:
        # Right shape, impossible date (e.g. 2024-02-30)
        return _invalid(field, f"{field} is not a valid calendar date")


def validate_date_range(from_raw: Optional[str], to_raw: Optional[str]) -> Union[AggregationWindow, Invalid]:
    date_from = parse_date(from_raw, "from")
    date_to = parse_date(to_raw, "to")

    invalid = merge_invalid(date_from, date_to)
    if invalid is not None:
        return invalid

    return AggregationWindow(date_from=date_from, date_to=date_to)
