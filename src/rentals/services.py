import logging
from typing import List, Optional, Union
from src.rentals.repository import RentalRepository
from src.rentals.schemas import RentalInfo, MonthlyRentalCount, MonthlyRevenue
from src.utils.pagination import PaginatedResponse
from src.utils.validation import Invalid, validate_pagination, validate_date_range

logger = logging.getLogger(__name__)


def format_month(year, month) -> str:
    # EXTRACT comes back as numeric on Postgres and as an integer on SQLite
    return f"{int(year):04d}-{int(month):02d}"


def to_rental_info(row) -> RentalInfo:
    return RentalInfo(
        id=row.rental_id,
        rental_date=row.rental_date,
        return_date=row.return_date,
        customer_id=row.customer_id,
        customer_name=f"{row.first_name} {row.last_name}",
        film_id=row.film_id,
        title=row.title,
        amount=row.amount,
    )


class RentalServices:

    def __init__(self, repository: RentalRepository):
        self.repository = repository

    async def get_rental(self, rental_id: int) -> Optional[RentalInfo]:
        row = await self.repository.get_rental(rental_id)

        if row is None:
            return None

        return to_rental_info(row)

    async def get_rentals(
            self,
            page: int,
            limit: int,
            customer_id: Optional[int] = None,
            film_id: Optional[int] = None) -> Union[PaginatedResponse[RentalInfo], Invalid]:
        invalid = validate_pagination(page, limit)
        if invalid is not None:
            return invalid

        rows, total = await self.repository.get_rentals(page, limit, customer_id, film_id)

        return PaginatedResponse[RentalInfo](
            items=[to_rental_info(row) for row in rows],
            current_page=page,
            limit=limit,
            total=total
        )

    async def get_monthly_rentals_summary(self, from_raw: str, to_raw: str) -> Union[List[MonthlyRentalCount], Invalid]:
        """Rentals per calendar month in the window, oldest month first.

        Months without rentals are left out rather than reported as zero.
        """
        window = validate_date_range(from_raw, to_raw)
        if isinstance(window, Invalid):
            return window

        if window.is_empty:
            logger.debug("Monthly summary window %s..%s is empty", window.date_from, window.date_to)
            return []

        rows = await self.repository.get_monthly_rental_counts(window)

        return [
            MonthlyRentalCount(
                month=format_month(row.year, row.month),
                rental_count=row.rental_count,
                returned_count=row.returned_count,
                open_count=row.rental_count - row.returned_count
            )
            for row in rows
        ]

    async def get_monthly_rental_revenue(self, from_raw: str, to_raw: str) -> Union[List[MonthlyRevenue], Invalid]:
        """Payment totals per calendar month of the rental date, oldest month first."""
        window = validate_date_range(from_raw, to_raw)
        if isinstance(window, Invalid):
            return window

        if window.is_empty:
            logger.debug("Monthly revenue window %s..%s is empty", window.date_from, window.date_to)
            return []

        rows = await self.repository.get_monthly_revenue(window)

        return [
            MonthlyRevenue(
                month=format_month(row.year, row.month),
                amount=row.amount,
                payment_count=row.payment_count
            )
            for row in rows
        ]
