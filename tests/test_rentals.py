from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from src import app
from src.rentals.routes import get_rental_services
from src.rentals.services import RentalServices, format_month
from src.utils.validation import Invalid
from tests.fakes import FakeRentalRepository, rental_row

INT32_MIN = -2**31


@pytest.fixture
def repository():
    return FakeRentalRepository(
        rentals=[
            rental_row(2, customer_id=1, film_id=1, return_date=datetime(2024, 1, 8)),
            rental_row(3, customer_id=1, film_id=2),
            rental_row(4, customer_id=2, film_id=1),
        ],
        monthly_counts=[
            SimpleNamespace(year=2024, month=1, rental_count=3, returned_count=3),
            SimpleNamespace(year=Decimal("2024"), month=Decimal("2"), rental_count=2, returned_count=1),
        ],
        monthly_revenue=[SimpleNamespace(year=2024, month=1, amount=Decimal("8.97"), payment_count=3)],
    )


@pytest.fixture
def use_repository(client, repository):
    app.dependency_overrides[get_rental_services] = lambda: RentalServices(repository)
    return repository


def test_format_month_pads_numeric_parts():
    assert format_month(2024, 1) == "2024-01"
    assert format_month(Decimal("2024"), Decimal("11")) == "2024-11"


async def test_get_rental_marks_open_rentals(repository):
    services = RentalServices(repository)

    assert (await services.get_rental(2)).is_open is False
    assert (await services.get_rental(3)).is_open is True


async def test_get_rental_returns_none_when_missing(repository):
    assert await RentalServices(repository).get_rental(1) is None


async def test_get_rentals_combines_filters(repository):
    services = RentalServices(repository)

    assert (await services.get_rentals(1, 10, customer_id=1)).total == 2
    assert (await services.get_rentals(1, 10, film_id=1)).total == 2
    both = await services.get_rentals(1, 10, customer_id=1, film_id=1)
    assert [r.id for r in both.items] == [2]


async def test_get_rentals_is_idempotent(repository):
    services = RentalServices(repository)

    assert await services.get_rentals(1, 2) == await services.get_rentals(1, 2)


async def test_monthly_summary_derives_open_count(repository):
    result = await RentalServices(repository).get_monthly_rentals_summary("2024-01-01", "2024-02-29")

    assert [(m.month, m.rental_count, m.open_count) for m in result] == [("2024-01", 3, 0), ("2024-02", 2, 1)]


async def test_monthly_revenue(repository):
    result = await RentalServices(repository).get_monthly_rental_revenue("2024-01-01", "2024-01-31")

    assert result[0].month == "2024-01"
    assert result[0].amount == Decimal("8.97")


async def test_invalid_dates_never_reach_persistence(repository):
    services = RentalServices(repository)

    assert isinstance(await services.get_monthly_rentals_summary("Date", "2024-01-01"), Invalid)
    assert isinstance(await services.get_monthly_rental_revenue("2024-01-01", "Date"), Invalid)
    assert repository.calls == []


def test_get_rental_returns_ok_when_found(client, use_repository):
    response = client.get("/api/rentals/2")

    assert response.status_code == 200
    assert response.json()["data"]["customer_name"] == "John Doe"


def test_get_rental_returns_not_found_when_missing(client, use_repository):
    response = client.get("/api/rentals/1")

    assert response.status_code == 404
    assert response.json()["message"] == "Rental not found"


def test_get_rentals_accepts_camel_case_filters(client, use_repository):
    response = client.get("/api/rentals/", params={"page": 1, "limit": 10, "customerId": 1, "filmId": 2})

    assert response.status_code == 200
    assert [r["id"] for r in response.json()["data"]["items"]] == [3]


@pytest.mark.parametrize("page", [0, -10, INT32_MIN])
def test_get_rentals_returns_bad_request_when_page_not_positive(client, use_repository, page):
    response = client.get("/api/rentals/", params={"page": page, "limit": 10})

    assert response.status_code == 400


@pytest.mark.parametrize("limit", [0, -10, INT32_MIN])
def test_get_rentals_returns_bad_request_when_limit_not_positive(client, use_repository, limit):
    response = client.get("/api/rentals/", params={"page": 1, "limit": limit})

    assert response.status_code == 400


def test_get_monthly_summary_returns_ok(client, use_repository):
    response = client.get("/api/rentals/monthly-summary", params={"from": "2024-01-01", "to": "2024-02-29"})

    assert response.status_code == 200
    assert response.json()["data"][0] == {"month": "2024-01", "rental_count": 3, "returned_count": 3, "open_count": 0}


@pytest.mark.parametrize("from_raw, to_raw", [
    ("2024-01-01", "Date"),
    ("Date", "2024-01-01"),
    ("Date", "Date"),
])
def test_get_monthly_summary_returns_bad_request_when_date_is_invalid(client, use_repository, from_raw, to_raw):
    response = client.get("/api/rentals/monthly-summary", params={"from": from_raw, "to": to_raw})

    assert response.status_code == 400


def test_get_monthly_revenue_returns_ok(client, use_repository):
    response = client.get("/api/rentals/monthly-revenue", params={"from": "2024-01-01", "to": "2024-01-31"})

    assert response.status_code == 200
    assert response.json()["data"][0]["payment_count"] == 3


@pytest.mark.parametrize("from_raw, to_raw", [
    ("2024-01-01", "Date"),
    ("Date", "2024-01-01"),
    ("Date", "Date"),
])
def test_get_monthly_rental_revenue_returns_bad_request_when_date_is_invalid(client, use_repository, from_raw, to_raw):
    response = client.get("/api/rentals/monthly-revenue", params={"from": from_raw, "to": to_raw})

    assert response.status_code == 400
