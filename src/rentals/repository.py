from sqlmodel import select, func
from sqlalchemy import extract
from sqlmodel.ext.asyncio.session import AsyncSession
from typing import Optional
from src.rentals.models import Rental, Payment
from src.customers.models import Customer
from src.films.models import Film, Inventory
from src.utils.pagination import paginate
from src.utils.validation import AggregationWindow


def rental_statement():
    """Rental rows joined to their customer and film, with the summed payment amount."""
    amount = (
        select(func.coalesce(func.sum(Payment.amount), 0))
        .where(Payment.rental_id == Rental.rental_id)
        .scalar_subquery()
    )

    return (
        select(
            Rental.rental_id,
            Rental.rental_date,
            Rental.return_date,
            Rental.customer_id,
            Customer.first_name,
            Customer.last_name,
            Inventory.film_id,
            Film.title,
            amount.label("amount"),
        )
        .join(Customer, Customer.customer_id == Rental.customer_id)
        .join(Inventory, Inventory.inventory_id == Rental.inventory_id)
        .join(Film, Film.film_id == Inventory.film_id)
    )


def in_window(column, window: AggregationWindow):
    condition = column >= window.starts_at

    ends_before = window.ends_before
    if ends_before is not None:
        condition = condition & (column < ends_before)
    return condition


class RentalRepository:
    """Reads rentals and their monthly aggregates."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_rental(self, rental_id: int):
        statement = rental_statement().where(Rental.rental_id == rental_id)

        result = await self.session.exec(statement)
        return result.first()

    async def get_rentals(self, page: int, limit: int, customer_id: Optional[int] = None, film_id: Optional[int] = None):
        statement = rental_statement()

        if customer_id is not None:
            statement = statement.where(Rental.customer_id == customer_id)
        if film_id is not None:
            statement = statement.where(Inventory.film_id == film_id)

        statement = statement.order_by(Rental.rental_id)

        return await paginate(self.session, statement, page, limit)

    async def get_monthly_rental_counts(self, window: AggregationWindow):
        year = extract("year", Rental.rental_date)
        month = extract("month", Rental.rental_date)

        statement = (
            select(
                year.label("year"),
                month.label("month"),
                func.count(Rental.rental_id).label("rental_count"),
                # COUNT skips NULLs, so this only counts rentals that came back
                func.count(Rental.return_date).label("returned_count"),
            )
            .where(in_window(Rental.rental_date, window))
            .group_by(year, month)
            .order_by(year, month)
        )

        result = await self.session.exec(statement)
        return result.all()

    async def get_monthly_revenue(self, window: AggregationWindow):
        year = extract("year", Rental.rental_date)
        month = extract("month", Rental.rental_date)

        statement = (
            select(
                year.label("year"),
                month.label("month"),
                func.sum(Payment.amount).label("amount"),
                func.count(Payment.payment_id).label("payment_count"),
            )
            .select_from(Payment)
            .join(Rental, Rental.rental_id == Payment.rental_id)
            .where(in_window(Rental.rental_date, window))
            .group_by(year, month)
            .order_by(year, month)
        )

        result = await self.session.exec(statement)
        return result.all()
