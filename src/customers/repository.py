from sqlmodel import select, func, col
from sqlalchemy import or_
from sqlmodel.ext.asyncio.session import AsyncSession
from src.customers.models import Customer, Address, City, Country
from src.films.models import Category, FilmCategory, Inventory
from src.rentals.models import Rental, Payment
from src.rentals.repository import rental_statement
from src.utils.pagination import paginate


def customer_statement():
    return (
        select(
            Customer.customer_id,
            Customer.first_name,
            Customer.last_name,
            Customer.email,
            Customer.active,
            Customer.create_date,
            Address.address,
            Address.address2,
            City.city,
            Country.country,
        )
        .join(Address, Address.address_id == Customer.address_id)
        .join(City, City.city_id == Address.city_id)
        .join(Country, Country.country_id == City.country_id)
    )


class CustomerRepository:
    """Reads customers, their rentals and what they have watched."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_customer(self, customer_id: int):
        statement = customer_statement().where(Customer.customer_id == customer_id)

        result = await self.session.exec(statement)
        return result.first()

    async def get_customers(self, page: int, limit: int, name: str = ""):
        statement = customer_statement()

        if name:
            statement = statement.where(
                or_(
                    col(Customer.first_name).icontains(name, autoescape=True),
                    col(Customer.last_name).icontains(name, autoescape=True),
                )
            )

        statement = statement.order_by(Customer.customer_id)

        return await paginate(self.session, statement, page, limit)

    async def get_customer_rentals(self, customer_id: int, page: int, limit: int):
        statement = (
            rental_statement()
            .where(Rental.customer_id == customer_id)
            .order_by(col(Rental.rental_date).desc(), Rental.rental_id)
        )

        return await paginate(self.session, statement, page, limit)

    async def get_watched_categories(self, customer_id: int):
        rental_count = func.count(Rental.rental_id).label("rental_count")

        statement = (
            select(Category.category_id, Category.name, rental_count)
            .select_from(Rental)
            .join(Inventory, Inventory.inventory_id == Rental.inventory_id)
            .join(FilmCategory, FilmCategory.film_id == Inventory.film_id)
            .join(Category, Category.category_id == FilmCategory.category_id)
            .where(Rental.customer_id == customer_id)
            .group_by(Category.category_id, Category.name)
            .order_by(rental_count.desc(), Category.name)
        )

        result = await self.session.exec(statement)
        return result.all()

    async def get_rental_stats(self, customer_id: int):
        statement = (
            select(
                func.count(Rental.rental_id).label("total_rentals"),
                func.count(Rental.return_date).label("returned_rentals"),
                func.min(Rental.rental_date).label("first_rental"),
                func.max(Rental.rental_date).label("last_rental"),
            )
            .where(Rental.customer_id == customer_id)
        )

        result = await self.session.exec(statement)
        return result.one()

    async def get_total_spent(self, customer_id: int):
        statement = (
            select(func.coalesce(func.sum(Payment.amount), 0))
            .where(Payment.customer_id == customer_id)
        )

        result = await self.session.exec(statement)
        return result.one()
