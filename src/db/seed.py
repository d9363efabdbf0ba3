"""A small Sakila-shaped dataset.

Used to populate a fresh database for local development and by the test
suite. Ids are fixed so reports over the data are predictable.
"""

from datetime import datetime
from decimal import Decimal
from sqlmodel.ext.asyncio.session import AsyncSession
from src.customers.models import Country, City, Address, Customer
from src.films.models import Category, Film, FilmCategory, Inventory
from src.rentals.models import Rental, Payment


def sample_data():
    """Return the rows to insert, grouped so each group only references earlier ones."""
    created = datetime(2023, 12, 1, 9, 0)

    countries = [Country(country_id=1, country="USA")]
    cities = [City(city_id=1, city="Orlando", country_id=1)]
    addresses = [
        Address(address_id=i, address="123 Main Street", address2=f"Apt #{i}", district="Florida", city_id=1)
        for i in (1, 2, 3)
    ]
    customers = [
        Customer(customer_id=1, first_name="John", last_name="Doe", email="john.doe@email.com", address_id=1, create_date=created),
        Customer(customer_id=2, first_name="Carl", last_name="Mitch", email="carl.mitch@email.com", address_id=2, create_date=created),
        Customer(customer_id=3, first_name="Peter", last_name="Blake", email="peter.Blake@email.com", address_id=3, create_date=created),
    ]

    categories = [
        Category(category_id=1, name="Action"),
        Category(category_id=2, name="Comedy"),
        Category(category_id=3, name="Drama"),
    ]
    films = [
        Film(film_id=1, title="Academy Dinosaur", release_year=2006, rental_rate=Decimal("0.99"), length=86, rating="PG"),
        Film(film_id=2, title="Ace Goldfinger", release_year=2006, rental_rate=Decimal("4.99"), length=48, rating="G"),
        Film(film_id=3, title="Adaptation Holes", release_year=2006, rental_rate=Decimal("2.99"), length=50, rating="NC-17"),
        Film(film_id=4, title="Affair Prejudice", release_year=2006, rental_rate=Decimal("2.99"), length=117, rating="G"),
        Film(film_id=5, title="Agent Truman", release_year=2006, rental_rate=Decimal("2.99"), length=169, rating="PG"),
    ]
    film_categories = [
        FilmCategory(film_id=1, category_id=3),
        FilmCategory(film_id=2, category_id=1),
        FilmCategory(film_id=3, category_id=2),
        FilmCategory(film_id=4, category_id=2),
        FilmCategory(film_id=5, category_id=1),
    ]
    inventory = [
        Inventory(inventory_id=1, film_id=1),
        Inventory(inventory_id=2, film_id=1),
        Inventory(inventory_id=3, film_id=2),
        Inventory(inventory_id=4, film_id=3),
        Inventory(inventory_id=5, film_id=4),
        Inventory(inventory_id=6, film_id=5),
    ]

    rentals = [
        Rental(rental_id=1, rental_date=datetime(2024, 1, 5, 10, 0), inventory_id=1, customer_id=1, return_date=datetime(2024, 1, 8, 10, 0)),
        Rental(rental_id=2, rental_date=datetime(2024, 1, 20, 15, 30), inventory_id=3, customer_id=1, return_date=datetime(2024, 1, 22, 9, 0)),
        Rental(rental_id=3, rental_date=datetime(2024, 1, 31, 23, 59), inventory_id=2, customer_id=2, return_date=datetime(2024, 2, 3, 12, 0)),
        # Still out
        Rental(rental_id=4, rental_date=datetime(2024, 2, 1, 0, 0), inventory_id=4, customer_id=2),
        Rental(rental_id=5, rental_date=datetime(2024, 2, 14, 12, 0), inventory_id=5, customer_id=1, return_date=datetime(2024, 2, 16, 12, 0)),
        Rental(rental_id=6, rental_date=datetime(2024, 3, 2, 9, 0), inventory_id=1, customer_id=1),
        Rental(rental_id=7, rental_date=datetime(2024, 3, 10, 18, 0), inventory_id=3, customer_id=2, return_date=datetime(2024, 3, 12, 18, 0)),
    ]
    payments = [
        Payment(payment_id=1, customer_id=1, rental_id=1, amount=Decimal("2.99"), payment_date=datetime(2024, 1, 5, 10, 5)),
        Payment(payment_id=2, customer_id=1, rental_id=2, amount=Decimal("4.99"), payment_date=datetime(2024, 1, 20, 15, 35)),
        Payment(payment_id=3, customer_id=2, rental_id=3, amount=Decimal("0.99"), payment_date=datetime(2024, 1, 31, 23, 59)),
        Payment(payment_id=4, customer_id=1, rental_id=5, amount=Decimal("2.99"), payment_date=datetime(2024, 2, 14, 12, 5)),
        Payment(payment_id=5, customer_id=1, rental_id=6, amount=Decimal("4.99"), payment_date=datetime(2024, 3, 2, 9, 5)),
        Payment(payment_id=6, customer_id=2, rental_id=7, amount=Decimal("3.99"), payment_date=datetime(2024, 3, 10, 18, 5)),
    ]

    return [
        countries, cities, addresses, customers,
        categories, films, film_categories, inventory,
        rentals, payments,
    ]


async def seed_sample_data(session: AsyncSession):
    for group in sample_data():
        session.add_all(group)
        # Flush per group so foreign keys always point at rows that already exist
        await session.flush()

    try:
        await session.commit()
    except Exception:
        await session.rollback()
        raise
