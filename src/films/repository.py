from sqlmodel import select, func, col
from sqlmodel.ext.asyncio.session import AsyncSession
from typing import Dict, List, Sequence
from src.films.models import Film, Category, FilmCategory, Inventory
from src.rentals.models import Rental, Payment
from src.rentals.repository import in_window
from src.utils.pagination import paginate, clamp_limit
from src.utils.validation import AggregationWindow


class FilmRepository:
    """Reads films and the rental reports built on them."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_film(self, film_id: int):
        statement = select(Film).where(Film.film_id == film_id)

        result = await self.session.exec(statement)
        return result.first()

    async def get_films(self, page: int, limit: int, name: str = ""):
        statement = select(Film)

        if name:
            statement = statement.where(col(Film.title).icontains(name, autoescape=True))

        statement = statement.order_by(Film.film_id)

        return await paginate(self.session, statement, page, limit)

    async def get_film_categories(self, film_ids: Sequence[int]) -> Dict[int, List[str]]:
        if not film_ids:
            return {}

        statement = (
            select(FilmCategory.film_id, Category.name)
            .join(Category, Category.category_id == FilmCategory.category_id)
            .where(col(FilmCategory.film_id).in_(film_ids))
            .order_by(Category.name)
        )

        result = await self.session.exec(statement)

        categories: Dict[int, List[str]] = {}
        for film_id, name in result.all():
            categories.setdefault(film_id, []).append(name)
        return categories

    async def get_most_rented_films(self, window: AggregationWindow, limit: int):
        rental_count = func.count(Rental.rental_id).label("rental_count")

        statement = (
            select(Film.film_id, Film.title, rental_count)
            .select_from(Rental)
            .join(Inventory, Inventory.inventory_id == Rental.inventory_id)
            .join(Film, Film.film_id == Inventory.film_id)
            .where(in_window(Rental.rental_date, window))
            .group_by(Film.film_id, Film.title)
            # film_id keeps ties in a stable order
            .order_by(rental_count.desc(), Film.film_id)
            .limit(clamp_limit(limit))
        )

        result = await self.session.exec(statement)
        return result.all()

    async def get_most_watched_categories(self, window: AggregationWindow, limit: int):
        rental_count = func.count(Rental.rental_id).label("rental_count")

        statement = (
            select(Category.category_id, Category.name, rental_count)
            .select_from(Rental)
            .join(Inventory, Inventory.inventory_id == Rental.inventory_id)
            .join(FilmCategory, FilmCategory.film_id == Inventory.film_id)
            .join(Category, Category.category_id == FilmCategory.category_id)
            .where(in_window(Rental.rental_date, window))
            .group_by(Category.category_id, Category.name)
            .order_by(rental_count.desc(), Category.category_id)
            .limit(clamp_limit(limit))
        )

        result = await self.session.exec(statement)
        return result.all()

    async def get_rental_stats(self, film_id: int):
        statement = (
            select(
                func.count(Rental.rental_id).label("total_rentals"),
                func.count(Rental.return_date).label("returned_rentals"),
                func.max(Rental.rental_date).label("last_rented"),
            )
            .select_from(Rental)
            .join(Inventory, Inventory.inventory_id == Rental.inventory_id)
            .where(Inventory.film_id == film_id)
        )

        result = await self.session.exec(statement)
        return result.one()

    async def get_total_revenue(self, film_id: int):
        statement = (
            select(func.coalesce(func.sum(Payment.amount), 0))
            .select_from(Payment)
            .join(Rental, Rental.rental_id == Payment.rental_id)
            .join(Inventory, Inventory.inventory_id == Rental.inventory_id)
            .where(Inventory.film_id == film_id)
        )

        result = await self.session.exec(statement)
        return result.one()

    async def count_inventory(self, film_id: int) -> int:
        statement = select(func.count(Inventory.inventory_id)).where(Inventory.film_id == film_id)

        result = await self.session.exec(statement)
        return result.one()
