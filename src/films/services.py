import logging
from decimal import Decimal
from typing import List, Optional, Union
from src.films.models import Film
from src.films.repository import FilmRepository
from src.films.schemas import FilmInfo, FilmSummary, MostRentedFilm, WatchedCategory
from src.utils.pagination import PaginatedResponse
from src.utils.validation import (
    Invalid, merge_invalid, validate_pagination,
    validate_bounded_limit, validate_date_range,
)

logger = logging.getLogger(__name__)

MOST_RENTED_MAX_LIMIT = 100


def to_film_info(film: Film, categories: List[str]) -> FilmInfo:
    return FilmInfo(
        id=film.film_id,
        title=film.title,
        description=film.description,
        release_year=film.release_year,
        rental_duration=film.rental_duration,
        rental_rate=film.rental_rate,
        length=film.length,
        replacement_cost=film.replacement_cost,
        rating=film.rating,
        categories=categories,
    )


class FilmServices:

    def __init__(self, repository: FilmRepository):
        self.repository = repository

    async def get_film(self, film_id: int) -> Optional[FilmInfo]:
        film = await self.repository.get_film(film_id)

        if film is None:
            return None

        categories = await self.repository.get_film_categories([film.film_id])
        return to_film_info(film, categories.get(film.film_id, []))

    async def get_films(self, page: int, limit: int, name: Optional[str] = "") -> Union[PaginatedResponse[FilmInfo], Invalid]:
        invalid = validate_pagination(page, limit)
        if invalid is not None:
            return invalid

        films, total = await self.repository.get_films(page, limit, name or "")
        categories = await self.repository.get_film_categories([film.film_id for film in films])

        return PaginatedResponse[FilmInfo](
            items=[to_film_info(film, categories.get(film.film_id, [])) for film in films],
            current_page=page,
            limit=limit,
            total=total
        )

    async def get_most_rented_films(self, limit: int, from_raw: str, to_raw: str) -> Union[List[MostRentedFilm], Invalid]:
        """Films ranked by how often they were rented inside the window.

        ``limit`` must lie between 1 and ``MOST_RENTED_MAX_LIMIT``.
        """
        window = validate_date_range(from_raw, to_raw)
        invalid = merge_invalid(
            validate_bounded_limit(limit, 1, MOST_RENTED_MAX_LIMIT),
            window
        )
        if invalid is not None:
            return invalid

        if window.is_empty:
            logger.debug("Most rented films window %s..%s is empty", window.date_from, window.date_to)
            return []

        rows = await self.repository.get_most_rented_films(window, limit)

        return [
            MostRentedFilm(film_id=row.film_id, title=row.title, rental_count=row.rental_count)
            for row in rows
        ]

    async def get_most_watched_categories(self, limit: int, from_raw: str, to_raw: str) -> Union[List[WatchedCategory], Invalid]:
        """Categories ranked by rentals inside the window.

        Unlike the films report, ``limit`` only has a lower bound.
        """
        window = validate_date_range(from_raw, to_raw)
        invalid = merge_invalid(validate_bounded_limit(limit, 1), window)
        if invalid is not None:
            return invalid

        if window.is_empty:
            logger.debug("Most watched categories window %s..%s is empty", window.date_from, window.date_to)
            return []

        rows = await self.repository.get_most_watched_categories(window, limit)

        return [
            WatchedCategory(category_id=row.category_id, name=row.name, rental_count=row.rental_count)
            for row in rows
        ]

    async def get_film_summary(self, film_id: int) -> Optional[FilmSummary]:
        film = await self.repository.get_film(film_id)

        if film is None:
            return None

        stats = await self.repository.get_rental_stats(film_id)
        total_revenue = await self.repository.get_total_revenue(film_id)
        copies = await self.repository.count_inventory(film_id)

        return FilmSummary(
            film_id=film.film_id,
            title=film.title,
            total_rentals=stats.total_rentals,
            open_rentals=stats.total_rentals - stats.returned_rentals,
            total_revenue=total_revenue if total_revenue is not None else Decimal("0.00"),
            inventory_copies=copies,
            last_rented=stats.last_rented
        )
