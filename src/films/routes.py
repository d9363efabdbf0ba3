from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from src.films.schemas import (
    FilmResponse, FilmListResponse, MostRentedFilmListResponse,
    WatchedCategoryListResponse, FilmSummaryResponse,
)
from src.films.repository import FilmRepository
from src.films.services import FilmServices
from sqlmodel.ext.asyncio.session import AsyncSession
from src.db.main import get_Session
from src.config import Config
from src.utils.errors import bad_request
from src.utils.limiter import limiter
from src.utils.validation import Invalid
from typing import Optional


film_router = APIRouter()


def get_film_services(session: AsyncSession = Depends(get_Session)) -> FilmServices:
    return FilmServices(FilmRepository(session))


@film_router.get("/", response_model=FilmListResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_all_films(
    request: Request,
    response: Response,
    page: int = 1,
    limit: int = 10,
    name: Optional[str] = "",
    film_services: FilmServices = Depends(get_film_services)
):
    films = await film_services.get_films(page, limit, name)

    if isinstance(films, Invalid):
        return bad_request(films)

    return {
        "success": True,
        "message": "films fetched successfully",
        "data": films
    }


# Report routes are registered ahead of /{id} so their paths are not parsed as ids
@film_router.get("/most-rented", response_model=MostRentedFilmListResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_most_rented_films(
    request: Request,
    response: Response,
    limit: int = 10,
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = None,
    film_services: FilmServices = Depends(get_film_services)
):
    films = await film_services.get_most_rented_films(limit, from_, to)

    if isinstance(films, Invalid):
        return bad_request(films)

    return {
        "success": True,
        "message": "most rented films fetched successfully",
        "data": films
    }


@film_router.get("/most-watched-categories", response_model=WatchedCategoryListResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_most_watched_categories(
    request: Request,
    response: Response,
    limit: int = 10,
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = None,
    film_services: FilmServices = Depends(get_film_services)
):
    categories = await film_services.get_most_watched_categories(limit, from_, to)

    if isinstance(categories, Invalid):
        return bad_request(categories)

    return {
        "success": True,
        "message": "most watched categories fetched successfully",
        "data": categories
    }


@film_router.get("/{id}", response_model=FilmResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_film(
    request: Request,
    response: Response,
    id: int,
    film_services: FilmServices = Depends(get_film_services)
):
    film = await film_services.get_film(id)

    if film is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Film not found"
        )

    return {
        "success": True,
        "message": "film fetched successfully",
        "data": film
    }


@film_router.get("/{id}/summary", response_model=FilmSummaryResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_film_summary(
    request: Request,
    response: Response,
    id: int,
    film_services: FilmServices = Depends(get_film_services)
):
    summary = await film_services.get_film_summary(id)

    if summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Film not found"
        )

    return {
        "success": True,
        "message": "film summary fetched successfully",
        "data": summary
    }
