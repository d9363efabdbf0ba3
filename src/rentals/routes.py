from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from src.rentals.schemas import (
    RentalResponse, RentalListResponse,
    MonthlyRentalCountListResponse, MonthlyRevenueListResponse,
)
from src.rentals.repository import RentalRepository
from src.rentals.services import RentalServices
from sqlmodel.ext.asyncio.session import AsyncSession
from src.db.main import get_Session
from src.config import Config
from src.utils.errors import bad_request
from src.utils.limiter import limiter
from src.utils.validation import Invalid
from typing import Optional


rental_router = APIRouter()


def get_rental_services(session: AsyncSession = Depends(get_Session)) -> RentalServices:
    return RentalServices(RentalRepository(session))


@rental_router.get("/", response_model=RentalListResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_rentals(
    request: Request,
    response: Response,
    page: int = 1,
    limit: int = 10,
    customer_id: Optional[int] = Query(None, alias="customerId"),
    film_id: Optional[int] = Query(None, alias="filmId"),
    rental_services: RentalServices = Depends(get_rental_services)
):
    rentals = await rental_services.get_rentals(page, limit, customer_id, film_id)

    if isinstance(rentals, Invalid):
        return bad_request(rentals)

    return {
        "success": True,
        "message": "rentals fetched successfully",
        "data": rentals
    }


@rental_router.get("/monthly-summary", response_model=MonthlyRentalCountListResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_monthly_summary(
    request: Request,
    response: Response,
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = None,
    rental_services: RentalServices = Depends(get_rental_services)
):
    summary = await rental_services.get_monthly_rentals_summary(from_, to)

    if isinstance(summary, Invalid):
        return bad_request(summary)

    return {
        "success": True,
        "message": "monthly rentals summary fetched successfully",
        "data": summary
    }


@rental_router.get("/monthly-revenue", response_model=MonthlyRevenueListResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_monthly_rental_revenue(
    request: Request,
    response: Response,
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = None,
    rental_services: RentalServices = Depends(get_rental_services)
):
    revenue = await rental_services.get_monthly_rental_revenue(from_, to)

    if isinstance(revenue, Invalid):
        return bad_request(revenue)

    return {
        "success": True,
        "message": "monthly rental revenue fetched successfully",
        "data": revenue
    }


@rental_router.get("/{id}", response_model=RentalResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_rental(
    request: Request,
    response: Response,
    id: int,
    rental_services: RentalServices = Depends(get_rental_services)
):
    rental = await rental_services.get_rental(id)

    if rental is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Rental not found"
        )

    return {
        "success": True,
        "message": "rental fetched successfully",
        "data": rental
    }
