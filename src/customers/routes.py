from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from src.customers.schemas import (
    CustomerResponse, CustomerListResponse, CustomerRentalListResponse,
    CustomerSummaryResponse,
)
from src.films.schemas import WatchedCategoryListResponse
from src.customers.repository import CustomerRepository
from src.customers.services import CustomerServices
from sqlmodel.ext.asyncio.session import AsyncSession
from src.db.main import get_Session
from src.config import Config
from src.utils.errors import bad_request
from src.utils.limiter import limiter
from src.utils.validation import Invalid
from typing import Optional


customer_router = APIRouter()


def get_customer_services(session: AsyncSession = Depends(get_Session)) -> CustomerServices:
    return CustomerServices(CustomerRepository(session))


@customer_router.get("/", response_model=CustomerListResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_customers(
    request: Request,
    response: Response,
    page: int = 1,
    limit: int = 10,
    name: Optional[str] = "",
    customer_services: CustomerServices = Depends(get_customer_services)
):
    customers = await customer_services.get_customers(page, limit, name)

    if isinstance(customers, Invalid):
        return bad_request(customers)

    return {
        "success": True,
        "message": "customers fetched successfully",
        "data": customers
    }


@customer_router.get("/{id}", response_model=CustomerResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_customer(
    request: Request,
    response: Response,
    id: int,
    customer_services: CustomerServices = Depends(get_customer_services)
):
    customer = await customer_services.get_customer(id)

    if customer is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )

    return {
        "success": True,
        "message": "customer fetched successfully",
        "data": customer
    }


@customer_router.get("/{id}/rentals", response_model=CustomerRentalListResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_customer_rentals(
    request: Request,
    response: Response,
    id: int,
    page: int = 1,
    limit: int = 10,
    customer_services: CustomerServices = Depends(get_customer_services)
):
    rentals = await customer_services.get_customer_rentals(id, page, limit)

    if isinstance(rentals, Invalid):
        return bad_request(rentals)

    return {
        "success": True,
        "message": "customer rentals fetched successfully",
        "data": rentals
    }


@customer_router.get("/{id}/watched-categories", response_model=WatchedCategoryListResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_customer_watched_categories(
    request: Request,
    response: Response,
    id: int,
    customer_services: CustomerServices = Depends(get_customer_services)
):
    categories = await customer_services.get_customer_watched_categories(id)

    return {
        "success": True,
        "message": "watched categories fetched successfully",
        "data": categories
    }


@customer_router.get("/{id}/summary", response_model=CustomerSummaryResponse, status_code=status.HTTP_200_OK)
@limiter.limit(Config.RATE_LIMIT)
async def get_customer_summary(
    request: Request,
    response: Response,
    id: int,
    customer_services: CustomerServices = Depends(get_customer_services)
):
    summary = await customer_services.get_customer_summary(id)

    if summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )

    return {
        "success": True,
        "message": "customer summary fetched successfully",
        "data": summary
    }
