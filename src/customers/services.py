from decimal import Decimal
from typing import List, Optional, Union
from src.customers.repository import CustomerRepository
from src.customers.schemas import CustomerInfo, CustomerSummary
from src.films.schemas import WatchedCategory
from src.rentals.schemas import RentalInfo
from src.rentals.services import to_rental_info
from src.utils.pagination import PaginatedResponse
from src.utils.validation import Invalid, validate_pagination


def to_customer_info(row) -> CustomerInfo:
    return CustomerInfo(
        id=row.customer_id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        address=row.address,
        address2=row.address2,
        city=row.city,
        country=row.country,
        created=row.create_date,
        active="1" if row.active else "0",
    )


class CustomerServices():

    def __init__(self, repository: CustomerRepository):
        self.repository = repository

    async def get_customer(self, customer_id: int) -> Optional[CustomerInfo]:
        row = await self.repository.get_customer(customer_id)

        if row is None:
            return None

        return to_customer_info(row)

    async def get_customers(self, page: int, limit: int, name: Optional[str] = "") -> Union[PaginatedResponse[CustomerInfo], Invalid]:
        invalid = validate_pagination(page, limit)
        if invalid is not None:
            return invalid

        rows, total = await self.repository.get_customers(page, limit, name or "")

        return PaginatedResponse[CustomerInfo](
            items=[to_customer_info(row) for row in rows],
            current_page=page,
            limit=limit,
            total=total
        )

    async def get_customer_rentals(self, customer_id: int, page: int, limit: int) -> Union[PaginatedResponse[RentalInfo], Invalid]:
        # An unknown customer is not an error here, it simply has no rentals
        invalid = validate_pagination(page, limit)
        if invalid is not None:
            return invalid

        rows, total = await self.repository.get_customer_rentals(customer_id, page, limit)

        return PaginatedResponse[RentalInfo](
            items=[to_rental_info(row) for row in rows],
            current_page=page,
            limit=limit,
            total=total
        )

    async def get_customer_watched_categories(self, customer_id: int) -> List[WatchedCategory]:
        rows = await self.repository.get_watched_categories(customer_id)

        return [
            WatchedCategory(category_id=row.category_id, name=row.name, rental_count=row.rental_count)
            for row in rows
        ]

    async def get_customer_summary(self, customer_id: int) -> Optional[CustomerSummary]:
        customer = await self.repository.get_customer(customer_id)

        if customer is None:
            return None

        stats = await self.repository.get_rental_stats(customer_id)
        total_spent = await self.repository.get_total_spent(customer_id)
        categories = await self.get_customer_watched_categories(customer_id)

        return CustomerSummary(
            customer_id=customer.customer_id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            total_rentals=stats.total_rentals,
            open_rentals=stats.total_rentals - stats.returned_rentals,
            total_spent=total_spent if total_spent is not None else Decimal("0.00"),
            first_rental=stats.first_rental,
            last_rental=stats.last_rental,
            favourite_category=categories[0].name if categories else None
        )
