from pydantic import BaseModel
from typing import Optional
from decimal import Decimal
from datetime import datetime
from src.utils.pagination import PaginatedResponse
from src.rentals.schemas import RentalInfo

class CustomerInfo(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    address: str
    address2: Optional[str] = None
    city: str
    country: str
    created: datetime
    # "1" active, "0" inactive
    active: str

class CustomerSummary(BaseModel):
    customer_id: int
    first_name: str
    last_name: str
    total_rentals: int
    open_rentals: int
    total_spent: Decimal
    first_rental: Optional[datetime] = None
    last_rental: Optional[datetime] = None
    favourite_category: Optional[str] = None

class CustomerResponse(BaseModel):
    success: bool
    message: str
    data: CustomerInfo

class CustomerListResponse(BaseModel):
    success: bool
    message: str
    data: PaginatedResponse[CustomerInfo]

class CustomerRentalListResponse(BaseModel):
    success: bool
    message: str
    data: PaginatedResponse[RentalInfo]

class CustomerSummaryResponse(BaseModel):
    success: bool
    message: str
    data: CustomerSummary
