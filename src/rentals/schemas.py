from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from decimal import Decimal
from datetime import datetime
from src.utils.pagination import PaginatedResponse

class RentalInfo(BaseModel):
    id: int
    rental_date: datetime
    return_date: Optional[datetime] = None
    customer_id: int
    customer_name: str
    film_id: int
    title: str
    amount: Decimal

    @property
    def is_open(self) -> bool:
        return self.return_date is None

class MonthlyRentalCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str  # YYYY-MM
    rental_count: int
    returned_count: int
    open_count: int

class MonthlyRevenue(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str  # YYYY-MM
    amount: Decimal
    payment_count: int

class RentalResponse(BaseModel):
    success: bool
    message: str
    data: RentalInfo

class RentalListResponse(BaseModel):
    success: bool
    message: str
    data: PaginatedResponse[RentalInfo]

class MonthlyRentalCountListResponse(BaseModel):
    success: bool
    message: str
    data: List[MonthlyRentalCount]

class MonthlyRevenueListResponse(BaseModel):
    success: bool
    message: str
    data: List[MonthlyRevenue]
