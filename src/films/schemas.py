from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from decimal import Decimal
from datetime import datetime
from src.utils.pagination import PaginatedResponse

class FilmInfo(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    release_year: Optional[int] = None
    rental_duration: int
    rental_rate: Decimal
    length: Optional[int] = None
    replacement_cost: Decimal
    rating: Optional[str] = None
    categories: List[str] = []

class MostRentedFilm(BaseModel):
    model_config = ConfigDict(frozen=True)

    film_id: int
    title: str
    rental_count: int

class WatchedCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    category_id: int
    name: str
    rental_count: int

class FilmSummary(BaseModel):
    film_id: int
    title: str
    total_rentals: int
    open_rentals: int
    total_revenue: Decimal
    inventory_copies: int
    last_rented: Optional[datetime] = None

class FilmResponse(BaseModel):
    success: bool
    message: str
    data: FilmInfo

class FilmListResponse(BaseModel):
    success: bool
    message: str
    data: PaginatedResponse[FilmInfo]

class MostRentedFilmListResponse(BaseModel):
    success: bool
    message: str
    data: List[MostRentedFilm]

class WatchedCategoryListResponse(BaseModel):
    success: bool
    message: str
    data: List[WatchedCategory]

class FilmSummaryResponse(BaseModel):
    success: bool
    message: str
    data: FilmSummary
