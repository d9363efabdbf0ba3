from sqlmodel import SQLModel, Field
from typing import Optional
from decimal import Decimal


class Category(SQLModel, table=True):
    __tablename__ = "category"

    category_id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)


class Film(SQLModel, table=True):
    __tablename__ = "film"

    film_id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    description: Optional[str] = None
    release_year: Optional[int] = None
    rental_duration: int = Field(default=3)
    rental_rate: Decimal = Field(default=Decimal("4.99"), max_digits=4, decimal_places=2)
    length: Optional[int] = None
    replacement_cost: Decimal = Field(default=Decimal("19.99"), max_digits=5, decimal_places=2)
    rating: Optional[str] = None


class FilmCategory(SQLModel, table=True):
    __tablename__ = "film_category"

    film_id: int = Field(foreign_key="film.film_id", primary_key=True)
    category_id: int = Field(foreign_key="category.category_id", primary_key=True)


class Inventory(SQLModel, table=True):
    __tablename__ = "inventory"

    # One physical copy of a film held by a store
    inventory_id: Optional[int] = Field(default=None, primary_key=True)
    film_id: int = Field(foreign_key="film.film_id", index=True)
    store_id: int = Field(default=1)
