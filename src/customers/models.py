from sqlmodel import SQLModel, Field, Column
from typing import Optional
import sqlalchemy.dialects.postgresql as pg
from datetime import datetime, timezone

def utc_now():
    # Sakila timestamps are stored without a timezone
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Country(SQLModel, table=True):
    __tablename__ = "country"

    country_id: Optional[int] = Field(default=None, primary_key=True)
    country: str


class City(SQLModel, table=True):
    __tablename__ = "city"

    city_id: Optional[int] = Field(default=None, primary_key=True)
    city: str
    country_id: int = Field(foreign_key="country.country_id", index=True)


class Address(SQLModel, table=True):
    __tablename__ = "address"

    address_id: Optional[int] = Field(default=None, primary_key=True)
    address: str
    address2: Optional[str] = None
    district: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    city_id: int = Field(foreign_key="city.city_id", index=True)


class Customer(SQLModel, table=True):
    __tablename__ = "customer"

    customer_id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = Field(default=1)
    first_name: str = Field(index=True)
    last_name: str = Field(index=True)
    email: Optional[str] = None
    address_id: int = Field(foreign_key="address.address_id", index=True)

    # 1 = active, 0 = inactive
    active: int = Field(default=1)

    create_date: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(pg.TIMESTAMP(timezone=False), nullable=False)
    )
