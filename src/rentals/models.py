from sqlmodel import SQLModel, Field, Column
from typing import Optional
from decimal import Decimal
import sqlalchemy.dialects.postgresql as pg
from datetime import datetime


class Rental(SQLModel, table=True):
    __tablename__ = "rental"

    rental_id: Optional[int] = Field(default=None, primary_key=True)
    rental_date: datetime = Field(
        sa_column=Column(pg.TIMESTAMP(timezone=False), nullable=False, index=True)
    )
    inventory_id: int = Field(foreign_key="inventory.inventory_id", index=True)
    customer_id: int = Field(foreign_key="customer.customer_id", index=True)

    # NULL while the copy is still out
    return_date: Optional[datetime] = Field(
        default=None,
        sa_column=Column(pg.TIMESTAMP(timezone=False), nullable=True)
    )


class Payment(SQLModel, table=True):
    __tablename__ = "payment"

    payment_id: Optional[int] = Field(default=None, primary_key=True)
    customer_id: int = Field(foreign_key="customer.customer_id", index=True)
    # Sakila allows payments that are not tied to a rental
    rental_id: Optional[int] = Field(default=None, foreign_key="rental.rental_id", index=True)
    amount: Decimal = Field(max_digits=5, decimal_places=2)
    payment_date: datetime = Field(
        sa_column=Column(pg.TIMESTAMP(timezone=False), nullable=False)
    )
