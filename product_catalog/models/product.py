from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Numeric
from typing import Optional
from decimal import Decimal


class ProductBase(SQLModel):
    name: str = Field(index=True)
    description: Optional[str] = None
    price: Decimal
    category: str = Field(index=True)


class Product(ProductBase, table=True):
    __tablename__ = "products"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        index=True
    )
    # Storage precision only; request bodies are not constrained by it
    price: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))


class ProductCreate(ProductBase):
    pass


class ProductRead(ProductBase):
    id: int


class ProductUpdate(ProductBase):
    """Full replacement of the mutable fields; the id comes from the route."""
    pass
