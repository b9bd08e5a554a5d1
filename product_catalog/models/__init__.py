# Import all models for easy access
from .product import Product, ProductCreate, ProductRead, ProductUpdate
from .enums import SortCriteria, SortOrder

__all__ = [
    "Product",
    "ProductCreate",
    "ProductRead",
    "ProductUpdate",
    "SortCriteria",
    "SortOrder",
]
