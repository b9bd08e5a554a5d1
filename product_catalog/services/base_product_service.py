"""
Contract for the product service the HTTP layer talks to.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from product_catalog.models.enums import SortOrder
from product_catalog.models.product import Product, ProductCreate


class BaseProductService(ABC):
    """Persistence and business logic for products.

    The controller calls exactly one of these per request (two for update
    and delete, which look the product up first) and maps the outcome to a
    status code. Implementations may raise any exception; the controller
    turns ProductNotFoundError into 404 and everything else into 500.
    """

    @abstractmethod
    async def add_product(self, product: ProductCreate) -> Product:
        """Store a new product and return it with its assigned id."""

    @abstractmethod
    async def get_all_products(self) -> List[Product]:
        """Return every product."""

    @abstractmethod
    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        """Return the product, or None (or raise ProductNotFoundError) when absent."""

    @abstractmethod
    async def get_products_by_name(self, name: str) -> List[Product]:
        """Return products whose name matches the search term."""

    @abstractmethod
    async def get_total_product_count(self) -> int:
        """Return the number of stored products."""

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        """Persist an already modified product."""

    @abstractmethod
    async def sort_products_by_name(self, order: SortOrder) -> List[Product]:
        pass

    @abstractmethod
    async def sort_products_by_category(self, order: SortOrder) -> List[Product]:
        pass

    @abstractmethod
    async def sort_products_by_price(self, order: SortOrder) -> List[Product]:
        pass

    @abstractmethod
    async def get_products_by_category(self, category: str) -> List[Product]:
        """Return products in the given category."""

    @abstractmethod
    async def delete_product(self, product_id: int) -> None:
        """Delete one product. Raises ProductNotFoundError when absent."""

    @abstractmethod
    async def delete_all_products(self) -> int:
        """Delete every product and return how many were removed."""
