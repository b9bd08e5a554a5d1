"""Product domain exceptions.

Raised by the service layer. The controller catches these and turns them
into HTTP responses.
"""


class ProductCatalogError(Exception):
    """Base class for errors raised by a product service."""


class ProductNotFoundError(ProductCatalogError):
    """The requested product does not exist."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")
