from typing import List, Optional
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from product_catalog.core.database import get_async_session
from product_catalog.core.exceptions import ProductNotFoundError
from product_catalog.dao.product_dao import product_dao
from product_catalog.models.enums import SortCriteria, SortOrder
from product_catalog.models.product import Product, ProductCreate
from product_catalog.services.base_product_service import BaseProductService
import structlog

logger = structlog.get_logger()


class ProductService(BaseProductService):
    def __init__(self, db: AsyncSession):
        self.db = db
        self.product_dao = product_dao

    async def add_product(self, product: ProductCreate) -> Product:
        try:
            created = await self.product_dao.create(self.db, obj_in=product.model_dump())
            logger.info("Product created successfully", product_id=created.id)
            return created
        except Exception as e:
            logger.error("Error creating product", error=str(e))
            raise

    async def get_all_products(self) -> List[Product]:
        try:
            products = await self.product_dao.get_multi(self.db)
            logger.info("Retrieved products", count=len(products))
            return products
        except Exception as e:
            logger.error("Error getting products", error=str(e))
            raise

    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        try:
            product = await self.product_dao.get_by_id(self.db, product_id)
            if not product:
                logger.warning("Product not found", product_id=product_id)
            return product
        except Exception as e:
            logger.error("Error getting product", product_id=product_id, error=str(e))
            raise

    async def get_products_by_name(self, name: str) -> List[Product]:
        try:
            products = await self.product_dao.search_by_name(self.db, name)
            logger.info("Searched products by name", name=name, count=len(products))
            return products
        except Exception as e:
            logger.error("Error searching products by name", name=name, error=str(e))
            raise

    async def get_total_product_count(self) -> int:
        try:
            return await self.product_dao.count(self.db)
        except Exception as e:
            logger.error("Error counting products", error=str(e))
            raise

    async def update_product(self, product: Product) -> Product:
        try:
            update_data = product.model_dump(exclude={"id"})
            updated = await self.product_dao.update(self.db, db_obj=product, obj_in=update_data)
            logger.info("Product updated successfully", product_id=updated.id)
            return updated
        except Exception as e:
            logger.error("Error updating product", product_id=product.id, error=str(e))
            raise

    async def sort_products_by_name(self, order: SortOrder) -> List[Product]:
        return await self._sorted(SortCriteria.NAME, order)

    async def sort_products_by_category(self, order: SortOrder) -> List[Product]:
        return await self._sorted(SortCriteria.CATEGORY, order)

    async def sort_products_by_price(self, order: SortOrder) -> List[Product]:
        return await self._sorted(SortCriteria.PRICE, order)

    async def _sorted(self, criteria: SortCriteria, order: SortOrder) -> List[Product]:
        try:
            products = await self.product_dao.get_sorted(self.db, criteria, order)
            logger.info(
                "Retrieved sorted products",
                criteria=criteria.value,
                order=order.value,
                count=len(products)
            )
            return products
        except Exception as e:
            logger.error("Error sorting products", criteria=criteria.value, error=str(e))
            raise

    async def get_products_by_category(self, category: str) -> List[Product]:
        try:
            products = await self.product_dao.get_by_category(self.db, category)
            logger.info("Retrieved products by category", category=category, count=len(products))
            return products
        except Exception as e:
            logger.error("Error getting products by category", category=category, error=str(e))
            raise

    async def delete_product(self, product_id: int) -> None:
        try:
            deleted = await self.product_dao.delete(self.db, id=product_id)
        except Exception as e:
            logger.error("Error deleting product", product_id=product_id, error=str(e))
            raise

        if not deleted:
            logger.warning("Product not found for delete", product_id=product_id)
            raise ProductNotFoundError(product_id)
        logger.info("Product deleted successfully", product_id=product_id)

    async def delete_all_products(self) -> int:
        try:
            deleted = await self.product_dao.delete_all(self.db)
            logger.info("All products deleted", count=deleted)
            return deleted
        except Exception as e:
            logger.error("Error deleting all products", error=str(e))
            raise


def get_product_service(db: AsyncSession = Depends(get_async_session)) -> BaseProductService:
    """FastAPI dependency; override it to plug in another product service."""
    return ProductService(db)
