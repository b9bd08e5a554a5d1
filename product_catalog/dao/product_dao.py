from typing import List
from sqlmodel import select
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from product_catalog.dao.base_dao import BaseDAO
from product_catalog.models.product import Product
from product_catalog.models.enums import SortCriteria, SortOrder
import structlog

logger = structlog.get_logger()


class ProductDAO(BaseDAO[Product]):
    def __init__(self):
        super().__init__(Product)

    async def get_by_category(self, db: AsyncSession, category: str) -> List[Product]:
        try:
            result = await db.execute(
                select(Product)
                .where(Product.category == category)
                .order_by(Product.id)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error getting products by category", category=category, error=str(e))
            raise

    async def search_by_name(self, db: AsyncSession, name: str) -> List[Product]:
        try:
            result = await db.execute(
                select(Product)
                .where(func.lower(Product.name).contains(name.lower(), autoescape=True))
                .order_by(Product.id)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error searching products by name", name=name, error=str(e))
            raise

    async def get_sorted(self, db: AsyncSession, criteria: SortCriteria, order: SortOrder) -> List[Product]:
        column = getattr(Product, criteria.value)
        ordering = column.desc() if order == SortOrder.DESC else column.asc()
        try:
            result = await db.execute(
                select(Product).order_by(ordering, Product.id)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(
                "Error sorting products",
                criteria=criteria.value,
                order=order.value,
                error=str(e)
            )
            raise


product_dao = ProductDAO()
