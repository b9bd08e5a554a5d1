"""Shared fixtures: an in-memory product service for router tests and an
in-memory SQLite database for service/DAO tests."""

from decimal import Decimal
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from product_catalog.core.database import create_db_and_tables, get_async_session
from product_catalog.core.exceptions import ProductNotFoundError
from product_catalog.main import app
from product_catalog.models.enums import SortOrder
from product_catalog.models.product import Product, ProductCreate
from product_catalog.services.base_product_service import BaseProductService
from product_catalog.services.product_service import ProductService, get_product_service


class FakeProductService(BaseProductService):
    """Dict-backed product service. Set `fail_with` to make every call raise."""

    def __init__(self):
        self.products: Dict[int, Product] = {}
        self.next_id = 1
        self.fail_with: Optional[Exception] = None
        self.raise_not_found_on_lookup = False
        self.calls: List[str] = []
        self.updated: List[Product] = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def seed(self, name: str, price: str, category: str, description: Optional[str] = None) -> Product:
        product = Product(
            id=self.next_id,
            name=name,
            description=description,
            price=Decimal(price),
            category=category,
        )
        self.products[product.id] = product
        self.next_id += 1
        return product

    async def add_product(self, product: ProductCreate) -> Product:
        self._record("add_product")
        return self.seed(product.name, str(product.price), product.category, product.description)

    async def get_all_products(self) -> List[Product]:
        self._record("get_all_products")
        return list(self.products.values())

    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        self._record("get_product_by_id")
        product = self.products.get(product_id)
        if product is None and self.raise_not_found_on_lookup:
            raise ProductNotFoundError(product_id)
        return product

    async def get_products_by_name(self, name: str) -> List[Product]:
        self._record("get_products_by_name")
        return [p for p in self.products.values() if name.lower() in p.name.lower()]

    async def get_total_product_count(self) -> int:
        self._record("get_total_product_count")
        return len(self.products)

    async def update_product(self, product: Product) -> Product:
        self._record("update_product")
        self.products[product.id] = product
        self.updated.append(product)
        return product

    def _sorted(self, key, order: SortOrder) -> List[Product]:
        return sorted(self.products.values(), key=key, reverse=order == SortOrder.DESC)

    async def sort_products_by_name(self, order: SortOrder) -> List[Product]:
        self._record("sort_products_by_name")
        return self._sorted(lambda p: p.name, order)

    async def sort_products_by_category(self, order: SortOrder) -> List[Product]:
        self._record("sort_products_by_category")
        return self._sorted(lambda p: p.category, order)

    async def sort_products_by_price(self, order: SortOrder) -> List[Product]:
        self._record("sort_products_by_price")
        return self._sorted(lambda p: p.price, order)

    async def get_products_by_category(self, category: str) -> List[Product]:
        self._record("get_products_by_category")
        return [p for p in self.products.values() if p.category == category]

    async def delete_product(self, product_id: int) -> None:
        self._record("delete_product")
        if self.products.pop(product_id, None) is None:
            raise ProductNotFoundError(product_id)

    async def delete_all_products(self) -> int:
        self._record("delete_all_products")
        count = len(self.products)
        self.products.clear()
        return count


@pytest.fixture
def fake_service() -> FakeProductService:
    return FakeProductService()


@pytest.fixture
def client(fake_service):
    """TestClient whose product service is the in-memory fake."""
    app.dependency_overrides[get_product_service] = lambda: fake_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )
    await create_db_and_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    return sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def product_service(db_session) -> ProductService:
    return ProductService(db_session)


@pytest.fixture
async def db_client(test_session_factory):
    """Async client running the real ProductService against the test database."""

    async def override_get_async_session():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
