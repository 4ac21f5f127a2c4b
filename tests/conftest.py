"""Shared pytest fixtures: in-memory database, seeding helpers and an HTTP client."""

import os

os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timezone

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stockalerts.db.base import Base, get_db
from stockalerts.db.models.companies import Company
from stockalerts.db.models.inventory import Inventory
from stockalerts.db.models.products import Product, ProductCategory
from stockalerts.db.models.sales_transactions import SalesTransaction
from stockalerts.db.models.suppliers import ProductSupplier, Supplier
from stockalerts.db.models.warehouses import Warehouse
from stockalerts.main import app


class Seed:
    """Creates rows through the test session and commits after each one."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _add(self, obj):
        self.session.add(obj)
        await self.session.commit()
        return obj

    async def company(self, name="Test Company"):
        return await self._add(Company(name=name, status="active"))

    async def warehouse(self, company, name="Main Warehouse", status="active"):
        return await self._add(Warehouse(company_id=company.id, name=name, status=status))

    async def category(self, name="Electronics", low_stock_threshold=15):
        return await self._add(ProductCategory(name=name, low_stock_threshold=low_stock_threshold))

    async def product(self, company, name, sku, low_stock_threshold=None, category=None, status="active"):
        return await self._add(
            Product(
                company_id=company.id,
                name=name,
                sku=sku,
                price=19.99,
                low_stock_threshold=low_stock_threshold,
                category_id=category.id if category is not None else None,
                status=status,
            )
        )

    async def supplier(self, company, name="Supplier Corp", contact_email="orders@supplier.com"):
        return await self._add(Supplier(company_id=company.id, name=name, contact_email=contact_email))

    async def link(self, product, supplier, is_primary=True, lead_time_days=7, supplier_sku=None):
        return await self._add(
            ProductSupplier(
                product_id=product.id,
                supplier_id=supplier.id,
                is_primary=is_primary,
                lead_time_days=lead_time_days,
                supplier_sku=supplier_sku,
            )
        )

    async def stock(self, product, warehouse, quantity):
        return await self._add(Inventory(product_id=product.id, warehouse_id=warehouse.id, quantity=quantity))

    async def sale(self, product, warehouse, quantity_sold, sale_date=None):
        return await self._add(
            SalesTransaction(
                product_id=product.id,
                warehouse_id=warehouse.id,
                quantity_sold=quantity_sold,
                unit_price=19.99,
                sale_date=sale_date or datetime.now(timezone.utc),
            )
        )


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    TestSession = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with TestSession() as session:
        yield session


@pytest_asyncio.fixture
async def seed(db):
    return Seed(db)


@pytest_asyncio.fixture
async def client(db):
    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
