# stockalerts/db/repositories/inventory.py
import asyncio
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func, select

from stockalerts.core.config import settings
from stockalerts.core.errors import GatewayTimeoutError, InternalError, UnavailableError
from stockalerts.core.logging import get_logger
from stockalerts.db.models.companies import Company
from stockalerts.db.models.inventory import Inventory
from stockalerts.db.models.products import Product, ProductCategory
from stockalerts.db.models.sales_transactions import SalesTransaction
from stockalerts.db.models.suppliers import ProductSupplier, Supplier
from stockalerts.db.models.warehouses import Warehouse
from stockalerts.domain.alerts.schemas import (
    CompanyRecord,
    InventoryRecord,
    PrimarySupplierRecord,
    ProductRecord,
    SalesAggregate,
    WarehouseRecord,
)

logger = get_logger(__name__)

ACTIVE = "active"


# SQLSTATE for a statement cancelled by the server, e.g. statement_timeout
QUERY_CANCELED = "57014"


def _is_query_canceled(exc: DBAPIError) -> bool:
    code = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    return code == QUERY_CANCELED or "canceling statement" in str(exc.orig)


async def _execute(db: AsyncSession, stmt, label: str):
    """Run one read under the configured deadline and translate driver failures."""
    try:
        return await asyncio.wait_for(db.execute(stmt), timeout=settings.QUERY_TIMEOUT_SECONDS)
    except (asyncio.TimeoutError, PoolTimeoutError) as exc:
        raise GatewayTimeoutError(f"Query {label} took too long to execute") from exc
    except (OperationalError, InterfaceError) as exc:
        if _is_query_canceled(exc):
            raise GatewayTimeoutError(f"Query {label} was cancelled by the database") from exc
        raise UnavailableError("Unable to connect to database") from exc
    except DBAPIError as exc:
        if exc.connection_invalidated:
            raise UnavailableError("Unable to connect to database") from exc
        raise InternalError(f"Query {label} failed") from exc
    except SQLAlchemyError as exc:
        raise InternalError(f"Query {label} failed") from exc


async def get_company(
    db: AsyncSession,
    company_id: int
) -> Optional[CompanyRecord]:
    result = await _execute(
        db,
        select(Company.id, Company.name).where(Company.id == company_id),
        "company",
    )
    row = result.one_or_none()
    if row is None:
        return None
    return CompanyRecord.model_validate(row)

async def get_active_products(
    db: AsyncSession,
    company_id: int
) -> List[ProductRecord]:
    result = await _execute(
        db,
        select(
            Product.id,
            Product.name,
            Product.sku,
            Product.category_id,
            Product.low_stock_threshold,
        ).where(Product.company_id == company_id, Product.status == ACTIVE),
        "active_products",
    )
    return [ProductRecord.model_validate(row) for row in result.all()]

async def get_category_thresholds(
    db: AsyncSession,
    category_ids: Iterable[int]
) -> Dict[int, Optional[int]]:
    category_ids = sorted(set(category_ids))
    if not category_ids:
        return {}

    result = await _execute(
        db,
        select(ProductCategory.id, ProductCategory.low_stock_threshold).where(
            ProductCategory.id.in_(category_ids)
        ),
        "category_thresholds",
    )
    return {row.id: row.low_stock_threshold for row in result.all()}

async def get_active_warehouses(
    db: AsyncSession,
    company_id: int,
    warehouse_id: Optional[int] = None
) -> List[WarehouseRecord]:
    stmt = select(Warehouse.id, Warehouse.name).where(
        Warehouse.company_id == company_id, Warehouse.status == ACTIVE
    )
    if warehouse_id is not None:
        stmt = stmt.where(Warehouse.id == warehouse_id)

    result = await _execute(db, stmt, "active_warehouses")
    return [WarehouseRecord.model_validate(row) for row in result.all()]

async def get_inventory_rows(
    db: AsyncSession,
    company_id: int,
    warehouse_id: Optional[int] = None
) -> List[InventoryRecord]:
    """Inventory for the company's active warehouses, optionally a single one."""
    stmt = (
        select(
            Inventory.product_id,
            Inventory.warehouse_id,
            Inventory.quantity,
            Inventory.reserved_quantity,
        )
        .join(Warehouse, Inventory.warehouse_id == Warehouse.id)
        .join(Product, Inventory.product_id == Product.id)
        .where(
            Warehouse.company_id == company_id,
            Warehouse.status == ACTIVE,
            Product.company_id == company_id,
        )
    )
    if warehouse_id is not None:
        stmt = stmt.where(Inventory.warehouse_id == warehouse_id)

    result = await _execute(db, stmt, "inventory")
    return [InventoryRecord.model_validate(row) for row in result.all()]

async def get_sales_aggregates(
    db: AsyncSession,
    company_id: int,
    since: datetime,
    until: datetime,
    warehouse_id: Optional[int] = None
) -> List[SalesAggregate]:
    """Mean quantity and transaction count per (product, warehouse) in [since, until]."""
    sales_count = func.count(SalesTransaction.id)
    stmt = (
        select(
            SalesTransaction.product_id,
            SalesTransaction.warehouse_id,
            func.avg(SalesTransaction.quantity_sold).label("avg_quantity"),
            sales_count.label("sales_count"),
        )
        .join(Warehouse, SalesTransaction.warehouse_id == Warehouse.id)
        .where(
            Warehouse.company_id == company_id,
            SalesTransaction.sale_date >= since,
            SalesTransaction.sale_date <= until,
        )
        .group_by(SalesTransaction.product_id, SalesTransaction.warehouse_id)
        .having(sales_count >= 1)
    )
    if warehouse_id is not None:
        stmt = stmt.where(SalesTransaction.warehouse_id == warehouse_id)

    result = await _execute(db, stmt, "sales_aggregates")
    aggregates = [SalesAggregate.model_validate(row) for row in result.all()]
    logger.debug(f"Found sales activity for {len(aggregates)} product/warehouse pairs since {since.isoformat()}")
    return aggregates

async def get_primary_suppliers(
    db: AsyncSession,
    product_ids: Iterable[int]
) -> Dict[int, PrimarySupplierRecord]:
    """Primary supplier per product.

    When a product has more than one primary link, the one with the lowest
    product_suppliers.id wins.
    """
    product_ids = sorted(set(product_ids))
    if not product_ids:
        return {}

    result = await _execute(
        db,
        select(
            ProductSupplier.product_id,
            Supplier.id.label("supplier_id"),
            Supplier.name,
            Supplier.contact_email,
            ProductSupplier.supplier_sku,
            ProductSupplier.lead_time_days,
        )
        .join(Supplier, ProductSupplier.supplier_id == Supplier.id)
        .where(ProductSupplier.product_id.in_(product_ids), ProductSupplier.is_primary.is_(True))
        .order_by(ProductSupplier.product_id, ProductSupplier.id),
        "primary_suppliers",
    )

    suppliers = {}
    for row in result.all():
        suppliers.setdefault(row.product_id, PrimarySupplierRecord.model_validate(row))
    return suppliers
