# stockalerts/domain/alerts/service.py
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession

from stockalerts.core.config import settings
from stockalerts.core.errors import ForbiddenError, InvalidArgumentError, NotFoundError
from stockalerts.core.logging import get_logger
from stockalerts.db.repositories import inventory as gateway
from .assembler import assemble_alerts, find_low_stock_candidates, summarize_low_stock
from .schemas import (
    CompanyRecord,
    FiltersApplied,
    LowStockAlertsResponse,
    LowStockCandidate,
    LowStockSummaryResponse,
)
from .velocity import build_velocity_map

logger = get_logger(__name__)

AccessChecker = Callable[[int], bool]


def allow_all(company_id: int) -> bool:
    return True


# Ids are stored in 32-bit INTEGER columns
MAX_ID = 2 ** 31 - 1


def parse_positive_int(value: Union[str, int, None], field: str) -> int:
    """Parse an id-like parameter, raising InvalidArgumentError unless it is a plain positive integer.

    Only ASCII decimal digits are accepted, and the value must fit MAX_ID.
    """
    text = str(value).strip() if value is not None else ""
    if not (text.isascii() and text.isdecimal()) or not 0 < int(text) <= MAX_ID:
        raise InvalidArgumentError(
            f"{field.replace('_', ' ').capitalize()} must be a positive integer no greater than {MAX_ID}",
            error=f"Invalid {field}",
        )
    return int(text)


def lookback_start(now: datetime, days: int) -> datetime:
    """Start of a lookback window of `days` ending at `now`, clamped to the earliest datetime."""
    try:
        return now - timedelta(days=days)
    except OverflowError:
        return datetime.min.replace(tzinfo=timezone.utc)


async def _load_company(
    db: AsyncSession,
    company_id: int,
    has_access: AccessChecker,
) -> CompanyRecord:
    if not has_access(company_id):
        raise ForbiddenError("You don't have access to this company")

    company = await gateway.get_company(db, company_id)
    if company is None:
        raise NotFoundError(f"Company with ID {company_id} does not exist", error="Company not found")
    return company


async def _load_candidates(
    db: AsyncSession,
    company_id: int,
    warehouse_id: Optional[int] = None,
) -> List[LowStockCandidate]:
    products = await gateway.get_active_products(db, company_id)
    category_thresholds = await gateway.get_category_thresholds(
        db, (p.category_id for p in products if p.category_id is not None)
    )
    warehouses = await gateway.get_active_warehouses(db, company_id, warehouse_id)
    if not products or not warehouses:
        return []

    inventory = await gateway.get_inventory_rows(db, company_id, warehouse_id)
    return find_low_stock_candidates(products, category_thresholds, warehouses, inventory)


async def get_low_stock_alerts(
    db: AsyncSession,
    company_id: Union[str, int],
    warehouse_id: Union[str, int, None] = None,
    days_threshold: Union[str, int, None] = None,
    has_access: AccessChecker = allow_all,
) -> LowStockAlertsResponse:
    """Low-stock alerts for a company's products with recent sales activity."""
    company_id = parse_positive_int(company_id, "company_id")
    if warehouse_id is not None and warehouse_id != "":
        warehouse_id = parse_positive_int(warehouse_id, "warehouse_id")
    else:
        warehouse_id = None
    if days_threshold is not None and days_threshold != "":
        days_threshold = parse_positive_int(days_threshold, "days_threshold")
    else:
        days_threshold = settings.DEFAULT_LOOKBACK_DAYS

    company = await _load_company(db, company_id, has_access)

    generated_at = datetime.now(timezone.utc)
    candidates = await _load_candidates(db, company_id, warehouse_id)

    alerts = []
    if candidates:
        aggregates = await gateway.get_sales_aggregates(
            db,
            company_id,
            since=lookback_start(generated_at, days_threshold),
            until=generated_at,
            warehouse_id=warehouse_id,
        )
        velocity = build_velocity_map(aggregates)
        suppliers = await gateway.get_primary_suppliers(
            db, (c.product.id for c in candidates if c.key in velocity)
        )
        alerts = assemble_alerts(candidates, velocity, suppliers)

    logger.info(
        f"Returning {len(alerts)} low stock alerts for company {company_id} "
        f"({len(candidates)} rows at or below threshold)"
    )

    return LowStockAlertsResponse(
        alerts=alerts,
        total_alerts=len(alerts),
        company_id=company.id,
        company_name=company.name,
        generated_at=generated_at,
        filters_applied=FiltersApplied(days_threshold=days_threshold, warehouse_id=warehouse_id),
    )


async def get_low_stock_summary(
    db: AsyncSession,
    company_id: Union[str, int],
    has_access: AccessChecker = allow_all,
) -> LowStockSummaryResponse:
    """Aggregate figures over every threshold-breaching inventory row of a company.

    Unlike get_low_stock_alerts, rows without recent sales are counted.
    """
    company_id = parse_positive_int(company_id, "company_id")
    company = await _load_company(db, company_id, has_access)

    candidates = await _load_candidates(db, company.id)
    summary = summarize_low_stock(candidates)

    logger.info(f"Low stock summary for company {company_id}: {summary.total_low_stock_products} products")
    return LowStockSummaryResponse(summary=summary, company_id=company.id)
