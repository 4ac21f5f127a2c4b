# stockalerts/domain/alerts/assembler.py
from typing import Iterable, List, Mapping, Optional

from .schemas import (
    AlertOut,
    InventoryRecord,
    LowStockCandidate,
    LowStockSummary,
    PairKey,
    PrimarySupplierRecord,
    ProductRecord,
    SupplierOut,
    WarehouseRecord,
)
from .thresholds import resolve_threshold
from .velocity import days_until_stockout


def find_low_stock_candidates(
    products: Iterable[ProductRecord],
    category_thresholds: Mapping[int, Optional[int]],
    warehouses: Iterable[WarehouseRecord],
    inventory: Iterable[InventoryRecord],
) -> List[LowStockCandidate]:
    """Pair inventory rows with their product and warehouse and keep those at or below threshold.

    Rows whose product or warehouse is not in the given (active) sets are
    skipped, so a missing inventory row simply yields no candidate.
    """
    by_product = {p.id: p for p in products}
    by_warehouse = {w.id: w for w in warehouses}

    candidates = []
    for row in inventory:
        product = by_product.get(row.product_id)
        warehouse = by_warehouse.get(row.warehouse_id)
        if product is None or warehouse is None:
            continue

        category_threshold = None
        if product.category_id is not None:
            category_threshold = category_thresholds.get(product.category_id)
        threshold = resolve_threshold(product.low_stock_threshold, category_threshold)

        if row.quantity <= threshold:
            candidates.append(
                LowStockCandidate(
                    product=product,
                    warehouse=warehouse,
                    current_stock=row.quantity,
                    threshold=threshold,
                )
            )
    return candidates


def _supplier_out(record: Optional[PrimarySupplierRecord]) -> Optional[SupplierOut]:
    if record is None:
        return None
    return SupplierOut(
        id=record.supplier_id,
        name=record.name,
        contact_email=record.contact_email,
        supplier_sku=record.supplier_sku,
        lead_time_days=record.lead_time_days,
    )


def assemble_alerts(
    candidates: Iterable[LowStockCandidate],
    velocity: Mapping[PairKey, float],
    suppliers: Mapping[int, PrimarySupplierRecord],
) -> List[AlertOut]:
    """Turn low-stock candidates into alerts.

    Candidates without recent sales (absent from `velocity`) are dropped.
    The result is ordered by current stock, then product name.
    """
    alerts = []
    for candidate in candidates:
        if candidate.key not in velocity:
            continue
        product = candidate.product
        alerts.append(
            AlertOut(
                product_id=product.id,
                product_name=product.name,
                sku=product.sku,
                warehouse_id=candidate.warehouse.id,
                warehouse_name=candidate.warehouse.name,
                current_stock=candidate.current_stock,
                threshold=candidate.threshold,
                days_until_stockout=days_until_stockout(candidate.current_stock, velocity.get(candidate.key)),
                supplier=_supplier_out(suppliers.get(product.id)),
            )
        )

    alerts.sort(key=lambda a: (a.current_stock, a.product_name))
    return alerts


def summarize_low_stock(candidates: Iterable[LowStockCandidate]) -> LowStockSummary:
    # Counts every threshold-breaching row; sales recency is not considered here.
    candidates = list(candidates)
    product_ids = {c.product.id for c in candidates}
    warehouse_ids = {c.warehouse.id for c in candidates}
    out_of_stock = sum(1 for c in candidates if c.current_stock == 0)

    avg_stock = None
    if candidates:
        avg_stock = sum(c.current_stock for c in candidates) / len(candidates)

    return LowStockSummary(
        total_low_stock_products=len(product_ids),
        warehouses_with_alerts=len(warehouse_ids),
        out_of_stock_count=out_of_stock,
        avg_current_stock=avg_stock,
    )
