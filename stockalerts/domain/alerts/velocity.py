# stockalerts/domain/alerts/velocity.py
import math
from typing import Dict, Iterable, Optional

from .schemas import PairKey, SalesAggregate


def build_velocity_map(aggregates: Iterable[SalesAggregate]) -> Dict[PairKey, float]:
    """Map (product_id, warehouse_id) to mean units sold per transaction.

    The mean is taken over transactions, not calendar days. Pairs without a
    qualifying transaction are left out of the map rather than set to zero.
    """
    velocity = {}
    for agg in aggregates:
        if agg.sales_count < 1:
            continue
        velocity[(agg.product_id, agg.warehouse_id)] = agg.avg_quantity
    return velocity


def days_until_stockout(current_stock: int, avg_sales: Optional[float]) -> Optional[int]:
    if avg_sales is None or avg_sales <= 0:
        return None
    return math.floor(current_stock / avg_sales)
