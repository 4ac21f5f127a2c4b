# stockalerts/domain/alerts/thresholds.py
from typing import Optional

DEFAULT_LOW_STOCK_THRESHOLD = 10


def resolve_threshold(
    product_threshold: Optional[int],
    category_threshold: Optional[int] = None,
) -> int:
    """Return the low-stock threshold that applies to a product.

    Precedence is the product's own override, then its category's default,
    then DEFAULT_LOW_STOCK_THRESHOLD. Only None falls through; 0 is a valid
    threshold at either tier.
    """
    if product_threshold is not None:
        return product_threshold
    if category_threshold is not None:
        return category_threshold
    return DEFAULT_LOW_STOCK_THRESHOLD
