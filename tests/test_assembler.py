from stockalerts.domain.alerts.assembler import assemble_alerts, find_low_stock_candidates, summarize_low_stock
from stockalerts.domain.alerts.schemas import (
    InventoryRecord,
    PrimarySupplierRecord,
    ProductRecord,
    WarehouseRecord,
)

W1 = WarehouseRecord(id=1, name="Warehouse 1")
W2 = WarehouseRecord(id=2, name="Warehouse 2")


def _product(id, name, threshold=None, category_id=None):
    return ProductRecord(id=id, name=name, sku=f"SKU-{id}", category_id=category_id, low_stock_threshold=threshold)


def test_candidates_use_resolved_threshold_inclusively():
    products = [
        _product(1, "At threshold", threshold=10),
        _product(2, "Above threshold", threshold=10),
        _product(3, "Category", category_id=7),
        _product(4, "Default"),
    ]
    inventory = [
        InventoryRecord(product_id=1, warehouse_id=1, quantity=10),
        InventoryRecord(product_id=2, warehouse_id=1, quantity=11),
        InventoryRecord(product_id=3, warehouse_id=1, quantity=15),
        InventoryRecord(product_id=4, warehouse_id=1, quantity=10),
    ]

    candidates = find_low_stock_candidates(products, {7: 15}, [W1], inventory)

    assert [(c.product.id, c.threshold) for c in candidates] == [(1, 10), (3, 15), (4, 10)]


def test_zero_threshold_only_flags_empty_stock():
    products = [_product(1, "Zero", threshold=0)]
    inventory = [
        InventoryRecord(product_id=1, warehouse_id=1, quantity=0),
        InventoryRecord(product_id=1, warehouse_id=2, quantity=1),
    ]

    candidates = find_low_stock_candidates(products, {}, [W1, W2], inventory)

    assert [c.key for c in candidates] == [(1, 1)]


def test_rows_for_unknown_products_or_inactive_warehouses_are_skipped():
    products = [_product(1, "Known", threshold=10)]
    inventory = [
        InventoryRecord(product_id=1, warehouse_id=2, quantity=1),
        InventoryRecord(product_id=9, warehouse_id=1, quantity=1),
    ]

    assert find_low_stock_candidates(products, {}, [W1], inventory) == []


def test_alerts_drop_pairs_without_recent_sales():
    products = [_product(1, "Selling", threshold=10), _product(2, "Slow Moving Product", threshold=10)]
    inventory = [
        InventoryRecord(product_id=1, warehouse_id=1, quantity=5),
        InventoryRecord(product_id=2, warehouse_id=1, quantity=3),
    ]
    candidates = find_low_stock_candidates(products, {}, [W1], inventory)

    alerts = assemble_alerts(candidates, {(1, 1): 2.0}, {})

    assert [a.product_id for a in alerts] == [1]
    assert alerts[0].days_until_stockout == 2
    assert alerts[0].supplier is None


def test_alerts_sorted_by_stock_then_name():
    products = [
        _product(1, "Charlie", threshold=10),
        _product(2, "Alpha", threshold=10),
        _product(3, "Bravo", threshold=10),
    ]
    inventory = [
        InventoryRecord(product_id=1, warehouse_id=1, quantity=2),
        InventoryRecord(product_id=2, warehouse_id=1, quantity=4),
        InventoryRecord(product_id=3, warehouse_id=1, quantity=2),
    ]
    candidates = find_low_stock_candidates(products, {}, [W1], inventory)
    velocity = {(1, 1): 1.0, (2, 1): 1.0, (3, 1): 1.0}

    alerts = assemble_alerts(candidates, velocity, {})

    assert [a.product_name for a in alerts] == ["Bravo", "Charlie", "Alpha"]


def test_alert_carries_primary_supplier_snapshot():
    products = [_product(1, "Widget A", category_id=7)]
    inventory = [InventoryRecord(product_id=1, warehouse_id=1, quantity=5)]
    candidates = find_low_stock_candidates(products, {7: 15}, [W1], inventory)
    suppliers = {
        1: PrimarySupplierRecord(
            product_id=1,
            supplier_id=42,
            name="Supplier Corp",
            contact_email="orders@supplier.com",
            supplier_sku="SUP-WID-1",
            lead_time_days=7,
        )
    }

    [alert] = assemble_alerts(candidates, {(1, 1): 2.0}, suppliers)

    assert alert.threshold == 15
    assert alert.supplier.model_dump() == {
        "id": 42,
        "name": "Supplier Corp",
        "contact_email": "orders@supplier.com",
        "supplier_sku": "SUP-WID-1",
        "lead_time_days": 7,
    }


def test_summary_counts_rows_regardless_of_sales():
    products = [_product(1, "Product 1", threshold=10), _product(2, "Product 2", threshold=5)]
    inventory = [
        InventoryRecord(product_id=1, warehouse_id=1, quantity=5),
        InventoryRecord(product_id=2, warehouse_id=1, quantity=0),
    ]
    candidates = find_low_stock_candidates(products, {}, [W1], inventory)

    summary = summarize_low_stock(candidates)

    assert summary.model_dump() == {
        "total_low_stock_products": 2,
        "warehouses_with_alerts": 1,
        "out_of_stock_count": 1,
        "avg_current_stock": 2.5,
    }


def test_summary_of_nothing():
    summary = summarize_low_stock([])
    assert summary.total_low_stock_products == 0
    assert summary.warehouses_with_alerts == 0
    assert summary.out_of_stock_count == 0
    assert summary.avg_current_stock is None
