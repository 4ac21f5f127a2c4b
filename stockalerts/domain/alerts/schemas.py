# stockalerts/domain/alerts/schemas.py
from datetime import datetime
from pydantic import BaseModel
from typing import List, Optional, Tuple

# (product_id, warehouse_id)
PairKey = Tuple[int, int]


# ---- Records read through the inventory gateway ----

class CompanyRecord(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True

class ProductRecord(BaseModel):
    id: int
    name: str
    sku: str
    category_id: Optional[int] = None
    low_stock_threshold: Optional[int] = None

    class Config:
        from_attributes = True

class WarehouseRecord(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True

class InventoryRecord(BaseModel):
    product_id: int
    warehouse_id: int
    quantity: int
    reserved_quantity: int = 0

    class Config:
        from_attributes = True

class SalesAggregate(BaseModel):
    """Mean quantity per sales transaction for a pair within the lookback window."""
    product_id: int
    warehouse_id: int
    avg_quantity: float
    sales_count: int

    class Config:
        from_attributes = True

class PrimarySupplierRecord(BaseModel):
    product_id: int
    supplier_id: int
    name: str
    contact_email: Optional[str] = None
    supplier_sku: Optional[str] = None
    lead_time_days: Optional[int] = None

    class Config:
        from_attributes = True


# ---- Intermediate values ----

class LowStockCandidate(BaseModel):
    """An inventory row at or below its product's effective threshold."""
    product: ProductRecord
    warehouse: WarehouseRecord
    current_stock: int
    threshold: int

    @property
    def key(self) -> PairKey:
        return (self.product.id, self.warehouse.id)


# ---- Responses ----

class SupplierOut(BaseModel):
    id: int
    name: str
    contact_email: Optional[str]
    supplier_sku: Optional[str]
    lead_time_days: Optional[int]

class AlertOut(BaseModel):
    product_id: int
    product_name: str
    sku: str
    warehouse_id: int
    warehouse_name: str
    current_stock: int
    threshold: int
    days_until_stockout: Optional[int]
    supplier: Optional[SupplierOut]

class FiltersApplied(BaseModel):
    days_threshold: int
    warehouse_id: Optional[int]

class LowStockAlertsResponse(BaseModel):
    alerts: List[AlertOut]
    total_alerts: int
    company_id: int
    company_name: str
    generated_at: datetime
    filters_applied: FiltersApplied

class LowStockSummary(BaseModel):
    total_low_stock_products: int
    warehouses_with_alerts: int
    out_of_stock_count: int
    avg_current_stock: Optional[float]

class LowStockSummaryResponse(BaseModel):
    summary: LowStockSummary
    company_id: int
