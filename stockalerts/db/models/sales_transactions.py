# stockalerts/db/models/sales_transactions.py
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric
from sqlalchemy.sql import func

from stockalerts.db.base import Base


class SalesTransaction(Base):
    __tablename__ = "sales_transactions"

    """Append-only record of units sold from a warehouse.

    Rows are never updated; the alert computation reads them only as a
    time-windowed aggregate to estimate sales velocity.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False)

    quantity_sold = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False, default=0)
    sale_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_sales_transactions_product_date", "product_id", "sale_date"),
        Index("ix_sales_transactions_warehouse_date", "warehouse_id", "sale_date"),
    )
