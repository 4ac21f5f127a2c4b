from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.sql import func

from stockalerts.db.base import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    """A vendor a company reorders stock from."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    status = Column(String(20), nullable=False, default="active")

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class ProductSupplier(Base):
    __tablename__ = "product_suppliers"

    """Links a product to a supplier with supplier-specific reorder terms.

    The schema does not stop a product from having several links flagged
    `is_primary`; readers pick the one with the lowest id.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False)

    supplier_sku = Column(String(100), nullable=True)
    cost = Column(Numeric(10, 2), nullable=True)
    lead_time_days = Column(Integer, nullable=True)
    minimum_order_quantity = Column(Integer, nullable=False, default=1)
    is_primary = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("product_id", "supplier_id", name="uq_product_suppliers_product_supplier"),
        Index("ix_product_suppliers_product_primary", "product_id", "is_primary"),
    )
