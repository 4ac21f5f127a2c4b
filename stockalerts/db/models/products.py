# stockalerts/db/models/products.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.sql import func

from stockalerts.db.base import Base


class ProductCategory(Base):
    __tablename__ = "product_categories"

    """Groups products and carries the default low-stock threshold for its members."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    low_stock_threshold = Column(Integer, nullable=True, default=10)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Product(Base):
    __tablename__ = "products"

    """A sellable item in a company's catalog.

    `low_stock_threshold` overrides the category default when set; NULL means
    "inherit". A zero override is meaningful and must not be treated as unset.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    sku = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)

    category_id = Column(Integer, ForeignKey("product_categories.id"), nullable=True)
    low_stock_threshold = Column(Integer, nullable=True)

    is_bundle = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default="active", index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("company_id", "sku", name="uq_products_company_sku"),
    )
