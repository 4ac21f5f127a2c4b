from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from stockalerts.db.base import Base


class Warehouse(Base):
    __tablename__ = "warehouses"

    """A physical stock location owned by a company.

    Only warehouses with status "active" take part in low-stock computations;
    inactive ones keep their inventory rows but never raise alerts.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="active")

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
