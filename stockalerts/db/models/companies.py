# stockalerts/db/models/companies.py
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from stockalerts.db.base import Base


class Company(Base):
    __tablename__ = "companies"

    """A tenant. Every warehouse, product and supplier belongs to exactly one company."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="active", index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
