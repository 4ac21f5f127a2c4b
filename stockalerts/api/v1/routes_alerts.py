# stockalerts/api/v1/routes_alerts.py
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession


from stockalerts.api.v1.deps import get_company_access_checker
from stockalerts.db.base import get_db
from stockalerts.domain.alerts.schemas import LowStockAlertsResponse, LowStockSummaryResponse
from stockalerts.domain.alerts.service import AccessChecker, get_low_stock_alerts, get_low_stock_summary


router = APIRouter(prefix="/api/companies", tags=["alerts"])


# Ids arrive as raw strings so the service can reject them with its own error
@router.get("/{company_id}/alerts/low-stock", response_model=LowStockAlertsResponse)
async def low_stock_alerts_endpoint(
    company_id: str,
    warehouse_id: Optional[str] = None,
    days_threshold: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    has_access: AccessChecker = Depends(get_company_access_checker),
):
    return await get_low_stock_alerts(
        db,
        company_id,
        warehouse_id=warehouse_id,
        days_threshold=days_threshold,
        has_access=has_access,
    )

@router.get("/{company_id}/alerts/low-stock/summary", response_model=LowStockSummaryResponse)
async def low_stock_summary_endpoint(
    company_id: str,
    db: AsyncSession = Depends(get_db),
    has_access: AccessChecker = Depends(get_company_access_checker),
):
    return await get_low_stock_summary(db, company_id, has_access=has_access)
