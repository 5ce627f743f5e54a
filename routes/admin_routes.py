# routes/admin_routes.py
from fastapi import APIRouter, Depends, Query
from core.authorization import require_admin
from core.context import AppContext, get_context
from models.admin import AdminStats, CategoryStat, AuditItem
from services.admin_service import admin_stats, order_stats, list_audit_logs
from typing import List

router = APIRouter(tags=["Admin"], dependencies=[Depends(require_admin)])

@router.get("/admin-stats", response_model=AdminStats)
async def api_admin_stats(ctx: AppContext = Depends(get_context)):
    return await admin_stats(ctx.mongo)

@router.get("/order-stats", response_model=List[CategoryStat])
async def api_order_stats(ctx: AppContext = Depends(get_context)):
    """
    Revenue uses current menu prices, not the price paid at checkout.
    """
    return await order_stats(ctx.mongo)

@router.get("/admin/audit-logs", response_model=List[AuditItem])
async def api_audit_logs(skip: int = Query(0, ge=0), limit: int = Query(50, ge=1, le=200), ctx: AppContext = Depends(get_context)):
    return await list_audit_logs(ctx.mongo, skip=skip, limit=limit)
