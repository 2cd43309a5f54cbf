"""Health check, database check and lookup catalogs"""
from typing import Any
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.deps import CurrentUser, get_current_user, get_db, require_admin
from orderdesk.db.base import Base
from orderdesk.models import StatusCode
from orderdesk.repositories.order_repository import OrderTypeRepository
from orderdesk.schemas.base import StatusItem, StatusListResponse
from orderdesk.schemas.order import OrderTypeListResponse, OrderTypeResponse

router = APIRouter()


@router.get("/health")
async def health() -> Any:
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}


@router.get("/db-test")
async def db_test(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    """Row count of every table"""
    counts = {}
    for name, table in sorted(Base.metadata.tables.items()):
        counts[name] = (await db.execute(select(func.count()).select_from(table))).scalar() or 0
    return {"status": "ok", "tables": counts}


@router.get("/statuses", response_model=StatusListResponse)
async def list_statuses(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    result = await db.execute(select(StatusCode).order_by(StatusCode.code))
    return StatusListResponse(statuses=[
        StatusItem(code=s.code, name=s.name, description=s.description or "", entity=s.entity or "")
        for s in result.scalars().all()
    ])


@router.get("/order-types", response_model=OrderTypeListResponse)
async def list_order_types(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    order_types = await OrderTypeRepository(db).list_active()
    return OrderTypeListResponse(order_types=[OrderTypeResponse.model_validate(t) for t in order_types])
