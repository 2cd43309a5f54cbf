"""Warehouse API"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.deps import CurrentUser, get_current_user, get_db, require_admin
from orderdesk.models import Warehouse
from orderdesk.schemas.warehouse import (
    CapacityStats, StateCount, WarehouseCreate, WarehouseCustomer, WarehouseDeactivatedResponse,
    WarehouseListResponse, WarehouseOrderCount, WarehouseResponse, WarehouseStatsResponse, WarehouseUpdate,
)
from orderdesk.services.result import unwrap
from orderdesk.services.warehouse_service import WarehouseService

router = APIRouter()


def build_warehouse_response(warehouse: Warehouse, order_count: int = 0, customer_count: int = 0, customers=()) -> WarehouseResponse:
    return WarehouseResponse(
        id=warehouse.id,
        lookup_code=warehouse.lookup_code,
        name=warehouse.name,
        address=warehouse.address,
        city=warehouse.city,
        state=warehouse.state,
        zip_code=warehouse.zip_code,
        phone=warehouse.phone,
        email=warehouse.email,
        capacity=warehouse.capacity,
        status=warehouse.status,
        created_at=warehouse.created_at,
        modified_at=warehouse.modified_at,
        order_count=order_count,
        customer_count=customer_count,
        customers=[WarehouseCustomer.model_validate(c) for c in customers],
    )


def build_detail_response(detail: Dict[str, Any]) -> WarehouseResponse:
    return build_warehouse_response(
        detail["warehouse"], detail["order_count"], detail["customer_count"], detail["customers"]
    )


@router.get("/", response_model=WarehouseListResponse)
async def list_warehouses(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, description="Name, code or city"),
    status_filter: Optional[int] = Query(None, alias="status"),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
) -> Any:
    """Warehouses visible to the caller; clients only see linked ones"""
    data = unwrap(await WarehouseService(db).list_warehouses(
        page=page,
        limit=limit,
        customer_id=current_user.scope_customer_id,
        search=search,
        status=status_filter,
        city=city,
        state=state,
    ))
    total = data["total"]
    return WarehouseListResponse(
        warehouses=[build_warehouse_response(w, oc, cc) for w, oc, cc in data["rows"]],
        total=total,
        page=page,
        limit=limit,
        total_pages=(total + limit - 1) // limit,
    )


@router.get("/stats", response_model=WarehouseStatsResponse)
async def warehouse_stats(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    data = unwrap(await WarehouseService(db).get_stats(current_user.scope_customer_id))
    return WarehouseStatsResponse(
        active_warehouses=data["active_warehouses"],
        capacity=CapacityStats(**data["capacity"]),
        by_state=[StateCount(state=s, count=c) for s, c in data["by_state"]],
        recent_orders=[
            WarehouseOrderCount(warehouse_id=w.id, lookup_code=w.lookup_code, name=w.name, order_count=c)
            for w, c in data["recent_orders"]
        ],
    )


@router.get("/{warehouse_id}", response_model=WarehouseResponse)
async def get_warehouse(
    *,
    db: AsyncSession = Depends(get_db),
    warehouse_id: int,
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    detail = unwrap(await WarehouseService(db).get_warehouse(warehouse_id, current_user.scope_customer_id))
    return build_detail_response(detail)


@router.post("/", response_model=WarehouseResponse, status_code=status.HTTP_201_CREATED)
async def create_warehouse(
    *,
    db: AsyncSession = Depends(get_db),
    body: WarehouseCreate,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    detail = unwrap(await WarehouseService(db).create_warehouse(body, user_id=current_user.user_id))
    return build_detail_response(detail)


@router.put("/{warehouse_id}", response_model=WarehouseResponse)
async def update_warehouse(
    *,
    db: AsyncSession = Depends(get_db),
    warehouse_id: int,
    body: WarehouseUpdate,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    detail = unwrap(await WarehouseService(db).update_warehouse(warehouse_id, body, user_id=current_user.user_id))
    return build_detail_response(detail)


@router.delete("/{warehouse_id}", response_model=None)
async def delete_warehouse(
    *,
    db: AsyncSession = Depends(get_db),
    warehouse_id: int,
    current_user: CurrentUser = Depends(require_admin),
) -> Response:
    """Deactivate when orders reference the warehouse, delete otherwise"""
    result = await WarehouseService(db).delete_warehouse(warehouse_id, user_id=current_user.user_id)
    data = unwrap(result)
    if data["deactivated"]:
        body = WarehouseDeactivatedResponse(message=result.message, warehouse=build_detail_response(data))
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump(mode="json", by_alias=True))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
