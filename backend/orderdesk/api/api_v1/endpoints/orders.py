"""Order API (client users only)"""
from typing import Any, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.deps import CurrentUser, get_db, require_customer
from orderdesk.models import Account, Order
from orderdesk.schemas.base import Pagination
from orderdesk.schemas.order import (
    OrderAccount, OrderCreate, OrderItemResponse, OrderListResponse, OrderResponse,
    OrderStatsResponse, OrderSummary, OrderUpdate,
)
from orderdesk.services.order_service import OrderService
from orderdesk.services.result import unwrap

router = APIRouter()


def _account(account: Optional[Account]) -> Optional[OrderAccount]:
    return OrderAccount.model_validate(account) if account else None


def _summary_fields(order: Order) -> dict:
    return dict(
        id=order.id,
        order_number=order.order_number,
        lookup_code=order.lookup_code,
        status=order.status,
        status_display=order.status_display,
        customer_id=order.customer_id,
        customer_name=order.customer.name if order.customer else "",
        carrier_name=order.carrier.name if order.carrier else "",
        expected_delivery_date=order.expected_delivery_date,
        created_at=order.created_at,
        item_count=order.item_count,
        total_quantity=order.total_quantity,
    )


def build_order_summary(order: Order) -> OrderSummary:
    return OrderSummary(**_summary_fields(order))


def build_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        **_summary_fields(order),
        order_type_id=order.order_type_id,
        order_type_name=order.order_type.name if order.order_type else "",
        ship_to_account=_account(order.ship_to_account),
        bill_to_account=_account(order.bill_to_account),
        carrier_id=order.carrier_id,
        carrier_service_id=order.carrier_service_id,
        carrier_service_name=order.carrier_service.name if order.carrier_service else "",
        warehouse_id=order.warehouse_id,
        warehouse_name=order.warehouse.name if order.warehouse else "",
        modified_at=order.modified_at,
        items=[
            OrderItemResponse(
                id=item.id,
                material_id=item.material_id,
                material_code=item.material.code if item.material else "",
                material_description=item.material.description if item.material else None,
                uom=item.material.uom if item.material else "",
                quantity=item.quantity,
                status=item.status,
            )
            for item in order.items
        ],
    )


@router.post("/", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    *,
    db: AsyncSession = Depends(get_db),
    body: OrderCreate,
    current_user: CurrentUser = Depends(require_customer),
) -> Any:
    """Create a draft order for the caller's customer"""
    order = unwrap(await OrderService(db).create_order(current_user.customer_id, body, user_id=current_user.user_id))
    return build_order_response(order)


@router.get("/", response_model=OrderListResponse)
async def list_orders(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_customer),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: Optional[int] = Query(None, alias="status"),
    from_date: Optional[datetime] = Query(None, alias="fromDate"),
    to_date: Optional[datetime] = Query(None, alias="toDate"),
) -> Any:
    data = unwrap(await OrderService(db).list_orders(
        current_user.customer_id,
        page=page,
        limit=limit,
        status=status_filter,
        from_date=from_date,
        to_date=to_date,
    ))
    return OrderListResponse(
        orders=[build_order_summary(o) for o in data["rows"]],
        pagination=Pagination.build(data["total"], page, limit),
    )


@router.get("/stats", response_model=OrderStatsResponse)
async def order_stats(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_customer),
    months: int = Query(6, ge=1, le=24, alias="periodInMonths"),
) -> Any:
    return unwrap(await OrderService(db).get_stats(current_user.customer_id, months))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    *,
    db: AsyncSession = Depends(get_db),
    order_id: int,
    current_user: CurrentUser = Depends(require_customer),
) -> Any:
    return build_order_response(unwrap(await OrderService(db).get_order(order_id, current_user.customer_id)))


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    *,
    db: AsyncSession = Depends(get_db),
    order_id: int,
    body: OrderUpdate,
    current_user: CurrentUser = Depends(require_customer),
) -> Any:
    """Edit a draft order; items are replaced when given"""
    order = unwrap(await OrderService(db).update_order(
        order_id, current_user.customer_id, body, user_id=current_user.user_id
    ))
    return build_order_response(order)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_order(
    *,
    db: AsyncSession = Depends(get_db),
    order_id: int,
    current_user: CurrentUser = Depends(require_customer),
):
    unwrap(await OrderService(db).delete_order(order_id, current_user.customer_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
