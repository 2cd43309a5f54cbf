"""
Client orders: creation with order-number allocation, draft-only edits and
statistics.

Order numbers are ``ORD`` + yymmdd + a 4 digit daily sequence taken from the
highest number already issued today. ``orders.order_number`` is unique, so
two concurrent creations cannot both commit the same number; the loser gets
an IntegrityError and retries with a fresh number.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.config import settings
from orderdesk.core.constants import STATUS_NAMES, OrderStatus, Status
from orderdesk.core.logging_config import get_logger
from orderdesk.core.messages import (
    AuthMessages, NotFoundMessages, OperationMessages, OrderMessages, required,
)
from orderdesk.models import Account, Carrier, CarrierService, Order, OrderItem, OrderType, Warehouse
from orderdesk.repositories.material_repository import MaterialRepository
from orderdesk.repositories.order_repository import OrderRepository
from orderdesk.schemas.order import OrderCreate, OrderItemInput, OrderUpdate
from orderdesk.services.result import FORBIDDEN, NOT_FOUND, VALIDATION, ServiceResult

logger = get_logger(__name__)

REQUIRED_FIELDS = {
    "order_type_id": "Order Type",
    "ship_to_account_id": "Ship To",
    "bill_to_account_id": "Bill To",
    "carrier_id": "Carrier",
    "carrier_service_id": "Carrier Service",
    "expected_delivery_date": "Expected Delivery Date",
}
HEADER_FIELDS = tuple(REQUIRED_FIELDS) + ("warehouse_id",)


def validate_items(items: List[OrderItemInput]) -> List[str]:
    if not items:
        return [OrderMessages.ITEMS_REQUIRED]
    errors: List[str] = []
    for index, item in enumerate(items, start=1):
        if item.material_id is None:
            errors.append(required(f"Item {index} material"))
        if item.quantity is None or item.quantity <= 0:
            errors.append(f"Item {index}: {OrderMessages.INVALID_QUANTITY}")
    return errors


def month_keys(months: int, today: Optional[datetime] = None) -> List[str]:
    """``months`` consecutive ``YYYY-MM`` keys ending with the current month"""
    today = today or datetime.utcnow()
    year, month = today.year, today.month
    keys = []
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


class OrderService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.orders = OrderRepository(db)
        self.materials = MaterialRepository(db)

    async def _validate_references(self, customer_id: int, header: Dict[str, Any], items: Optional[List[OrderItemInput]]) -> List[str]:
        """Every referenced row must exist and belong to the customer"""
        errors: List[str] = []

        if header.get("order_type_id") is not None and await self.db.get(OrderType, header["order_type_id"]) is None:
            errors.append("Order type not found")

        ship_to = await self.db.get(Account, header["ship_to_account_id"]) if header.get("ship_to_account_id") else None
        if header.get("ship_to_account_id") and (
            ship_to is None or ship_to.customer_id != customer_id or not ship_to.can_ship_to
        ):
            errors.append("Ship-to account not found")
        bill_to = await self.db.get(Account, header["bill_to_account_id"]) if header.get("bill_to_account_id") else None
        if header.get("bill_to_account_id") and (
            bill_to is None or bill_to.customer_id != customer_id or not bill_to.can_bill_to
        ):
            errors.append("Bill-to account not found")

        carrier = await self.db.get(Carrier, header["carrier_id"]) if header.get("carrier_id") else None
        if header.get("carrier_id") and carrier is None:
            errors.append(NotFoundMessages.CARRIER)
        if header.get("carrier_service_id"):
            service = await self.db.get(CarrierService, header["carrier_service_id"])
            if service is None or service.carrier_id != header.get("carrier_id"):
                errors.append(NotFoundMessages.CARRIER_SERVICE)

        if header.get("warehouse_id") and await self.db.get(Warehouse, header["warehouse_id"]) is None:
            errors.append(NotFoundMessages.WAREHOUSE)

        if items:
            material_ids = [i.material_id for i in items if i.material_id is not None]
            found = await self.materials.find_for_customer(material_ids, customer_id)
            for material_id in dict.fromkeys(material_ids):
                if material_id not in found:
                    errors.append(f"Material {material_id} not found")
        return errors

    @staticmethod
    def _build_items(items: List[OrderItemInput], user_id: Optional[int]) -> List[OrderItem]:
        return [
            OrderItem(
                material_id=item.material_id,
                quantity=item.quantity,
                status=Status.ACTIVE,
                created_by=user_id,
                modified_by=user_id,
            )
            for item in items
        ]

    async def _load_owned(self, order_id: int, customer_id: int) -> ServiceResult:
        order = await self.orders.get_full(order_id)
        if order is None:
            return ServiceResult.fail(NotFoundMessages.ORDER, NOT_FOUND)
        if order.customer_id != customer_id:
            logger.warning(f"Customer {customer_id} tried to access order {order_id}")
            return ServiceResult.fail(AuthMessages.ACCESS_DENIED, FORBIDDEN)
        return ServiceResult.ok(order)

    async def create_order(self, customer_id: int, data: OrderCreate, user_id: Optional[int] = None) -> ServiceResult:
        header = data.model_dump(include=set(HEADER_FIELDS))
        errors = [required(label) for name, label in REQUIRED_FIELDS.items() if header.get(name) is None]
        errors += validate_items(data.items)
        if not errors:
            errors = await self._validate_references(customer_id, header, data.items)
        if errors:
            return ServiceResult.invalid(errors)

        for attempt in range(1, settings.ORDER_NUMBER_MAX_RETRIES + 1):
            order_number = await self.orders.next_order_number()
            order = self.orders.add(Order(
                **header,
                order_number=order_number,
                lookup_code=order_number,
                customer_id=customer_id,
                status=OrderStatus.DRAFT,
                items=self._build_items(data.items, user_id),
                created_by=user_id,
                modified_by=user_id,
            ))
            try:
                await self.db.commit()
            except IntegrityError as e:
                await self.db.rollback()
                if "order_number" not in str(e.orig) and "lookup_code" not in str(e.orig):
                    logger.error(f"Failed to create order for customer {customer_id}: {e}")
                    return ServiceResult.fail(OperationMessages.CREATE_FAILED)
                logger.warning(f"Order number {order_number} already taken (attempt {attempt}), retrying")
                continue
            except Exception as e:
                await self.db.rollback()
                logger.error(f"Failed to create order for customer {customer_id}: {e}")
                return ServiceResult.fail(OperationMessages.CREATE_FAILED)

            logger.info(f"Created order {order_number} for customer {customer_id} with {len(data.items)} items")
            return ServiceResult.ok(await self.orders.get_full(order.id))

        logger.error(f"Gave up allocating an order number for customer {customer_id}")
        return ServiceResult.fail(OrderMessages.NUMBER_UNAVAILABLE)

    async def list_orders(self, customer_id: int, *, page: int = 1, limit: int = 20, **filters) -> ServiceResult:
        orders, total = await self.orders.list_paginated(customer_id=customer_id, page=page, limit=limit, **filters)
        return ServiceResult.ok({"rows": orders, "total": total, "page": page, "limit": limit})

    async def get_order(self, order_id: int, customer_id: int) -> ServiceResult:
        return await self._load_owned(order_id, customer_id)

    async def update_order(self, order_id: int, customer_id: int, data: OrderUpdate, user_id: Optional[int] = None) -> ServiceResult:
        loaded = await self._load_owned(order_id, customer_id)
        if not loaded.success:
            return loaded
        order: Order = loaded.data
        if not order.is_draft:
            return ServiceResult.fail(OrderMessages.ONLY_DRAFT_UPDATE, VALIDATION)

        changes = data.model_dump(exclude_unset=True, include=set(HEADER_FIELDS))
        errors = [
            required(REQUIRED_FIELDS[name]) for name, value in changes.items()
            if value is None and name in REQUIRED_FIELDS
        ]
        if data.items is not None:
            errors += validate_items(data.items)
        if not errors:
            header = {name: getattr(order, name) for name in HEADER_FIELDS}
            header.update(changes)
            # Only re-check what changed, plus the service whenever the carrier moves
            to_check = {name: header[name] for name in changes}
            if "carrier_id" in changes or "carrier_service_id" in changes:
                to_check["carrier_id"] = header["carrier_id"]
                to_check["carrier_service_id"] = header["carrier_service_id"]
            errors = await self._validate_references(customer_id, to_check, data.items)
        if errors:
            return ServiceResult.invalid(errors)

        try:
            for field, value in changes.items():
                setattr(order, field, value)
            if data.items is not None:
                order.items = self._build_items(data.items, user_id)
            order.modified_by = user_id
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update order {order_id}: {e}")
            return ServiceResult.fail(OperationMessages.UPDATE_FAILED)

        logger.info(f"Updated order {order.order_number}")
        return ServiceResult.ok(await self.orders.get_full(order_id))

    async def delete_order(self, order_id: int, customer_id: int) -> ServiceResult:
        loaded = await self._load_owned(order_id, customer_id)
        if not loaded.success:
            return loaded
        order: Order = loaded.data
        if not order.is_draft:
            return ServiceResult.fail(OrderMessages.ONLY_DRAFT_DELETE, VALIDATION)
        order_number = order.order_number

        try:
            await self.orders.delete(order)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete order {order_id}: {e}")
            return ServiceResult.fail(OperationMessages.DELETE_FAILED)

        logger.info(f"Deleted order {order_number}")
        return ServiceResult.ok()

    async def get_stats(self, customer_id: int, months: int = 6) -> ServiceResult:
        by_status = await self.orders.counts_by_status(customer_id)

        keys = month_keys(months)
        since = datetime.strptime(keys[0], "%Y-%m")
        by_month = dict.fromkeys(keys, 0)
        for created_at in await self.orders.created_dates_since(customer_id, since):
            key = created_at.strftime("%Y-%m")
            if key in by_month:
                by_month[key] += 1

        return ServiceResult.ok({
            "total_orders": sum(count for _, count in by_status),
            "by_status": [
                {"status": code, "name": STATUS_NAMES.get(code, str(code)), "count": count}
                for code, count in by_status
            ],
            "by_month": [{"month": key, "count": count} for key, count in by_month.items()],
            "top_carriers": [
                {"carrier_id": cid, "name": name, "count": count}
                for cid, name, count in await self.orders.top_carriers(customer_id)
            ],
            "top_materials": [
                {
                    "material_id": material.id,
                    "code": material.code,
                    "description": material.description,
                    "total_quantity": total,
                    "order_count": orders,
                }
                for material, total, orders in await self.orders.top_materials(customer_id)
            ],
        })
