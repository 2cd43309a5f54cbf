"""Warehouse management, customer links and statistics"""
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.constants import Status
from orderdesk.core.logging_config import get_logger
from orderdesk.core.messages import NotFoundMessages, OperationMessages, WarehouseMessages
from orderdesk.models import Customer, Warehouse
from orderdesk.repositories.warehouse_repository import WarehouseRepository
from orderdesk.schemas.warehouse import WarehouseCreate, WarehouseUpdate
from orderdesk.services import validation
from orderdesk.services.result import CONFLICT, NOT_FOUND, ServiceResult

logger = get_logger(__name__)

REQUIRED_FIELDS = {
    "lookup_code": "Warehouse Code",
    "name": "Warehouse Name",
    "address": "Address",
    "city": "City",
    "state": "State",
    "zip_code": "Zip Code",
}
WAREHOUSE_FIELDS = tuple(REQUIRED_FIELDS) + ("phone", "email", "capacity", "status")


def validate_warehouse(data: dict) -> List[str]:
    errors: List[str] = []
    validation.check_required(errors, data, REQUIRED_FIELDS)
    validation.check_max_length(errors, data.get("lookup_code"), "Warehouse Code", 50)
    validation.check_max_length(errors, data.get("name"), "Warehouse Name", 100)
    validation.check_email(errors, data.get("email"))
    validation.check_non_negative(errors, data.get("capacity"), WarehouseMessages.INVALID_CAPACITY)
    validation.check_status(errors, data.get("status"))
    return errors


class WarehouseService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.warehouses = WarehouseRepository(db)

    async def _detail(self, warehouse_id: int, customer_id: Optional[int] = None) -> Optional[Dict[str, Any]]:
        warehouse = await self.warehouses.get_full(warehouse_id, customer_id)
        if warehouse is None:
            return None
        active_links = [link for link in warehouse.customer_links if link.status == Status.ACTIVE]
        return {
            "warehouse": warehouse,
            "order_count": await self.warehouses.count_orders(warehouse.id),
            "customer_count": len(active_links),
            "customers": [link.customer for link in active_links],
        }

    async def _missing_customers(self, customer_ids: List[int]) -> List[int]:
        if not customer_ids:
            return []
        result = await self.db.execute(select(Customer.id).where(Customer.id.in_(customer_ids)))
        found = set(result.scalars().all())
        return [cid for cid in customer_ids if cid not in found]

    async def list_warehouses(self, *, page: int = 1, limit: int = 20, customer_id: Optional[int] = None, **filters) -> ServiceResult:
        rows, total = await self.warehouses.list_paginated(page=page, limit=limit, customer_id=customer_id, **filters)
        return ServiceResult.ok({"rows": rows, "total": total, "page": page, "limit": limit})

    async def get_warehouse(self, warehouse_id: int, customer_id: Optional[int] = None) -> ServiceResult:
        detail = await self._detail(warehouse_id, customer_id)
        if detail is None:
            return ServiceResult.fail(NotFoundMessages.WAREHOUSE, NOT_FOUND)
        return ServiceResult.ok(detail)

    async def create_warehouse(self, data: WarehouseCreate, user_id: Optional[int] = None) -> ServiceResult:
        fields = data.model_dump(include=set(WAREHOUSE_FIELDS))
        errors = validate_warehouse(fields)
        customer_ids = data.customer_ids or []
        if await self._missing_customers(customer_ids):
            errors.append(NotFoundMessages.CUSTOMER)
        if errors:
            return ServiceResult.invalid(errors)
        if await self.warehouses.lookup_code_taken(data.lookup_code.strip()):
            return ServiceResult.fail(WarehouseMessages.EXISTS, CONFLICT)

        try:
            fields["lookup_code"] = fields["lookup_code"].strip()
            fields["status"] = fields.get("status") or Status.ACTIVE
            warehouse = self.warehouses.add(Warehouse(**fields, created_by=user_id, modified_by=user_id))
            await self.db.flush()
            if customer_ids:
                await self.warehouses.replace_links(warehouse.id, customer_ids, user_id)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create warehouse {data.lookup_code}: {e}")
            return ServiceResult.fail(OperationMessages.CREATE_FAILED)

        logger.info(f"Created warehouse {warehouse.lookup_code}")
        return ServiceResult.ok(await self._detail(warehouse.id))

    async def update_warehouse(self, warehouse_id: int, data: WarehouseUpdate, user_id: Optional[int] = None) -> ServiceResult:
        warehouse = await self.warehouses.get(warehouse_id)
        if warehouse is None:
            return ServiceResult.fail(NotFoundMessages.WAREHOUSE, NOT_FOUND)

        changes = data.model_dump(exclude_unset=True, include=set(WAREHOUSE_FIELDS))
        if changes.get("status") is None:
            changes.pop("status", None)
        merged = {name: getattr(warehouse, name) for name in WAREHOUSE_FIELDS}
        merged.update(changes)
        errors = validate_warehouse(merged)
        if data.customer_ids and await self._missing_customers(data.customer_ids):
            errors.append(NotFoundMessages.CUSTOMER)
        if errors:
            return ServiceResult.invalid(errors)
        if "lookup_code" in changes and await self.warehouses.lookup_code_taken(changes["lookup_code"], exclude_id=warehouse.id):
            return ServiceResult.fail(WarehouseMessages.EXISTS, CONFLICT)

        try:
            for field, value in changes.items():
                setattr(warehouse, field, value)
            warehouse.modified_by = user_id
            if data.customer_ids is not None:
                await self.warehouses.replace_links(warehouse.id, data.customer_ids, user_id)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update warehouse {warehouse_id}: {e}")
            return ServiceResult.fail(OperationMessages.UPDATE_FAILED)

        logger.info(f"Updated warehouse {warehouse.lookup_code}")
        return ServiceResult.ok(await self._detail(warehouse.id))

    async def delete_warehouse(self, warehouse_id: int, user_id: Optional[int] = None) -> ServiceResult:
        """
        Soft delete (status -> inactive) when orders reference the warehouse,
        otherwise remove it together with its customer links.

        ``data["deactivated"]`` tells which of the two happened.
        """
        warehouse = await self.warehouses.get(warehouse_id)
        if warehouse is None:
            return ServiceResult.fail(NotFoundMessages.WAREHOUSE, NOT_FOUND)
        lookup_code = warehouse.lookup_code

        try:
            if await self.warehouses.count_orders(warehouse_id):
                warehouse.status = Status.INACTIVE
                warehouse.modified_by = user_id
                await self.db.commit()
                logger.info(f"Deactivated warehouse {lookup_code}: it has orders")
                return ServiceResult.ok(
                    {"deactivated": True, **await self._detail(warehouse_id)},
                    message=WarehouseMessages.DEACTIVATED,
                )

            await self.warehouses.delete_links(warehouse_id)
            await self.db.execute(delete(Warehouse).where(Warehouse.id == warehouse_id))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete warehouse {warehouse_id}: {e}")
            return ServiceResult.fail(OperationMessages.DELETE_FAILED)

        logger.info(f"Deleted warehouse {lookup_code}")
        return ServiceResult.ok({"deactivated": False})

    async def get_stats(self, customer_id: Optional[int] = None) -> ServiceResult:
        capacity = await self.warehouses.capacity_stats(customer_id)
        return ServiceResult.ok({
            "active_warehouses": capacity.pop("count"),
            "capacity": capacity,
            "by_state": await self.warehouses.counts_by_state(customer_id),
            "recent_orders": await self.warehouses.recent_order_counts(30, customer_id),
        })
