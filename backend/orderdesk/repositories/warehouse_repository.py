from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import and_, delete, desc, func, or_, select
from sqlalchemy.orm import selectinload

from orderdesk.core.constants import Status
from orderdesk.models import CustomerWarehouse, Order, Warehouse
from orderdesk.repositories.base import BaseRepository


def _order_count_column():
    return (
        select(func.count(Order.id))
        .where(Order.warehouse_id == Warehouse.id)
        .correlate(Warehouse)
        .scalar_subquery()
        .label("order_count")
    )


def _customer_count_column():
    return (
        select(func.count(CustomerWarehouse.id))
        .where(
            CustomerWarehouse.warehouse_id == Warehouse.id,
            CustomerWarehouse.status == Status.ACTIVE,
        )
        .correlate(Warehouse)
        .scalar_subquery()
        .label("customer_count")
    )


class WarehouseRepository(BaseRepository[Warehouse]):
    model = Warehouse

    def scope_condition(self, customer_id: Optional[int]):
        """Warehouses a customer is linked to; ``None`` means all"""
        if customer_id is None:
            return None
        linked = select(CustomerWarehouse.warehouse_id).where(
            CustomerWarehouse.customer_id == customer_id,
            CustomerWarehouse.status == Status.ACTIVE,
        )
        return Warehouse.id.in_(linked)

    async def list_paginated(
        self,
        *,
        page: int,
        limit: int,
        customer_id: Optional[int] = None,
        search: Optional[str] = None,
        status: Optional[int] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
    ) -> Tuple[List[Tuple[Warehouse, int, int]], int]:
        conditions = []
        scope = self.scope_condition(customer_id)
        if scope is not None:
            conditions.append(scope)
        if search:
            conditions.append(
                or_(
                    Warehouse.name.contains(search),
                    Warehouse.lookup_code.contains(search),
                    Warehouse.city.contains(search),
                )
            )
        if status is not None:
            conditions.append(Warehouse.status == status)
        if city:
            conditions.append(Warehouse.city == city)
        if state:
            conditions.append(Warehouse.state == state)

        base = select(Warehouse.id)
        if conditions:
            base = base.where(and_(*conditions))
        total = await self.count_total(base)

        query = select(Warehouse, _order_count_column(), _customer_count_column())
        if conditions:
            query = query.where(and_(*conditions))
        query = (
            query.order_by(desc(Warehouse.status), Warehouse.lookup_code)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        rows = (await self.db.execute(query)).all()
        return [(row[0], row[1] or 0, row[2] or 0) for row in rows], total

    async def get_full(self, warehouse_id: int, customer_id: Optional[int] = None) -> Optional[Warehouse]:
        query = (
            select(Warehouse)
            .options(selectinload(Warehouse.customer_links).selectinload(CustomerWarehouse.customer))
            .where(Warehouse.id == warehouse_id)
            .execution_options(populate_existing=True)
        )
        scope = self.scope_condition(customer_id)
        if scope is not None:
            query = query.where(scope)
        return (await self.db.execute(query)).scalars().first()

    async def count_orders(self, warehouse_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Order.id)).where(Order.warehouse_id == warehouse_id)
        )
        return result.scalar() or 0

    async def replace_links(self, warehouse_id: int, customer_ids: Iterable[int], user_id: Optional[int] = None) -> None:
        await self.db.execute(
            delete(CustomerWarehouse).where(CustomerWarehouse.warehouse_id == warehouse_id)
        )
        for customer_id in dict.fromkeys(customer_ids):
            self.db.add(CustomerWarehouse(
                customer_id=customer_id,
                warehouse_id=warehouse_id,
                created_by=user_id,
                modified_by=user_id,
            ))

    async def delete_links(self, warehouse_id: int) -> None:
        await self.db.execute(
            delete(CustomerWarehouse).where(CustomerWarehouse.warehouse_id == warehouse_id)
        )

    # ===== Statistics =====

    def _active_in_scope(self, customer_id: Optional[int]):
        conditions = [Warehouse.status == Status.ACTIVE]
        scope = self.scope_condition(customer_id)
        if scope is not None:
            conditions.append(scope)
        return and_(*conditions)

    async def capacity_stats(self, customer_id: Optional[int] = None) -> Dict[str, float]:
        row = (await self.db.execute(
            select(
                func.count(Warehouse.id),
                func.sum(Warehouse.capacity),
                func.avg(Warehouse.capacity),
                func.max(Warehouse.capacity),
                func.min(Warehouse.capacity),
            ).where(self._active_in_scope(customer_id))
        )).one()
        return {
            "count": row[0] or 0,
            "total": row[1] or 0,
            "average": float(row[2] or 0),
            "max": row[3] or 0,
            "min": row[4] or 0,
        }

    async def counts_by_state(self, customer_id: Optional[int] = None) -> List[Tuple[str, int]]:
        rows = (await self.db.execute(
            select(Warehouse.state, func.count(Warehouse.id))
            .where(self._active_in_scope(customer_id))
            .group_by(Warehouse.state)
            .order_by(Warehouse.state)
        )).all()
        return [(state, count) for state, count in rows]

    async def recent_order_counts(self, days: int = 30, customer_id: Optional[int] = None) -> List[Tuple[Warehouse, int]]:
        since = datetime.utcnow() - timedelta(days=days)
        order_count = func.count(Order.id).label("order_count")
        query = (
            select(Warehouse, order_count)
            .join(Order, Order.warehouse_id == Warehouse.id)
            .where(Order.created_at >= since)
            .group_by(Warehouse.id)
            .order_by(desc(order_count))
        )
        scope = self.scope_condition(customer_id)
        if scope is not None:
            query = query.where(scope)
        rows = (await self.db.execute(query)).all()
        return [(row[0], row[1]) for row in rows]
