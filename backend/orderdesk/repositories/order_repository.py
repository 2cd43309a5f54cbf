from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import Integer, and_, cast, desc, func, select
from sqlalchemy.orm import selectinload

from orderdesk.core.constants import ORDER_NUMBER_PREFIX, Status
from orderdesk.models import Carrier, Material, Order, OrderItem, OrderType
from orderdesk.repositories.base import BaseRepository


def order_number_prefix(today: Optional[datetime] = None) -> str:
    return f"{ORDER_NUMBER_PREFIX}{(today or datetime.now()).strftime('%y%m%d')}"


class OrderRepository(BaseRepository[Order]):
    model = Order

    def base_query(self):
        """Order with every relation the responses read"""
        return select(Order).options(
            selectinload(Order.items).selectinload(OrderItem.material),
            selectinload(Order.order_type),
            selectinload(Order.customer),
            selectinload(Order.ship_to_account),
            selectinload(Order.bill_to_account),
            selectinload(Order.carrier),
            selectinload(Order.carrier_service),
            selectinload(Order.warehouse),
        )

    async def next_order_number(self, today: Optional[datetime] = None) -> str:
        """``ORD`` + yymmdd + daily sequence, zero padded to 4 digits"""
        prefix = order_number_prefix(today)
        sequence = cast(func.substr(Order.order_number, len(prefix) + 1), Integer)
        result = await self.db.execute(
            select(func.max(sequence)).where(Order.order_number.like(f"{prefix}%"))
        )
        seq = (result.scalar() or 0) + 1
        return f"{prefix}{seq:04d}"

    async def get_full(self, order_id: int) -> Optional[Order]:
        result = await self.db.execute(
            self.base_query()
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def list_paginated(
        self,
        *,
        customer_id: int,
        page: int,
        limit: int,
        status: Optional[int] = None,
        from_date: Optional[datetime] = None,
        to_date: Optional[datetime] = None,
    ) -> Tuple[List[Order], int]:
        conditions = [Order.customer_id == customer_id]
        if status is not None:
            conditions.append(Order.status == status)
        if from_date is not None:
            conditions.append(Order.created_at >= from_date)
        if to_date is not None:
            conditions.append(Order.created_at <= to_date)

        query = self.base_query().where(and_(*conditions)).order_by(desc(Order.created_at), desc(Order.id))
        total = await self.count_total(select(Order.id).where(and_(*conditions)))
        return await self.paginate(query, page, limit), total

    # ===== Statistics =====

    async def counts_by_status(self, customer_id: int) -> List[Tuple[int, int]]:
        rows = (await self.db.execute(
            select(Order.status, func.count(Order.id))
            .where(Order.customer_id == customer_id)
            .group_by(Order.status)
            .order_by(Order.status)
        )).all()
        return [(s, c) for s, c in rows]

    async def created_dates_since(self, customer_id: int, since: datetime) -> List[datetime]:
        result = await self.db.execute(
            select(Order.created_at).where(Order.customer_id == customer_id, Order.created_at >= since)
        )
        return list(result.scalars().all())

    async def top_carriers(self, customer_id: int, limit: int = 5) -> List[Tuple[int, str, int]]:
        order_count = func.count(Order.id).label("order_count")
        rows = (await self.db.execute(
            select(Carrier.id, Carrier.name, order_count)
            .join(Order, Order.carrier_id == Carrier.id)
            .where(Order.customer_id == customer_id)
            .group_by(Carrier.id, Carrier.name)
            .order_by(desc(order_count), Carrier.name)
            .limit(limit)
        )).all()
        return [(r[0], r[1], r[2]) for r in rows]

    async def top_materials(self, customer_id: int, limit: int = 5) -> List[Tuple[Material, int, int]]:
        total_quantity = func.sum(OrderItem.quantity).label("total_quantity")
        rows = (await self.db.execute(
            select(Material, total_quantity, func.count(func.distinct(OrderItem.order_id)))
            .join(OrderItem, OrderItem.material_id == Material.id)
            .join(Order, OrderItem.order_id == Order.id)
            .where(Order.customer_id == customer_id)
            .group_by(Material.id)
            .order_by(desc(total_quantity))
            .limit(limit)
        )).all()
        return [(r[0], r[1] or 0, r[2] or 0) for r in rows]


class OrderTypeRepository(BaseRepository[OrderType]):
    model = OrderType

    async def list_active(self) -> List[OrderType]:
        result = await self.db.execute(
            select(OrderType).where(OrderType.status == Status.ACTIVE).order_by(OrderType.name)
        )
        return list(result.scalars().all())
