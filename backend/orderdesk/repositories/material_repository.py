from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import and_, func, or_, select

from orderdesk.models import Customer, Material, Order, OrderItem, Project
from orderdesk.repositories.base import BaseRepository


def _order_count_column():
    return (
        select(func.count(func.distinct(OrderItem.order_id)))
        .where(OrderItem.material_id == Material.id)
        .correlate(Material)
        .scalar_subquery()
        .label("order_count")
    )


class MaterialRepository(BaseRepository[Material]):
    model = Material

    def _summary_query(self):
        return (
            select(
                Material,
                Project.name.label("project_name"),
                Customer.id.label("customer_id"),
                Customer.name.label("customer_name"),
                _order_count_column(),
            )
            .join(Project, Material.project_id == Project.id)
            .join(Customer, Project.customer_id == Customer.id)
        )

    @staticmethod
    def _rows_to_dicts(rows) -> List[Dict[str, Any]]:
        return [
            {
                "material": row[0],
                "project_name": row[1],
                "customer_id": row[2],
                "customer_name": row[3],
                "order_count": row[4] or 0,
            }
            for row in rows
        ]

    def _conditions(
        self,
        customer_id: Optional[int],
        search: Optional[str] = None,
        uom: Optional[str] = None,
        status: Optional[int] = None,
        project_id: Optional[int] = None,
        min_quantity: Optional[int] = None,
        max_quantity: Optional[int] = None,
    ) -> list:
        conditions = []
        if customer_id is not None:
            conditions.append(Project.customer_id == customer_id)
        if search:
            conditions.append(
                or_(
                    Material.code.contains(search),
                    Material.description.contains(search),
                    Material.lookup_code.contains(search),
                )
            )
        if uom:
            conditions.append(Material.uom == uom)
        if status is not None:
            conditions.append(Material.status == status)
        if project_id is not None:
            conditions.append(Material.project_id == project_id)
        if min_quantity is not None:
            conditions.append(Material.available_quantity >= min_quantity)
        if max_quantity is not None:
            conditions.append(Material.available_quantity <= max_quantity)
        return conditions

    async def list_paginated(self, *, page: int, limit: int, customer_id: Optional[int] = None, **filters) -> Tuple[List[Dict[str, Any]], int]:
        conditions = self._conditions(customer_id, **filters)
        base = select(Material.id).join(Project, Material.project_id == Project.id)
        query = self._summary_query()
        if conditions:
            base = base.where(and_(*conditions))
            query = query.where(and_(*conditions))
        total = await self.count_total(base)
        rows = (await self.db.execute(
            query.order_by(Material.code).offset((page - 1) * limit).limit(limit)
        )).all()
        return self._rows_to_dicts(rows), total

    async def search(self, *, customer_id: Optional[int] = None, limit: int = 50, **filters) -> List[Dict[str, Any]]:
        conditions = self._conditions(customer_id, **filters)
        query = self._summary_query()
        if conditions:
            query = query.where(and_(*conditions))
        rows = (await self.db.execute(query.order_by(Material.code).limit(limit))).all()
        return self._rows_to_dicts(rows)

    async def get_summary(self, material_id: int, customer_id: Optional[int] = None) -> Optional[Dict[str, Any]]:
        conditions = self._conditions(customer_id)
        conditions.append(Material.id == material_id)
        row = (await self.db.execute(self._summary_query().where(and_(*conditions)))).first()
        return self._rows_to_dicts([row])[0] if row else None

    async def distinct_uoms(self, customer_id: Optional[int] = None) -> List[str]:
        query = select(Material.uom).distinct()
        if customer_id is not None:
            query = query.join(Project, Material.project_id == Project.id).where(Project.customer_id == customer_id)
        result = await self.db.execute(query.order_by(Material.uom))
        return [uom for uom in result.scalars().all() if uom]

    async def order_history(self, material_id: int, limit: int = 50) -> List[Tuple[Order, int]]:
        rows = (await self.db.execute(
            select(Order, OrderItem.quantity)
            .join(OrderItem, OrderItem.order_id == Order.id)
            .where(OrderItem.material_id == material_id)
            .order_by(Order.created_at.desc())
            .limit(limit)
        )).all()
        return [(row[0], row[1]) for row in rows]

    async def find_for_customer(self, material_ids: List[int], customer_id: int) -> Dict[int, Material]:
        """Materials among ``material_ids`` owned by the customer's projects"""
        if not material_ids:
            return {}
        result = await self.db.execute(
            select(Material)
            .join(Project, Material.project_id == Project.id)
            .where(Material.id.in_(material_ids), Project.customer_id == customer_id)
        )
        return {m.id: m for m in result.scalars().all()}
