from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from orderdesk.models import Customer, Material, Order, Project
from orderdesk.repositories.base import BaseRepository


class CustomerRepository(BaseRepository[Customer]):
    model = Customer

    def _with_children(self):
        return select(Customer).options(
            selectinload(Customer.projects),
            selectinload(Customer.users),
        )

    async def list_all(self) -> List[Customer]:
        result = await self.db.execute(self._with_children().order_by(Customer.name))
        return list(result.scalars().all())

    async def get_full(self, customer_id: int) -> Optional[Customer]:
        result = await self.db.execute(
            self._with_children()
            .where(Customer.id == customer_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def count_orders(self, customer_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Order.id)).where(Order.customer_id == customer_id)
        )
        return result.scalar() or 0

    async def count_materials(self, customer_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Material.id))
            .join(Project, Material.project_id == Project.id)
            .where(Project.customer_id == customer_id)
        )
        return result.scalar() or 0


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def count_materials(self, project_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Material.id)).where(Material.project_id == project_id)
        )
        return result.scalar() or 0
