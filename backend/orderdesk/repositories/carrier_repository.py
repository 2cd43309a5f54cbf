from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload, with_loader_criteria

from orderdesk.core.constants import Status
from orderdesk.models import Carrier, CarrierService
from orderdesk.repositories.base import BaseRepository


class CarrierRepository(BaseRepository[Carrier]):
    model = Carrier

    async def list_active(self) -> List[Carrier]:
        """Active carriers with only their active services loaded"""
        result = await self.db.execute(
            select(Carrier)
            .options(
                selectinload(Carrier.services),
                with_loader_criteria(CarrierService, CarrierService.status == Status.ACTIVE),
            )
            .where(Carrier.status == Status.ACTIVE)
            .order_by(Carrier.name)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_full(self, carrier_id: int) -> Optional[Carrier]:
        result = await self.db.execute(
            select(Carrier)
            .options(selectinload(Carrier.services))
            .where(Carrier.id == carrier_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()


class CarrierServiceRepository(BaseRepository[CarrierService]):
    model = CarrierService

    async def list_active_for_carrier(self, carrier_id: int) -> List[CarrierService]:
        result = await self.db.execute(
            select(CarrierService)
            .where(
                CarrierService.carrier_id == carrier_id,
                CarrierService.status == Status.ACTIVE,
            )
            .order_by(CarrierService.name)
        )
        return list(result.scalars().all())
