"""Carriers and their service levels"""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.constants import Status
from orderdesk.core.logging_config import get_logger
from orderdesk.core.messages import CarrierMessages, NotFoundMessages, OperationMessages
from orderdesk.models import Carrier, CarrierService
from orderdesk.repositories.carrier_repository import CarrierRepository, CarrierServiceRepository
from orderdesk.schemas.carrier import CarrierInput, CarrierServiceInput
from orderdesk.services import validation
from orderdesk.services.result import CONFLICT, NOT_FOUND, ServiceResult

logger = get_logger(__name__)


def validate_code_and_name(data: dict, label: str, partial: bool = False) -> List[str]:
    errors: List[str] = []
    if not partial:
        validation.check_required(errors, data, {"lookup_code": f"{label} Code", "name": f"{label} Name"})
    else:
        for name, field_label in (("lookup_code", f"{label} Code"), ("name", f"{label} Name")):
            if name in data and validation.is_blank(data[name]):
                errors.append(f"{field_label} is required")
    validation.check_max_length(errors, data.get("lookup_code"), f"{label} Code", 50)
    validation.check_max_length(errors, data.get("name"), f"{label} Name", 100)
    validation.check_status(errors, data.get("status"))
    return errors


class CarrierManagementService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.carriers = CarrierRepository(db)
        self.services = CarrierServiceRepository(db)

    async def list_active_carriers(self) -> ServiceResult:
        return ServiceResult.ok(await self.carriers.list_active())

    async def get_carrier(self, carrier_id: int) -> ServiceResult:
        carrier = await self.carriers.get_full(carrier_id)
        if carrier is None:
            return ServiceResult.fail(NotFoundMessages.CARRIER, NOT_FOUND)
        return ServiceResult.ok(carrier)

    async def list_carrier_services(self, carrier_id: int) -> ServiceResult:
        if await self.carriers.get(carrier_id) is None:
            return ServiceResult.fail(NotFoundMessages.CARRIER, NOT_FOUND)
        return ServiceResult.ok(await self.services.list_active_for_carrier(carrier_id))

    async def create_carrier(self, data: CarrierInput, user_id: Optional[int] = None) -> ServiceResult:
        fields = data.model_dump()
        errors = validate_code_and_name(fields, "Carrier")
        if errors:
            return ServiceResult.invalid(errors)
        if await self.carriers.lookup_code_taken(data.lookup_code):
            return ServiceResult.fail(CarrierMessages.EXISTS, CONFLICT)

        try:
            carrier = self.carriers.add(Carrier(
                lookup_code=data.lookup_code,
                name=data.name,
                status=data.status or Status.ACTIVE,
                created_by=user_id,
                modified_by=user_id,
            ))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create carrier {data.lookup_code}: {e}")
            return ServiceResult.fail(OperationMessages.CREATE_FAILED)

        logger.info(f"Created carrier {carrier.lookup_code}")
        return ServiceResult.ok(await self.carriers.get_full(carrier.id))

    async def update_carrier(self, carrier_id: int, data: CarrierInput, user_id: Optional[int] = None) -> ServiceResult:
        carrier = await self.carriers.get(carrier_id)
        if carrier is None:
            return ServiceResult.fail(NotFoundMessages.CARRIER, NOT_FOUND)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        errors = validate_code_and_name(changes, "Carrier", partial=True)
        if errors:
            return ServiceResult.invalid(errors)
        if "lookup_code" in changes and await self.carriers.lookup_code_taken(changes["lookup_code"], exclude_id=carrier_id):
            return ServiceResult.fail(CarrierMessages.EXISTS, CONFLICT)

        try:
            for field, value in changes.items():
                setattr(carrier, field, value)
            carrier.modified_by = user_id
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update carrier {carrier_id}: {e}")
            return ServiceResult.fail(OperationMessages.UPDATE_FAILED)

        logger.info(f"Updated carrier {carrier.lookup_code}")
        return ServiceResult.ok(await self.carriers.get_full(carrier_id))

    async def create_service(self, carrier_id: int, data: CarrierServiceInput, user_id: Optional[int] = None) -> ServiceResult:
        if await self.carriers.get(carrier_id) is None:
            return ServiceResult.fail(NotFoundMessages.CARRIER, NOT_FOUND)
        errors = validate_code_and_name(data.model_dump(), "Service")
        if errors:
            return ServiceResult.invalid(errors)
        if await self.services.lookup_code_taken(data.lookup_code):
            return ServiceResult.fail(CarrierMessages.SERVICE_EXISTS, CONFLICT)

        try:
            service = self.services.add(CarrierService(
                lookup_code=data.lookup_code,
                name=data.name,
                description=data.description,
                carrier_id=carrier_id,
                status=data.status or Status.ACTIVE,
                created_by=user_id,
                modified_by=user_id,
            ))
            await self.db.commit()
            await self.db.refresh(service)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create service {data.lookup_code}: {e}")
            return ServiceResult.fail(OperationMessages.CREATE_FAILED)

        logger.info(f"Created carrier service {service.lookup_code}")
        return ServiceResult.ok(service)

    async def update_service(self, service_id: int, data: CarrierServiceInput, user_id: Optional[int] = None) -> ServiceResult:
        service = await self.services.get(service_id)
        if service is None:
            return ServiceResult.fail(NotFoundMessages.CARRIER_SERVICE, NOT_FOUND)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        errors = validate_code_and_name(changes, "Service", partial=True)
        if errors:
            return ServiceResult.invalid(errors)
        if "lookup_code" in changes and await self.services.lookup_code_taken(changes["lookup_code"], exclude_id=service_id):
            return ServiceResult.fail(CarrierMessages.SERVICE_EXISTS, CONFLICT)

        try:
            for field, value in changes.items():
                setattr(service, field, value)
            service.modified_by = user_id
            await self.db.commit()
            await self.db.refresh(service)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update service {service_id}: {e}")
            return ServiceResult.fail(OperationMessages.UPDATE_FAILED)

        logger.info(f"Updated carrier service {service.lookup_code}")
        return ServiceResult.ok(service)
