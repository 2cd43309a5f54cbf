"""Materials, scoped to the caller's customer through the owning project"""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.constants import UOMS, Status
from orderdesk.core.logging_config import get_logger
from orderdesk.core.messages import MaterialMessages, NotFoundMessages, OperationMessages, ValidationMessages
from orderdesk.models import Material
from orderdesk.repositories.customer_repository import ProjectRepository
from orderdesk.repositories.material_repository import MaterialRepository
from orderdesk.schemas.material import MaterialInput
from orderdesk.services import validation
from orderdesk.services.result import CONFLICT, NOT_FOUND, ServiceResult

logger = get_logger(__name__)

REQUIRED_FIELDS = {"lookup_code": "Material Lookup Code", "code": "Material Code", "project_id": "Project"}
MATERIAL_FIELDS = ("lookup_code", "code", "description", "uom", "available_quantity", "project_id", "status")


def validate_material(data: dict) -> List[str]:
    errors: List[str] = []
    validation.check_required(errors, data, REQUIRED_FIELDS)
    validation.check_max_length(errors, data.get("lookup_code"), "Material Lookup Code", 50)
    validation.check_max_length(errors, data.get("code"), "Material Code", 50)
    if data.get("uom") is not None and data["uom"] not in UOMS:
        errors.append(ValidationMessages.INVALID_UOM)
    validation.check_non_negative(errors, data.get("available_quantity"), MaterialMessages.INVALID_QUANTITY)
    validation.check_status(errors, data.get("status"))
    return errors


class MaterialService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.materials = MaterialRepository(db)
        self.projects = ProjectRepository(db)

    async def list_materials(self, *, page: int = 1, limit: int = 20, customer_id: Optional[int] = None, **filters) -> ServiceResult:
        rows, total = await self.materials.list_paginated(page=page, limit=limit, customer_id=customer_id, **filters)
        return ServiceResult.ok({"rows": rows, "total": total, "page": page, "limit": limit})

    async def search_materials(self, *, customer_id: Optional[int] = None, **filters) -> ServiceResult:
        return ServiceResult.ok(await self.materials.search(customer_id=customer_id, **filters))

    async def list_uoms(self, customer_id: Optional[int] = None) -> ServiceResult:
        return ServiceResult.ok(await self.materials.distinct_uoms(customer_id))

    async def get_material(self, material_id: int, customer_id: Optional[int] = None) -> ServiceResult:
        summary = await self.materials.get_summary(material_id, customer_id)
        if summary is None:
            return ServiceResult.fail(NotFoundMessages.MATERIAL, NOT_FOUND)
        material = summary["material"]
        summary["project"] = await self.projects.get(material.project_id)
        summary["order_history"] = await self.materials.order_history(material.id)
        return ServiceResult.ok(summary)

    async def create_material(self, data: MaterialInput, user_id: Optional[int] = None) -> ServiceResult:
        fields = data.model_dump(include=set(MATERIAL_FIELDS))
        errors = validate_material(fields)
        if data.project_id is not None and await self.projects.get(data.project_id) is None:
            errors.append(NotFoundMessages.PROJECT)
        if errors:
            return ServiceResult.invalid(errors)
        if await self.materials.lookup_code_taken(data.lookup_code):
            return ServiceResult.fail(MaterialMessages.EXISTS, CONFLICT)

        try:
            fields["uom"] = fields.get("uom") or "EA"
            fields["available_quantity"] = fields.get("available_quantity") or 0
            fields["status"] = fields.get("status") or Status.ACTIVE
            material = self.materials.add(Material(**fields, created_by=user_id, modified_by=user_id))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create material {data.lookup_code}: {e}")
            return ServiceResult.fail(OperationMessages.CREATE_FAILED)

        logger.info(f"Created material {material.lookup_code}")
        return await self.get_material(material.id)

    async def update_material(self, material_id: int, data: MaterialInput, user_id: Optional[int] = None) -> ServiceResult:
        material = await self.materials.get(material_id)
        if material is None:
            return ServiceResult.fail(NotFoundMessages.MATERIAL, NOT_FOUND)

        changes = data.model_dump(exclude_unset=True, include=set(MATERIAL_FIELDS))
        for name in ("status", "uom", "available_quantity"):
            if name in changes and changes[name] is None:
                changes.pop(name)
        merged = {name: getattr(material, name) for name in MATERIAL_FIELDS}
        merged.update(changes)
        errors = validate_material(merged)
        if "project_id" in changes and changes["project_id"] is not None and await self.projects.get(changes["project_id"]) is None:
            errors.append(NotFoundMessages.PROJECT)
        if errors:
            return ServiceResult.invalid(errors)
        if "lookup_code" in changes and await self.materials.lookup_code_taken(changes["lookup_code"], exclude_id=material_id):
            return ServiceResult.fail(MaterialMessages.EXISTS, CONFLICT)

        try:
            for field, value in changes.items():
                setattr(material, field, value)
            material.modified_by = user_id
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update material {material_id}: {e}")
            return ServiceResult.fail(OperationMessages.UPDATE_FAILED)

        logger.info(f"Updated material {material.lookup_code}")
        return await self.get_material(material_id)
