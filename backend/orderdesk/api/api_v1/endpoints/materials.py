"""Material API"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.deps import CurrentUser, get_current_user, get_db, require_admin
from orderdesk.schemas.base import Pagination
from orderdesk.schemas.material import (
    MaterialDetail, MaterialInput, MaterialListResponse, MaterialOrderHistory, MaterialProject,
    MaterialSearchResponse, MaterialSummary, UomListResponse,
)
from orderdesk.services.material_service import MaterialService
from orderdesk.services.result import unwrap

router = APIRouter()


def _summary_fields(row: Dict[str, Any]) -> Dict[str, Any]:
    material = row["material"]
    return dict(
        id=material.id,
        lookup_code=material.lookup_code,
        code=material.code,
        description=material.description,
        uom=material.uom,
        available_quantity=material.available_quantity,
        status=material.status,
        project_id=material.project_id,
        project_name=row["project_name"] or "",
        customer_id=row["customer_id"],
        customer_name=row["customer_name"] or "",
        order_count=row["order_count"],
    )


def build_material_summary(row: Dict[str, Any]) -> MaterialSummary:
    return MaterialSummary(**_summary_fields(row))


def build_material_detail(row: Dict[str, Any]) -> MaterialDetail:
    material = row["material"]
    project = row.get("project")
    return MaterialDetail(
        **_summary_fields(row),
        created_at=material.created_at,
        modified_at=material.modified_at,
        project=MaterialProject.model_validate(project) if project else None,
        order_history=[
            MaterialOrderHistory(
                order_id=order.id,
                order_number=order.order_number,
                status=order.status,
                quantity=quantity,
                created_at=order.created_at,
            )
            for order, quantity in row.get("order_history", [])
        ],
    )


@router.get("/", response_model=MaterialListResponse)
async def list_materials(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, description="Code, description or lookup code"),
    uom: Optional[str] = Query(None),
    status_filter: Optional[int] = Query(None, alias="status"),
    project_id: Optional[int] = Query(None, alias="projectId"),
) -> Any:
    data = unwrap(await MaterialService(db).list_materials(
        page=page,
        limit=limit,
        customer_id=current_user.scope_customer_id,
        search=search,
        uom=uom,
        status=status_filter,
        project_id=project_id,
    ))
    return MaterialListResponse(
        materials=[build_material_summary(row) for row in data["rows"]],
        pagination=Pagination.build(data["total"], page, limit),
    )


@router.get("/search", response_model=MaterialSearchResponse)
async def search_materials(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    query: Optional[str] = Query(None),
    uom: Optional[str] = Query(None),
    min_quantity: Optional[int] = Query(None, alias="minQuantity", ge=0),
    max_quantity: Optional[int] = Query(None, alias="maxQuantity", ge=0),
    project_id: Optional[int] = Query(None, alias="projectId"),
) -> Any:
    rows = unwrap(await MaterialService(db).search_materials(
        customer_id=current_user.scope_customer_id,
        search=query,
        uom=uom,
        min_quantity=min_quantity,
        max_quantity=max_quantity,
        project_id=project_id,
    ))
    return MaterialSearchResponse(materials=[build_material_summary(row) for row in rows])


@router.get("/uoms", response_model=UomListResponse)
async def list_uoms(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    return UomListResponse(uoms=unwrap(await MaterialService(db).list_uoms(current_user.scope_customer_id)))


@router.get("/{material_id}", response_model=MaterialDetail)
async def get_material(
    *,
    db: AsyncSession = Depends(get_db),
    material_id: int,
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    row = unwrap(await MaterialService(db).get_material(material_id, current_user.scope_customer_id))
    return build_material_detail(row)


@router.post("/", response_model=MaterialDetail, status_code=status.HTTP_201_CREATED)
async def create_material(
    *,
    db: AsyncSession = Depends(get_db),
    body: MaterialInput,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    return build_material_detail(unwrap(await MaterialService(db).create_material(body, user_id=current_user.user_id)))


@router.put("/{material_id}", response_model=MaterialDetail)
async def update_material(
    *,
    db: AsyncSession = Depends(get_db),
    material_id: int,
    body: MaterialInput,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    row = unwrap(await MaterialService(db).update_material(material_id, body, user_id=current_user.user_id))
    return build_material_detail(row)
