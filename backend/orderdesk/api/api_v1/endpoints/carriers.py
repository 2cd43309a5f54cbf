"""Carrier API"""
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.deps import CurrentUser, get_current_user, get_db, require_admin
from orderdesk.schemas.carrier import (
    CarrierInput, CarrierListResponse, CarrierResponse, CarrierServiceInput,
    CarrierServiceListResponse, CarrierServiceResponse,
)
from orderdesk.services.carrier_service import CarrierManagementService
from orderdesk.services.result import unwrap

router = APIRouter()


@router.get("/", response_model=CarrierListResponse)
async def list_carriers(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    """Active carriers with their active services"""
    carriers = unwrap(await CarrierManagementService(db).list_active_carriers())
    return CarrierListResponse(carriers=[CarrierResponse.model_validate(c) for c in carriers])


@router.post("/", response_model=CarrierResponse, status_code=status.HTTP_201_CREATED)
async def create_carrier(
    *,
    db: AsyncSession = Depends(get_db),
    body: CarrierInput,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    return unwrap(await CarrierManagementService(db).create_carrier(body, user_id=current_user.user_id))


@router.put("/services/{service_id}", response_model=CarrierServiceResponse)
async def update_carrier_service(
    *,
    db: AsyncSession = Depends(get_db),
    service_id: int,
    body: CarrierServiceInput,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    return unwrap(await CarrierManagementService(db).update_service(service_id, body, user_id=current_user.user_id))


@router.get("/{carrier_id}", response_model=CarrierResponse)
async def get_carrier(
    *,
    db: AsyncSession = Depends(get_db),
    carrier_id: int,
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    return unwrap(await CarrierManagementService(db).get_carrier(carrier_id))


@router.put("/{carrier_id}", response_model=CarrierResponse)
async def update_carrier(
    *,
    db: AsyncSession = Depends(get_db),
    carrier_id: int,
    body: CarrierInput,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    return unwrap(await CarrierManagementService(db).update_carrier(carrier_id, body, user_id=current_user.user_id))


@router.get("/{carrier_id}/services", response_model=CarrierServiceListResponse)
async def list_carrier_services(
    *,
    db: AsyncSession = Depends(get_db),
    carrier_id: int,
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    """Active services of one carrier"""
    services = unwrap(await CarrierManagementService(db).list_carrier_services(carrier_id))
    return CarrierServiceListResponse(services=[CarrierServiceResponse.model_validate(s) for s in services])


@router.post("/{carrier_id}/services", response_model=CarrierServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_carrier_service(
    *,
    db: AsyncSession = Depends(get_db),
    carrier_id: int,
    body: CarrierServiceInput,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    return unwrap(await CarrierManagementService(db).create_service(carrier_id, body, user_id=current_user.user_id))
