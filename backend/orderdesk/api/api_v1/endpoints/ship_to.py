"""Ship-to / billing address API (client users only)"""
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.deps import CurrentUser, get_db, require_customer
from orderdesk.schemas.account import AccountCreate, AccountResponse, AddressListResponse
from orderdesk.services.account_service import AccountService
from orderdesk.services.result import unwrap

router = APIRouter()


@router.get("/", response_model=AddressListResponse)
async def list_ship_to_addresses(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_customer),
) -> Any:
    accounts = unwrap(await AccountService(db).list_ship_to(current_user.customer_id))
    return AddressListResponse(addresses=[AccountResponse.model_validate(a) for a in accounts])


@router.get("/billing", response_model=AddressListResponse)
async def list_billing_addresses(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_customer),
) -> Any:
    accounts = unwrap(await AccountService(db).list_bill_to(current_user.customer_id))
    return AddressListResponse(addresses=[AccountResponse.model_validate(a) for a in accounts])


@router.post("/", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def create_address(
    *,
    db: AsyncSession = Depends(get_db),
    body: AccountCreate,
    current_user: CurrentUser = Depends(require_customer),
) -> Any:
    return unwrap(await AccountService(db).create_account(current_user.customer_id, body, user_id=current_user.user_id))
