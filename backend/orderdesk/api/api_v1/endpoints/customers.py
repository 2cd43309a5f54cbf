"""Customer API (admin only)"""
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.deps import CurrentUser, get_db, require_admin
from orderdesk.models import Customer
from orderdesk.schemas.customer import CustomerCreate, CustomerListResponse, CustomerResponse, CustomerUpdate
from orderdesk.services.customer_service import CustomerService
from orderdesk.services.result import unwrap

router = APIRouter()


def build_customer_response(customer: Customer) -> CustomerResponse:
    resp = CustomerResponse.model_validate(customer)
    resp.project_count = len(resp.projects)
    resp.user_count = len(resp.users)
    return resp


@router.get("/", response_model=CustomerListResponse)
async def list_customers(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    """Customers ordered by name, with projects and users"""
    customers = unwrap(await CustomerService(db).list_customers())
    return CustomerListResponse(customers=[build_customer_response(c) for c in customers])


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    *,
    db: AsyncSession = Depends(get_db),
    customer_id: int,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    return build_customer_response(unwrap(await CustomerService(db).get_customer(customer_id)))


@router.post("/", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    *,
    db: AsyncSession = Depends(get_db),
    body: CustomerCreate,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    """Create a customer together with its projects and users"""
    customer = unwrap(await CustomerService(db).create_customer(body, user_id=current_user.user_id))
    return build_customer_response(customer)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    *,
    db: AsyncSession = Depends(get_db),
    customer_id: int,
    body: CustomerUpdate,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    customer = unwrap(await CustomerService(db).update_customer(customer_id, body, user_id=current_user.user_id))
    return build_customer_response(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_customer(
    *,
    db: AsyncSession = Depends(get_db),
    customer_id: int,
    current_user: CurrentUser = Depends(require_admin),
):
    unwrap(await CustomerService(db).delete_customer(customer_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
