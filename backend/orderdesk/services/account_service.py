"""Ship-to and bill-to accounts of a client's customer"""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.constants import ACCOUNT_TYPES, AccountType, Status
from orderdesk.core.logging_config import get_logger
from orderdesk.core.messages import OperationMessages, ValidationMessages
from orderdesk.models import Account
from orderdesk.repositories.account_repository import AccountRepository
from orderdesk.schemas.account import AccountCreate
from orderdesk.services import validation
from orderdesk.services.result import ServiceResult

logger = get_logger(__name__)

REQUIRED_FIELDS = {
    "name": "Name",
    "address": "Address",
    "city": "City",
    "state": "State",
    "zip_code": "Zip Code",
}


def account_lookup_code(name: str) -> str:
    """``Main Dock`` -> ``MAIN-DOCK``"""
    return "-".join(name.strip().upper().split())[:45]


class AccountService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.accounts = AccountRepository(db)

    async def list_ship_to(self, customer_id: int) -> ServiceResult:
        return ServiceResult.ok(
            await self.accounts.list_active_for_customer(customer_id, (AccountType.SHIP_TO, AccountType.BOTH))
        )

    async def list_bill_to(self, customer_id: int) -> ServiceResult:
        return ServiceResult.ok(
            await self.accounts.list_active_for_customer(customer_id, (AccountType.BILL_TO, AccountType.BOTH))
        )

    async def _unique_lookup_code(self, name: str) -> str:
        base = account_lookup_code(name)
        taken = set(await self.accounts.lookup_codes_like(base))
        if base not in taken:
            return base
        suffix = 2
        while f"{base}-{suffix}" in taken:
            suffix += 1
        return f"{base}-{suffix}"

    async def create_account(self, customer_id: int, data: AccountCreate, user_id: Optional[int] = None) -> ServiceResult:
        fields = data.model_dump()
        errors: List[str] = []
        validation.check_required(errors, fields, REQUIRED_FIELDS)
        validation.check_max_length(errors, data.name, "Name", 100)
        validation.check_email(errors, data.email)
        account_type = data.account_type or AccountType.SHIP_TO
        if account_type not in ACCOUNT_TYPES:
            errors.append(ValidationMessages.INVALID_ACCOUNT_TYPE)
        if errors:
            return ServiceResult.invalid(errors)

        try:
            account = self.accounts.add(Account(
                lookup_code=await self._unique_lookup_code(data.name),
                name=data.name.strip(),
                address=data.address,
                city=data.city,
                state=data.state,
                zip_code=data.zip_code,
                phone=data.phone,
                email=data.email,
                contact_name=data.contact_name,
                customer_id=customer_id,
                account_type=account_type,
                status=Status.ACTIVE,
                created_by=user_id,
                modified_by=user_id,
            ))
            await self.db.commit()
            await self.db.refresh(account)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create account {data.name} for customer {customer_id}: {e}")
            return ServiceResult.fail(OperationMessages.CREATE_FAILED)

        logger.info(f"Created {account.account_type} account {account.lookup_code} for customer {customer_id}")
        return ServiceResult.ok(account)
