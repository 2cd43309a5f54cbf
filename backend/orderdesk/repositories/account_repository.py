from typing import Iterable, List

from sqlalchemy import select

from orderdesk.core.constants import Status
from orderdesk.models import Account
from orderdesk.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    model = Account

    async def list_active_for_customer(self, customer_id: int, account_types: Iterable[str]) -> List[Account]:
        result = await self.db.execute(
            select(Account)
            .where(
                Account.customer_id == customer_id,
                Account.status == Status.ACTIVE,
                Account.account_type.in_(list(account_types)),
            )
            .order_by(Account.name)
        )
        return list(result.scalars().all())

    async def lookup_codes_like(self, prefix: str) -> List[str]:
        result = await self.db.execute(
            select(Account.lookup_code).where(Account.lookup_code.like(f"{prefix}%"))
        )
        return list(result.scalars().all())
