from typing import Iterable, List, Optional

from sqlalchemy import select

from orderdesk.models import User
from orderdesk.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def find_taken_emails(self, emails: Iterable[str], exclude_customer_id: Optional[int] = None) -> List[str]:
        """Emails already used by users outside ``exclude_customer_id``"""
        emails = list(emails)
        if not emails:
            return []
        query = select(User.email).where(User.email.in_(emails))
        if exclude_customer_id is not None:
            query = query.where((User.customer_id != exclude_customer_id) | User.customer_id.is_(None))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def lookup_codes_like(self, prefix: str) -> List[str]:
        result = await self.db.execute(select(User.lookup_code).where(User.lookup_code.like(f"{prefix}%")))
        return list(result.scalars().all())
