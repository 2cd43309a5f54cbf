"""Base repository: ORM access bound to one session"""
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    model: Type[ModelT]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, id: int) -> Optional[ModelT]:
        return await self.db.get(self.model, id)

    async def lookup_code_taken(self, lookup_code: str, exclude_id: Optional[int] = None) -> bool:
        query = select(func.count(self.model.id)).where(self.model.lookup_code == lookup_code)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        return (await self.db.execute(query)).scalar() > 0

    async def count_total(self, query) -> int:
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        return (await self.db.execute(count_query)).scalar() or 0

    async def paginate(self, query, page: int, limit: int) -> List[Any]:
        result = await self.db.execute(query.offset((page - 1) * limit).limit(limit))
        return list(result.scalars().all())

    def add(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        return obj

    async def delete(self, obj: ModelT) -> None:
        await self.db.delete(obj)
