"""Table creation and reference data"""
import asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.constants import STATUS_CATALOG, Status
from orderdesk.core.logging_config import get_logger
from orderdesk.db.base import Base
from orderdesk.db.session import SessionLocal, engine
from orderdesk.models import OrderType, StatusCode
from orderdesk.services.auth_service import ensure_admin

logger = get_logger(__name__)

ORDER_TYPES = [
    ("OUTBOUND", "Outbound", "Shipment leaving the warehouse"),
    ("INBOUND", "Inbound", "Receipt into the warehouse"),
]


async def ensure_tables_exist(bind=None) -> None:
    """
    Create missing tables (called on startup)
    """
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_reference_data(db: AsyncSession) -> dict:
    """Insert missing statuses, order types and the first admin"""
    created = {"statuses": 0, "order_types": 0, "admin": False}

    existing_codes = set((await db.execute(select(StatusCode.code))).scalars().all())
    for code, name, description, entity in STATUS_CATALOG:
        if code not in existing_codes:
            db.add(StatusCode(code=code, name=name, description=description, entity=entity))
            created["statuses"] += 1

    existing_types = set((await db.execute(select(OrderType.lookup_code))).scalars().all())
    for lookup_code, name, description in ORDER_TYPES:
        if lookup_code not in existing_types:
            db.add(OrderType(lookup_code=lookup_code, name=name, description=description, status=Status.ACTIVE))
            created["order_types"] += 1

    await db.commit()
    created["admin"] = await ensure_admin(db)
    return created


async def init_db() -> None:
    await ensure_tables_exist()
    async with SessionLocal() as db:
        created = await seed_reference_data(db)
    logger.info(f"Reference data seeded: {created}")


if __name__ == "__main__":
    asyncio.run(init_db())
