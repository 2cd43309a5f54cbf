"""
Demo data loader
- creates missing tables and reference data
- adds the demo customer, carriers, warehouse and materials
"""

import asyncio
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from orderdesk.core.config import settings
from orderdesk.core.logging_config import setup_logging
from orderdesk.db.demo_data import DEMO_CLIENT_EMAIL, DEMO_CLIENT_PASSWORD, load_demo_data
from orderdesk.db.init_db import init_db
from orderdesk.db.session import SessionLocal


async def main():
    await init_db()
    async with SessionLocal() as db:
        loaded = await load_demo_data(db)
    if loaded:
        print("✅ Demo data loaded")
        print(f"   admin:  {settings.FIRST_ADMIN_EMAIL} / {settings.FIRST_ADMIN_PASSWORD}")
        print(f"   client: {DEMO_CLIENT_EMAIL} / {DEMO_CLIENT_PASSWORD}")
    else:
        print("ℹ️  Demo data already present")


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    asyncio.run(main())
