import asyncio
import os
import tempfile

# Settings are read at import time, so the environment goes first
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTO_BACKUP_ENABLED", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-the-orderdesk-suite-0123456789")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="orderdesk-logs-"))
os.environ.setdefault("SQLITE_DATABASE_URI", f"sqlite:///{tempfile.mkdtemp(prefix='orderdesk-db-')}/unused.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.pool import NullPool

from orderdesk.core.config import settings
from orderdesk.core.deps import get_db
from orderdesk.db.demo_data import DEMO_CLIENT_EMAIL, DEMO_CLIENT_PASSWORD, load_demo_data
from orderdesk.db.init_db import ensure_tables_exist, seed_reference_data
from orderdesk.db.session import build_engine, build_sessionmaker
from orderdesk.main import app
from orderdesk.models import (
    Account, Carrier, CarrierService, Customer, Material, OrderType, Project, Warehouse,
)
from tests.helpers import customer_payload, login


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def engine(tmp_path):
    test_engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    run(ensure_tables_exist(test_engine))
    yield test_engine
    run(test_engine.dispose())


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
def db_run(session_factory):
    """Run ``fn(session)`` against the test database"""
    def _run(fn):
        async def _inner():
            async with session_factory() as db:
                return await fn(db)
        return run(_inner())
    return _run


async def _collect_ids(db):
    ids = {
        "customer": (await db.execute(select(Customer.id).where(Customer.lookup_code == "ACME"))).scalar(),
        "warehouse": (await db.execute(select(Warehouse.id).where(Warehouse.lookup_code == "WH-CHI"))).scalar(),
        "outbound": (await db.execute(select(OrderType.id).where(OrderType.lookup_code == "OUTBOUND"))).scalar(),
    }
    for model, key in ((Project, "projects"), (Material, "materials"), (Carrier, "carriers"),
                       (CarrierService, "services"), (Account, "accounts")):
        rows = (await db.execute(select(model.lookup_code, model.id))).all()
        ids[key] = {code: id_ for code, id_ in rows}
    return ids


@pytest.fixture
def seed(db_run):
    """Reference data plus the demo data set; returns ids by lookup code"""
    async def _seed(db):
        await seed_reference_data(db)
        await load_demo_data(db)
        return await _collect_ids(db)
    return db_run(_seed)


@pytest.fixture
def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client, seed):
    return login(client, settings.FIRST_ADMIN_EMAIL, settings.FIRST_ADMIN_PASSWORD)


@pytest.fixture
def client_headers(client, seed):
    return login(client, DEMO_CLIENT_EMAIL, DEMO_CLIENT_PASSWORD)


@pytest.fixture
def other_customer(client, admin_headers):
    """A second customer with one client user"""
    response = client.post("/api/customers/", json=customer_payload(), headers=admin_headers)
    assert response.status_code == 201, response.text
    data = response.json()
    return {
        "id": data["id"],
        "projects": {p["name"]: p["id"] for p in data["projects"]},
        "headers": login(client, "buyer@globex.example.com", "Password456!"),
    }
