"""
Pytest fixtures: временная SQLite-база на тест, сторы поверх неё
и HTTP-клиент к приложению.
"""

import os

# Настройки должны быть в окружении до импорта car_management
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_TO_FILE", "0")
os.environ.setdefault("SQLITE_DB_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from car_management.app.api.deps import get_session_factory
from car_management.app.core.db import init_db
from car_management.app.core.security import Principal
from car_management.app.schemas.car import CarRequest
from car_management.app.schemas.engine import EngineRequest
from car_management.app.stores.car_store import CarStore
from car_management.app.stores.engine_store import EngineStore
from car_management.main import app


@pytest.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cars.db'}", future=True)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def engine_store(session_factory):
    return EngineStore(session_factory)


@pytest.fixture
def car_store(session_factory):
    return CarStore(session_factory)


@pytest.fixture
def principal():
    now = datetime.now(timezone.utc)
    return Principal(username="admin", issued_at=now, expires_at=now + timedelta(hours=24))


@pytest.fixture
def engine_request():
    return EngineRequest(displacement=1200, no_of_cylinders=4, car_range=400)


@pytest.fixture
def car_request():
    return CarRequest(
        name="Corolla",
        year="2020",
        brand="Toyota",
        fuel_type="Petrol",
        engine={"displacement": 1800, "noOfCylinders": 4, "carRange": 600},
        price="25000.50",
    )


@pytest.fixture
async def client(session_factory):
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(client):
    resp = await client.post("/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}
