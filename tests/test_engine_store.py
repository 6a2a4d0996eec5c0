"""
Tests for EngineStore against a temporary SQLite database.
"""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from car_management.app.core.errors import InvalidIdentity, NotFound, PersistenceError
from car_management.app.models import Engine
from car_management.app.schemas.engine import EngineRequest
from car_management.app.stores.base import transaction
from car_management.app.stores.engine_store import EngineStore


async def _engine_count(session_factory) -> int:
    async with session_factory() as db:
        return (await db.execute(select(func.count()).select_from(Engine))).scalar_one()


class TestEngineCreate:
    async def test_create_echoes_request(self, engine_store, engine_request):
        engine = await engine_store.create(engine_request)

        assert engine.engine_id is not None
        assert engine.displacement == 1200
        assert engine.no_of_cylinders == 4
        assert engine.car_range == 400

    async def test_identities_are_unique(self, engine_store, engine_request):
        ids = {(await engine_store.create(engine_request)).engine_id for _ in range(5)}
        assert len(ids) == 5

    async def test_round_trip(self, engine_store, engine_request):
        created = await engine_store.create(engine_request)
        loaded = await engine_store.get_by_id(str(created.engine_id))

        assert loaded == created


    async def test_int32_max_round_trip(self, engine_store):
        top = 2**31 - 1
        created = await engine_store.create(
            EngineRequest(displacement=top, no_of_cylinders=top, car_range=top)
        )

        assert await engine_store.get_by_id(str(created.engine_id)) == created


class TestEngineRead:
    async def test_missing_engine_is_not_found_every_time(self, engine_store):
        missing = str(uuid.uuid4())

        for _ in range(2):
            with pytest.raises(NotFound):
                await engine_store.get_by_id(missing)

    async def test_malformed_id(self, engine_store):
        with pytest.raises(InvalidIdentity):
            await engine_store.get_by_id("not-a-uuid")


class TestEngineUpdate:
    async def test_update_changes_fields(self, engine_store, engine_request):
        created = await engine_store.create(engine_request)
        new_values = EngineRequest(displacement=2000, no_of_cylinders=6, car_range=500)

        updated = await engine_store.update(str(created.engine_id), new_values)
        loaded = await engine_store.get_by_id(str(created.engine_id))

        assert updated.engine_id == created.engine_id
        assert loaded == updated
        assert loaded.displacement == 2000

    async def test_update_missing_row(self, engine_store, engine_request):
        with pytest.raises(NotFound):
            await engine_store.update(str(uuid.uuid4()), engine_request)

    async def test_update_malformed_id(self, engine_store, engine_request):
        with pytest.raises(InvalidIdentity):
            await engine_store.update("123", engine_request)


class TestEngineDelete:
    async def test_delete_returns_deleted_entity(self, engine_store, engine_request):
        created = await engine_store.create(engine_request)

        deleted = await engine_store.delete(str(created.engine_id))

        assert deleted == created
        with pytest.raises(NotFound):
            await engine_store.get_by_id(str(created.engine_id))

    async def test_second_delete_is_not_found(self, engine_store, engine_request):
        created = await engine_store.create(engine_request)
        await engine_store.delete(str(created.engine_id))

        with pytest.raises(NotFound):
            await engine_store.delete(str(created.engine_id))

    async def test_delete_malformed_id(self, engine_store):
        with pytest.raises(InvalidIdentity):
            await engine_store.delete("zzz")


class TestTransactions:
    """Tests for commit/rollback discipline."""

    async def test_exception_rolls_back(self, session_factory):
        with pytest.raises(RuntimeError):
            async with transaction(session_factory, "test") as db:
                db.add(Engine(id=uuid.uuid4(), displacement=1, no_of_cylinders=1, car_range=1))
                await db.flush()
                raise RuntimeError("boom")

        assert await _engine_count(session_factory) == 0

    async def test_domain_error_rolls_back(self, session_factory):
        with pytest.raises(NotFound):
            async with transaction(session_factory, "test") as db:
                db.add(Engine(id=uuid.uuid4(), displacement=1, no_of_cylinders=1, car_range=1))
                await db.flush()
                raise NotFound("nope")

        assert await _engine_count(session_factory) == 0

    async def test_database_error_becomes_persistence_error(self, tmp_path, engine_request):
        # схема не создана: любой запрос падает на уровне БД
        db_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        factory = sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)
        store = EngineStore(factory)

        try:
            with pytest.raises(PersistenceError):
                await store.create(engine_request)
            with pytest.raises(PersistenceError):
                await store.get_by_id(str(uuid.uuid4()))
        finally:
            await db_engine.dispose()
