from __future__ import annotations

import uuid

from sqlalchemy import delete, update

from ..core.errors import NotFound
from ..models import Engine
from ..schemas.engine import EngineRead, EngineRequest
from .base import parse_identity, to_engine_read, transaction


class EngineStore:
    """
    Стор двигателей. Каждая операция - своя транзакция.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    async def create(self, engine_req: EngineRequest) -> EngineRead:
        async with transaction(self._session_factory, "engine create") as db:
            engine = Engine(
                id=uuid.uuid4(),
                displacement=engine_req.displacement,
                no_of_cylinders=engine_req.no_of_cylinders,
                car_range=engine_req.car_range,
            )
            db.add(engine)
            await db.flush()
            result = to_engine_read(engine)
        return result

    async def get_by_id(self, engine_id: str) -> EngineRead:
        eid = parse_identity(engine_id, "engine")

        async with transaction(self._session_factory, "engine read") as db:
            engine = await db.get(Engine, eid)
            if engine is None:
                raise NotFound(f"Engine {eid} not found")
            result = to_engine_read(engine)
        return result

    async def update(self, engine_id: str, engine_req: EngineRequest) -> EngineRead:
        eid = parse_identity(engine_id, "engine")

        async with transaction(self._session_factory, "engine update") as db:
            res = await db.execute(
                update(Engine)
                .where(Engine.id == eid)
                .values(
                    displacement=engine_req.displacement,
                    no_of_cylinders=engine_req.no_of_cylinders,
                    car_range=engine_req.car_range,
                )
            )
            if res.rowcount == 0:
                raise NotFound(f"Engine {eid} not found, no rows were updated")

        return EngineRead(
            engine_id=eid,
            displacement=engine_req.displacement,
            no_of_cylinders=engine_req.no_of_cylinders,
            car_range=engine_req.car_range,
        )

    async def delete(self, engine_id: str) -> EngineRead:
        eid = parse_identity(engine_id, "engine")

        async with transaction(self._session_factory, "engine delete") as db:
            engine = await db.get(Engine, eid)
            if engine is None:
                raise NotFound(f"Engine {eid} not found")
            result = to_engine_read(engine)

            res = await db.execute(delete(Engine).where(Engine.id == eid))
            if res.rowcount == 0:
                raise NotFound(f"Engine {eid} not found, no rows were deleted")
        return result
