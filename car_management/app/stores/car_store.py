from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.errors import NotFound
from ..models import Car, Engine
from ..schemas.car import CarRead, CarRequest
from ..schemas.engine import CarEngineRequest, EngineRead
from .base import as_utc, parse_identity, to_car_read, to_engine_read, transaction


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CarStore:
    """
    Стор машин.

    Двигатель машины разрешается в той же транзакции, что и сама машина:
    либо берётся существующий (engineId в запросе), либо создаётся новый.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    # ------------------------------------------------------------------
    # Создание
    # ------------------------------------------------------------------
    async def create(self, car_req: CarRequest) -> CarRead:
        async with transaction(self._session_factory, "car create") as db:
            engine = await self._resolve_engine(db, car_req.engine)

            now = _now()
            car = Car(
                id=uuid.uuid4(),
                name=car_req.name,
                year=int(car_req.year),
                brand=car_req.brand,
                fuel_type=car_req.fuel_type,
                engine_id=engine.id,
                price=car_req.price,
                created_at=now,
                updated_at=now,
            )
            db.add(car)
            await db.flush()
            result = to_car_read(car, engine)
        return result

    # ------------------------------------------------------------------
    # Получение
    # ------------------------------------------------------------------
    async def get_by_id(self, car_id: str) -> CarRead:
        cid = parse_identity(car_id, "car")

        async with transaction(self._session_factory, "car read") as db:
            car = await self._load_car(db, cid)
            result = to_car_read(car, car.engine)
        return result

    async def get_by_brand(self, brand: str, include_engine: bool) -> List[CarRead]:
        stmt = select(Car).where(Car.brand == brand).order_by(Car.created_at)
        if include_engine:
            stmt = stmt.options(selectinload(Car.engine))

        async with transaction(self._session_factory, "car list by brand") as db:
            res = await db.execute(stmt)
            # без include_engine к car.engine не обращаемся: ленивой загрузки в async нет
            cars = [
                to_car_read(car, car.engine if include_engine else None)
                for car in res.scalars().all()
            ]
        return cars

    # ------------------------------------------------------------------
    # Обновление
    # ------------------------------------------------------------------
    async def update(self, car_id: str, car_req: CarRequest) -> CarRead:
        cid = parse_identity(car_id, "car")
        engine_req = car_req.engine

        async with transaction(self._session_factory, "car update") as db:
            car = await db.get(Car, cid)
            if car is None:
                raise NotFound(f"Car {cid} not found")
            created_at = as_utc(car.created_at)

            if engine_req.engine_id is not None:
                engine = await self._get_engine(db, engine_req.engine_id)
                engine_read = to_engine_read(engine)
            elif await self._engine_is_shared(db, car.engine_id, cid):
                # двигатель общий с другими машинами: им правка не должна достаться,
                # поэтому машина получает свой новый двигатель
                engine = await self._resolve_engine(db, engine_req)
                engine_read = to_engine_read(engine)
            else:
                # двигатель только у этой машины: обновляем на месте
                res = await db.execute(
                    update(Engine)
                    .where(Engine.id == car.engine_id)
                    .values(
                        displacement=engine_req.displacement,
                        no_of_cylinders=engine_req.no_of_cylinders,
                        car_range=engine_req.car_range,
                    )
                )
                if res.rowcount == 0:
                    raise NotFound(f"Engine {car.engine_id} of car {cid} not found")
                engine_read = EngineRead(
                    engine_id=car.engine_id,
                    displacement=engine_req.displacement,
                    no_of_cylinders=engine_req.no_of_cylinders,
                    car_range=engine_req.car_range,
                )

            now = _now()
            res = await db.execute(
                update(Car)
                .where(Car.id == cid)
                .values(
                    name=car_req.name,
                    year=int(car_req.year),
                    brand=car_req.brand,
                    fuel_type=car_req.fuel_type,
                    engine_id=engine_read.engine_id,
                    price=car_req.price,
                    updated_at=now,
                )
            )
            if res.rowcount == 0:
                raise NotFound(f"Car {cid} not found, no rows were updated")

        return CarRead(
            id=cid,
            name=car_req.name,
            year=int(car_req.year),
            brand=car_req.brand,
            fuel_type=car_req.fuel_type,
            engine_id=engine_read.engine_id,
            engine=engine_read,
            price=car_req.price,
            created_at=created_at,
            updated_at=now,
        )

    # ------------------------------------------------------------------
    # Удаление
    # ------------------------------------------------------------------
    async def delete(self, car_id: str) -> CarRead:
        cid = parse_identity(car_id, "car")

        async with transaction(self._session_factory, "car delete") as db:
            car = await self._load_car(db, cid)
            result = to_car_read(car, car.engine)

            # двигатель не трогаем: у него свой жизненный цикл
            res = await db.execute(delete(Car).where(Car.id == cid))
            if res.rowcount == 0:
                raise NotFound(f"Car {cid} not found, no rows were deleted")
        return result

    # ------------------------------------------------------------------
    # Вспомогательное
    # ------------------------------------------------------------------
    @staticmethod
    async def _load_car(db: AsyncSession, cid: uuid.UUID) -> Car:
        res = await db.execute(
            select(Car).options(selectinload(Car.engine)).where(Car.id == cid)
        )
        car = res.scalar_one_or_none()
        if car is None:
            raise NotFound(f"Car {cid} not found")
        if car.engine is None:
            raise NotFound(f"Engine {car.engine_id} of car {cid} not found")
        return car

    @staticmethod
    async def _engine_is_shared(db: AsyncSession, engine_id: uuid.UUID, car_id: uuid.UUID) -> bool:
        others = await db.scalar(
            select(func.count())
            .select_from(Car)
            .where(Car.engine_id == engine_id, Car.id != car_id)
        )
        return bool(others)

    @staticmethod
    async def _get_engine(db: AsyncSession, engine_id: uuid.UUID) -> Engine:
        engine = await db.get(Engine, engine_id)
        if engine is None:
            raise NotFound(f"Engine {engine_id} not found")
        return engine

    async def _resolve_engine(self, db: AsyncSession, engine_req: CarEngineRequest) -> Engine:
        if engine_req.engine_id is not None:
            return await self._get_engine(db, engine_req.engine_id)

        engine = Engine(
            id=uuid.uuid4(),
            displacement=engine_req.displacement,
            no_of_cylinders=engine_req.no_of_cylinders,
            car_range=engine_req.car_range,
        )
        db.add(engine)
        await db.flush()
        return engine
