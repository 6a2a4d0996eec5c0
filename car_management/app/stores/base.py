"""
Общее для сторов: транзакция на одну операцию, разбор идентификаторов
и перевод ORM-строк в DTO.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import InvalidIdentity, PersistenceError
from ..models import Car, Engine
from ..schemas.car import CarRead
from ..schemas.engine import EngineRead

logger = logging.getLogger(__name__)


@asynccontextmanager
async def transaction(session_factory, operation: str) -> AsyncIterator[AsyncSession]:
    """
    Одна сессия и одна транзакция на операцию стора.

    Выход без исключения -> commit, любое исключение (включая отмену
    запроса) -> rollback. Ошибки SQLAlchemy наружу уходят как PersistenceError,
    доменные ошибки (NotFound и т.п.) пробрасываются как есть.
    """
    async with session_factory() as session:
        try:
            async with session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.exception("%s failed, transaction rolled back", operation)
            raise PersistenceError(f"{operation} failed") from e


def parse_identity(raw, kind: str) -> uuid.UUID:
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError) as e:
        raise InvalidIdentity(f"Invalid {kind} ID: {raw}") from e


def as_utc(value: datetime) -> datetime:
    # SQLite отдаёт DateTime без tzinfo; пишем всегда UTC, поэтому просто проставляем его
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_engine_read(engine: Engine) -> EngineRead:
    return EngineRead(
        engine_id=engine.id,
        displacement=engine.displacement,
        no_of_cylinders=engine.no_of_cylinders,
        car_range=engine.car_range,
    )


def to_car_read(car: Car, engine: Optional[Engine] = None) -> CarRead:
    # engine=None -> машина без вложенного двигателя (ленивая выборка)
    return CarRead(
        id=car.id,
        name=car.name,
        year=car.year,
        brand=car.brand,
        fuel_type=car.fuel_type,
        engine_id=car.engine_id,
        engine=to_engine_read(engine) if engine is not None else None,
        price=car.price,
        created_at=as_utc(car.created_at),
        updated_at=as_utc(car.updated_at),
    )
