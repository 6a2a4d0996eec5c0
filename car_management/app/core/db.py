from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

engine = create_async_engine(
    settings.DB_URL,
    echo=getattr(settings, "DEBUG", False),
    future=True,
)

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


async def init_db(bind=None) -> None:
    """
    Инициализация БД: create_all() создаёт таблицы engine и car, если их нет.
    """
    # важно импортнуть модели, чтобы Base.metadata знала про все таблицы
    from .. import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is ready")
