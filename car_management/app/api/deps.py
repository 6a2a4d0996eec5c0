import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.db import AsyncSessionLocal
from ..core.errors import Unauthenticated
from ..core.security import Principal, TokenGate
from ..services.cars_service import CarsService
from ..services.engine_service import EngineService
from ..stores.car_store import CarStore
from ..stores.engine_store import EngineStore

logger = logging.getLogger(__name__)

# auto_error=False: отсутствие заголовка обрабатываем сами, чтобы ответ был 401
bearer_scheme = HTTPBearer(auto_error=False)


def get_session_factory():
    return AsyncSessionLocal


def get_token_gate() -> TokenGate:
    return TokenGate.from_settings()


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    gate: TokenGate = Depends(get_token_gate),
) -> Principal:
    """
    Проверка Bearer-токена. Всё, что за этой зависимостью,
    выполняется только для валидного токена.
    """
    token = credentials.credentials if credentials else None
    try:
        return gate.verify(token)
    except Unauthenticated as e:
        logger.warning("Rejected request: %s", e.message)
        raise


def get_engine_service(session_factory=Depends(get_session_factory)) -> EngineService:
    return EngineService(EngineStore(session_factory))


def get_cars_service(session_factory=Depends(get_session_factory)) -> CarsService:
    return CarsService(CarStore(session_factory))
