import logging

from ..core.security import Principal
from ..core.validators import validate_engine_request
from ..schemas.engine import EngineRead, EngineRequest
from ..stores.protocols import EngineStoreProtocol

logger = logging.getLogger(__name__)


class EngineService:
    def __init__(self, store: EngineStoreProtocol):
        self._store = store

    async def get_engine(self, principal: Principal, engine_id: str) -> EngineRead:
        return await self._store.get_by_id(engine_id)

    async def create_engine(self, principal: Principal, data_in: EngineRequest) -> EngineRead:
        validate_engine_request(data_in)

        engine = await self._store.create(data_in)
        logger.info("Engine %s created by %s", engine.engine_id, principal.username)
        return engine

    async def update_engine(
        self,
        principal: Principal,
        engine_id: str,
        data_in: EngineRequest,
    ) -> EngineRead:
        validate_engine_request(data_in)

        engine = await self._store.update(engine_id, data_in)
        logger.info("Engine %s updated by %s", engine.engine_id, principal.username)
        return engine

    async def delete_engine(self, principal: Principal, engine_id: str) -> EngineRead:
        engine = await self._store.delete(engine_id)
        logger.info("Engine %s deleted by %s", engine.engine_id, principal.username)
        return engine
