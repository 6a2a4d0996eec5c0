from typing import List, Protocol

from ..schemas.car import CarRead, CarRequest
from ..schemas.engine import EngineRead, EngineRequest


class EngineStoreProtocol(Protocol):
    async def create(self, engine_req: EngineRequest) -> EngineRead: ...

    async def get_by_id(self, engine_id: str) -> EngineRead: ...

    async def update(self, engine_id: str, engine_req: EngineRequest) -> EngineRead: ...

    async def delete(self, engine_id: str) -> EngineRead: ...


class CarStoreProtocol(Protocol):
    async def create(self, car_req: CarRequest) -> CarRead: ...

    async def get_by_id(self, car_id: str) -> CarRead: ...

    async def get_by_brand(self, brand: str, include_engine: bool) -> List[CarRead]: ...

    async def update(self, car_id: str, car_req: CarRequest) -> CarRead: ...

    async def delete(self, car_id: str) -> CarRead: ...
