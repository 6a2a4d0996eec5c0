from typing import List, Protocol

from ..core.security import Principal
from ..schemas.car import CarRead, CarRequest
from ..schemas.engine import EngineRead, EngineRequest


class EngineServiceProtocol(Protocol):
    async def get_engine(self, principal: Principal, engine_id: str) -> EngineRead: ...

    async def create_engine(self, principal: Principal, data_in: EngineRequest) -> EngineRead: ...

    async def update_engine(
        self, principal: Principal, engine_id: str, data_in: EngineRequest
    ) -> EngineRead: ...

    async def delete_engine(self, principal: Principal, engine_id: str) -> EngineRead: ...


class CarServiceProtocol(Protocol):
    async def get_car(self, principal: Principal, car_id: str) -> CarRead: ...

    async def list_cars_by_brand(
        self, principal: Principal, brand: str, include_engine: bool = False
    ) -> List[CarRead]: ...

    async def create_car(self, principal: Principal, data_in: CarRequest) -> CarRead: ...

    async def update_car(self, principal: Principal, car_id: str, data_in: CarRequest) -> CarRead: ...

    async def delete_car(self, principal: Principal, car_id: str) -> CarRead: ...
