import logging
from typing import List

from ..core.security import Principal
from ..core.validators import validate_car_request
from ..schemas.car import CarRead, CarRequest
from ..stores.protocols import CarStoreProtocol

logger = logging.getLogger(__name__)


class CarsService:
    """
    Сервисный слой для машин: сначала валидация, потом стор.
    Ошибки стора пробрасываются без изменений.
    """

    def __init__(self, store: CarStoreProtocol):
        self._store = store

    async def get_car(self, principal: Principal, car_id: str) -> CarRead:
        return await self._store.get_by_id(car_id)

    async def list_cars_by_brand(
        self,
        principal: Principal,
        brand: str,
        include_engine: bool = False,
    ) -> List[CarRead]:
        return await self._store.get_by_brand(brand, include_engine)

    async def create_car(self, principal: Principal, data_in: CarRequest) -> CarRead:
        validate_car_request(data_in)

        car = await self._store.create(data_in)
        logger.info("Car %s (engine %s) created by %s", car.id, car.engine_id, principal.username)
        return car

    async def update_car(self, principal: Principal, car_id: str, data_in: CarRequest) -> CarRead:
        validate_car_request(data_in)

        car = await self._store.update(car_id, data_in)
        logger.info("Car %s updated by %s", car.id, principal.username)
        return car

    async def delete_car(self, principal: Principal, car_id: str) -> CarRead:
        car = await self._store.delete(car_id)
        logger.info("Car %s deleted by %s", car.id, principal.username)
        return car
