from typing import List

from fastapi import APIRouter, Depends, Query, status

from ..core.security import Principal
from ..schemas.car import CarRead, CarRequest
from ..services.protocols import CarServiceProtocol
from .deps import get_cars_service, get_current_principal

router = APIRouter(
    prefix="/cars",
    tags=["cars"],
)


@router.get(
    "/{car_id}",
    response_model=CarRead,
)
async def get_car(
    car_id: str,
    principal: Principal = Depends(get_current_principal),
    service: CarServiceProtocol = Depends(get_cars_service),
):
    """
    Получить машину по ID вместе с двигателем.
    """
    return await service.get_car(principal, car_id)


@router.get(
    "",
    response_model=List[CarRead],
)
async def list_cars_by_brand(
    brand: str = Query(...),
    is_engine: bool = Query(False, alias="isEngine"),
    principal: Principal = Depends(get_current_principal),
    service: CarServiceProtocol = Depends(get_cars_service),
):
    """
    Машины бренда. isEngine=true - с вложенными двигателями.
    """
    return await service.list_cars_by_brand(principal, brand, is_engine)


@router.post(
    "",
    response_model=CarRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_car(
    data_in: CarRequest,
    principal: Principal = Depends(get_current_principal),
    service: CarServiceProtocol = Depends(get_cars_service),
):
    return await service.create_car(principal, data_in)


@router.put(
    "/{car_id}",
    response_model=CarRead,
    status_code=status.HTTP_201_CREATED,
)
async def update_car(
    car_id: str,
    data_in: CarRequest,
    principal: Principal = Depends(get_current_principal),
    service: CarServiceProtocol = Depends(get_cars_service),
):
    """
    Полное обновление машины (и её двигателя, если engineId не указан).
    """
    return await service.update_car(principal, car_id, data_in)


@router.delete(
    "/{car_id}",
    response_model=CarRead,
    status_code=status.HTTP_201_CREATED,
)
async def delete_car(
    car_id: str,
    principal: Principal = Depends(get_current_principal),
    service: CarServiceProtocol = Depends(get_cars_service),
):
    """
    Удаление машины. Двигатель остаётся.
    """
    return await service.delete_car(principal, car_id)
