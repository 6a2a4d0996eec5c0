from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class EngineBase(BaseModel):
    # Ограничения (> 0) проверяет core/validators.py, а не pydantic:
    # так порядок проверок и текст ошибок остаются под нашим контролем.
    displacement: int = 0
    no_of_cylinders: int = Field(0, alias="noOfCylinders")
    car_range: int = Field(0, alias="carRange")

    class Config:
        populate_by_name = True


class EngineRequest(EngineBase):
    pass


class CarEngineRequest(EngineBase):
    """
    Двигатель внутри запроса на машину.
    Если указан engineId, берётся уже существующий двигатель.
    """

    engine_id: Optional[UUID] = Field(None, alias="engineId")


class EngineRead(EngineBase):
    engine_id: UUID = Field(..., alias="engineId")
