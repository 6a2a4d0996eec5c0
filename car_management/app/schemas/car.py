from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer, field_validator

from .engine import CarEngineRequest, EngineRead

# В JSON цена уходит числом, а не строкой
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class FuelType(str, Enum):
    petrol = "Petrol"
    diesel = "Diesel"
    electric = "Electric"
    hybrid = "Hybrid"


class CarRequest(BaseModel):
    name: str = ""
    # год приходит числом или строкой, проверяется валидатором
    year: str = ""
    brand: str = ""
    fuel_type: str = Field("", alias="fuelType")
    engine: CarEngineRequest = Field(default_factory=CarEngineRequest)
    price: Decimal = Decimal("0")

    class Config:
        populate_by_name = True

    @field_validator("year", mode="before")
    @classmethod
    def _year_as_text(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class CarRead(BaseModel):
    id: UUID
    name: str
    year: int
    brand: str
    fuel_type: str = Field(..., alias="fuelType")

    engine_id: UUID = Field(..., alias="engineId")
    # None, если список запрошен без двигателей (isEngine=false)
    engine: Optional[EngineRead] = None

    price: Price
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True
