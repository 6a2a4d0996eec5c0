"""
Проверка входящих запросов до любого обращения к БД.

Функции чистые: ничего не пишут и не читают, только бросают
ValidationError на первом невалидном поле. Порядок проверок машины
фиксирован: name -> year -> brand -> fuelType -> engine -> price.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import Optional

from ..schemas.car import CarRequest, FuelType
from ..schemas.engine import EngineBase
from .errors import ValidationError

MIN_CAR_YEAR = 1886

FUEL_TYPES = tuple(ft.value for ft in FuelType)

# не больше 5 цифр: int() на тысячах цифр падает с ValueError
_YEAR_RE = re.compile(r"-?\d{1,5}")

# Integer-колонки engine: int32
MAX_ENGINE_VALUE = 2**31 - 1

# price хранится как Numeric(12, 2): до 10 цифр целой части и 2 после запятой
MAX_PRICE = Decimal("10000000000")
PRICE_STEP = Decimal("0.01")


def validate_engine_request(engine_req: EngineBase) -> None:
    _validate_engine(engine_req)


def validate_car_request(car_req: CarRequest, current_year: Optional[int] = None) -> None:
    _validate_name(car_req.name)
    _validate_year(car_req.year, current_year or date.today().year)
    _validate_brand(car_req.brand)
    _validate_fuel_type(car_req.fuel_type)
    _validate_engine(car_req.engine, prefix="engine.")
    _validate_price(car_req.price)


def _validate_name(name: str) -> None:
    if not name:
        raise ValidationError("name is required", field="name")


def _validate_year(year: str, current_year: int) -> None:
    if not year:
        raise ValidationError("year is required", field="year")

    if not _YEAR_RE.fullmatch(year):
        raise ValidationError("year must be a valid number", field="year")

    if not MIN_CAR_YEAR <= int(year) <= current_year:
        raise ValidationError(
            f"year must be between {MIN_CAR_YEAR} and {current_year}",
            field="year",
        )


def _validate_brand(brand: str) -> None:
    if not brand:
        raise ValidationError("brand is required", field="brand")


def _validate_fuel_type(fuel_type: str) -> None:
    # без нормализации регистра и пробелов: "petrol" и " Petrol" невалидны
    if fuel_type not in FUEL_TYPES:
        raise ValidationError(
            f"fuelType must be one of: {', '.join(FUEL_TYPES)}",
            field="fuelType",
        )


def _validate_engine(engine_req: EngineBase, prefix: str = "") -> None:
    fields = (
        ("displacement", engine_req.displacement),
        ("noOfCylinders", engine_req.no_of_cylinders),
        ("carRange", engine_req.car_range),
    )
    for name, value in fields:
        if value <= 0:
            raise ValidationError(
                f"{name} must be greater than zero",
                field=f"{prefix}{name}",
            )
        if value > MAX_ENGINE_VALUE:
            raise ValidationError(
                f"{name} must not exceed {MAX_ENGINE_VALUE}",
                field=f"{prefix}{name}",
            )


def _validate_price(price: Decimal) -> None:
    if price <= 0:
        raise ValidationError("price must be greater than zero", field="price")

    if price >= MAX_PRICE:
        raise ValidationError(f"price must be less than {MAX_PRICE}", field="price")

    if price.quantize(PRICE_STEP) != price:
        raise ValidationError("price must have at most 2 decimal places", field="price")
