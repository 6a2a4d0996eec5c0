from .engine import Engine
from .car import Car

__all__ = [
    "Engine",
    "Car",
]
