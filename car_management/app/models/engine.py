from __future__ import annotations

from sqlalchemy import Column, Integer, Uuid
from sqlalchemy.orm import relationship

from ..core.db import Base


class Engine(Base):
    __tablename__ = "engine"

    id = Column(Uuid, primary_key=True)

    displacement = Column(Integer, nullable=False)      # куб. см
    no_of_cylinders = Column(Integer, nullable=False)
    car_range = Column(Integer, nullable=False)

    # Машины с этим двигателем: Car.engine <-> Engine.cars
    cars = relationship(
        "Car",
        back_populates="engine",
    )
