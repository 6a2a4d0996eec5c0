from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import relationship

from ..core.db import Base


class Car(Base):
    __tablename__ = "car"

    id = Column(Uuid, primary_key=True)

    name = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    brand = Column(String, nullable=False, index=True)

    # fuel_type: Petrol | Diesel | Electric | Hybrid
    fuel_type = Column(String(20), nullable=False)

    engine_id = Column(Uuid, ForeignKey("engine.id"), nullable=False, index=True)

    price = Column(Numeric(12, 2), nullable=False)

    # Проставляются стором при записи, не сервером БД
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # ---------- связи ----------

    engine = relationship(
        "Engine",
        back_populates="cars",
    )
