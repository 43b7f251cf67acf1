# backend/verdanta/models/plant.py

from sqlalchemy import Column, String, Float, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from verdanta.core.database import Base
from verdanta.models._ids import gen_uuid


class PlantSystem(Base):
    __tablename__ = "plant_systems"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    name = Column(String, nullable=False)
    crop_type = Column(String, nullable=False)
    location = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    yields = relationship("PlantYield", back_populates="plant_system", cascade="all, delete-orphan")


class PlantYield(Base):
    __tablename__ = "plant_yields"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    plant_system_id = Column(String(36), ForeignKey("plant_systems.id"), nullable=False, index=True)
    harvest_date = Column(DateTime, default=datetime.utcnow, index=True)
    quantity = Column(Float, nullable=False)
    quality = Column(String, nullable=True)

    plant_system = relationship("PlantSystem", back_populates="yields")
