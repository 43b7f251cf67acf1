# backend/verdanta/models/vermiculture.py

from sqlalchemy import Column, String, Integer, Float, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from verdanta.core.database import Base
from verdanta.models._ids import gen_uuid


# ============================================================
# VERMICULTURE SYSTEM (worm beds / bins)
# ============================================================
class VermicultureSystem(Base):
    __tablename__ = "vermiculture_systems"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    name = Column(String, nullable=False)
    location = Column(String, nullable=False)
    capacity = Column(Float, nullable=False)
    current_load = Column(Float, default=0)

    temperature = Column(Float, nullable=True)
    moisture = Column(Float, nullable=True)
    ph = Column(Float, nullable=True)

    status = Column(String, default="optimal")   # optimal, attention, critical, maintenance
    last_feed_time = Column(DateTime, nullable=True)
    last_harvest_time = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    productions = relationship("VermicultureProduction", back_populates="system", cascade="all, delete-orphan")
    maintenance_logs = relationship("MaintenanceLog", back_populates="system", cascade="all, delete-orphan")


# ============================================================
# PRODUCTION BATCH
# ============================================================
class VermicultureProduction(Base):
    __tablename__ = "vermiculture_productions"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    system_id = Column(String(36), ForeignKey("vermiculture_systems.id"), nullable=False, index=True)
    batch_number = Column(String, nullable=False)

    start_date = Column(DateTime, default=datetime.utcnow, index=True)
    expected_harvest = Column(DateTime, nullable=True)
    actual_harvest = Column(DateTime, nullable=True)

    expected_yield = Column(Float, nullable=False, default=0)
    actual_yield = Column(Float, nullable=True)
    quality = Column(String, nullable=True)   # A / B / C

    system = relationship("VermicultureSystem", back_populates="productions")


# ============================================================
# MAINTENANCE LOG
# ============================================================
class MaintenanceLog(Base):
    __tablename__ = "maintenance_logs"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    system_id = Column(String(36), ForeignKey("vermiculture_systems.id"), nullable=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    maintenance_type = Column(String, nullable=False, default="routine")

    status = Column(String, default="scheduled")   # scheduled, in_progress, completed
    scheduled_date = Column(DateTime, nullable=False, index=True)
    completed_date = Column(DateTime, nullable=True)
    duration = Column(Integer, nullable=True)      # minutes
    cost = Column(Float, nullable=True)
    performed_by = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    system = relationship("VermicultureSystem", back_populates="maintenance_logs")
