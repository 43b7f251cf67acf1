# backend/verdanta/models/alert.py

from sqlalchemy import Column, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from verdanta.core.database import Base
from verdanta.models._ids import gen_uuid


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    alert_type = Column(String, nullable=False)

    # stored lower-case: critical, high, medium, low
    severity = Column(String, nullable=False, index=True)
    # open, acknowledged, resolved
    status = Column(String, default="open", index=True)

    device_id = Column(String(36), ForeignKey("devices.id"), nullable=True)
    assigned_to = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    acknowledged_at = Column(DateTime, nullable=True)
    resolved_at = Column(DateTime, nullable=True)

    device = relationship("Device", back_populates="alerts")
