# backend/verdanta/schemas/automation.py

from typing import Optional
from pydantic import BaseModel, Field


class AutomationActionRequest(BaseModel):
    action: Optional[str] = None
    alert_id: Optional[str] = Field(None, alias="alertId")

    class Config:
        populate_by_name = True
