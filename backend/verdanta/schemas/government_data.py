# backend/verdanta/schemas/government_data.py

from typing import Any, Dict, List, Optional
from pydantic import BaseModel


# ============================================================
# USDA
# ============================================================

class USDARequest(BaseModel):
    action: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None


# ============================================================
# WEATHER
# ============================================================

class WeatherAnalysisRequest(BaseModel):
    locations: Optional[List[str]] = None
    analysis_type: Optional[str] = None
    crop_type: Optional[str] = None
    growth_stage: Optional[str] = None
