# backend/verdanta/services/query_params.py

from typing import List, Optional

# NOTE:
# Query values arrive as raw strings (or None). Nothing here raises:
# anything unparsable or unknown falls back to the default.

TIMEFRAME_DAYS = {"24h": 1, "7d": 7, "30d": 30, "90d": 90}
TIMEFRAME_HOURS = {"24h": 24, "7d": 168, "30d": 720, "90d": 2160}

DEFAULT_TIMEFRAME = "7d"
DEFAULT_DAYS = 7
DEFAULT_LOCATION = "ILLINOIS"
DEFAULT_FORECAST_LOCATION = "peoria"
DEFAULT_COMMODITY = "CORN"
DEFAULT_STATE = "ILLINOIS"
DEFAULT_CROP_TYPE = "mixed"
DEFAULT_FARM_ID = "default_farm"
DEFAULT_MARKET_CROPS = ["lettuce", "tomatoes", "herbs"]

# upper bounds for generated series and lookback windows
MAX_FORECAST_DAYS = 365
MAX_HOURS = 24 * 90


def normalize_timeframe(timeframe: Optional[str], default: str = DEFAULT_TIMEFRAME) -> str:
    return timeframe or default


def timeframe_days(timeframe: Optional[str]) -> int:
    """Day count for a timeframe; misses give DEFAULT_DAYS."""
    return TIMEFRAME_DAYS.get(timeframe or "", DEFAULT_DAYS)


def timeframe_hours(timeframe: Optional[str]) -> Optional[int]:
    return TIMEFRAME_HOURS.get(timeframe or "")


def parse_int(value: Optional[str], default: int, minimum: Optional[int] = 0, maximum: Optional[int] = None) -> int:
    """Integer within [minimum, maximum]; out-of-range values are clamped."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if minimum is not None and parsed < minimum:
        return minimum
    if maximum is not None and parsed > maximum:
        return maximum
    return parsed


def parse_optional_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_flag(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() == "true"


def parse_optional_flag(value: Optional[str]) -> Optional[bool]:
    """Tri-state filter: None means 'do not filter'."""
    if value is None:
        return None
    return value.strip().lower() == "true"


def split_csv(value: Optional[str], default: Optional[List[str]] = None) -> List[str]:
    if not value:
        return list(default or [])
    items = [v.strip() for v in value.split(",") if v.strip()]
    return items or list(default or [])


def normalize_label(value: Optional[str]) -> Optional[str]:
    """Lower-cases categorical values (severity, status) at the boundary."""
    if value is None:
        return None
    return value.strip().lower()
