# backend/verdanta/services/watsonx_client.py
"""
Thin async client for the watsonx.ai backend.

When WATSONX_URL is configured every call is a single POST awaited with the
configured timeout; transport or HTTP errors propagate to the caller, which
renders them in the error envelope. Without a URL the client answers from
local analytics so the dashboard keeps working offline.
"""

from typing import Any, Dict, List, Optional

import httpx

from verdanta.core.config import settings
from verdanta.core.logger import logger

YIELD_WORKFLOWS = ["Intelligent Nutrient Distribution", "Environmental Control Automation"]

LOCAL_YIELD_PROJECTION = {"projected": 125.5, "unit": "lbs", "confidence": 0.82}
LOCAL_IMPROVEMENT_AREAS = ["nutrient timing", "irrigation scheduling", "light exposure"]


class WatsonxError(Exception):
    pass


class WatsonxClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self._transport,
        ) as client:
            response = await client.post(path, json=payload)
            response.raise_for_status()
            body = response.json()

        if not isinstance(body, dict):
            raise WatsonxError(f"Unexpected response from {path}")
        return body

    # ------------------------------------------------
    # Yield optimization
    # ------------------------------------------------
    async def optimize_yield_prediction(self, farm_id: str, crop_type: str) -> Dict[str, Any]:
        if self.enabled:
            logger.info(f"Requesting yield optimization for {farm_id}", extra={"action": "watsonx_yield"})
            result = await self._post("/v1/yield/optimize", {"farmId": farm_id, "cropType": crop_type})
            result.setdefault("success", True)
            return result

        return _local_yield_optimization()

    # ------------------------------------------------
    # Natural language query
    # ------------------------------------------------
    async def handle_query(self, query: str, system_data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self.enabled:
            return {"success": False, "error": "Watson Assistant is not enabled"}

        result = await self._post("/v1/assistant/query", {"query": query, "context": system_data or {}})
        result.setdefault("success", True)
        return result

    # ------------------------------------------------
    # Environmental analysis (health report enrichment)
    # ------------------------------------------------
    async def analyze_environment(self, environmental: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Remote AI analysis of the current readings; None when the service is off."""
        if not self.enabled:
            return None
        return await self._post("/v1/environment/analyze", {"environmental": environmental})

    # ------------------------------------------------
    # Enhanced intelligence (government data enrichment)
    # ------------------------------------------------
    async def enhance_intelligence(self, government_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if not self.enabled:
            return None
        return await self._post("/v1/intelligence/enhance", {"governmentData": government_data})


def _local_yield_optimization() -> Dict[str, Any]:
    projection = dict(LOCAL_YIELD_PROJECTION)
    analytics = {"yieldProjection": projection, "improvementAreas": list(LOCAL_IMPROVEMENT_AREAS)}

    insights: List[str] = [
        f"Projected yield: {projection['projected']} {projection['unit']}",
        f"Confidence level: {round(projection['confidence'] * 100, 1)}%",
    ]
    recommendations = [f"Focus on improving {area}" for area in analytics["improvementAreas"]]

    return {
        "success": True,
        "data": {"yieldAnalytics": analytics},
        "insights": insights,
        "recommendations": recommendations,
        "workflows": list(YIELD_WORKFLOWS),
        "confidence": 0.85,
    }


def get_watsonx_client() -> WatsonxClient:
    """FastAPI dependency; overridden in tests to inject a mock transport."""
    return WatsonxClient(
        base_url=settings.WATSONX_URL,
        api_key=settings.WATSONX_API_KEY,
        timeout=settings.WATSONX_TIMEOUT,
    )
