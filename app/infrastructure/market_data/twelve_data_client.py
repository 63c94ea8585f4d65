"""
TwelveData REST client
Thin HTTP layer; failures propagate to the gateway for classification.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class TwelveDataError(Exception):
    """Error reported in a 2xx body: {"status": "error", "code": N, "message": ...}"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"TwelveData error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TwelveDataClient:
    def __init__(
        self,
        api_base_url: str = "https://api.twelvedata.com",
        api_key: Optional[str] = None,
        timeout_seconds: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_base_url = api_base_url.rstrip("/")
        self.api_key = (api_key or "").strip() or None
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=self.api_base_url,
            timeout=timeout_seconds,
            headers={"Accept": "application/json"},
        )

    async def _request_json(self, path: str, params: dict) -> Optional[Any]:
        if self.api_key:
            params = {**params, "apikey": self.api_key}
        response = await self._client.get(path, params=params)
        response.raise_for_status()

        payload = response.json()
        if isinstance(payload, dict) and payload.get("status") == "error":
            code = payload.get("code")
            raise TwelveDataError(
                int(code) if isinstance(code, (int, str)) and str(code).isdigit() else 500,
                str(payload.get("message", "unknown error")),
            )
        return payload

    async def get_price(self, symbol: str) -> Optional[Any]:
        logger.debug("TwelveData /price symbol=%s", symbol)
        return await self._request_json("/price", {"symbol": symbol})

    async def get_dividends(self, symbol: str, start_date: date, end_date: date) -> Optional[Any]:
        logger.debug("TwelveData /dividends symbol=%s %s..%s", symbol, start_date, end_date)
        return await self._request_json(
            "/dividends",
            {
                "symbol": symbol,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
            },
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
