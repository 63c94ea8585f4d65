"""
Domain Errors
Error taxonomy shared by the enrichment pipeline, the services and the API.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import httpx


class ErrorKind(str, Enum):
    """Classified failure kinds"""
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    MARKET_DATA_ERROR = "MARKET_DATA_ERROR"
    API_ERROR = "API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_TICKER = "INVALID_TICKER"
    NULL_RESPONSE = "NULL_RESPONSE"


class ServiceError(Exception):
    """
    Failure tagged with an ErrorKind.

    The original exception, when there is one, is chained as __cause__.
    """

    def __init__(self, kind: ErrorKind, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"[{self.kind.value}] {self.operation}: {self.message}"
        return f"[{self.kind.value}] {self.message}"


class MarketDataError(ServiceError):
    """Failure raised by the market data gateway"""


_NETWORK_HINTS = ("timeout", "connection", "network")


def _status_code_of(exc: BaseException) -> Optional[int]:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    status = getattr(exc, "status_code", None)
    return status if isinstance(status, int) else None


def classify_market_data_failure(exc: BaseException, ticker: str, action: str) -> ServiceError:
    """
    Map any provider failure onto the gateway error kinds.

    Args:
        exc: Exception raised while calling or parsing the provider
        ticker: Ticker being processed (for the message)
        action: Short description, e.g. "price" or "dividends"

    Returns:
        A ServiceError; already-classified errors are returned unchanged
    """
    if isinstance(exc, ServiceError):
        return exc

    status = _status_code_of(exc)
    if status is not None:
        if status in (400, 404):
            error = MarketDataError(ErrorKind.INVALID_TICKER, f"Invalid ticker symbol: {ticker}")
        elif status >= 500:
            error = MarketDataError(ErrorKind.API_ERROR, f"Market data server error (status: {status})")
        else:
            error = MarketDataError(ErrorKind.API_ERROR, f"Market data API error (status: {status})")
    elif isinstance(exc, httpx.TransportError) or any(
        hint in str(exc).lower() for hint in _NETWORK_HINTS
    ):
        error = MarketDataError(
            ErrorKind.NETWORK_ERROR, f"Network error while fetching {action} for {ticker}"
        )
    else:
        error = MarketDataError(ErrorKind.API_ERROR, f"Failed to fetch {action} for ticker: {ticker}")

    error.__cause__ = exc
    return error
