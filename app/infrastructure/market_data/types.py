"""
Market data gateway protocol for type hints.
"""

from __future__ import annotations

from typing import Protocol, List
from datetime import date
from decimal import Decimal

from app.domain.models import Dividend


class MarketDataGateway(Protocol):
    async def get_current_price(self, ticker: str) -> Decimal:
        ...

    async def get_dividends(self, ticker: str, start_date: date, end_date: date) -> List[Dividend]:
        ...
