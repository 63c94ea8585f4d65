"""
DIVIDEND FAN-OUT

Dividend lookups for one ticker or for every active position.

RULES:
- Portfolio lookups run ticker by ticker, in store order (bounded provider load)
- A failed ticker yields an empty list, never a missing key
- Single-ticker lookups surface provider failures as MARKET_DATA_ERROR
- A store failure aborts before any provider call
"""

import logging
from datetime import date
from typing import Dict, List

from app.domain.errors import ErrorKind, MarketDataError, ServiceError
from app.domain.models import Dividend
from app.domain.services.position_store import PositionStore
from app.infrastructure.market_data.types import MarketDataGateway

logger = logging.getLogger(__name__)


class DividendFanout:

    def __init__(self, store: PositionStore, gateway: MarketDataGateway):
        self.store = store
        self.gateway = gateway

    async def for_portfolio(self, start_date: date, end_date: date) -> Dict[str, List[Dividend]]:
        """
        Dividends for every position with shares.

        Returns:
            {ticker: [Dividend, ...]} with one entry per active ticker

        Raises:
            ServiceError(PERSISTENCE_ERROR): if active positions cannot be loaded
        """
        logger.info("Getting dividends for portfolio from %s to %s", start_date, end_date)

        try:
            positions = await self.store.find_all_with_shares()
        except Exception as exc:
            raise ServiceError(
                ErrorKind.PERSISTENCE_ERROR,
                "Failed to retrieve positions",
                operation="get_dividends_for_portfolio",
            ) from exc

        if not positions:
            logger.info("No active positions found in portfolio")
            return {}

        logger.info("Found %d active positions, fetching dividends", len(positions))
        result: Dict[str, List[Dividend]] = {}
        for position in positions:
            result[position.ticker] = await self._dividends_or_empty(
                position.ticker, start_date, end_date
            )

        total = sum(len(items) for items in result.values())
        logger.info("Retrieved dividends for %d tickers with %d total entries", len(result), total)
        return result

    async def _dividends_or_empty(self, ticker: str, start_date: date, end_date: date) -> List[Dividend]:
        try:
            return await self.gateway.get_dividends(ticker, start_date, end_date)
        except Exception as exc:
            logger.warning("Failed to retrieve dividends for ticker %s: %s", ticker, exc)
            return []

    async def for_ticker(self, ticker: str, start_date: date, end_date: date) -> List[Dividend]:
        """
        Dividends for a single ticker.

        Raises:
            ServiceError(INVALID_INPUT): for a blank ticker
            MarketDataError(MARKET_DATA_ERROR): wrapping the classified gateway error
        """
        symbol = (ticker or "").strip().upper()
        if not symbol:
            raise ServiceError(
                ErrorKind.INVALID_INPUT,
                "Ticker symbol cannot be null or empty",
                operation="get_dividends_for_ticker",
            )
        logger.info("Getting dividends for ticker: %s from %s to %s", symbol, start_date, end_date)

        try:
            dividends = await self.gateway.get_dividends(symbol, start_date, end_date)
        except Exception as exc:
            logger.error("Failed to retrieve dividends for ticker %s: %s", symbol, exc)
            raise MarketDataError(
                ErrorKind.MARKET_DATA_ERROR,
                f"Failed to retrieve dividends for ticker: {symbol}",
                operation="get_dividends_for_ticker",
            ) from exc

        logger.info("Retrieved %d dividends for ticker %s", len(dividends), symbol)
        return dividends
