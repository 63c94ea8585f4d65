"""
TwelveData Market Data Gateway
Validated, classified and cached access to prices and dividends.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from app.domain.errors import ErrorKind, MarketDataError, classify_market_data_failure
from app.domain.models import Dividend
from app.infrastructure.cache.ttl_cache import TTLCache
from app.infrastructure.market_data.twelve_data_client import TwelveDataClient
from app.infrastructure.market_data.twelve_data_models import (
    TwelveDataDividendsResponse,
    TwelveDataPriceResponse,
)

logger = logging.getLogger(__name__)


def normalize_ticker(ticker: Optional[str]) -> str:
    """
    Trim and uppercase a ticker.

    Raises:
        MarketDataError(INVALID_INPUT): if the ticker is missing or blank
    """
    if ticker is None or not ticker.strip():
        raise MarketDataError(ErrorKind.INVALID_INPUT, "Ticker symbol cannot be null or empty")
    return ticker.strip().upper()


class TwelveDataMarketDataGateway:
    """
    MarketDataGateway backed by the TwelveData REST API.

    Successful results are cached under ("get_current_price", ticker) and
    ("get_dividends", ticker, start, end) with the normalized ticker.
    """

    def __init__(
        self,
        client: TwelveDataClient,
        cache: TTLCache,
        price_ttl_seconds: float = 300,
        dividend_ttl_seconds: float = 43_200,
    ):
        self.client = client
        self.cache = cache
        self.price_ttl_seconds = price_ttl_seconds
        self.dividend_ttl_seconds = dividend_ttl_seconds

    # ------------------------------------------------------------------
    # CURRENT PRICE
    # ------------------------------------------------------------------

    async def get_current_price(self, ticker: str) -> Decimal:
        try:
            symbol = normalize_ticker(ticker)
        except MarketDataError:
            logger.error("Invalid ticker provided: %r", ticker)
            raise

        return await self.cache.get_or_load(
            ("get_current_price", symbol),
            self.price_ttl_seconds,
            lambda: self._fetch_price(symbol),
        )

    async def _fetch_price(self, symbol: str) -> Decimal:
        logger.info("Fetching current price for ticker: %s", symbol)
        try:
            payload = await self.client.get_price(symbol)
            price = self._extract_price(payload)
        except Exception as exc:
            error = classify_market_data_failure(exc, symbol, "price")
            logger.error("Failed to fetch price for ticker %s: %s", symbol, error, exc_info=exc)
            if error is exc:
                raise
            raise error from exc

        logger.info("Retrieved price %s for ticker %s", price, symbol)
        return price

    @staticmethod
    def _extract_price(payload: object) -> Decimal:
        if payload is None:
            raise MarketDataError(ErrorKind.NULL_RESPONSE, "API returned null response")
        response = TwelveDataPriceResponse.model_validate(payload)
        if response.price is None:
            raise MarketDataError(ErrorKind.NULL_RESPONSE, "API returned null price")
        return response.price

    # ------------------------------------------------------------------
    # DIVIDENDS
    # ------------------------------------------------------------------

    async def get_dividends(self, ticker: str, start_date: date, end_date: date) -> List[Dividend]:
        try:
            symbol = normalize_ticker(ticker)
        except MarketDataError:
            logger.error("Invalid ticker provided: %r", ticker)
            raise
        if start_date > end_date:
            raise MarketDataError(
                ErrorKind.INVALID_INPUT,
                f"Start date {start_date} cannot be after end date {end_date}",
            )

        # The cache holds a tuple; each caller gets its own list
        dividends = await self.cache.get_or_load(
            ("get_dividends", symbol, start_date, end_date),
            self.dividend_ttl_seconds,
            lambda: self._fetch_dividends(symbol, start_date, end_date),
        )
        return list(dividends)

    async def _fetch_dividends(self, symbol: str, start_date: date, end_date: date) -> Tuple[Dividend, ...]:
        logger.info("Fetching dividends for ticker: %s from %s to %s", symbol, start_date, end_date)
        try:
            payload = await self.client.get_dividends(symbol, start_date, end_date)
            dividends = self._map_dividends(symbol, payload)
        except Exception as exc:
            error = classify_market_data_failure(exc, symbol, "dividends")
            logger.error("Failed to fetch dividends for ticker %s: %s", symbol, error, exc_info=exc)
            if error is exc:
                raise
            raise error from exc

        logger.info("Retrieved %d dividends for ticker %s", len(dividends), symbol)
        return tuple(dividends)

    @staticmethod
    def _map_dividends(symbol: str, payload: object) -> List[Dividend]:
        if payload is None:
            raise MarketDataError(ErrorKind.NULL_RESPONSE, "API returned null response")
        response = TwelveDataDividendsResponse.model_validate(payload)
        if response.dividends is None:
            return []

        meta = response.meta
        return [
            Dividend(
                ticker=(meta.symbol if meta and meta.symbol else symbol),
                mic_code=meta.mic_code if meta else None,
                exchange=meta.exchange if meta else None,
                ex_date=item.ex_date,
                amount=item.amount,
            )
            for item in response.dividends
        ]
