"""
Position Service
Read paths for priced positions plus the market-price and recalculation
updates. Store failures are wrapped with the operation and key; quote
failures degrade to stored prices inside the enricher.
"""

import logging
from decimal import Decimal
from typing import Awaitable, List, Optional, TypeVar
from uuid import UUID

from app.domain.errors import ErrorKind, ServiceError
from app.domain.models import CurrentPosition, Position
from app.domain.services.position_enricher import PositionEnricher, PositionListEnricher
from app.domain.services.position_store import PositionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _guard_store(call: Awaitable[T], operation: str, message: str) -> T:
    try:
        return await call
    except ServiceError:
        raise
    except Exception as exc:
        logger.error("%s: %s", message, exc)
        raise ServiceError(ErrorKind.PERSISTENCE_ERROR, message, operation=operation) from exc


def _require_ticker(ticker: Optional[str], operation: str) -> str:
    if ticker is None or not ticker.strip():
        raise ServiceError(ErrorKind.INVALID_INPUT, "Ticker cannot be null or empty", operation=operation)
    return ticker.strip().upper()


class PositionService:

    def __init__(self, store: PositionStore, enricher: PositionEnricher):
        self.store = store
        self.enricher = enricher
        self.list_enricher = PositionListEnricher(enricher)

    # ------------------------------------------------------------------
    # READS
    # ------------------------------------------------------------------

    async def get_by_id(self, position_id: UUID) -> Optional[CurrentPosition]:
        position = await _guard_store(
            self.store.find_by_id(position_id),
            "get_position",
            f"Error getting position with ID {position_id}",
        )
        return await self.enricher.enrich(position)

    async def get_by_ticker(self, ticker: str) -> Optional[CurrentPosition]:
        symbol = _require_ticker(ticker, "get_position")
        position = await _guard_store(
            self.store.find_by_ticker(symbol),
            "get_position",
            f"Error getting position with ticker {symbol}",
        )
        return await self.enricher.enrich(position)

    async def get_all(self) -> List[CurrentPosition]:
        """All positions, including zero-share ones, in store order"""
        positions = await _guard_store(
            self.store.find_all(), "get_position", "Error getting all positions"
        )
        return await self.list_enricher.enrich_all(positions)

    async def get_active_positions(self) -> List[CurrentPosition]:
        """Positions with shares > 0, in store order"""
        positions = await _guard_store(
            self.store.find_all_with_shares(), "get_position", "Error getting all active positions"
        )
        return await self.list_enricher.enrich_all(positions)

    async def exists_by_ticker(self, ticker: str) -> bool:
        symbol = _require_ticker(ticker, "get_position")
        return await _guard_store(
            self.store.exists_by_ticker(symbol),
            "get_position",
            f"Error checking if position with ticker {symbol} exists",
        )

    async def count_all(self) -> int:
        return await _guard_store(
            self.store.count_all(), "get_position", "Error getting positions count"
        )

    async def count_active_positions(self) -> int:
        return await _guard_store(
            self.store.count_with_shares(), "get_position", "Error getting active positions count"
        )

    # ------------------------------------------------------------------
    # UPDATES
    # ------------------------------------------------------------------

    async def update_market_price(self, ticker: str, price: Optional[Decimal]) -> Position:
        """
        Store a manually supplied market price

        Raises:
            ServiceError(INVALID_INPUT): blank ticker or non-positive price
            ServiceError(NOT_FOUND): no position for the ticker
            ServiceError(PERSISTENCE_ERROR): store failure
        """
        operation = "update_market_data"
        symbol = _require_ticker(ticker, operation)
        if price is None or price <= 0:
            raise ServiceError(ErrorKind.INVALID_INPUT, "Price must be positive", operation=operation)

        exists = await _guard_store(
            self.store.exists_by_ticker(symbol),
            operation,
            f"Error checking if position with ticker {symbol} exists",
        )
        if not exists:
            raise ServiceError(
                ErrorKind.NOT_FOUND, f"No position found for ticker: {symbol}", operation=operation
            )

        position = await _guard_store(
            self.store.update_market_price(symbol, price),
            operation,
            f"Error updating market price for ticker {symbol} to price {price}",
        )
        if position is None:
            raise ServiceError(
                ErrorKind.NOT_FOUND, f"No position found for ticker: {symbol}", operation=operation
            )
        logger.info("Market price for %s updated to %s", symbol, price)
        return position

    async def recalculate_position(self, ticker: str) -> Optional[Position]:
        operation = "recalculate_position"
        symbol = _require_ticker(ticker, operation)
        position = await _guard_store(
            self.store.recalculate_position(symbol),
            operation,
            f"Error recalculating position for ticker {symbol}",
        )
        logger.info("Position for %s recalculated", symbol)
        return position
