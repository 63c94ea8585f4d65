"""
POSITION ENRICHER

Prices stored positions with live market quotes.

RULES:
- A quote failure never fails the read: the stored price is used instead
- Fallback prices are tagged STORED and are never reported as fresh
- List enrichment keeps input order, one quote request at a time
"""

import logging
from decimal import Decimal
from typing import Callable, List, Optional, Sequence
from datetime import datetime

from app.domain.models import CurrentPosition, Position, PriceSource
from app.infrastructure.market_data.types import MarketDataGateway
from app.utils.time import STALE_SENTINEL_OFFSET, now_local, start_of_day

logger = logging.getLogger(__name__)


class PositionEnricher:
    """Combines one Position with a live quote"""

    def __init__(self, gateway: MarketDataGateway, clock: Callable[[], datetime] = now_local):
        self.gateway = gateway
        self.clock = clock

    async def enrich(self, position: Optional[Position]) -> Optional[CurrentPosition]:
        """
        Price a single position.

        Returns:
            CurrentPosition, or None when the position or its ticker is missing
        """
        if position is None or not position.ticker:
            logger.warning("Position or ticker is missing, nothing to enrich")
            return None

        try:
            price = await self.gateway.get_current_price(position.ticker)
        except Exception as exc:
            logger.warning(
                "Failed to fetch current price for ticker %s, using stored price: %s",
                position.ticker,
                exc,
            )
            return self._fallback(position)

        logger.info("Retrieved current price %s for ticker %s", price, position.ticker)
        return CurrentPosition.from_position(position, price, self.clock(), PriceSource.LIVE)

    def _fallback(self, position: Position) -> CurrentPosition:
        price = position.current_price if position.current_price is not None else Decimal("0")
        if position.last_updated is not None:
            timestamp = start_of_day(position.last_updated)
        else:
            timestamp = self.clock() - STALE_SENTINEL_OFFSET
        return CurrentPosition.from_position(position, price, timestamp, PriceSource.STORED)


class PositionListEnricher:
    """Applies PositionEnricher across a collection, preserving order"""

    def __init__(self, enricher: PositionEnricher):
        self.enricher = enricher

    async def enrich_all(self, positions: Optional[Sequence[Position]]) -> List[CurrentPosition]:
        if not positions:
            return []

        enriched: List[CurrentPosition] = []
        for position in positions:
            current = await self.enricher.enrich(position)
            if current is None:
                # Store rows always carry a ticker; a bare record has nothing to price
                continue
            enriched.append(current)
        return enriched
