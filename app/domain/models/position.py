"""
DOMAIN MODELS — POSITIONS

Position is the persisted aggregate owned by the position store.
CurrentPosition is the transient view of a Position priced with a live
(or fallback) market quote. Neither object touches the database or the
market data provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional
from uuid import UUID

from app.utils.time import FRESHNESS_WINDOW, now_local

ZERO = Decimal("0")
HUNDRED = Decimal("100")
PERCENT_RATIO_QUANTUM = Decimal("0.000001")


class Currency(str, Enum):
    """Position currency"""
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class PriceSource(str, Enum):
    """Where a CurrentPosition's price came from"""
    LIVE = "LIVE"
    STORED = "STORED"


@dataclass(frozen=True)
class Position:
    """
    Aggregated holdings for one ticker, as stored.
    """
    ticker: Optional[str]
    total_quantity: Optional[Decimal] = ZERO
    average_price: Optional[Decimal] = ZERO
    current_price: Optional[Decimal] = ZERO
    total_cost: Optional[Decimal] = ZERO
    currency: Currency = Currency.USD
    last_updated: Optional[date] = None
    is_active: bool = True
    id: Optional[UUID] = None

    def has_shares(self) -> bool:
        return self.total_quantity is not None and self.total_quantity > ZERO


@dataclass(frozen=True)
class CurrentPosition:
    """
    A Position priced with a live or fallback quote.

    current_price_timestamp is the time the live price was obtained, or
    the stored price's date for a fallback.
    """
    ticker: str
    total_quantity: Optional[Decimal]
    average_price: Optional[Decimal]
    current_price: Optional[Decimal]
    total_cost: Optional[Decimal]
    currency: Currency
    last_updated: Optional[date]
    is_active: bool
    current_price_timestamp: Optional[datetime]
    price_source: PriceSource = PriceSource.LIVE
    id: Optional[UUID] = None

    @classmethod
    def from_position(
        cls,
        position: Position,
        price: Optional[Decimal],
        timestamp: datetime,
        source: PriceSource = PriceSource.LIVE,
    ) -> "CurrentPosition":
        return cls(
            id=position.id,
            ticker=position.ticker,
            total_quantity=position.total_quantity,
            average_price=position.average_price,
            current_price=price,
            total_cost=position.total_cost,
            currency=position.currency,
            last_updated=position.last_updated,
            is_active=position.is_active,
            current_price_timestamp=timestamp,
            price_source=source,
        )

    def has_shares(self) -> bool:
        return self.total_quantity is not None and self.total_quantity > ZERO

    @property
    def market_value(self) -> Decimal:
        if self.total_quantity is None or self.current_price is None:
            return ZERO
        return self.total_quantity * self.current_price

    @property
    def unrealized_gain_loss(self) -> Decimal:
        cost = self.total_cost if self.total_cost is not None else ZERO
        return self.market_value - cost

    @property
    def unrealized_gain_loss_pct(self) -> Decimal:
        if self.total_cost is None or self.total_cost <= ZERO:
            return ZERO
        ratio = (self.unrealized_gain_loss / self.total_cost).quantize(
            PERCENT_RATIO_QUANTUM, rounding=ROUND_HALF_UP
        )
        return ratio * HUNDRED

    def is_fresh(self, now: Optional[datetime] = None) -> bool:
        """True for a live price obtained within the freshness window."""
        if self.price_source is not PriceSource.LIVE or self.current_price_timestamp is None:
            return False
        now = now or now_local()
        return self.current_price_timestamp > now - FRESHNESS_WINDOW
