from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.domain.models import CurrentPosition, Currency, Position, PriceSource
from app.domain.schemas.common import JsonDecimal, normalize_monetary, normalize_quantity


class PositionResponse(BaseModel):
    id: Optional[UUID] = None
    ticker: str
    total_quantity: Optional[JsonDecimal] = None
    average_price: Optional[JsonDecimal] = None
    current_price: Optional[JsonDecimal] = None
    total_cost: Optional[JsonDecimal] = None
    currency: Currency
    last_updated: Optional[date] = None
    is_active: bool
    market_value: Optional[JsonDecimal] = None
    unrealized_gain_loss: Optional[JsonDecimal] = None
    unrealized_gain_loss_pct: Optional[JsonDecimal] = None
    price_source: Optional[PriceSource] = None
    price_timestamp: Optional[datetime] = None
    price_fresh: Optional[bool] = None

    @classmethod
    def from_current(cls, position: CurrentPosition) -> "PositionResponse":
        return cls(
            id=position.id,
            ticker=position.ticker,
            total_quantity=normalize_quantity(position.total_quantity),
            average_price=normalize_monetary(position.average_price),
            current_price=normalize_monetary(position.current_price),
            total_cost=normalize_monetary(position.total_cost),
            currency=position.currency,
            last_updated=position.last_updated,
            is_active=position.is_active,
            market_value=normalize_monetary(position.market_value),
            unrealized_gain_loss=normalize_monetary(position.unrealized_gain_loss),
            unrealized_gain_loss_pct=normalize_monetary(position.unrealized_gain_loss_pct),
            price_source=position.price_source,
            price_timestamp=position.current_price_timestamp,
            price_fresh=position.is_fresh(),
        )

    @classmethod
    def from_stored(cls, position: Position) -> "PositionResponse":
        """Response for a stored aggregate (price as persisted, no live quote)"""
        quantity = position.total_quantity
        price = position.current_price
        market_value = quantity * price if quantity is not None and price is not None else None
        gain_loss = (
            market_value - position.total_cost
            if market_value is not None and position.total_cost is not None
            else None
        )
        return cls(
            id=position.id,
            ticker=position.ticker,
            total_quantity=normalize_quantity(quantity),
            average_price=normalize_monetary(position.average_price),
            current_price=normalize_monetary(price),
            total_cost=normalize_monetary(position.total_cost),
            currency=position.currency,
            last_updated=position.last_updated,
            is_active=position.is_active,
            market_value=normalize_monetary(market_value),
            unrealized_gain_loss=normalize_monetary(gain_loss),
            price_source=PriceSource.STORED,
        )


class UpdateMarketPriceRequest(BaseModel):
    price: Decimal = Field(..., gt=0, description="New market price per share")
