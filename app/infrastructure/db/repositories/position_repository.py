"""
Position Repository
Read access to position aggregates plus the two store-side updates
"""

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import Currency, Position
from app.infrastructure.db.models import PositionModel
from app.utils.time import now_local


class PositionRepository:
    """SQLAlchemy implementation of PositionStore"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def find_by_id(self, position_id: UUID) -> Optional[Position]:
        result = await self.session.execute(
            select(PositionModel).where(PositionModel.id == position_id)
        )
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def find_by_ticker(self, ticker: str) -> Optional[Position]:
        model = await self._get_model_by_ticker(ticker)
        return self._to_domain(model) if model else None

    async def find_all(self) -> List[Position]:
        result = await self.session.execute(
            select(PositionModel).order_by(PositionModel.ticker)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def find_all_with_shares(self) -> List[Position]:
        result = await self.session.execute(
            select(PositionModel)
            .where(PositionModel.current_quantity > 0)
            .order_by(PositionModel.ticker)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def exists_by_ticker(self, ticker: str) -> bool:
        result = await self.session.execute(
            select(func.count()).select_from(PositionModel).where(PositionModel.ticker == ticker)
        )
        return result.scalar_one() > 0

    async def count_all(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(PositionModel))
        return int(result.scalar_one())

    async def count_with_shares(self) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(PositionModel)
            .where(PositionModel.current_quantity > 0)
        )
        return int(result.scalar_one())

    async def update_market_price(self, ticker: str, price: Decimal) -> Optional[Position]:
        """
        Store a new market price and refresh derived columns

        Args:
            ticker: Position ticker
            price: New market price

        Returns:
            Updated Position, or None if no row exists for the ticker
        """
        model = await self._get_model_by_ticker(ticker)
        if model is None:
            return None

        market_value = Decimal(model.current_quantity) * price
        model.current_price = price
        model.last_price_update = now_local()
        model.current_market_value = market_value
        model.unrealized_gain_loss = market_value - Decimal(model.total_cost_basis)

        await self.session.flush()
        return self._to_domain(model)

    async def recalculate_position(self, ticker: str) -> Optional[Position]:
        """
        Run the database-side recalculation procedure and re-read the row

        The recalculate_position(ticker) function is owned by the database
        schema and rebuilds the aggregate from the transactions table.
        """
        await self.session.execute(select(func.recalculate_position(ticker)))
        await self.session.flush()
        self.session.expire_all()
        return await self.find_by_ticker(ticker)

    async def _get_model_by_ticker(self, ticker: str) -> Optional[PositionModel]:
        result = await self.session.execute(
            select(PositionModel).where(PositionModel.ticker == ticker)
        )
        return result.scalar_one_or_none()

    def _to_domain(self, model: PositionModel) -> Position:
        """Convert ORM model to domain object"""
        quantity = model.current_quantity
        return Position(
            id=model.id,
            ticker=model.ticker,
            total_quantity=quantity,
            average_price=model.avg_cost_per_share,
            current_price=model.current_price,
            total_cost=model.total_cost_basis,
            currency=Currency(model.primary_currency),
            last_updated=model.last_transaction_date,
            is_active=quantity is not None and quantity > 0,
        )
