"""
Protocol for position persistence - ASYNC

Implemented by app.infrastructure.db.repositories.position_repository.
Every method may raise on a store failure.
"""

from decimal import Decimal
from typing import List, Optional, Protocol
from uuid import UUID

from app.domain.models import Position


class PositionStore(Protocol):

    async def find_by_id(self, position_id: UUID) -> Optional[Position]:
        ...

    async def find_by_ticker(self, ticker: str) -> Optional[Position]:
        ...

    async def find_all(self) -> List[Position]:
        """All positions, including those with zero shares"""
        ...

    async def find_all_with_shares(self) -> List[Position]:
        """Positions with quantity > 0"""
        ...

    async def exists_by_ticker(self, ticker: str) -> bool:
        ...

    async def count_all(self) -> int:
        ...

    async def count_with_shares(self) -> int:
        ...

    async def update_market_price(self, ticker: str, price: Decimal) -> Optional[Position]:
        ...

    async def recalculate_position(self, ticker: str) -> Optional[Position]:
        """Rebuild the aggregate from its transactions (opaque to this service)"""
        ...
