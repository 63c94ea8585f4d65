import dataclasses
from datetime import date
from decimal import Decimal
from typing import AsyncGenerator, Dict, Iterable, List, Optional

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.api.dependencies import get_market_data_gateway
from app.domain.errors import ErrorKind, MarketDataError
from app.domain.models import Dividend, Position
from app.infrastructure.db.database import Base, get_db
from app.main import create_app


class FakeMarketDataGateway:
    """Scriptable MarketDataGateway that records every call"""

    def __init__(self):
        self.prices: Dict[str, Decimal] = {}
        self.dividends: Dict[str, List[Dividend]] = {}
        self.failing: set = set()
        self.price_calls: List[str] = []
        self.dividend_calls: List[str] = []

    async def get_current_price(self, ticker: str) -> Decimal:
        self.price_calls.append(ticker)
        if ticker in self.failing or ticker not in self.prices:
            raise MarketDataError(ErrorKind.NETWORK_ERROR, f"Network error while fetching price for {ticker}")
        return self.prices[ticker]

    async def get_dividends(self, ticker: str, start_date: date, end_date: date) -> List[Dividend]:
        self.dividend_calls.append(ticker)
        if ticker in self.failing:
            raise MarketDataError(ErrorKind.API_ERROR, f"Failed to fetch dividends for ticker: {ticker}")
        return list(self.dividends.get(ticker, []))


class InMemoryPositionStore:
    """PositionStore over a dict; fail=True makes every call raise"""

    def __init__(self, positions: Iterable[Position] = (), fail: bool = False):
        self.positions: Dict[str, Position] = {p.ticker: p for p in positions}
        self.fail = fail
        self.recalculated: Dict[str, Position] = {}

    def _check(self):
        if self.fail:
            raise RuntimeError("connection refused by database")

    async def find_by_id(self, position_id) -> Optional[Position]:
        self._check()
        return next((p for p in self.positions.values() if p.id == position_id), None)

    async def find_by_ticker(self, ticker: str) -> Optional[Position]:
        self._check()
        return self.positions.get(ticker)

    async def find_all(self) -> List[Position]:
        self._check()
        return [self.positions[t] for t in sorted(self.positions)]

    async def find_all_with_shares(self) -> List[Position]:
        return [p for p in await self.find_all() if p.has_shares()]

    async def exists_by_ticker(self, ticker: str) -> bool:
        self._check()
        return ticker in self.positions

    async def count_all(self) -> int:
        self._check()
        return len(self.positions)

    async def count_with_shares(self) -> int:
        return len(await self.find_all_with_shares())

    async def update_market_price(self, ticker: str, price: Decimal) -> Optional[Position]:
        self._check()
        position = self.positions.get(ticker)
        if position is None:
            return None
        updated = dataclasses.replace(position, current_price=price)
        self.positions[ticker] = updated
        return updated

    async def recalculate_position(self, ticker: str) -> Optional[Position]:
        self._check()
        if ticker in self.recalculated:
            self.positions[ticker] = self.recalculated[ticker]
        return self.positions.get(ticker)


def make_position(ticker: str, quantity: str = "10", average: str = "100", price: str = "100", **kwargs) -> Position:
    quantity_d = Decimal(quantity)
    average_d = Decimal(average)
    fields = dict(
        ticker=ticker,
        total_quantity=quantity_d,
        average_price=average_d,
        current_price=Decimal(price),
        total_cost=quantity_d * average_d,
        last_updated=date(2026, 3, 2),
        is_active=quantity_d > 0,
    )
    fields.update(kwargs)
    return Position(**fields)


@pytest.fixture()
def fake_gateway() -> FakeMarketDataGateway:
    return FakeMarketDataGateway()


@pytest.fixture()
def position_factory():
    return make_position


@pytest.fixture()
def store_factory():
    return InMemoryPositionStore


@pytest.fixture()
async def db_engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        future=True,
        echo=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture()
async def app(db_session, fake_gateway) -> FastAPI:
    app = create_app()

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_data_gateway] = lambda: fake_gateway

    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
