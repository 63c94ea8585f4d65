"""
Request-scoped wiring for the API routes.

The market data gateway is process-scoped (it owns the shared cache) and
lives on app.state; stores and services are built per request around the
request's database session.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.services.dividend_fanout import DividendFanout
from app.domain.services.portfolio_aggregator import PortfolioAggregator
from app.domain.services.position_enricher import PositionEnricher
from app.domain.services.position_store import PositionStore
from app.infrastructure.db.database import get_db
from app.infrastructure.db.repositories.position_repository import PositionRepository
from app.infrastructure.market_data.types import MarketDataGateway
from app.services.portfolio_service import PortfolioService
from app.services.position_service import PositionService


def get_market_data_gateway(request: Request) -> MarketDataGateway:
    return request.app.state.market_data_gateway


def get_position_store(db: AsyncSession = Depends(get_db)) -> PositionStore:
    return PositionRepository(db)


def get_position_service(
    store: PositionStore = Depends(get_position_store),
    gateway: MarketDataGateway = Depends(get_market_data_gateway),
) -> PositionService:
    return PositionService(store, PositionEnricher(gateway))


def get_portfolio_service(
    position_service: PositionService = Depends(get_position_service),
) -> PortfolioService:
    return PortfolioService(position_service, PortfolioAggregator())


def get_dividend_fanout(
    store: PositionStore = Depends(get_position_store),
    gateway: MarketDataGateway = Depends(get_market_data_gateway),
) -> DividendFanout:
    return DividendFanout(store, gateway)
