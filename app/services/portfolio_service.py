import logging

from app.domain.errors import ErrorKind, ServiceError
from app.domain.models import PortfolioSummary
from app.domain.services.portfolio_aggregator import PortfolioAggregator
from app.services.position_service import PositionService

logger = logging.getLogger(__name__)


class PortfolioService:
    """
    Portfolio summaries with real-time market prices.
    A position without a live quote is valued at its stored price.
    """

    def __init__(self, position_service: PositionService, aggregator: PortfolioAggregator):
        self.position_service = position_service
        self.aggregator = aggregator

    async def get_portfolio_summary(self) -> PortfolioSummary:
        """Summary over all positions, including zero-share ones"""
        logger.info("Calculating portfolio summary with real-time market data")
        try:
            positions = await self.position_service.get_all()
        except ServiceError as exc:
            raise ServiceError(
                ErrorKind.PERSISTENCE_ERROR,
                "Error getting all positions",
                operation="get_portfolio_summary",
            ) from exc
        return self.aggregator.summarize(positions)

    async def get_active_summary(self) -> PortfolioSummary:
        """Summary over positions with shares > 0"""
        logger.info("Calculating active portfolio summary with real-time market data")
        try:
            positions = await self.position_service.get_active_positions()
        except ServiceError as exc:
            raise ServiceError(
                ErrorKind.PERSISTENCE_ERROR,
                "Error getting all positions with shares",
                operation="get_portfolio_summary",
            ) from exc
        return self.aggregator.summarize(positions)
