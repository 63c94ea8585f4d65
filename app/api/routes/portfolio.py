"""
Portfolio API Routes
Aggregated portfolio value and performance with live market prices
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_portfolio_service
from app.domain.schemas.portfolio import PortfolioSummaryResponse
from app.services.portfolio_service import PortfolioService

router = APIRouter()


@router.get("/summary", response_model=PortfolioSummaryResponse)
async def get_portfolio_summary(service: PortfolioService = Depends(get_portfolio_service)):
    """Summary over all positions (active and closed)."""
    summary = await service.get_portfolio_summary()
    return PortfolioSummaryResponse.from_domain(summary)


@router.get("/summary/active", response_model=PortfolioSummaryResponse)
async def get_active_portfolio_summary(service: PortfolioService = Depends(get_portfolio_service)):
    """Summary over positions with shares > 0."""
    summary = await service.get_active_summary()
    return PortfolioSummaryResponse.from_domain(summary)
