"""
FastAPI Main Application
Portfolio positions priced with live TwelveData market data
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import FastAPI

from app.api.errors import register_exception_handlers
from app.api.routes import dividends, health, portfolio, positions
from app.config import settings
from app.core.logging import setup_logging
from app.infrastructure.cache.ttl_cache import TTLCache
from app.infrastructure.db.database import close_db
from app.infrastructure.market_data.twelve_data_client import TwelveDataClient
from app.infrastructure.market_data.twelve_data_gateway import TwelveDataMarketDataGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Builds the process-wide market data gateway and tears it down on exit
    """
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting portfolio service (env=%s)", settings.APP_ENV)

    if not settings.TWELVE_DATA_API_KEY:
        logger.warning("TWELVE_DATA_API_KEY is not set; market data requests will be unauthenticated")

    client = TwelveDataClient(
        api_base_url=settings.TWELVE_DATA_BASE_URL,
        api_key=settings.TWELVE_DATA_API_KEY,
        timeout_seconds=settings.TWELVE_DATA_TIMEOUT_SECONDS,
    )
    cache = TTLCache(max_entries=settings.MARKET_DATA_CACHE_MAX_ENTRIES)
    app.state.market_data_gateway = TwelveDataMarketDataGateway(
        client,
        cache,
        price_ttl_seconds=settings.PRICE_CACHE_TTL_SECONDS,
        dividend_ttl_seconds=settings.DIVIDEND_CACHE_TTL_SECONDS,
    )

    try:
        yield
    finally:
        logger.info("Shutting down portfolio service")
        await client.close()
        await close_db()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Portfolio Positions API",
        description="Positions, portfolio summaries and dividends priced with live market data",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(positions.router, prefix="/api/v1/positions", tags=["Positions"])
    app.include_router(portfolio.router, prefix="/api/v1/portfolio", tags=["Portfolio"])
    app.include_router(dividends.router, prefix="/api/v1/dividends", tags=["Dividends"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
