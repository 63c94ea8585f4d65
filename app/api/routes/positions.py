"""
Position API Routes
Positions priced with live market data, plus manual price updates
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from app.api.dependencies import get_position_service
from app.domain.errors import ErrorKind, ServiceError
from app.domain.schemas.position import PositionResponse, UpdateMarketPriceRequest
from app.services.position_service import PositionService

router = APIRouter()


@router.get("", response_model=List[PositionResponse])
async def get_all_positions(service: PositionService = Depends(get_position_service)):
    """All positions, including those with zero shares."""
    positions = await service.get_all()
    return [PositionResponse.from_current(p) for p in positions]


@router.get("/active", response_model=List[PositionResponse])
async def get_active_positions(service: PositionService = Depends(get_position_service)):
    """Positions with shares > 0."""
    positions = await service.get_active_positions()
    return [PositionResponse.from_current(p) for p in positions]


@router.get("/count")
async def get_position_count(service: PositionService = Depends(get_position_service)) -> int:
    return await service.count_all()


@router.get("/count/active")
async def get_active_position_count(service: PositionService = Depends(get_position_service)) -> int:
    return await service.count_active_positions()


@router.get("/ticker/{ticker}", response_model=PositionResponse)
async def get_position_by_ticker(ticker: str, service: PositionService = Depends(get_position_service)):
    position = await service.get_by_ticker(ticker)
    if position is None:
        raise ServiceError(ErrorKind.NOT_FOUND, f"No position found for ticker: {ticker}")
    return PositionResponse.from_current(position)


@router.get("/ticker/{ticker}/exists")
async def check_position_exists(ticker: str, service: PositionService = Depends(get_position_service)) -> bool:
    return await service.exists_by_ticker(ticker)


@router.put("/ticker/{ticker}/price", response_model=PositionResponse)
async def update_market_price(
    ticker: str,
    payload: UpdateMarketPriceRequest,
    service: PositionService = Depends(get_position_service),
):
    position = await service.update_market_price(ticker, payload.price)
    return PositionResponse.from_stored(position)


@router.post("/ticker/{ticker}/recalculate", response_model=PositionResponse)
async def recalculate_position(ticker: str, service: PositionService = Depends(get_position_service)):
    position = await service.recalculate_position(ticker)
    if position is None:
        raise ServiceError(ErrorKind.NOT_FOUND, f"No position found for ticker: {ticker}")
    return PositionResponse.from_stored(position)


@router.get("/{position_id}", response_model=PositionResponse)
async def get_position(position_id: UUID, service: PositionService = Depends(get_position_service)):
    position = await service.get_by_id(position_id)
    if position is None:
        raise ServiceError(ErrorKind.NOT_FOUND, f"No position found with ID {position_id}")
    return PositionResponse.from_current(position)
