"""
Dividend API Routes
"""

from datetime import date
from typing import Dict, List

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_dividend_fanout
from app.domain.errors import ErrorKind, ServiceError
from app.domain.schemas.dividend import DividendResponse, to_response_map
from app.domain.services.dividend_fanout import DividendFanout

router = APIRouter()


def _check_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise ServiceError(ErrorKind.INVALID_INPUT, "Start date cannot be after end date")


@router.get("/ticker/{ticker}", response_model=List[DividendResponse])
async def get_dividends_for_ticker(
    ticker: str,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    fanout: DividendFanout = Depends(get_dividend_fanout),
):
    _check_range(start_date, end_date)
    dividends = await fanout.for_ticker(ticker, start_date, end_date)
    return [DividendResponse.from_domain(d) for d in dividends]


@router.get("/portfolio", response_model=Dict[str, List[DividendResponse]])
async def get_dividends_for_portfolio(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    fanout: DividendFanout = Depends(get_dividend_fanout),
):
    """Dividends for every active position; a failed ticker maps to []."""
    _check_range(start_date, end_date)
    dividends = await fanout.for_portfolio(start_date, end_date)
    return to_response_map(dividends)
