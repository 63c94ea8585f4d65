from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel

from app.domain.models import Dividend
from app.domain.schemas.common import JsonDecimal


class DividendResponse(BaseModel):
    ticker: str
    mic_code: Optional[str] = None
    exchange: Optional[str] = None
    ex_date: Optional[date] = None
    amount: Optional[JsonDecimal] = None

    @classmethod
    def from_domain(cls, dividend: Dividend) -> "DividendResponse":
        return cls(
            ticker=dividend.ticker,
            mic_code=dividend.mic_code,
            exchange=dividend.exchange,
            ex_date=dividend.ex_date,
            amount=dividend.amount,
        )


def to_response_map(dividends: Dict[str, List[Dividend]]) -> Dict[str, List[DividendResponse]]:
    return {
        ticker: [DividendResponse.from_domain(d) for d in items]
        for ticker, items in dividends.items()
    }
