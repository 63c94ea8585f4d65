from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Dividend:
    """
    A dividend payment announced for a ticker.
    """
    ticker: str
    mic_code: Optional[str]
    exchange: Optional[str]
    ex_date: Optional[date]
    amount: Optional[Decimal]
