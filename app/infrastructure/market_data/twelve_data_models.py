"""
TwelveData response payloads.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class TwelveDataPriceResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    price: Optional[Decimal] = None


class TwelveDataDividendsMeta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    symbol: Optional[str] = None
    name: Optional[str] = None
    currency: Optional[str] = None
    exchange: Optional[str] = None
    mic_code: Optional[str] = None
    exchange_timezone: Optional[str] = None


class TwelveDataDividend(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ex_date: Optional[date] = None
    amount: Optional[Decimal] = None


class TwelveDataDividendsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    meta: Optional[TwelveDataDividendsMeta] = None
    dividends: Optional[List[TwelveDataDividend]] = None
