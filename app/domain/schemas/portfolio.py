from pydantic import BaseModel

from app.domain.models import PortfolioSummary
from app.domain.schemas.common import JsonDecimal, normalize_monetary


class PortfolioSummaryResponse(BaseModel):
    total_market_value: JsonDecimal
    total_cost: JsonDecimal
    total_unrealized_gain_loss: JsonDecimal
    total_unrealized_gain_loss_pct: JsonDecimal
    total_positions: int
    active_positions: int

    @classmethod
    def from_domain(cls, summary: PortfolioSummary) -> "PortfolioSummaryResponse":
        return cls(
            total_market_value=normalize_monetary(summary.total_market_value),
            total_cost=normalize_monetary(summary.total_cost),
            total_unrealized_gain_loss=normalize_monetary(summary.total_unrealized_gain_loss),
            total_unrealized_gain_loss_pct=normalize_monetary(summary.total_unrealized_gain_loss_pct),
            total_positions=summary.total_positions,
            active_positions=summary.active_positions,
        )
