from dataclasses import dataclass
from decimal import Decimal

ZERO = Decimal("0")


@dataclass(frozen=True)
class PortfolioSummary:
    """
    Portfolio-level totals computed from priced positions.
    """
    total_market_value: Decimal
    total_cost: Decimal
    total_unrealized_gain_loss: Decimal
    total_unrealized_gain_loss_pct: Decimal
    total_positions: int
    active_positions: int

    @classmethod
    def empty(cls) -> "PortfolioSummary":
        return cls(
            total_market_value=ZERO,
            total_cost=ZERO,
            total_unrealized_gain_loss=ZERO,
            total_unrealized_gain_loss_pct=ZERO,
            total_positions=0,
            active_positions=0,
        )

    def has_value(self) -> bool:
        return self.total_market_value > ZERO or self.total_cost > ZERO

    def has_active_positions(self) -> bool:
        return self.active_positions > 0
