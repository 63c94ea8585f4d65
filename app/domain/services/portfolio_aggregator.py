"""
PORTFOLIO AGGREGATOR

Reduces priced positions into portfolio totals.

Totals are exact decimals. The percentage is derived from the totals
(never averaged across positions) and keeps 6 fractional digits; display
rounding belongs to the response layer.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from app.domain.models import CurrentPosition, PortfolioSummary

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
RATIO_QUANTUM = Decimal("1E-10")
PERCENT_QUANTUM = Decimal("1E-6")


class PortfolioAggregator:

    def summarize(self, positions: Iterable[CurrentPosition]) -> PortfolioSummary:
        positions = list(positions)
        if not positions:
            return PortfolioSummary.empty()

        total_market_value = ZERO
        total_cost = ZERO
        active_positions = 0

        for position in positions:
            if position.has_shares():
                active_positions += 1
            market_value = position.market_value if position.market_value is not None else ZERO
            cost = position.total_cost if position.total_cost is not None else ZERO

            total_market_value += market_value
            total_cost += cost

            logger.debug(
                "Position %s: market value = %s, cost = %s", position.ticker, market_value, cost
            )

        total_gain_loss = total_market_value - total_cost
        total_gain_loss_pct = ZERO
        if total_cost > ZERO:
            ratio = (total_gain_loss / total_cost).quantize(RATIO_QUANTUM, rounding=ROUND_HALF_UP)
            total_gain_loss_pct = (ratio * HUNDRED).quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)

        summary = PortfolioSummary(
            total_market_value=total_market_value,
            total_cost=total_cost,
            total_unrealized_gain_loss=total_gain_loss,
            total_unrealized_gain_loss_pct=total_gain_loss_pct,
            total_positions=len(positions),
            active_positions=active_positions,
        )
        logger.info(
            "Portfolio summary | positions=%d active=%d value=%s cost=%s pnl=%s",
            summary.total_positions,
            summary.active_positions,
            summary.total_market_value,
            summary.total_cost,
            summary.total_unrealized_gain_loss,
        )
        return summary
