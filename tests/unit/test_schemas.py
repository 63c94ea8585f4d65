import json
from datetime import datetime
from decimal import Decimal

from app.domain.models import CurrentPosition, Position, PortfolioSummary, PriceSource
from app.domain.schemas.portfolio import PortfolioSummaryResponse
from app.domain.schemas.position import PositionResponse


def test_money_is_rounded_half_up_and_emitted_as_json_numbers():
    position = Position(
        ticker="AAPL",
        total_quantity=Decimal("3.1234565"),
        average_price=Decimal("100.00005"),
        total_cost=Decimal("312.35"),
    )
    current = CurrentPosition.from_position(position, Decimal("187.12345"), datetime(2026, 3, 2, 12, 0))

    body = json.loads(PositionResponse.from_current(current).model_dump_json())

    assert body["total_quantity"] == 3.123457
    assert body["average_price"] == 100.0001
    assert body["current_price"] == 187.1235
    assert body["price_source"] == "LIVE"


def test_large_amounts_keep_four_decimals_in_json():
    summary = PortfolioSummary(
        total_market_value=Decimal("98765432109.1234"),
        total_cost=Decimal("12345678901.5678"),
        total_unrealized_gain_loss=Decimal("86419753207.5556"),
        total_unrealized_gain_loss_pct=Decimal("700.000011"),
        total_positions=3,
        active_positions=2,
    )
    response = PortfolioSummaryResponse.from_domain(summary)
    body = json.loads(response.model_dump_json())

    assert Decimal(str(body["total_market_value"])) == Decimal("98765432109.1234")
    assert Decimal(str(body["total_cost"])) == Decimal("12345678901.5678")
    assert Decimal(str(body["total_unrealized_gain_loss_pct"])) == Decimal("700.0000")
    # Python-mode dumps keep the exact Decimal
    assert response.model_dump()["total_market_value"] == Decimal("98765432109.1234")
