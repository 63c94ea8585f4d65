from datetime import date, datetime, timedelta
from decimal import Decimal

from app.domain.models import CurrentPosition, Currency, Position, PriceSource


NOW = datetime(2026, 3, 2, 15, 0, 0)


def _current(quantity="10", price="150", cost="1000", source=PriceSource.LIVE, timestamp=NOW):
    position = Position(
        ticker="AAPL",
        total_quantity=Decimal(quantity) if quantity is not None else None,
        average_price=Decimal("100"),
        current_price=Decimal("90"),
        total_cost=Decimal(cost) if cost is not None else None,
        currency=Currency.USD,
        last_updated=date(2026, 3, 1),
    )
    return CurrentPosition.from_position(
        position, Decimal(price) if price is not None else None, timestamp, source
    )


def test_market_value_and_gain_loss():
    current = _current()
    assert current.market_value == Decimal("1500")
    assert current.unrealized_gain_loss == Decimal("500")
    assert current.unrealized_gain_loss_pct == Decimal("50.000000")


def test_gain_loss_pct_rounds_ratio_half_up_to_six_places():
    # 1/3 -> 0.333333 -> 33.3333%
    current = _current(quantity="1", price="4", cost="3")
    assert current.unrealized_gain_loss_pct == Decimal("33.333300")


def test_missing_price_or_quantity_values_at_zero():
    assert _current(price=None).market_value == Decimal("0")
    assert _current(quantity=None).market_value == Decimal("0")
    assert _current(price=None).unrealized_gain_loss == Decimal("-1000")


def test_gain_loss_pct_is_zero_without_positive_cost():
    assert _current(cost="0").unrealized_gain_loss_pct == Decimal("0")
    assert _current(cost=None).unrealized_gain_loss_pct == Decimal("0")


def test_from_position_keeps_stored_fields():
    current = _current(price="150")
    assert current.ticker == "AAPL"
    assert current.average_price == Decimal("100")
    assert current.current_price == Decimal("150")
    assert current.last_updated == date(2026, 3, 1)
    assert current.price_source is PriceSource.LIVE


def test_live_price_is_fresh_within_window():
    assert _current(timestamp=NOW - timedelta(minutes=29)).is_fresh(now=NOW)
    assert not _current(timestamp=NOW - timedelta(minutes=30)).is_fresh(now=NOW)


def test_stored_price_is_never_fresh():
    assert not _current(source=PriceSource.STORED, timestamp=NOW).is_fresh(now=NOW)


def test_has_shares():
    assert _current(quantity="0.5").has_shares()
    assert not _current(quantity="0").has_shares()
    assert not _current(quantity=None).has_shares()
