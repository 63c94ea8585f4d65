from datetime import date, datetime
from decimal import Decimal

import pytest

from app.domain.models import Position, PriceSource
from app.domain.services.position_enricher import PositionEnricher, PositionListEnricher


NOW = datetime(2026, 3, 2, 15, 30, 0)


def _enricher(gateway) -> PositionEnricher:
    return PositionEnricher(gateway, clock=lambda: NOW)


@pytest.mark.asyncio
async def test_live_price_is_used(fake_gateway, position_factory):
    fake_gateway.prices["AAPL"] = Decimal("187.12")
    current = await _enricher(fake_gateway).enrich(position_factory("AAPL", price="150"))

    assert current.current_price == Decimal("187.12")
    assert current.price_source is PriceSource.LIVE
    assert current.current_price_timestamp == NOW
    assert current.total_quantity == Decimal("10")


@pytest.mark.asyncio
async def test_gateway_failure_falls_back_to_stored_price(fake_gateway, position_factory):
    fake_gateway.failing.add("AAPL")
    position = position_factory("AAPL", price="150", last_updated=date(2026, 2, 27))

    current = await _enricher(fake_gateway).enrich(position)

    assert current.current_price == Decimal("150")
    assert current.price_source is PriceSource.STORED
    assert current.current_price_timestamp == datetime(2026, 2, 27, 0, 0, 0)
    assert not current.is_fresh(now=NOW)


@pytest.mark.asyncio
async def test_fallback_without_stored_price_or_date(fake_gateway):
    position = Position(ticker="NEW", total_quantity=Decimal("1"), current_price=None, last_updated=None)

    current = await _enricher(fake_gateway).enrich(position)

    assert current.current_price == Decimal("0")
    assert current.current_price_timestamp == datetime(2026, 3, 1, 15, 30, 0)
    assert current.price_source is PriceSource.STORED


@pytest.mark.asyncio
async def test_missing_position_or_ticker_skips_gateway(fake_gateway):
    enricher = _enricher(fake_gateway)
    assert await enricher.enrich(None) is None
    assert await enricher.enrich(Position(ticker=None)) is None
    assert await enricher.enrich(Position(ticker="")) is None
    assert fake_gateway.price_calls == []


@pytest.mark.asyncio
async def test_enrich_all_preserves_order_and_isolates_failures(fake_gateway, position_factory):
    fake_gateway.prices.update({"AAPL": Decimal("200"), "TSLA": Decimal("250")})
    fake_gateway.failing.add("MSFT")
    positions = [
        position_factory("TSLA", price="240"),
        position_factory("MSFT", price="410"),
        position_factory("AAPL", price="190"),
    ]

    enriched = await PositionListEnricher(_enricher(fake_gateway)).enrich_all(positions)

    assert [p.ticker for p in enriched] == ["TSLA", "MSFT", "AAPL"]
    assert [p.current_price for p in enriched] == [Decimal("250"), Decimal("410"), Decimal("200")]
    assert [p.price_source for p in enriched] == [PriceSource.LIVE, PriceSource.STORED, PriceSource.LIVE]
    assert fake_gateway.price_calls == ["TSLA", "MSFT", "AAPL"]


@pytest.mark.asyncio
async def test_enrich_all_empty_input(fake_gateway):
    list_enricher = PositionListEnricher(_enricher(fake_gateway))
    assert await list_enricher.enrich_all([]) == []
    assert await list_enricher.enrich_all(None) == []
    assert fake_gateway.price_calls == []
