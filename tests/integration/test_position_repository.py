from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from app.domain.models import Currency
from app.infrastructure.db.models import PositionModel
from app.infrastructure.db.repositories.position_repository import PositionRepository


async def _seed(db_session):
    db_session.add_all([
        PositionModel(
            ticker="MSFT",
            current_quantity=Decimal("5"),
            avg_cost_per_share=Decimal("300"),
            total_cost_basis=Decimal("1500"),
            primary_currency="USD",
            current_price=Decimal("320"),
            last_transaction_date=date(2026, 2, 20),
        ),
        PositionModel(
            ticker="AAPL",
            current_quantity=Decimal("10"),
            avg_cost_per_share=Decimal("100"),
            total_cost_basis=Decimal("1000"),
            primary_currency="USD",
            current_price=Decimal("150"),
            last_transaction_date=date(2026, 3, 1),
        ),
        PositionModel(
            ticker="GME",
            current_quantity=Decimal("0"),
            avg_cost_per_share=Decimal("0"),
            total_cost_basis=Decimal("0"),
            primary_currency="EUR",
        ),
    ])
    await db_session.commit()


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_queries_are_ordered_by_ticker(db_session):
    await _seed(db_session)
    repo = PositionRepository(db_session)

    assert [p.ticker for p in await repo.find_all()] == ["AAPL", "GME", "MSFT"]
    assert [p.ticker for p in await repo.find_all_with_shares()] == ["AAPL", "MSFT"]
    assert await repo.count_all() == 3
    assert await repo.count_with_shares() == 2


@pytest.mark.asyncio
@pytest.mark.integration
async def test_find_maps_columns_to_domain(db_session):
    await _seed(db_session)
    repo = PositionRepository(db_session)

    position = await repo.find_by_ticker("AAPL")
    assert position.total_quantity == Decimal("10")
    assert position.average_price == Decimal("100")
    assert position.total_cost == Decimal("1000")
    assert position.current_price == Decimal("150")
    assert position.currency is Currency.USD
    assert position.last_updated == date(2026, 3, 1)
    assert position.is_active

    closed = await repo.find_by_ticker("GME")
    assert closed.currency is Currency.EUR
    assert not closed.is_active
    assert closed.current_price is None

    assert (await repo.find_by_id(position.id)).ticker == "AAPL"
    assert await repo.find_by_ticker("ZZZZ") is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_exists_by_ticker(db_session):
    await _seed(db_session)
    repo = PositionRepository(db_session)
    assert await repo.exists_by_ticker("MSFT")
    assert not await repo.exists_by_ticker("ZZZZ")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_market_price_refreshes_derived_columns(db_session):
    await _seed(db_session)
    repo = PositionRepository(db_session)

    position = await repo.update_market_price("AAPL", Decimal("175.5"))
    await db_session.commit()

    assert position.current_price == Decimal("175.5")
    model = await repo._get_model_by_ticker("AAPL")
    assert model.current_market_value == Decimal("1755")
    assert model.unrealized_gain_loss == Decimal("755")
    assert model.last_price_update is not None

    assert await repo.update_market_price("ZZZZ", Decimal("1")) is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unsupported_currency_is_rejected_by_store(db_session):
    await _seed(db_session)
    db_session.add(
        PositionModel(
            ticker="7203.T",
            current_quantity=Decimal("100"),
            avg_cost_per_share=Decimal("2500"),
            total_cost_basis=Decimal("250000"),
            primary_currency="JPY",
        )
    )
    with pytest.raises(IntegrityError):
        await db_session.commit()
    await db_session.rollback()

    repo = PositionRepository(db_session)
    assert [p.ticker for p in await repo.find_all()] == ["AAPL", "GME", "MSFT"]
