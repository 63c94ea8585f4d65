"""
Database Models (SQLAlchemy ORM)
Position aggregates; rows are written by the recalculation procedure
"""

import uuid

from sqlalchemy import CheckConstraint, Column, String, Numeric, Date, DateTime, Uuid

from app.domain.models import Currency
from app.infrastructure.db.database import Base
from app.utils.time import now_local


class PositionModel(Base):
    """Aggregated position per ticker"""
    __tablename__ = "positions"
    __table_args__ = (
        CheckConstraint(
            "primary_currency IN (" + ", ".join(f"'{c.value}'" for c in Currency) + ")",
            name="ck_positions_primary_currency",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    ticker = Column(String(20), nullable=False, unique=True, index=True)

    current_quantity = Column(Numeric(18, 6), nullable=False, default=0)
    avg_cost_per_share = Column(Numeric(18, 4), nullable=False, default=0)
    primary_currency = Column(String(3), nullable=False, default="USD")
    total_cost_basis = Column(Numeric(18, 4), nullable=False, default=0)
    total_commissions = Column(Numeric(18, 4), nullable=True)

    first_purchase_date = Column(Date, nullable=True)
    last_transaction_date = Column(Date, nullable=True)

    current_price = Column(Numeric(18, 4), nullable=True)
    current_market_value = Column(Numeric(18, 4), nullable=True)
    unrealized_gain_loss = Column(Numeric(18, 4), nullable=True)
    last_price_update = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=now_local)
    updated_at = Column(DateTime, nullable=True, default=now_local, onupdate=now_local)
