# alembic/versions/001_positions.py

"""Positions table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Aggregates are maintained by the recalculate_position(ticker) database
    # function, which is provisioned alongside the transactions schema.
    op.create_table('positions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('ticker', sa.String(length=20), nullable=False),
        sa.Column('current_quantity', sa.Numeric(precision=18, scale=6), nullable=False, server_default='0'),
        sa.Column('avg_cost_per_share', sa.Numeric(precision=18, scale=4), nullable=False, server_default='0'),
        sa.Column('primary_currency', sa.String(length=3), nullable=False, server_default='USD'),
        sa.Column('total_cost_basis', sa.Numeric(precision=18, scale=4), nullable=False, server_default='0'),
        sa.Column('total_commissions', sa.Numeric(precision=18, scale=4), nullable=True),
        sa.Column('first_purchase_date', sa.Date(), nullable=True),
        sa.Column('last_transaction_date', sa.Date(), nullable=True),
        sa.Column('current_price', sa.Numeric(precision=18, scale=4), nullable=True),
        sa.Column('current_market_value', sa.Numeric(precision=18, scale=4), nullable=True),
        sa.Column('unrealized_gain_loss', sa.Numeric(precision=18, scale=4), nullable=True),
        sa.Column('last_price_update', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('ticker'),
        sa.CheckConstraint("primary_currency IN ('USD', 'EUR', 'GBP')", name='ck_positions_primary_currency')
    )
    op.create_index('ix_positions_ticker', 'positions', ['ticker'])
    op.create_index('ix_positions_active', 'positions', ['ticker'],
                    postgresql_where=sa.text('current_quantity > 0'))


def downgrade():
    op.drop_index('ix_positions_active', table_name='positions')
    op.drop_index('ix_positions_ticker', table_name='positions')
    op.drop_table('positions')
