"""create key_value and settlement tables

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from offramp.adapters.sqlalchemy.mappings import UTCDateTime

revision: str = "0001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "key_value",
        sa.Column("key", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("key", name=op.f("pk_key_value")),
    )
    op.create_table(
        "settlement",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("link", sa.Text(), nullable=False),
        sa.Column("transaction_hash", sa.String(length=128), nullable=False),
        sa.Column("liquidation_address_id", sa.String(length=64), nullable=False),
        sa.Column("liquidation_address", sa.String(length=128), nullable=False),
        sa.Column("liquidation_chain", sa.String(length=32), nullable=False),
        sa.Column("liquidation_currency", sa.String(length=16), nullable=False),
        sa.Column("customer_id", sa.String(length=64), nullable=False),
        sa.Column("external_account_id", sa.String(length=64), nullable=False),
        sa.Column("destination_chain_id", sa.String(length=16), nullable=False),
        sa.Column("destination_currency", sa.String(length=16), nullable=False),
        sa.Column("usd_value", sa.String(length=40), nullable=True),
        sa.Column("fee", sa.String(length=40), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("account_identifier", sa.String(length=64), nullable=True),
        sa.Column("account_id", sa.String(length=64), nullable=True),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_settlement")),
        sa.UniqueConstraint("link", "transaction_hash", name=op.f("uq_settlement_link")),
    )


def downgrade() -> None:
    op.drop_table("settlement")
    op.drop_table("key_value")
