"""add received_amount to settlement

Revision ID: 0002_received_amount
Revises: 0001_initial
Create Date: 2026-10-19 15:00:00

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0002_received_amount"
down_revision: str | None = "0001_initial"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    with op.batch_alter_table("settlement") as batch_op:
        batch_op.add_column(sa.Column("received_amount", sa.String(length=40), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("settlement") as batch_op:
        batch_op.drop_column("received_amount")
