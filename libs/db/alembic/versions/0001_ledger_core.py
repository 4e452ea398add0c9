# ruff: noqa: I001
"""Ledger transactions table.

Revision ID: 0001_ledger_core
Revises: None
Create Date: 2026-10-19
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_ledger_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "ledger_transactions",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("owner_id", sa.Text(), nullable=False),
        sa.Column("kind", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("category", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("kind in ('income','expense')", name="ck_ledger_tx_kind"),
        sa.CheckConstraint("amount > 0", name="ck_ledger_tx_amount_positive"),
    )

    # Range lookups during import are always owner-scoped.
    op.create_index(
        "ix_ledger_tx_owner_date",
        "ledger_transactions",
        ["owner_id", "date"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_ledger_tx_owner_date", table_name="ledger_transactions")
    op.drop_table("ledger_transactions")
