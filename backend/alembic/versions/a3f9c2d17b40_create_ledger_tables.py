"""create ledger_counter and ledger_items

Revision ID: a3f9c2d17b40
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a3f9c2d17b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ITEM_STATUS = sa.Enum("Available", "Sold", name="item_status")


def upgrade() -> None:
    op.create_table(
        "ledger_counter",
        sa.Column("key", sa.String(32), primary_key=True),
        sa.Column("total_items", sa.BigInteger(), nullable=False, server_default="0"),
        sa.CheckConstraint("total_items >= 0", name="ck_ledger_counter_total_nonneg"),
    )

    op.create_table(
        "ledger_items",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("quantity", sa.BigInteger(), nullable=False),
        sa.Column("price_denom", sa.String(128), nullable=False),
        sa.Column("price_amount", sa.String(39), nullable=False),
        sa.Column("owner", sa.String(255), nullable=False),
        sa.Column("status", ITEM_STATUS, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("quantity >= 0", name="ck_ledger_item_qty_nonneg"),
        sa.CheckConstraint(
            "(quantity = 0 AND status = 'Sold') OR (quantity > 0 AND status = 'Available')",
            name="ck_ledger_item_status_matches_qty",
        ),
    )
    op.create_index("ix_ledger_items_owner", "ledger_items", ["owner"])


def downgrade() -> None:
    op.drop_index("ix_ledger_items_owner", table_name="ledger_items")
    op.drop_table("ledger_items")
    op.drop_table("ledger_counter")
    ITEM_STATUS.drop(op.get_bind(), checkfirst=True)
