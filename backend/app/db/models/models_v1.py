from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    String,
    BigInteger,
    DateTime,
    Enum,
    CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.db.base import Base
from backend.app.db.models.core_types import ItemStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------- LEDGER ----------
class LedgerCounter(Base):
    __tablename__ = "ledger_counter"
    key: Mapped[str] = mapped_column(String(32), primary_key=True)
    total_items: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)

    __table_args__ = (
        CheckConstraint("total_items >= 0", name="ck_ledger_counter_total_nonneg"),
    )


class LedgerItem(Base):
    __tablename__ = "ledger_items"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)

    price_denom: Mapped[str] = mapped_column(String(128), nullable=False)
    # Uint128 en chiffres décimaux (hors de portée d'un BIGINT)
    price_amount: Mapped[str] = mapped_column(String(39), nullable=False)

    owner: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[ItemStatus] = mapped_column(
        Enum(
            ItemStatus,
            name="item_status",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_ledger_item_qty_nonneg"),
        CheckConstraint(
            "(quantity = 0 AND status = 'Sold') OR (quantity > 0 AND status = 'Available')",
            name="ck_ledger_item_status_matches_qty",
        ),
    )
