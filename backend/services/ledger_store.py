from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.db.models.models_v1 import LedgerCounter, LedgerItem
from backend.services.errors import ItemNotFound, LedgerUninitialized, StoreFailure
from backend.services.records import COUNTER_KEY, Coin, Counter, Item

logger = logging.getLogger(__name__)


class LedgerStore(ABC):
    """
    Stockage clé/valeur du registre.

    - "counter" : compteur singleton
    - "item-<n>" : un enregistrement par article

    Le verrouillage (for_update) couvre un load -> validate -> save sur une clé ;
    la frontière de transaction appartient à l'appelant.
    """

    @abstractmethod
    def load_counter(self, *, for_update: bool = False) -> Counter:
        ...

    @abstractmethod
    def save_counter(self, counter: Counter) -> None:
        ...

    @abstractmethod
    def load_item(self, item_id: str, *, for_update: bool = False) -> Item:
        ...

    @abstractmethod
    def save_item(self, item_id: str, item: Item) -> None:
        ...

    @abstractmethod
    def iter_items(self) -> list[Item]:
        """Snapshot of every item, ascending by key."""


class MemoryLedgerStore(LedgerStore):
    def __init__(self):
        self._counter: Counter | None = None
        self._items: dict[str, Item] = {}

    def load_counter(self, *, for_update: bool = False) -> Counter:
        if self._counter is None:
            raise LedgerUninitialized()
        return self._counter

    def save_counter(self, counter: Counter) -> None:
        self._counter = counter

    def load_item(self, item_id: str, *, for_update: bool = False) -> Item:
        try:
            return self._items[item_id]
        except KeyError:
            raise ItemNotFound(item_id) from None

    def save_item(self, item_id: str, item: Item) -> None:
        self._items[item_id] = item

    def iter_items(self) -> list[Item]:
        return [self._items[key] for key in sorted(self._items)]


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Ledger store %s failed: %s", action, e)
        raise StoreFailure(action) from e


def _to_item(row: LedgerItem) -> Item:
    return Item(
        id=row.id,
        name=row.name,
        quantity=int(row.quantity),
        unit_price=Coin(denom=row.price_denom, amount=int(row.price_amount)),
        owner=row.owner,
        status=row.status,
    )


class SqlLedgerStore(LedgerStore):
    """
    Implémentation SQLAlchemy.

    Les écritures sont flushées, jamais commitées : l'appelant fait
    commit() (succès) ou rollback() (erreur métier ou technique).
    """

    def __init__(self, db: Session):
        self.db = db

    def load_counter(self, *, for_update: bool = False) -> Counter:
        stmt = select(LedgerCounter).where(LedgerCounter.key == COUNTER_KEY)
        if for_update:
            stmt = stmt.with_for_update()

        with _store_errors("load_counter"):
            row = self.db.execute(stmt).scalar_one_or_none()
        if not row:
            raise LedgerUninitialized()
        return Counter(total_items=int(row.total_items))

    def save_counter(self, counter: Counter) -> None:
        with _store_errors("save_counter"):
            row = self.db.get(LedgerCounter, COUNTER_KEY)
            if not row:
                row = LedgerCounter(key=COUNTER_KEY, total_items=counter.total_items)
                self.db.add(row)
            else:
                row.total_items = counter.total_items
            self.db.flush()

    def load_item(self, item_id: str, *, for_update: bool = False) -> Item:
        stmt = select(LedgerItem).where(LedgerItem.id == item_id)
        if for_update:
            stmt = stmt.with_for_update()

        with _store_errors("load_item"):
            row = self.db.execute(stmt).scalar_one_or_none()
        if not row:
            raise ItemNotFound(item_id)
        return _to_item(row)

    def save_item(self, item_id: str, item: Item) -> None:
        with _store_errors("save_item"):
            row = self.db.get(LedgerItem, item_id)
            if not row:
                row = LedgerItem(id=item_id)
                self.db.add(row)

            row.name = item.name
            row.quantity = item.quantity
            row.price_denom = item.unit_price.denom
            row.price_amount = str(item.unit_price.amount)
            row.owner = item.owner
            row.status = item.status
            self.db.flush()

    def iter_items(self) -> list[Item]:
        with _store_errors("iter_items"):
            rows = self.db.execute(select(LedgerItem).order_by(LedgerItem.id.asc())).scalars().all()
        return [_to_item(r) for r in rows]

    def commit(self) -> None:
        with _store_errors("commit"):
            self.db.commit()

    def rollback(self) -> None:
        with _store_errors("rollback"):
            self.db.rollback()
