from __future__ import annotations

from dataclasses import dataclass, field, replace

from backend.app.db.models.core_types import ItemStatus

COUNTER_KEY = "counter"
ITEM_KEY_PREFIX = "item-"

Attributes = list[tuple[str, str]]


def item_key(sequence: int) -> str:
    return f"{ITEM_KEY_PREFIX}{sequence}"


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int


@dataclass(frozen=True)
class Counter:
    total_items: int = 0


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    quantity: int
    unit_price: Coin
    owner: str
    status: ItemStatus

    @classmethod
    def new(cls, *, id: str, name: str, quantity: int, unit_price: Coin, owner: str) -> Item:
        return cls(
            id=id,
            name=name,
            quantity=quantity,
            unit_price=unit_price,
            owner=owner,
            status=ItemStatus.for_quantity(quantity),
        )

    def with_quantity(self, quantity: int) -> Item:
        """Copy with a new quantity; status always follows."""
        return replace(self, quantity=quantity, status=ItemStatus.for_quantity(quantity))


@dataclass(frozen=True)
class RegisterResult:
    item_id: str
    attributes: Attributes = field(default_factory=list)


@dataclass(frozen=True)
class PurchaseResult:
    item_id: str
    quantity_purchased: int
    quantity: int
    status: ItemStatus
    attributes: Attributes = field(default_factory=list)
