from __future__ import annotations

from pydantic import BaseModel, Field

from backend.app.db.models.core_types import ItemStatus
from backend.services.records import Item

UINT128_MAX = 2**128 - 1
# quantity tient dans un BIGINT signé
QUANTITY_MAX = 2**63 - 1


class CoinCreate(BaseModel):
    denom: str = Field(min_length=1, max_length=128)
    amount: int = Field(ge=0, le=UINT128_MAX)


class ItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    unit_price: CoinCreate
    quantity: int = Field(ge=0, le=QUANTITY_MAX)


class PurchaseCreate(BaseModel):
    quantity: int = Field(ge=0, le=QUANTITY_MAX)


class CoinRead(BaseModel):
    denom: str
    amount: str  # Uint128 : transporté en chaîne


class ItemRead(BaseModel):
    id: str
    name: str
    quantity: int
    price: CoinRead
    owner: str
    status: ItemStatus

    @classmethod
    def from_item(cls, item: Item) -> "ItemRead":
        return cls(
            id=item.id,
            name=item.name,
            quantity=item.quantity,
            price=CoinRead(denom=item.unit_price.denom, amount=str(item.unit_price.amount)),
            owner=item.owner,
            status=item.status,
        )


class ItemsRead(BaseModel):
    items: list[ItemRead]
