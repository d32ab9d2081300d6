from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException

from backend.app.api.deps import get_ledger_store
from backend.app.api.errors import http_error
from backend.app.schemas.item import ItemCreate, ItemRead, ItemsRead, PurchaseCreate
from backend.services.errors import LedgerError
from backend.services.inventory import get_item, list_items, purchase_item, register_item
from backend.services.ledger_store import SqlLedgerStore
from backend.services.records import Attributes, Coin

router = APIRouter(prefix="/items")


# ---------- Helpers ----------
def _require_caller(caller: str | None) -> str:
    # identité fournie par la couche d'appel, non vérifiée ici
    if not caller or not caller.strip():
        raise HTTPException(status_code=400, detail="Missing X-Caller header")
    return caller.strip()


def _attributes_out(attributes: Attributes) -> list[dict]:
    return [{"key": k, "value": v} for k, v in attributes]


# ---------- Endpoints ----------
@router.get("", response_model=ItemsRead)
def read_items(store: SqlLedgerStore = Depends(get_ledger_store)):
    try:
        items = list_items(store)
    except LedgerError as e:
        raise http_error(e)

    return ItemsRead(items=[ItemRead.from_item(i) for i in items])


@router.get("/{item_id}", response_model=ItemRead)
def read_item(item_id: str, store: SqlLedgerStore = Depends(get_ledger_store)):
    try:
        item = get_item(store, item_id)
    except LedgerError as e:
        raise http_error(e)

    return ItemRead.from_item(item)


@router.post("")
def create_item(
    payload: ItemCreate,
    store: SqlLedgerStore = Depends(get_ledger_store),
    caller: str | None = Header(default=None, alias="X-Caller"),
):
    owner = _require_caller(caller)

    try:
        result = register_item(
            store,
            caller=owner,
            name=payload.name,
            unit_price=Coin(denom=payload.unit_price.denom, amount=payload.unit_price.amount),
            quantity=payload.quantity,
        )
        store.commit()
    except LedgerError as e:
        store.rollback()
        raise http_error(e)

    return {"item_id": result.item_id, "attributes": _attributes_out(result.attributes)}


@router.post("/{item_id}/purchase")
def purchase(
    item_id: str,
    payload: PurchaseCreate,
    store: SqlLedgerStore = Depends(get_ledger_store),
    caller: str | None = Header(default=None, alias="X-Caller"),
):
    try:
        result = purchase_item(
            store,
            item_id=item_id,
            quantity=payload.quantity,
            buyer=caller.strip() if caller else None,
        )
        store.commit()
    except LedgerError as e:
        store.rollback()
        raise http_error(e)

    return {
        "item_id": result.item_id,
        "quantity_purchased": result.quantity_purchased,
        "quantity": result.quantity,
        "status": result.status,
        "attributes": _attributes_out(result.attributes),
    }
