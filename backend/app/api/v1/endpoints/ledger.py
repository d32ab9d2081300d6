from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.app.api.deps import get_ledger_store
from backend.app.api.errors import http_error
from backend.services.errors import LedgerError
from backend.services.inventory import get_counter, initialize_ledger
from backend.services.ledger_store import SqlLedgerStore

router = APIRouter(prefix="/ledger")


@router.post("/init")
def init_ledger(store: SqlLedgerStore = Depends(get_ledger_store)):
    try:
        attributes = initialize_ledger(store)
        store.commit()
    except LedgerError as e:
        store.rollback()
        raise http_error(e)

    return {"attributes": [{"key": k, "value": v} for k, v in attributes]}


@router.get("")
def read_ledger(store: SqlLedgerStore = Depends(get_ledger_store)):
    try:
        counter = get_counter(store)
    except LedgerError as e:
        raise http_error(e)

    return {"total_items": counter.total_items}
