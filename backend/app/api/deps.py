from __future__ import annotations

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.app.db.session import SessionLocal
from backend.services.ledger_store import SqlLedgerStore


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_ledger_store(db: Session = Depends(get_db)) -> SqlLedgerStore:
    return SqlLedgerStore(db)
