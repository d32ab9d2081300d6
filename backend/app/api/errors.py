from __future__ import annotations

from fastapi import HTTPException

from backend.services.errors import (
    AlreadySold,
    InsufficientStock,
    InvalidQuantity,
    LedgerAlreadyInitialized,
    LedgerError,
    LedgerUninitialized,
    RecordNotFound,
    StoreFailure,
)

# ordre important : LedgerUninitialized hérite de RecordNotFound
_STATUS_CODES: list[tuple[type[LedgerError], int]] = [
    (LedgerUninitialized, 409),
    (RecordNotFound, 404),
    (LedgerAlreadyInitialized, 409),
    (AlreadySold, 409),
    (InsufficientStock, 400),
    (InvalidQuantity, 400),
    (StoreFailure, 503),
]


def http_error(exc: LedgerError) -> HTTPException:
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
