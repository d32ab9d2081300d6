from __future__ import annotations

from backend.services.records import COUNTER_KEY


class LedgerError(Exception):
    """Base class for every error the ledger reports to its caller."""


class RecordNotFound(LedgerError):
    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"{key} not found")


class LedgerUninitialized(RecordNotFound):
    def __init__(self):
        super().__init__(COUNTER_KEY, "Ledger not initialized")


class ItemNotFound(RecordNotFound):
    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(item_id, f"Item {item_id} not found")


class LedgerAlreadyInitialized(LedgerError):
    def __init__(self, total_items: int):
        self.total_items = total_items
        super().__init__(f"Ledger already initialized (total_items={total_items})")


class AlreadySold(LedgerError):
    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item {item_id} already sold")


class InvalidQuantity(LedgerError):
    def __init__(self, quantity: int):
        self.quantity = quantity
        super().__init__(f"Invalid quantity {quantity}")


class InsufficientStock(LedgerError):
    def __init__(self, item_id: str, *, requested: int, available: int):
        self.item_id = item_id
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient stock for {item_id} (requested={requested}, available={available})")


class StoreFailure(LedgerError):
    """The persistence layer failed; never retried here."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Ledger store failure during {action}")
