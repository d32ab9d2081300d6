from __future__ import annotations

import logging

from backend.app.db.models.core_types import ItemStatus
from backend.services.errors import (
    AlreadySold,
    InsufficientStock,
    InvalidQuantity,
    LedgerAlreadyInitialized,
    LedgerUninitialized,
)
from backend.services.ledger_store import LedgerStore
from backend.services.records import (
    Attributes,
    Coin,
    Counter,
    Item,
    PurchaseResult,
    RegisterResult,
    item_key,
)

logger = logging.getLogger(__name__)


def initialize_ledger(store: LedgerStore) -> Attributes:
    """
    Crée le compteur (total_items = 0).

    Rejoué sur un registre vide : no-op.
    Rejoué après au moins un article : refusé, sinon les ids seraient ré-émis.
    """
    try:
        counter = store.load_counter(for_update=True)
    except LedgerUninitialized:
        counter = None

    if counter is not None and counter.total_items > 0:
        logger.warning("Initialize rejected: ledger already holds %s items", counter.total_items)
        raise LedgerAlreadyInitialized(counter.total_items)

    store.save_counter(Counter(total_items=0))
    logger.info("Ledger initialized")
    return [("action", "instantiate")]


def register_item(
    store: LedgerStore,
    *,
    caller: str,
    name: str,
    unit_price: Coin,
    quantity: int,
) -> RegisterResult:
    """
    Enregistre un article et lui attribue l'id suivant.

    Le nom est pris tel quel. quantity == 0 donne un article déjà SOLD.
    """
    if quantity < 0:
        raise InvalidQuantity(quantity)

    counter = store.load_counter(for_update=True)
    next_seq = counter.total_items + 1
    item_id = item_key(next_seq)

    item = Item.new(
        id=item_id,
        name=name,
        quantity=quantity,
        unit_price=unit_price,
        owner=caller,
    )
    store.save_item(item_id, item)
    store.save_counter(Counter(total_items=next_seq))

    logger.info("Registered %s (%s x %s) for %s", item_id, quantity, name, caller)
    return RegisterResult(
        item_id=item_id,
        attributes=[("action", "register_item"), ("item_id", item_id)],
    )


def purchase_item(
    store: LedgerStore,
    *,
    item_id: str,
    quantity: int,
    buyer: str | None = None,
) -> PurchaseResult:
    """
    Décrémente le stock d'un article.

    Ordre de validation (premier qui échoue gagne) :
        introuvable -> SOLD -> quantité <= 0 -> stock insuffisant

    Le compteur n'est jamais touché ici.
    """
    item = store.load_item(item_id, for_update=True)

    if item.status == ItemStatus.sold:
        logger.warning("Purchase rejected: %s already sold", item_id)
        raise AlreadySold(item_id)
    if quantity <= 0:
        raise InvalidQuantity(quantity)
    if quantity > item.quantity:
        logger.warning(
            "Purchase rejected: %s requested=%s available=%s", item_id, quantity, item.quantity
        )
        raise InsufficientStock(item_id, requested=quantity, available=item.quantity)

    updated = item.with_quantity(item.quantity - quantity)
    store.save_item(item_id, updated)

    logger.info("Purchased %s x %s, remaining=%s status=%s", quantity, item_id, updated.quantity, updated.status.value)

    attributes: Attributes = [
        ("action", "purchase"),
        ("item_id", item_id),
        ("quantity", str(quantity)),
    ]
    if buyer:
        attributes.append(("buyer", buyer))

    return PurchaseResult(
        item_id=item_id,
        quantity_purchased=quantity,
        quantity=updated.quantity,
        status=updated.status,
        attributes=attributes,
    )


def get_item(store: LedgerStore, item_id: str) -> Item:
    return store.load_item(item_id)


def list_items(store: LedgerStore) -> list[Item]:
    return store.iter_items()


def get_counter(store: LedgerStore) -> Counter:
    return store.load_counter()
