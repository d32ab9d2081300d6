import pytest

from backend.app.db.models.core_types import ItemStatus
from backend.services.errors import (
    AlreadySold,
    InsufficientStock,
    InvalidQuantity,
    ItemNotFound,
    LedgerAlreadyInitialized,
    LedgerUninitialized,
    RecordNotFound,
)
from backend.services.inventory import (
    get_counter,
    get_item,
    initialize_ledger,
    list_items,
    purchase_item,
    register_item,
)
from backend.services.records import Coin

TOMATO_PRICE = Coin(denom="earth", amount=50)


def _register(store, name="Tomato", quantity=100, caller="creator"):
    return register_item(store, caller=caller, name=name, unit_price=TOMATO_PRICE, quantity=quantity)


@pytest.fixture
def tomato_ledger(store):
    initialize_ledger(store)
    assert _register(store).item_id == "item-1"
    return store


def test_register_then_get_item(tomato_ledger):
    item = get_item(tomato_ledger, "item-1")

    assert item.id == "item-1"
    assert item.name == "Tomato"
    assert item.quantity == 100
    assert item.unit_price == TOMATO_PRICE
    assert item.owner == "creator"
    assert item.status == ItemStatus.available


def test_purchase_down_to_sold_then_rejected(tomato_ledger):
    """
    GIVEN
    - item-1 : 100 unités

    THEN
    - achat 30 -> 70, AVAILABLE
    - achat 70 -> 0, SOLD
    - achat 1  -> AlreadySold, rien ne bouge
    """
    res = purchase_item(tomato_ledger, item_id="item-1", quantity=30)
    assert (res.quantity, res.status) == (70, ItemStatus.available)
    assert res.quantity_purchased == 30

    res = purchase_item(tomato_ledger, item_id="item-1", quantity=70)
    assert (res.quantity, res.status) == (0, ItemStatus.sold)

    before = get_item(tomato_ledger, "item-1")
    with pytest.raises(AlreadySold):
        purchase_item(tomato_ledger, item_id="item-1", quantity=1)
    assert get_item(tomato_ledger, "item-1") == before


def test_sold_item_rejects_zero_quantity_purchase(tomato_ledger):
    purchase_item(tomato_ledger, item_id="item-1", quantity=100)

    with pytest.raises(AlreadySold):
        purchase_item(tomato_ledger, item_id="item-1", quantity=0)


def test_purchase_unknown_item_on_empty_ledger(store):
    initialize_ledger(store)

    with pytest.raises(ItemNotFound) as exc_info:
        purchase_item(store, item_id="item-99", quantity=1)

    assert isinstance(exc_info.value, RecordNotFound)
    assert exc_info.value.key == "item-99"


def test_get_item_not_found(store):
    initialize_ledger(store)

    with pytest.raises(ItemNotFound):
        get_item(store, "item-1")


def test_insufficient_stock_leaves_item_unchanged(tomato_ledger):
    with pytest.raises(InsufficientStock) as exc_info:
        purchase_item(tomato_ledger, item_id="item-1", quantity=101)

    assert exc_info.value.requested == 101
    assert exc_info.value.available == 100
    item = get_item(tomato_ledger, "item-1")
    assert item.quantity == 100
    assert item.status == ItemStatus.available


@pytest.mark.parametrize("quantity", [0, -5])
def test_non_positive_purchase_on_available_item(tomato_ledger, quantity):
    with pytest.raises(InvalidQuantity):
        purchase_item(tomato_ledger, item_id="item-1", quantity=quantity)

    assert get_item(tomato_ledger, "item-1").quantity == 100


def test_repeated_purchase_is_not_idempotent(tomato_ledger):
    first = purchase_item(tomato_ledger, item_id="item-1", quantity=50)
    second = purchase_item(tomato_ledger, item_id="item-1", quantity=50)

    assert first.quantity == 50
    assert second.quantity == 0
    with pytest.raises(AlreadySold):
        purchase_item(tomato_ledger, item_id="item-1", quantity=50)


def test_purchase_does_not_touch_counter(tomato_ledger):
    _register(tomato_ledger, name="Corn", quantity=10)

    purchase_item(tomato_ledger, item_id="item-1", quantity=100)
    purchase_item(tomato_ledger, item_id="item-2", quantity=4)

    assert get_counter(tomato_ledger).total_items == 2


def test_register_zero_quantity_is_sold_immediately(store):
    initialize_ledger(store)

    item_id = _register(store, quantity=0).item_id

    item = get_item(store, item_id)
    assert item.quantity == 0
    assert item.status == ItemStatus.sold


def test_register_accepts_name_verbatim(store):
    initialize_ledger(store)

    item_id = _register(store, name="").item_id

    assert get_item(store, item_id).name == ""


def test_register_negative_quantity_rejected(store):
    initialize_ledger(store)

    with pytest.raises(InvalidQuantity):
        _register(store, quantity=-1)
    assert get_counter(store).total_items == 0


def test_ids_are_sequential_without_gaps(store):
    initialize_ledger(store)

    ids = [_register(store, name=f"crop-{n}", quantity=n).item_id for n in range(1, 6)]

    assert ids == ["item-1", "item-2", "item-3", "item-4", "item-5"]
    assert get_counter(store).total_items == 5


def test_register_result_attributes(store):
    initialize_ledger(store)

    result = _register(store)

    assert result.attributes == [("action", "register_item"), ("item_id", "item-1")]


def test_purchase_result_attributes(tomato_ledger):
    result = purchase_item(tomato_ledger, item_id="item-1", quantity=3, buyer="buyer")

    assert result.attributes == [
        ("action", "purchase"),
        ("item_id", "item-1"),
        ("quantity", "3"),
        ("buyer", "buyer"),
    ]


def test_operations_before_initialize_fail(store):
    with pytest.raises(LedgerUninitialized):
        _register(store)
    with pytest.raises(LedgerUninitialized):
        get_counter(store)


def test_initialize_is_noop_on_empty_ledger(store):
    assert initialize_ledger(store) == [("action", "instantiate")]
    initialize_ledger(store)

    assert get_counter(store).total_items == 0


def test_initialize_rejected_once_items_exist(tomato_ledger):
    with pytest.raises(LedgerAlreadyInitialized) as exc_info:
        initialize_ledger(tomato_ledger)

    assert exc_info.value.total_items == 1
    assert _register(tomato_ledger, name="Corn").item_id == "item-2"


def test_list_items_ordered_and_includes_sold(store):
    initialize_ledger(store)
    _register(store, name="Tomato", quantity=5)
    purchase_item(store, item_id="item-1", quantity=5)
    _register(store, name="Corn", quantity=7)
    purchase_item(store, item_id="item-2", quantity=2)
    _register(store, name="Rice", quantity=9)

    items = list_items(store)

    assert [i.id for i in items] == ["item-1", "item-2", "item-3"]
    assert [i.status for i in items] == [ItemStatus.sold, ItemStatus.available, ItemStatus.available]


def test_list_items_empty(store):
    initialize_ledger(store)

    assert list_items(store) == []


def test_list_items_uses_key_order(store):
    initialize_ledger(store)
    for n in range(12):
        _register(store, name=f"crop-{n}", quantity=1)

    ids = [i.id for i in list_items(store)]

    assert ids == sorted(f"item-{n}" for n in range(1, 13))
    assert ids[:3] == ["item-1", "item-10", "item-11"]


def test_list_items_is_a_snapshot(tomato_ledger):
    snapshot = list_items(tomato_ledger)

    purchase_item(tomato_ledger, item_id="item-1", quantity=10)
    _register(tomato_ledger, name="Corn")

    assert len(snapshot) == 1
    assert snapshot[0].quantity == 100


def test_status_always_matches_quantity(store):
    initialize_ledger(store)
    for qty in (0, 1, 3, 10):
        _register(store, quantity=qty)
    purchase_item(store, item_id="item-2", quantity=1)
    purchase_item(store, item_id="item-3", quantity=2)

    for item in list_items(store):
        assert (item.quantity == 0) == (item.status == ItemStatus.sold)
        assert item.quantity >= 0
