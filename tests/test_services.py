import pytest

from ristoword.models import DEFAULT_ORDER_STATUS
from ristoword.schemas import InventoryItemCreate, OrderCreate
from ristoword.services import InventoryService, NotFoundError, OrderService, ValidationError


@pytest.fixture
def order_service(orders) -> OrderService:
    return OrderService(orders)


@pytest.fixture
def inventory_service(inventory) -> InventoryService:
    return InventoryService(inventory)


def test_create_order_defaults(order_service):
    order = order_service.create(OrderCreate(table=5, covers=2, area="sala", waiter="Luca"))

    assert order.id == 1
    assert order.status == DEFAULT_ORDER_STATUS
    assert order.paid is False
    assert order.created_at.endswith("Z")


@pytest.mark.parametrize("missing", ["table", "covers", "waiter"])
def test_create_order_requires_fields(order_service, orders, missing):
    fields = {"table": 5, "covers": 2, "area": "sala", "waiter": "Luca"}
    fields[missing] = None

    with pytest.raises(ValidationError) as exc:
        order_service.create(OrderCreate(**fields))

    assert missing in exc.value.message
    assert orders.next_id == 1
    assert len(orders) == 0


def test_area_is_optional(order_service):
    order = order_service.create(OrderCreate(table=1, covers=1, waiter="Sara"))
    assert order.area is None


def test_set_paid_coerces_to_bool(order_service):
    order_service.create(OrderCreate(table=1, covers=1, waiter="Sara"))

    assert order_service.set_paid("1", 1).paid is True
    assert order_service.set_paid("1", "").paid is False
    assert order_service.set_paid("1", None).paid is False


def test_unknown_order_raises_not_found(order_service, orders):
    order_service.create(OrderCreate(table=1, covers=1, waiter="Sara"))
    snapshot = [o.to_json() for o in orders]

    with pytest.raises(NotFoundError):
        order_service.set_status("2", "pronto")
    with pytest.raises(NotFoundError):
        order_service.set_paid("abc", True)

    assert [o.to_json() for o in orders] == snapshot


def test_list_orders_filters(order_service):
    for table in (1, 2, 3):
        order_service.create(OrderCreate(table=table, covers=2, waiter="Marco"))
    order_service.set_status("2", "pronto")
    order_service.set_paid("3", True)

    assert [o.id for o in order_service.list_orders()] == [1, 2, 3]
    assert [o.id for o in order_service.list_orders(status="pronto")] == [2]
    assert [o.id for o in order_service.list_orders(paid=False)] == [1, 2]


def test_create_item_coerces_quantity(inventory_service):
    item = inventory_service.create(InventoryItemCreate(name="Olio", unit="l", quantity="2.5"))
    assert item.quantity == 2.5

    item = inventory_service.create(InventoryItemCreate(name="Sale", unit="kg"))
    assert item.quantity == 0


def test_create_item_requires_name_and_unit(inventory_service, inventory):
    with pytest.raises(ValidationError):
        inventory_service.create(InventoryItemCreate(name="Olio", quantity=3))
    with pytest.raises(ValidationError):
        inventory_service.create(InventoryItemCreate(unit="l", quantity=3))

    assert inventory.next_id == 1


def test_adjust_round_trip_restores_quantity(inventory_service):
    inventory_service.create(InventoryItemCreate(name="Farina", unit="kg", quantity=12))

    inventory_service.adjust("1", -5)
    item = inventory_service.adjust("1", 5)

    assert item.quantity == 12


def test_adjust_allows_negative_stock(inventory_service):
    inventory_service.create(InventoryItemCreate(name="Farina", unit="kg", quantity=1))

    assert inventory_service.adjust("1", -4).quantity == -3


def test_adjust_non_numeric_delta_is_zero(inventory_service):
    inventory_service.create(InventoryItemCreate(name="Farina", unit="kg", quantity=4))

    assert inventory_service.adjust("1", "tanto").quantity == 4


def test_adjust_unknown_item(inventory_service):
    with pytest.raises(NotFoundError):
        inventory_service.adjust("5", 1)
