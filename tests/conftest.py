import pytest

from fulfillment.coordinator import OrderLifecycleCoordinator
from fulfillment.inventory import Inventory
from fulfillment.network import WarehouseLayout
from fulfillment.order import Order
from fulfillment.seed import default_inventory, default_layout


def _make_order(order_id: int, priority: int, location_node: int = 7) -> Order:
    return Order(
        order_id=order_id,
        priority=priority,
        item_id=101,
        item_name="Laptop",
        quantity=1,
        location_node=location_node,
    )


@pytest.fixture
def make_order():
    return _make_order


@pytest.fixture
def layout() -> WarehouseLayout:
    return default_layout()


@pytest.fixture
def inventory() -> Inventory:
    return default_inventory()


@pytest.fixture
def coordinator(inventory, layout) -> OrderLifecycleCoordinator:
    return OrderLifecycleCoordinator(inventory, layout)
