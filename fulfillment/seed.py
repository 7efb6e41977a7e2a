from __future__ import annotations

from fulfillment.catalog import ProductCatalog
from fulfillment.inventory import Inventory
from fulfillment.network import WarehouseLayout

# (u, v, distance); node 0 is the depot.
DEFAULT_EDGES: list[tuple[int, int, int]] = [
    (0, 1, 5),
    (0, 2, 7),
    (1, 3, 4),
    (1, 4, 3),
    (2, 5, 2),
    (2, 6, 5),
    (4, 7, 6),
    (5, 8, 4),
    (6, 9, 3),
    (3, 7, 2),
    (8, 9, 1),
]

# (item_id, name, quantity, location_node, category, price)
DEFAULT_ITEMS: list[tuple[int, str, int, int, str, float]] = [
    (101, "Laptop", 50, 7, "Electronics", 1200.00),
    (102, "Mouse", 100, 3, "Accessories", 25.50),
    (103, "Keyboard", 80, 4, "Accessories", 45.00),
    (104, "Monitor", 30, 8, "Electronics", 300.00),
    (105, "Headphones", 60, 9, "Audio", 80.00),
]


def default_layout() -> WarehouseLayout:
    return WarehouseLayout.from_edges(DEFAULT_EDGES)


def default_inventory() -> Inventory:
    inv = Inventory()
    for item_id, name, qty, loc, _, _ in DEFAULT_ITEMS:
        inv.add_item(item_id, name, qty, loc)
    return inv


def default_catalog() -> ProductCatalog:
    catalog = ProductCatalog()
    for item_id, name, _, _, category, price in DEFAULT_ITEMS:
        catalog.add_product(item_id, name, category, price)
    return catalog
