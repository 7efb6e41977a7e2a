from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class StockItem:
    """
    Stock for one item at one storage location.

    Important rule: no decision-making in this class.
    """

    item_id: int
    name: str
    quantity: int
    location_node: int


class Inventory:
    """Item id -> StockItem. Unknown ids never have stock."""

    def __init__(self) -> None:
        self._items: dict[int, StockItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    def add_item(self, item_id: int, name: str, quantity: int, location_node: int) -> None:
        if quantity < 0:
            raise ValueError("quantity must be >= 0")
        self._items[item_id] = StockItem(item_id, name, quantity, location_node)

    def item_info(self, item_id: int) -> Optional[StockItem]:
        return self._items.get(item_id)

    def has_stock(self, item_id: int, qty: int) -> bool:
        item = self._items.get(item_id)
        return item is not None and item.quantity >= qty

    def adjust_stock(self, item_id: int, delta: int) -> bool:
        """
        Applies a signed change to an item's quantity.
        Returns True if the item exists, False otherwise (nothing changes).
        """
        item = self._items.get(item_id)
        if item is None:
            return False
        item.quantity += delta
        return True

    def items(self) -> list[StockItem]:
        return [self._items[k] for k in sorted(self._items)]
