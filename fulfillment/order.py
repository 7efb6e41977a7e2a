from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OrderState(Enum):
    PENDING = "pending"  # in the priority queue
    READY = "ready"  # route resolved, waiting in the dispatch queue
    SHIPPED = "shipped"  # terminal, no longer tracked


@dataclass(frozen=True)
class Order:
    """
    A customer order admitted against inventory.

    item_name and location_node are copied from the inventory record at
    admission time and are never looked up again.
    """

    order_id: int
    priority: int  # higher value = served first
    item_id: int
    item_name: str
    quantity: int
    location_node: int

    def outranks(self, other: "Order") -> bool:
        """Higher priority wins; equal priorities go to the earlier (lower) id."""
        if self.priority != other.priority:
            return self.priority > other.priority
        return self.order_id < other.order_id
