from __future__ import annotations

from typing import Optional


class FulfillmentError(Exception):
    """
    Base class for every refused operation in the order lifecycle.

    These are recoverable: the caller decides whether to resubmit.
    """

    code = "fulfillment_error"


class InvalidItemOrStock(FulfillmentError):
    code = "invalid_item_or_stock"

    def __init__(self, item_id: int, quantity: int):
        self.item_id = item_id
        self.quantity = quantity
        super().__init__(f"Invalid item {item_id} or insufficient stock for quantity {quantity}")


class EmptyQueue(FulfillmentError):
    code = "empty_queue"

    def __init__(self, queue_name: str):
        self.queue_name = queue_name
        super().__init__(f"No orders in {queue_name} queue")


class UnreachableLocation(FulfillmentError):
    code = "unreachable_location"

    def __init__(self, order_id: int, start: int, end: int):
        self.order_id = order_id
        self.start = start
        self.end = end
        super().__init__(f"Order {order_id}: location node {end} is unreachable from node {start}")


class NothingToUndo(FulfillmentError):
    code = "nothing_to_undo"

    def __init__(self) -> None:
        super().__init__("Nothing to undo")


class DispatchQueueEmpty(FulfillmentError):
    code = "dispatch_queue_empty"

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Cannot undo process of order {order_id}: dispatch queue is empty")


class OrderNotPending(FulfillmentError):
    """Undo of an admission found the order outside the pending queue (ledger/state desync)."""

    code = "order_not_pending"

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found in pending queue (already processed?)")


class UnsupportedUndo(FulfillmentError):
    code = "unsupported_undo"

    def __init__(self, order_id: Optional[int] = None):
        self.order_id = order_id
        super().__init__("Cannot undo a final dispatch")
