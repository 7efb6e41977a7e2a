from __future__ import annotations

from collections import deque

from fulfillment.errors import EmptyQueue
from fulfillment.order import Order


class DispatchQueue:
    """
    Routed orders waiting to ship.

    Shipping takes the oldest order (front). Undoing a process takes back the
    order that was enqueued last (back), whatever the queue length. The two
    ends are exposed as separate operations on purpose.
    """

    def __init__(self) -> None:
        self._orders: deque[Order] = deque()

    def __len__(self) -> int:
        return len(self._orders)

    def enqueue(self, order: Order) -> None:
        self._orders.append(order)

    def peek_front(self) -> Order:
        if not self._orders:
            raise EmptyQueue("dispatch")
        return self._orders[0]

    def dequeue_front(self) -> Order:
        """Ships the oldest ready order. It leaves the system for good."""
        if not self._orders:
            raise EmptyQueue("dispatch")
        return self._orders.popleft()

    def peek_most_recently_enqueued(self) -> Order:
        if not self._orders:
            raise EmptyQueue("dispatch")
        return self._orders[-1]

    def remove_most_recently_enqueued(self) -> Order:
        if not self._orders:
            raise EmptyQueue("dispatch")
        return self._orders.pop()

    def snapshot(self) -> list[Order]:
        return list(self._orders)
