from __future__ import annotations

from typing import Optional

from fulfillment.errors import EmptyQueue
from fulfillment.order import Order


class PriorityOrderQueue:
    """
    Pending orders in an indexed binary max-heap.

    The heap is a plain list; _positions maps order_id -> index and is kept in
    step on every swap, so removal by id does not need a scan. Ordering is
    Order.outranks (priority, then lower id).
    """

    def __init__(self) -> None:
        self._heap: list[Order] = []
        self._positions: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, order_id: object) -> bool:
        return order_id in self._positions

    def get(self, order_id: int) -> Optional[Order]:
        idx = self._positions.get(order_id)
        return self._heap[idx] if idx is not None else None

    def admit(self, order: Order) -> None:
        if order.order_id in self._positions:
            raise ValueError(f"order {order.order_id} is already pending")
        self._heap.append(order)
        self._positions[order.order_id] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def peek_max(self) -> Order:
        if not self._heap:
            raise EmptyQueue("pending")
        return self._heap[0]

    def pop_max(self) -> Order:
        if not self._heap:
            raise EmptyQueue("pending")
        top = self._heap[0]
        self._remove_at(0)
        return top

    def remove_by_id(self, order_id: int) -> bool:
        idx = self._positions.get(order_id)
        if idx is None:
            return False
        self._remove_at(idx)
        return True

    def snapshot_descending(self) -> list[Order]:
        """All pending orders, highest priority first, without touching the heap."""
        return sorted(self._heap, key=lambda o: (-o.priority, o.order_id))

    # --- heap internals ---

    def _remove_at(self, idx: int) -> None:
        last = len(self._heap) - 1
        removed = self._heap[idx]
        if idx != last:
            self._swap(idx, last)
        self._heap.pop()
        del self._positions[removed.order_id]
        if idx < len(self._heap):
            # The former last element may belong above or below its new slot.
            moved = self._heap[idx]
            self._sift_up(idx)
            self._sift_down(self._positions[moved.order_id])

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._positions[heap[i].order_id] = i
        self._positions[heap[j].order_id] = j

    def _sift_up(self, idx: int) -> None:
        while idx > 0:
            parent = (idx - 1) // 2
            if not self._heap[idx].outranks(self._heap[parent]):
                break
            self._swap(idx, parent)
            idx = parent

    def _sift_down(self, idx: int) -> None:
        size = len(self._heap)
        while True:
            best = idx
            for child in (2 * idx + 1, 2 * idx + 2):
                if child < size and self._heap[child].outranks(self._heap[best]):
                    best = child
            if best == idx:
                return
            self._swap(idx, best)
            idx = best
