from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from fulfillment.dispatch import DispatchQueue
from fulfillment.errors import (
    DispatchQueueEmpty,
    EmptyQueue,
    InvalidItemOrStock,
    OrderNotPending,
    UnreachableLocation,
    UnsupportedUndo,
)
from fulfillment.inventory import StockItem
from fulfillment.ledger import ActionKind, ActionLedger, AdmitRecord, DispatchRecord, ProcessRecord
from fulfillment.logging_config import get_logger
from fulfillment.network import DEPOT_NODE, Route, WarehouseLayout
from fulfillment.order import Order
from fulfillment.priority_queue import PriorityOrderQueue

logger = get_logger(__name__)


class StockLedger(Protocol):
    """The slice of inventory the coordinator needs."""

    def has_stock(self, item_id: int, qty: int) -> bool: ...

    def adjust_stock(self, item_id: int, delta: int) -> bool: ...

    def item_info(self, item_id: int) -> Optional[StockItem]: ...


@dataclass(frozen=True)
class ReadyOrder:
    order: Order
    route: Route


@dataclass(frozen=True)
class UndoResult:
    kind: ActionKind
    order: Order


class OrderLifecycleCoordinator:
    """
    Owns the pending queue, the dispatch queue and the undo ledger.

    Order states: PENDING (priority queue) -> READY (dispatch queue) -> SHIPPED
    (gone). Every committed admit and process is recorded in the ledger in the
    same call that commits it; refused operations change nothing (a failed
    process re-admits the order it popped). Shipping is never recorded.

    Commands are expected one at a time; none of the collections is safe for
    concurrent mutation.
    """

    def __init__(self, inventory: StockLedger, layout: WarehouseLayout, depot_node: int = DEPOT_NODE):
        self.inventory = inventory
        self.layout = layout
        self.depot_node = depot_node
        self.pending = PriorityOrderQueue()
        self.ready = DispatchQueue()
        self.ledger = ActionLedger()
        self._next_id = 1

    # --- transitions ---

    def admit_order(self, item_id: int, quantity: int, priority: int) -> Order:
        item = self.inventory.item_info(item_id)
        if item is None or quantity <= 0 or not self.inventory.has_stock(item_id, quantity):
            logger.warning("Order refused", item_id=item_id, quantity=quantity, priority=priority)
            raise InvalidItemOrStock(item_id, quantity)

        order = Order(
            order_id=self._next_id,
            priority=priority,
            item_id=item_id,
            item_name=item.name,
            quantity=quantity,
            location_node=item.location_node,
        )
        self._next_id += 1

        self.pending.admit(order)
        self.inventory.adjust_stock(item_id, -quantity)
        self.ledger.record(AdmitRecord(order.order_id, item_id, quantity, priority))
        logger.info(
            "Order admitted",
            order_id=order.order_id,
            item_id=item_id,
            quantity=quantity,
            priority=priority,
        )
        return order

    def process_next(self) -> ReadyOrder:
        order = self.pending.pop_max()
        route = self.layout.shortest_path(self.depot_node, order.location_node)
        if not route.reachable:
            self.pending.admit(order)
            logger.warning(
                "Order location unreachable",
                order_id=order.order_id,
                location_node=order.location_node,
            )
            raise UnreachableLocation(order.order_id, self.depot_node, order.location_node)

        self.ready.enqueue(order)
        self.ledger.record(ProcessRecord(order.order_id))
        logger.info(
            "Order ready for dispatch",
            order_id=order.order_id,
            priority=order.priority,
            route=route.path,
            route_cost=route.cost,
        )
        return ReadyOrder(order=order, route=route)

    def dispatch_next(self) -> Order:
        order = self.ready.dequeue_front()
        logger.info("Order shipped", order_id=order.order_id)
        return order

    def undo_last(self) -> UndoResult:
        record = self.ledger.pop_last()

        if isinstance(record, AdmitRecord):
            order = self.pending.get(record.order_id)
            if order is None:
                logger.error("Undo found order outside pending queue", order_id=record.order_id)
                raise OrderNotPending(record.order_id)
            self.pending.remove_by_id(record.order_id)
            self.inventory.adjust_stock(record.item_id, record.quantity)
            logger.info("Undid admission", order_id=record.order_id, restored_quantity=record.quantity)
            return UndoResult(kind=ActionKind.ADD, order=order)

        if isinstance(record, ProcessRecord):
            try:
                order = self.ready.remove_most_recently_enqueued()
            except EmptyQueue:
                logger.error("Undo found dispatch queue empty", order_id=record.order_id)
                raise DispatchQueueEmpty(record.order_id) from None
            self.pending.admit(order)
            logger.info("Undid process", order_id=order.order_id)
            return UndoResult(kind=ActionKind.PROCESS, order=order)

        if isinstance(record, DispatchRecord):
            raise UnsupportedUndo(record.order_id)

        raise TypeError(f"unknown ledger record: {record!r}")

    # --- queries ---

    def list_pending(self) -> list[Order]:
        return self.pending.snapshot_descending()

    def list_ready(self) -> list[Order]:
        return self.ready.snapshot()

    def route_to(self, node: int) -> Route:
        return self.layout.shortest_path(self.depot_node, node)
