"""Tests for the order lifecycle: admit, process, dispatch and undo."""

import pytest

from fulfillment.errors import (
    DispatchQueueEmpty,
    EmptyQueue,
    InvalidItemOrStock,
    NothingToUndo,
    OrderNotPending,
    UnreachableLocation,
    UnsupportedUndo,
)
from fulfillment.ledger import ActionKind, AdmitRecord, DispatchRecord, ProcessRecord


def stock(inventory, item_id):
    return inventory.item_info(item_id).quantity


class TestAdmit:
    def test_admit_reserves_stock_and_queues_order(self, coordinator, inventory):
        order = coordinator.admit_order(101, 10, 5)
        assert stock(inventory, 101) == 40
        assert coordinator.list_pending() == [order]
        assert order.item_name == "Laptop"
        assert order.location_node == 7
        assert len(coordinator.ledger) == 1

    def test_ids_are_monotonic(self, coordinator):
        first = coordinator.admit_order(101, 1, 1)
        coordinator.undo_last()
        second = coordinator.admit_order(102, 1, 1)
        assert second.order_id > first.order_id

    def test_item_name_is_copied_at_admission(self, coordinator, inventory):
        order = coordinator.admit_order(101, 1, 1)
        inventory.item_info(101).name = "Renamed"
        assert coordinator.list_pending()[0].item_name == "Laptop"
        assert order.item_name == "Laptop"

    @pytest.mark.parametrize(
        "item_id, qty",
        [(999, 1), (101, 51), (101, 0), (101, -3)],
    )
    def test_refused_admission_changes_nothing(self, coordinator, inventory, item_id, qty):
        with pytest.raises(InvalidItemOrStock) as exc_info:
            coordinator.admit_order(item_id, qty, 5)
        assert exc_info.value.item_id == item_id
        assert stock(inventory, 101) == 50
        assert coordinator.list_pending() == []
        assert not coordinator.ledger.has_pending()

    def test_failed_queue_insert_leaves_stock_untouched(self, coordinator, inventory, make_order):
        coordinator.pending.admit(make_order(1, 5))
        with pytest.raises(ValueError):
            coordinator.admit_order(101, 10, 5)
        assert stock(inventory, 101) == 50
        assert not coordinator.ledger.has_pending()

    def test_exact_stock_is_allowed(self, coordinator, inventory):
        coordinator.admit_order(104, 30, 1)
        assert stock(inventory, 104) == 0
        with pytest.raises(InvalidItemOrStock):
            coordinator.admit_order(104, 1, 1)


class TestProcess:
    def test_highest_priority_processed_first(self, coordinator):
        low = coordinator.admit_order(102, 1, 3)
        high = coordinator.admit_order(103, 1, 9)
        ready = coordinator.process_next()
        assert ready.order == high
        assert coordinator.list_pending() == [low]
        assert coordinator.list_ready() == [high]

    def test_route_resolved_from_depot(self, coordinator):
        coordinator.admit_order(101, 1, 1)
        ready = coordinator.process_next()
        assert ready.route.cost == 11
        assert ready.route.path == (0, 1, 3, 7)

    def test_success_writes_process_record(self, coordinator):
        order = coordinator.admit_order(101, 1, 1)
        coordinator.process_next()
        assert len(coordinator.ledger) == 2
        assert coordinator.ledger.pop_last() == ProcessRecord(order.order_id)

    def test_empty_pending_queue(self, coordinator):
        with pytest.raises(EmptyQueue):
            coordinator.process_next()
        assert not coordinator.ledger.has_pending()

    def test_unreachable_location_readmits_order(self, coordinator, inventory):
        inventory.add_item(200, "Crate", 5, 50)
        order = coordinator.admit_order(200, 2, 4)
        with pytest.raises(UnreachableLocation) as exc_info:
            coordinator.process_next()
        assert exc_info.value.order_id == order.order_id
        assert coordinator.list_pending() == [order]
        assert coordinator.list_ready() == []
        assert len(coordinator.ledger) == 1
        assert stock(inventory, 200) == 3


class TestDispatch:
    def test_dispatch_is_fifo(self, coordinator):
        a = coordinator.admit_order(101, 1, 9)
        b = coordinator.admit_order(102, 1, 3)
        coordinator.process_next()
        coordinator.process_next()
        assert coordinator.dispatch_next() == a
        assert coordinator.list_ready() == [b]

    def test_dispatch_is_not_recorded(self, coordinator):
        coordinator.admit_order(101, 1, 9)
        coordinator.process_next()
        coordinator.dispatch_next()
        assert len(coordinator.ledger) == 2

    def test_empty_dispatch_queue_leaves_state_untouched(self, coordinator, inventory):
        order = coordinator.admit_order(101, 5, 2)
        with pytest.raises(EmptyQueue):
            coordinator.dispatch_next()
        assert coordinator.list_pending() == [order]
        assert coordinator.list_ready() == []
        assert stock(inventory, 101) == 45
        assert len(coordinator.ledger) == 1


class TestUndo:
    def test_undo_admission_restores_stock(self, coordinator, inventory):
        order = coordinator.admit_order(101, 10, 5)
        result = coordinator.undo_last()
        assert result.kind is ActionKind.ADD
        assert result.order == order
        assert stock(inventory, 101) == 50
        assert coordinator.list_pending() == []
        assert coordinator.list_ready() == []

    def test_undo_process_returns_exact_order(self, coordinator, inventory):
        order = coordinator.admit_order(103, 4, 6)
        coordinator.process_next()
        result = coordinator.undo_last()
        assert result.kind is ActionKind.PROCESS
        assert coordinator.list_pending() == [order]
        assert coordinator.list_ready() == []
        assert stock(inventory, 103) == 76
        assert coordinator.ledger.pop_last() == AdmitRecord(order.order_id, 103, 4, 6)

    def test_undo_process_takes_most_recent_ready_order(self, coordinator):
        a = coordinator.admit_order(101, 1, 9)
        b = coordinator.admit_order(102, 1, 3)
        coordinator.process_next()
        coordinator.process_next()
        assert coordinator.undo_last().order == b
        assert coordinator.list_ready() == [a]
        assert coordinator.list_pending() == [b]

    def test_full_unwind(self, coordinator, inventory):
        coordinator.admit_order(101, 2, 1)
        coordinator.admit_order(105, 3, 8)
        coordinator.process_next()
        while coordinator.ledger.has_pending():
            coordinator.undo_last()
        assert stock(inventory, 101) == 50
        assert stock(inventory, 105) == 60
        assert coordinator.list_pending() == []
        assert coordinator.list_ready() == []

    def test_nothing_to_undo(self, coordinator):
        with pytest.raises(NothingToUndo):
            coordinator.undo_last()

    def test_undo_process_after_ship_reports_empty_dispatch_queue(self, coordinator):
        order = coordinator.admit_order(101, 1, 1)
        coordinator.process_next()
        coordinator.dispatch_next()
        with pytest.raises(DispatchQueueEmpty) as exc_info:
            coordinator.undo_last()
        assert exc_info.value.order_id == order.order_id
        # The ADD record is still next; the order is gone, so it is a desync.
        with pytest.raises(OrderNotPending):
            coordinator.undo_last()

    def test_undo_admission_of_processed_order(self, coordinator, inventory):
        order = coordinator.admit_order(101, 1, 1)
        coordinator.process_next()
        coordinator.ledger.pop_last()
        with pytest.raises(OrderNotPending) as exc_info:
            coordinator.undo_last()
        assert exc_info.value.order_id == order.order_id
        assert stock(inventory, 101) == 49
        assert coordinator.list_ready() == [order]

    def test_dispatch_record_cannot_be_undone(self, coordinator):
        coordinator.ledger.record(DispatchRecord(order_id=1))
        with pytest.raises(UnsupportedUndo):
            coordinator.undo_last()


class TestQueries:
    def test_listing_is_idempotent(self, coordinator):
        for item_id, prio in [(101, 2), (102, 7), (103, 7), (104, 1)]:
            coordinator.admit_order(item_id, 1, prio)
        coordinator.process_next()
        pending = coordinator.list_pending()
        ready = coordinator.list_ready()
        assert coordinator.list_pending() == pending
        assert coordinator.list_ready() == ready
        assert [o.priority for o in pending] == [7, 2, 1]

    def test_route_to(self, coordinator):
        assert coordinator.route_to(8).cost == 13
