"""
Line-command front end for the fulfillment engine.

One command per input line, one JSON object per output line:

    ADD_ORDER <item_id> <qty> <priority>
    PROCESS
    DISPATCH
    UNDO
    GET_STATE
    ROUTE <from_node> <to_node>
    HISTORY
    GRAPH
"""

from __future__ import annotations

import argparse
import inspect
import json
import os
import sys
from typing import Any, Optional, TextIO

# Allow running as a script: `python fulfillment/console.py`
if __package__ is None:  # pragma: no cover
    _ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if _ROOT not in sys.path:
        sys.path.insert(0, _ROOT)

from fulfillment.catalog import ProductCatalog  # noqa: E402
from fulfillment.coordinator import OrderLifecycleCoordinator  # noqa: E402
from fulfillment.errors import FulfillmentError  # noqa: E402
from fulfillment.inventory import Inventory  # noqa: E402
from fulfillment.logging_config import configure_logging  # noqa: E402
from fulfillment.seed import default_catalog, default_inventory, default_layout  # noqa: E402


def render_state(coordinator: OrderLifecycleCoordinator, inventory: Inventory, catalog: ProductCatalog) -> dict[str, Any]:
    return {
        "status": "success",
        "pending": [
            {
                "id": o.order_id,
                "text": f"Item: {o.item_name} (Prio: {o.priority})",
                "prio": o.priority,
            }
            for o in coordinator.list_pending()
        ],
        "dispatched": [
            {"id": o.order_id, "text": f"Item: {o.item_name} (Sent)"}
            for o in coordinator.list_ready()
        ],
        "inventory": [
            {"id": i.item_id, "name": i.name, "qty": i.quantity, "loc": i.location_node}
            for i in inventory.items()
        ],
        "catalog": [
            {"id": p.product_id, "name": p.name, "cat": p.category, "price": p.price}
            for p in catalog.products()
        ],
    }


def _ok(msg: str, **extra: Any) -> dict[str, Any]:
    return {"status": "success", "msg": msg, **extra}


def _error(msg: str, code: str = "bad_command") -> dict[str, Any]:
    return {"status": "error", "code": code, "msg": msg}


class CommandSession:
    """Parses command lines and applies them to one coordinator."""

    def __init__(
        self,
        coordinator: Optional[OrderLifecycleCoordinator] = None,
        inventory: Optional[Inventory] = None,
        catalog: Optional[ProductCatalog] = None,
    ):
        if inventory is None:
            inventory = coordinator.inventory if coordinator is not None else default_inventory()
        self.inventory = inventory
        self.catalog = catalog if catalog is not None else default_catalog()
        self.coordinator = coordinator or OrderLifecycleCoordinator(self.inventory, default_layout())

    def handle(self, line: str) -> dict[str, Any]:
        parts = line.split()
        if not parts:
            return _error("Empty command")
        cmd, args = parts[0].upper(), parts[1:]

        handler = getattr(self, f"_cmd_{cmd.lower()}", None)
        if handler is None:
            return _error("Unknown command")
        if len(args) != len(inspect.signature(handler).parameters):
            return _error(f"Bad arguments for {cmd}")
        try:
            int_args = [int(a) for a in args]
        except ValueError:
            return _error(f"Bad arguments for {cmd}")

        try:
            return handler(*int_args)
        except FulfillmentError as exc:
            return _error(str(exc), code=exc.code)

    def _cmd_add_order(self, item_id: int, qty: int, prio: int) -> dict[str, Any]:
        order = self.coordinator.admit_order(item_id, qty, prio)
        return _ok("Order placed", order_id=order.order_id)

    def _cmd_process(self) -> dict[str, Any]:
        ready = self.coordinator.process_next()
        return _ok(
            "Processed",
            order_id=ready.order.order_id,
            route=list(ready.route.path),
            cost=ready.route.cost,
        )

    def _cmd_dispatch(self) -> dict[str, Any]:
        order = self.coordinator.dispatch_next()
        return _ok("Dispatched", order_id=order.order_id)

    def _cmd_undo(self) -> dict[str, Any]:
        result = self.coordinator.undo_last()
        return _ok(f"Undid {result.kind.name} Order {result.order.order_id}", order_id=result.order.order_id)

    def _cmd_get_state(self) -> dict[str, Any]:
        return render_state(self.coordinator, self.inventory, self.catalog)

    def _cmd_route(self, start: int, end: int) -> dict[str, Any]:
        route = self.coordinator.layout.shortest_path(start, end)
        if not route.reachable:
            return _error(f"Node {end} is unreachable from node {start}", code="unreachable_location")
        return _ok("Route found", route=list(route.path), cost=route.cost)

    def _cmd_history(self) -> dict[str, Any]:
        return _ok("Ledger size", size=len(self.coordinator.ledger))

    def _cmd_graph(self) -> dict[str, Any]:
        return _ok(
            "Warehouse layout",
            graph=[
                {"node": node, "edges": [{"to": nbr, "dist": dist} for nbr, dist in edges]}
                for node, edges in self.coordinator.layout.describe().items()
            ],
        )

    def run(self, stdin: TextIO, stdout: TextIO) -> None:
        print(json.dumps({"status": "ready"}), file=stdout, flush=True)
        for line in stdin:
            if not line.strip():
                continue
            print(json.dumps(self.handle(line)), file=stdout, flush=True)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Warehouse fulfillment line-command session (JSON over stdio).")
    p.add_argument("--log-level", type=str, default=None, help="Overrides LOG_LEVEL")
    p.add_argument("--json-logs", action="store_true", help="Emit structured logs as JSON on stderr")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(level=args.log_level, json_logs=args.json_logs)
    CommandSession().run(sys.stdin, sys.stdout)


if __name__ == "__main__":
    main()
