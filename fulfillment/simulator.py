from __future__ import annotations

import argparse
import csv
import os
import sys
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

import numpy as np
import simpy

# Allow running as a script: `python fulfillment/simulator.py`
if __package__ is None:  # pragma: no cover
    _ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if _ROOT not in sys.path:
        sys.path.insert(0, _ROOT)

from fulfillment.coordinator import OrderLifecycleCoordinator  # noqa: E402
from fulfillment.errors import (  # noqa: E402
    EmptyQueue,
    FulfillmentError,
    InvalidItemOrStock,
    UnreachableLocation,
)
from fulfillment.ledger import ActionKind  # noqa: E402
from fulfillment.logging_config import configure_logging, get_logger  # noqa: E402
from fulfillment.order import OrderState  # noqa: E402
from fulfillment.order_generator import OrderGenerator, OrderRequest  # noqa: E402
from fulfillment.seed import default_inventory, default_layout  # noqa: E402

logger = get_logger(__name__)

WITHDRAWN = "withdrawn"  # admission undone


@dataclass
class SimConfig:
    seed: int = 7
    sim_horizon: float = 200.0

    # Demand
    interarrival_mean: float = 4.0
    qty_min: int = 1
    qty_max: int = 6
    priority_min: int = 1
    priority_max: int = 10

    # Floor operations (time units between attempts)
    process_interval: float = 5.0
    dispatch_interval: float = 7.0
    operator_interval: float = 10.0
    undo_prob: float = 0.1

    # Logging
    log_dir: str = "data/logs"


@dataclass
class OrderLogRow:
    order_id: int
    item_id: int
    item_name: str
    quantity: int
    priority: int
    admitted_time: float
    ready_time: Optional[float]
    shipped_time: Optional[float]
    route: Optional[str]
    route_cost: Optional[float]
    state: str
    undo_count: int = 0


class FulfillmentSimulator:
    """
    Drives one coordinator with SimPy processes:
    - Generates order requests
    - A picker processes the top pending order periodically
    - A dispatcher ships the oldest ready order periodically
    - An operator occasionally undoes the last action
    Logs one row per admitted order.
    """

    def __init__(self, cfg: SimConfig):
        self.cfg = cfg
        self.env = simpy.Environment()
        self.inventory = default_inventory()
        self.layout = default_layout()
        self.coordinator = OrderLifecycleCoordinator(self.inventory, self.layout)
        self.rng = np.random.default_rng(cfg.seed + 2)

        self.order_gen = OrderGenerator(
            env=self.env,
            item_ids=[i.item_id for i in self.inventory.items()],
            interarrival_mean=cfg.interarrival_mean,
            qty_min=cfg.qty_min,
            qty_max=cfg.qty_max,
            priority_min=cfg.priority_min,
            priority_max=cfg.priority_max,
            seed=cfg.seed + 1,
        )

        self.order_logs: dict[int, OrderLogRow] = {}

        # Summary counters
        self.n_requests = 0
        self.n_refused = 0
        self.n_unreachable = 0
        self.n_undone = 0
        self.n_undo_errors = 0

    def on_request(self, req: OrderRequest) -> None:
        self.n_requests += 1
        try:
            order = self.coordinator.admit_order(req.item_id, req.quantity, req.priority)
        except InvalidItemOrStock:
            self.n_refused += 1
            return
        self.order_logs[order.order_id] = OrderLogRow(
            order_id=order.order_id,
            item_id=order.item_id,
            item_name=order.item_name,
            quantity=order.quantity,
            priority=order.priority,
            admitted_time=float(self.env.now),
            ready_time=None,
            shipped_time=None,
            route=None,
            route_cost=None,
            state=OrderState.PENDING.value,
        )

    def _picker(self):
        while True:
            yield self.env.timeout(self.cfg.process_interval)
            try:
                ready = self.coordinator.process_next()
            except EmptyQueue:
                continue
            except UnreachableLocation:
                self.n_unreachable += 1
                continue
            row = self.order_logs[ready.order.order_id]
            row.ready_time = float(self.env.now)
            row.route = "->".join(str(n) for n in ready.route.path)
            row.route_cost = float(ready.route.cost)
            row.state = OrderState.READY.value

    def _dispatcher(self):
        while True:
            yield self.env.timeout(self.cfg.dispatch_interval)
            try:
                order = self.coordinator.dispatch_next()
            except EmptyQueue:
                continue
            row = self.order_logs[order.order_id]
            row.shipped_time = float(self.env.now)
            row.state = OrderState.SHIPPED.value

    def _operator(self):
        while True:
            yield self.env.timeout(self.cfg.operator_interval)
            if float(self.rng.random()) >= self.cfg.undo_prob:
                continue
            try:
                result = self.coordinator.undo_last()
            except FulfillmentError as exc:
                self.n_undo_errors += 1
                logger.warning("Undo refused", reason=exc.code)
                continue
            self.n_undone += 1
            row = self.order_logs[result.order.order_id]
            row.undo_count += 1
            if result.kind is ActionKind.ADD:
                row.state = WITHDRAWN
            else:
                row.ready_time = None
                row.route = None
                row.route_cost = None
                row.state = OrderState.PENDING.value

    def run(self) -> None:
        self.order_gen.run(self.on_request)
        self.env.process(self._picker())
        self.env.process(self._dispatcher())
        self.env.process(self._operator())
        self.env.run(until=float(self.cfg.sim_horizon))

    def write_logs(self) -> str:
        os.makedirs(self.cfg.log_dir, exist_ok=True)
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        out_path = os.path.join(self.cfg.log_dir, f"fulfillment_orders_{ts}.csv")

        fieldnames = list(OrderLogRow.__annotations__.keys())
        with open(out_path, "w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=fieldnames)
            w.writeheader()
            for order_id in sorted(self.order_logs):
                w.writerow(asdict(self.order_logs[order_id]))
        return out_path

    def print_summary(self) -> None:
        rows = list(self.order_logs.values())
        shipped = [r for r in rows if r.state == OrderState.SHIPPED.value]
        avg_lead = (
            sum(r.shipped_time - r.admitted_time for r in shipped) / len(shipped)
            if shipped
            else 0.0
        )
        print("=== Fulfillment Simulator Summary ===")
        print(f"sim_horizon={self.cfg.sim_horizon}")
        print(f"requests={self.n_requests} admitted={len(rows)} refused={self.n_refused}")
        print(
            f"pending={len(self.coordinator.list_pending())} ready={len(self.coordinator.list_ready())} "
            f"shipped={len(shipped)}"
        )
        print(f"undone={self.n_undone} undo_errors={self.n_undo_errors} unreachable={self.n_unreachable}")
        print(f"avg_lead_time={avg_lead:.2f}")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="SimPy warehouse fulfillment simulator.")
    p.add_argument("--seed", type=int, default=7)
    p.add_argument("--horizon", type=float, default=200.0)
    p.add_argument("--undo-prob", type=float, default=0.1)
    p.add_argument("--log-dir", type=str, default="data/logs")
    p.add_argument("--log-level", type=str, default=None)
    return p.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(level=args.log_level)
    cfg = SimConfig(seed=args.seed, sim_horizon=args.horizon, undo_prob=args.undo_prob, log_dir=args.log_dir)
    sim = FulfillmentSimulator(cfg)
    sim.run()
    sim.print_summary()
    out_path = sim.write_logs()
    print(f"wrote_logs={out_path}")


if __name__ == "__main__":
    main()
