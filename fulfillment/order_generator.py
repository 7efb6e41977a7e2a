from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np
import simpy


@dataclass(frozen=True)
class OrderRequest:
    request_id: int
    created_time: float
    item_id: int
    quantity: int
    priority: int


class OrderGenerator:
    """
    SimPy process that generates stochastic order requests against a fixed item list.
    """

    def __init__(
        self,
        *,
        env: simpy.Environment,
        item_ids: list[int],
        interarrival_mean: float,
        qty_min: int,
        qty_max: int,
        priority_min: int,
        priority_max: int,
        seed: int,
    ):
        if not item_ids:
            raise ValueError("item_ids must not be empty")
        self.env = env
        self.item_ids = item_ids
        self.interarrival_mean = float(interarrival_mean)
        self.qty_min = int(qty_min)
        self.qty_max = int(qty_max)
        self.priority_min = int(priority_min)
        self.priority_max = int(priority_max)
        self.rng = np.random.default_rng(seed)
        self._next_id = 0

    def sample_interarrival(self) -> float:
        # Exponential interarrival (Poisson process)
        return float(self.rng.exponential(self.interarrival_mean))

    def sample_quantity(self) -> int:
        return int(self.rng.integers(self.qty_min, self.qty_max + 1))

    def sample_priority(self) -> int:
        return int(self.rng.integers(self.priority_min, self.priority_max + 1))

    def sample_item(self) -> int:
        return self.item_ids[int(self.rng.integers(0, len(self.item_ids)))]

    def run(self, on_request: Callable[[OrderRequest], None]) -> simpy.events.Event:
        def _proc() -> simpy.events.Event:
            while True:
                yield self.env.timeout(self.sample_interarrival())
                req = OrderRequest(
                    request_id=self._next_id,
                    created_time=float(self.env.now),
                    item_id=self.sample_item(),
                    quantity=self.sample_quantity(),
                    priority=self.sample_priority(),
                )
                self._next_id += 1
                on_request(req)

        return self.env.process(_proc())
