from __future__ import annotations

import heapq
import math
from dataclasses import dataclass
from typing import Iterable, Iterator

import networkx as nx
import numpy as np

# All routes start at the depot.
DEPOT_NODE = 0


@dataclass(frozen=True)
class Route:
    """
    Result of a shortest-path query.

    An unreachable destination has an infinite cost and an empty path.
    """

    cost: float
    path: tuple[int, ...] = ()

    @property
    def reachable(self) -> bool:
        return bool(self.path)

    @staticmethod
    def unreachable() -> "Route":
        return Route(cost=math.inf, path=())


class WarehouseLayout:
    """
    Thin wrapper around an undirected NetworkX graph of storage locations.

    Nodes are integers; edges carry a non-negative 'distance' attribute.
    """

    def __init__(self, graph: nx.Graph | None = None):
        self.g = graph if graph is not None else nx.Graph()

    @staticmethod
    def from_edges(edges: Iterable[tuple[int, int, float]]) -> "WarehouseLayout":
        layout = WarehouseLayout()
        for u, v, dist in edges:
            layout.add_edge(u, v, dist)
        return layout

    @staticmethod
    def random_connected(
        *,
        seed: int,
        n_nodes: int,
        extra_edge_prob: float = 0.2,
        min_dist: int = 1,
        max_dist: int = 10,
    ) -> "WarehouseLayout":
        """
        Builds a seeded connected layout over nodes 0..n_nodes-1:
        - Start with a random spanning tree for connectivity
        - Add extra random edges
        """
        rng = np.random.default_rng(seed)
        layout = WarehouseLayout()
        layout.g.add_nodes_from(range(n_nodes))

        order = list(range(n_nodes))
        rng.shuffle(order)
        for i in range(1, n_nodes):
            u = int(order[i])
            v = int(order[rng.integers(0, i)])
            layout.add_edge(u, v, int(rng.integers(min_dist, max_dist + 1)))

        for u in range(n_nodes):
            for v in range(u + 1, n_nodes):
                if layout.g.has_edge(u, v):
                    continue
                if float(rng.random()) < extra_edge_prob:
                    layout.add_edge(u, v, int(rng.integers(min_dist, max_dist + 1)))
        return layout

    def add_edge(self, u: int, v: int, distance: float) -> None:
        """Connects two locations in both directions. A repeated edge keeps the shorter distance."""
        if distance < 0:
            raise ValueError(f"distance must be >= 0 (edge {u}-{v} got {distance})")
        if self.g.has_edge(u, v):
            distance = min(distance, self.g.edges[u, v]["distance"])
        self.g.add_edge(u, v, distance=distance)

    def nodes(self) -> list[int]:
        return sorted(self.g.nodes())

    def neighbors(self, node: int) -> Iterator[tuple[int, float]]:
        # Unknown nodes simply have no outgoing edges.
        if node not in self.g:
            return iter(())
        return ((nbr, data["distance"]) for nbr, data in self.g.adj[node].items())

    def edge_distance(self, u: int, v: int) -> float:
        return self.g.edges[u, v]["distance"]

    def total_path_distance(self, path: Iterable[int]) -> float:
        it = iter(path)
        try:
            prev = next(it)
        except StopIteration:
            return 0
        total = 0
        for cur in it:
            total += self.edge_distance(prev, cur)
            prev = cur
        return total

    def shortest_path(self, start: int, end: int) -> Route:
        """
        Dijkstra's algorithm from start to end.

        Precondition: all edge distances are non-negative (enforced by add_edge).
        Stops as soon as the destination is settled; stale frontier entries are skipped.
        """
        dist: dict[int, float] = {n: math.inf for n in self.g.nodes()}
        dist[start] = 0
        dist.setdefault(end, math.inf)
        parent: dict[int, int] = {}

        frontier: list[tuple[float, int]] = [(0, start)]
        while frontier:
            d, u = heapq.heappop(frontier)
            if d > dist[u]:
                continue
            if u == end:
                break
            for v, weight in self.neighbors(u):
                candidate = d + weight
                if candidate < dist.get(v, math.inf):
                    dist[v] = candidate
                    parent[v] = u
                    heapq.heappush(frontier, (candidate, v))

        if dist[end] == math.inf:
            return Route.unreachable()

        path = [end]
        while path[-1] != start:
            path.append(parent[path[-1]])
        path.reverse()
        return Route(cost=dist[end], path=tuple(path))

    def describe(self) -> dict[int, list[tuple[int, float]]]:
        """Adjacency view for display: node -> [(neighbor, distance), ...]."""
        return {n: sorted(self.neighbors(n)) for n in self.nodes()}
