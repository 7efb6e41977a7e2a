from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt
import networkx as nx

from fulfillment.network import DEPOT_NODE, WarehouseLayout


def plot_layout(layout: WarehouseLayout, route: Optional[Sequence[int]] = None, item_nodes: Optional[dict[int, str]] = None) -> None:
    G = layout.g
    pos = nx.spring_layout(G, seed=0, weight="distance")
    item_nodes = item_nodes or {}

    plt.figure(figsize=(8, 6))

    # Draw nodes
    nx.draw_networkx_nodes(G, pos, nodelist=[DEPOT_NODE], node_color="red", node_size=600, label="Depot")
    nx.draw_networkx_nodes(
        G,
        pos,
        nodelist=[n for n in G.nodes() if n in item_nodes],
        node_color="blue",
        node_size=500,
        label="Storage",
    )
    nx.draw_networkx_nodes(
        G,
        pos,
        nodelist=[n for n in G.nodes() if n != DEPOT_NODE and n not in item_nodes],
        node_color="lightgray",
        node_size=300,
        label="Aisle",
    )

    # Draw edges + labels
    nx.draw_networkx_edges(G, pos, alpha=0.5)
    nx.draw_networkx_edge_labels(G, pos, edge_labels=nx.get_edge_attributes(G, "distance"), font_size=8)
    labels = {n: f"{n}\n{item_nodes[n]}" if n in item_nodes else str(n) for n in G.nodes()}
    nx.draw_networkx_labels(G, pos, labels=labels, font_size=8)

    if route and len(route) > 1:
        nx.draw_networkx_edges(G, pos, edgelist=list(zip(route, route[1:])), edge_color="orange", width=3)

    plt.legend()
    plt.title("Warehouse Layout")
    plt.axis("off")
    plt.tight_layout()
    plt.show()
