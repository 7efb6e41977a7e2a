#!/usr/bin/env python3
"""
Quick demo: resolve the route from the depot to an item and draw it on the layout.
"""

import argparse
import os
import sys

# Add project root to path
if __package__ is None:
    _ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if _ROOT not in sys.path:
        sys.path.insert(0, _ROOT)

from fulfillment.network import DEPOT_NODE  # noqa: E402
from fulfillment.seed import default_inventory, default_layout  # noqa: E402
from experiments.visualize import plot_layout  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Draw the depot-to-item route on the default layout")
    parser.add_argument("--item", type=int, default=101, help="Item id (101-105)")
    parser.add_argument("--no-plot", action="store_true", help="Print the route only")
    args = parser.parse_args()

    layout = default_layout()
    inventory = default_inventory()
    item = inventory.item_info(args.item)
    if item is None:
        print(f"Unknown item {args.item}")
        sys.exit(1)

    route = layout.shortest_path(DEPOT_NODE, item.location_node)
    print(f"Layout: {len(layout.nodes())} nodes, {layout.g.number_of_edges()} edges")
    print(f"{item.name} @ node {item.location_node}: cost={route.cost} path={route.path}")

    if not args.no_plot:
        plot_layout(layout, route=route.path, item_nodes={i.location_node: i.name for i in inventory.items()})


if __name__ == "__main__":
    main()
