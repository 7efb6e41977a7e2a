from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Product:
    product_id: int
    name: str
    category: str
    price: float


@dataclass
class _Node:
    product: Product
    left: int = -1  # arena index, -1 = none
    right: int = -1


class ProductCatalog:
    """
    Products kept in a binary search tree keyed by product id.

    Nodes live in a flat arena and refer to their children by index.
    """

    def __init__(self) -> None:
        self._arena: list[_Node] = []
        self._root = -1

    def __len__(self) -> int:
        return len(self._arena)

    def add_product(self, product_id: int, name: str, category: str, price: float) -> bool:
        """Inserts a product. Returns False (and keeps the existing one) if the id is taken."""
        product = Product(product_id, name, category, float(price))
        if self._root < 0:
            self._root = self._new_node(product)
            return True

        idx = self._root
        while True:
            node = self._arena[idx]
            if product_id == node.product.product_id:
                return False
            if product_id < node.product.product_id:
                if node.left < 0:
                    node.left = self._new_node(product)
                    return True
                idx = node.left
            else:
                if node.right < 0:
                    node.right = self._new_node(product)
                    return True
                idx = node.right

    def find_product(self, product_id: int) -> Optional[Product]:
        idx = self._root
        while idx >= 0:
            node = self._arena[idx]
            if product_id == node.product.product_id:
                return node.product
            idx = node.left if product_id < node.product.product_id else node.right
        return None

    def products(self) -> list[Product]:
        """In-order traversal (ascending product id)."""
        out: list[Product] = []
        stack: list[int] = []
        idx = self._root
        while stack or idx >= 0:
            while idx >= 0:
                stack.append(idx)
                idx = self._arena[idx].left
            idx = stack.pop()
            out.append(self._arena[idx].product)
            idx = self._arena[idx].right
        return out

    def _new_node(self, product: Product) -> int:
        self._arena.append(_Node(product))
        return len(self._arena) - 1
