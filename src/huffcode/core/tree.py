from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from huffcode.errors import InvariantViolation


# -------------------
# Nodi dell'albero Huffman
# -------------------
@dataclass(frozen=True)
class Leaf:
    symbol: str
    freq: int


@dataclass(frozen=True)
class Internal:
    freq: int
    left: "TreeNode"
    right: "TreeNode"


TreeNode = Union[Leaf, Internal]


def iter_leaves(node: TreeNode | None) -> Iterator[Leaf]:
    """Leaves left to right."""
    if node is None:
        return
    if isinstance(node, Leaf):
        yield node
        return
    yield from iter_leaves(node.left)
    yield from iter_leaves(node.right)


def count_nodes(node: TreeNode | None) -> tuple[int, int]:
    """Return (leaves, internal nodes)."""
    if node is None:
        return 0, 0
    if isinstance(node, Leaf):
        return 1, 0
    ll, li = count_nodes(node.left)
    rl, ri = count_nodes(node.right)
    return ll + rl, li + ri + 1


def leaf_frequencies(node: TreeNode | None) -> dict[str, int]:
    return {leaf.symbol: leaf.freq for leaf in iter_leaves(node)}


def walk_code(root: TreeNode, code: str) -> Leaf:
    """
    Follow `code` from the root ('0' = left, '1' = right) and return the leaf
    it ends on.

    A single-leaf tree accepts the conventional code "0".
    """
    if isinstance(root, Leaf):
        if code != "0":
            raise InvariantViolation(f"albero a foglia singola: codice atteso '0', trovato {code!r}")
        return root

    node: TreeNode = root
    for i, bit in enumerate(code):
        if isinstance(node, Leaf):
            raise InvariantViolation(f"codice {code!r}: foglia raggiunta dopo {i} bit")
        if bit == "0":
            node = node.left
        elif bit == "1":
            node = node.right
        else:
            raise InvariantViolation(f"codice {code!r}: bit non valido {bit!r}")
    if not isinstance(node, Leaf):
        raise InvariantViolation(f"codice {code!r}: termina su un nodo interno")
    return node


def check_tree(node: TreeNode) -> None:
    """Raise InvariantViolation if an internal node's freq is not the sum of its children."""
    if isinstance(node, Leaf):
        if node.freq <= 0:
            raise InvariantViolation(f"foglia {node.symbol!r} con frequenza {node.freq}")
        return
    if node.freq != node.left.freq + node.right.freq:
        raise InvariantViolation(
            f"nodo interno freq={node.freq} != {node.left.freq} + {node.right.freq}"
        )
    check_tree(node.left)
    check_tree(node.right)
