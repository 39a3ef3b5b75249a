from __future__ import annotations

import heapq
import itertools
from collections.abc import Mapping
from typing import Literal

from huffcode.core.tree import Internal, Leaf, TreeNode

Strategy = Literal["sort", "heap"]
STRATEGIES: tuple[str, ...] = ("sort", "heap")

CodeTable = dict[str, str]


def _build_tree_sort(freq: Mapping[str, int]) -> TreeNode | None:
    """
    Reference pool: before every extraction the whole pool is sorted
    ascending by freq (stable) and the two frontmost nodes are merged.
    The parent goes to the end of the pool.
    """
    pool: list[TreeNode] = [Leaf(symbol=sym, freq=f) for sym, f in freq.items()]
    if not pool:
        return None

    while len(pool) > 1:
        pool.sort(key=lambda n: n.freq)
        left = pool.pop(0)
        right = pool.pop(0)
        pool.append(Internal(freq=left.freq + right.freq, left=left, right=right))

    return pool[0]


def _build_tree_heap(freq: Mapping[str, int]) -> TreeNode | None:
    """
    Same tree as _build_tree_sort in O(n log n).

    Among equal freqs the stable sort keeps insertion order, and parents are
    always appended last: a (freq, sequence number) key gives the same order.
    """
    heap: list[tuple[int, int, TreeNode]] = []
    counter = itertools.count()

    for sym, f in freq.items():
        heap.append((f, next(counter), Leaf(symbol=sym, freq=f)))
    if not heap:
        return None
    heapq.heapify(heap)

    while len(heap) > 1:
        f1, _, n1 = heapq.heappop(heap)
        f2, _, n2 = heapq.heappop(heap)
        parent = Internal(freq=f1 + f2, left=n1, right=n2)
        heapq.heappush(heap, (parent.freq, next(counter), parent))

    return heap[0][2]


def build_tree(freq: Mapping[str, int], strategy: Strategy = "sort") -> TreeNode | None:
    if strategy == "sort":
        return _build_tree_sort(freq)
    if strategy == "heap":
        return _build_tree_heap(freq)
    raise ValueError(f"strategy non supportata: {strategy!r} (attese: {', '.join(STRATEGIES)})")


def build_code_table(root: TreeNode | None) -> CodeTable:
    codes: CodeTable = {}
    if root is None:
        return codes

    # Caso speciale: un solo simbolo => codice "0", mai vuoto
    if isinstance(root, Leaf):
        codes[root.symbol] = "0"
        return codes

    def dfs(node: TreeNode, path: str) -> None:
        if isinstance(node, Leaf):
            codes[node.symbol] = path
            return
        dfs(node.left, path + "0")
        dfs(node.right, path + "1")

    dfs(root, "")
    return codes


def build(
    freq: Mapping[str, int], strategy: Strategy = "sort"
) -> tuple[TreeNode | None, CodeTable]:
    """freq -> (root, codes). Empty freq gives (None, {})."""
    root = build_tree(freq, strategy)
    return root, build_code_table(root)
