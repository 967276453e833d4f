"""Single-pass generator construction by topological ordering.

Alternative to the fixed-point pass solver with a guaranteed
O(n + edges log n) bound. The constraint graph has an edge from each node
to each of its children and from each child to the next sibling in its
list. Kahn's algorithm with a min-heap on the current index places nodes,
so an array that is already normalized comes back as the identity.
"""

from __future__ import annotations

import heapq
from collections.abc import MutableSequence
from typing import Any

from dagsort.core.errors import GraphError
from dagsort.core.links import Links
from dagsort.models.report import Solution


def constraint_edges(nodes: MutableSequence[Any], links: Links) -> list[set[int]]:
    """Successor sets of the ordering constraints, indexed by node."""
    succ: list[set[int]] = [set() for _ in range(len(nodes))]
    for i, node in enumerate(nodes):
        prev = None
        for child in links.children(node):
            if child != i:
                succ[i].add(child)
            if prev is not None and prev != child:
                succ[prev].add(child)
            prev = child
    return succ


def solve_topological(nodes: MutableSequence[Any], links: Links) -> Solution:
    """Build the generator in one topological sweep.

    Raises:
        GraphError: The constraints contain a cycle (a child cycle or
            contradicting sibling orders), so no valid layout exists.
    """
    n = len(nodes)
    succ = constraint_edges(nodes, links)
    indegree = [0] * n
    for targets in succ:
        for t in targets:
            indegree[t] += 1

    ready = [i for i in range(n) if indegree[i] == 0]
    heapq.heapify(ready)
    gen = [-1] * n
    position = 0

    while ready:
        i = heapq.heappop(ready)
        gen[i] = position
        position += 1
        for t in succ[i]:
            indegree[t] -= 1
            if indegree[t] == 0:
                heapq.heappush(ready, t)

    if position < n:
        stuck = [i for i in range(n) if gen[i] < 0]
        raise GraphError(f"Ordering constraints are cyclic; cannot place nodes {stuck}")

    return Solution(generator=gen, strategy="topological", passes=1, swaps=0)
