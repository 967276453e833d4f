"""Shared fixtures: random index-linked DAGs in shuffled storage order."""

import random

import pytest

from dagsort.models.node import Node


def make_random_graph(
    rng: random.Random, n: int, max_fanout: int = 4, root_chance: float = 0.1, extra_parent_chance: float = 0.2
) -> list[Node]:
    """Build a valid DAG of ``n`` nodes, then scramble its storage order.

    Nodes are first laid out in a normalized order (every child after its
    parents, child lists ascending), so the sibling orders never conflict.
    A random permutation of the array then breaks both invariants.
    Each node's ``data`` is its position in that hidden normalized order.
    """
    nodes = [Node(data=k) for k in range(n)]
    for child in range(1, n):
        if rng.random() < root_chance:
            continue
        open_parents = [p for p in range(child) if len(nodes[p].children) < max_fanout]
        if not open_parents:
            continue
        parent = rng.choice(open_parents)
        nodes[parent].children.append(child)
        nodes[child].parent = parent

        # Occasionally share the child with a second parent
        if rng.random() < extra_parent_chance:
            other = rng.choice(open_parents)
            if other != parent and len(nodes[other].children) < max_fanout:
                nodes[other].children.append(child)

    perm = list(range(n))
    rng.shuffle(perm)
    shuffled: list[Node] = [None] * n  # type: ignore[list-item]
    for k, node in enumerate(nodes):
        node.parent = None if node.parent is None else perm[node.parent]
        node.children = [perm[c] for c in node.children]
        shuffled[perm[k]] = node
    return shuffled


@pytest.fixture
def random_graph():
    return make_random_graph
