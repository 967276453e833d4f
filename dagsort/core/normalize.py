"""In-place DAG normalization.

After ``sort`` returns, every child is stored at a higher index than its
parent and every child list is strictly ascending. The array is permuted,
never copied: a generator permutation is solved first, links are rewritten
through it, and only then are nodes swapped into their final slots.
"""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any

from dagsort.checks.invariants import check_graph
from dagsort.core.errors import GraphError, SolverError
from dagsort.core.links import AttrLinks, Links
from dagsort.core.topological import solve_topological
from dagsort.models.report import NormalizeReport, Solution

DEFAULT_STRATEGY = "passes"


def solve(nodes: MutableSequence[Any], links: Links, max_passes: int | None = None) -> Solution:
    """Find a generator permutation by swapping generator values to a fixed point.

    Node data is only read. Each swap fixes a strict violation of
    parent-before-child or sibling order, so the loop ends on acyclic input;
    ``max_passes`` caps the total pass count, the final clean pass included;
    a dirty pass that reaches it raises ``SolverError``.
    """
    gen = list(range(len(nodes)))
    passes = 0
    swaps = 0

    while True:
        passes += 1
        changed = False
        for i, node in enumerate(nodes):
            children = links.children(node)
            for j, a in enumerate(children):
                # Child after its parent
                if gen[i] > gen[a]:
                    gen[i], gen[a] = gen[a], gen[i]
                    swaps += 1
                    changed = True
                # Siblings in list order
                for b in children[j + 1 :]:
                    if gen[a] > gen[b]:
                        gen[a], gen[b] = gen[b], gen[a]
                        swaps += 1
                        changed = True
        if not changed:
            break
        if max_passes is not None and passes >= max_passes:
            raise SolverError(passes)

    return Solution(generator=gen, strategy="passes", passes=passes, swaps=swaps)


def remap(nodes: MutableSequence[Any], links: Links, generator: list[int]) -> None:
    """Rewrite every parent and child index from old to new positions.

    Must run before ``retrace``: the generator maps old indices, and the
    nodes have not moved yet.
    """
    for node in nodes:
        parent = links.get_parent(node)
        if parent is not None:
            links.set_parent(node, generator[parent])
        children = links.children(node)
        for k, child in enumerate(children):
            children[k] = generator[child]


def retrace(nodes: MutableSequence[Any], generator: list[int]) -> int:
    """Swap nodes into place, restoring ``generator`` to the identity.

    Walks each cycle of the permutation once, so a cycle of length k costs
    k - 1 swaps. Once ``generator[i] == i`` no other slot can map to ``i``,
    so one forward scan is enough. ``generator`` must be a permutation or
    this does not terminate.
    """
    swaps = 0
    for i in range(len(nodes)):
        while generator[i] != i:
            j = generator[i]
            nodes[i], nodes[j] = nodes[j], nodes[i]
            generator[i], generator[j] = generator[j], generator[i]
            swaps += 1
    return swaps


def _solve_topological(nodes: MutableSequence[Any], links: Links, max_passes: int | None = None) -> Solution:
    return solve_topological(nodes, links)


STRATEGIES = {
    "passes": solve,
    "topological": _solve_topological,
}


def sort(
    nodes: MutableSequence[Any],
    links: Links,
    *,
    strategy: str = DEFAULT_STRATEGY,
    max_passes: int | None = None,
    check: bool = False,
) -> NormalizeReport:
    """Normalize ``nodes`` in place using ``links`` to reach each node's edges.

    Args:
        nodes: The arena. Must support item assignment; only positions change.
        links: Accessor for the parent slot and child list of a node.
        strategy: ``"passes"`` (fixed-point swapping) or ``"topological"``.
        max_passes: Total pass budget for the ``"passes"`` solver, counting the
            final clean pass (``None`` = no limit).
        check: Validate indices and acyclicity first; raise ``GraphError``
            before anything is modified.

    Returns:
        NormalizeReport describing the work done.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy '{strategy}'. Must be one of: {list(STRATEGIES)}")

    if check:
        result = check_graph(nodes, links)
        if not result.passed:
            raise GraphError(f"{result.summary()}: {result.errors[0].message}", result.errors)

    solution = STRATEGIES[strategy](nodes, links, max_passes=max_passes)
    moved = solution.moved

    remap(nodes, links, solution.generator)
    node_swaps = retrace(nodes, solution.generator)

    return NormalizeReport(
        node_count=len(nodes),
        strategy=solution.strategy,
        passes=solution.passes,
        generator_swaps=solution.swaps,
        moved=moved,
        node_swaps=node_swaps,
    )


def fix(nodes: MutableSequence[Any], **options) -> NormalizeReport:
    """Normalize nodes with conventional ``parent``/``children`` attributes."""
    return sort(nodes, AttrLinks(), **options)
