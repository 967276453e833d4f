"""Graph invariant checks.

``check_graph`` covers what ``sort`` assumes about its input;
``check_normalized`` covers what it promises about its output. Neither
moves nodes or rewrites indices.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dagsort.core.links import Links
from dagsort.core.topological import constraint_edges


class Severity(Enum):
    ERROR = "error"  # Normalization would misbehave
    WARNING = "warning"  # Suspicious but normalizable
    INFO = "info"


@dataclass
class GraphIssue:
    """A single problem found in a graph."""

    severity: Severity
    code: str  # Machine-readable issue code
    message: str
    index: int | None = None  # Offending node, when there is one


@dataclass
class CheckResult:
    """Outcome of a graph check."""

    issues: list[GraphIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not any(i.severity == Severity.ERROR for i in self.issues)

    @property
    def errors(self) -> list[GraphIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[GraphIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    def summary(self) -> str:
        e = len(self.errors)
        w = len(self.warnings)
        status = "PASS" if self.passed else "FAIL"
        return f"[{status}] {e} error(s), {w} warning(s)"

    def add(self, severity: Severity, code: str, message: str, index: int | None = None):
        self.issues.append(GraphIssue(severity=severity, code=code, message=message, index=index))


def check_graph(nodes: Sequence[Any], links: Links) -> CheckResult:
    """Check the preconditions of normalization.

    Cycle and order-conflict checks only run once every index is in range.
    """
    result = CheckResult()

    _check_indices(nodes, links, result)
    if not result.passed:
        return result

    _check_duplicates(nodes, links, result)
    _check_parent_links(nodes, links, result)
    _check_cycles(nodes, links, result)

    return result


def check_normalized(nodes: Sequence[Any], links: Links) -> CheckResult:
    """Check that parents precede children and children are ascending."""
    result = CheckResult()

    for i, node in enumerate(nodes):
        parent = links.get_parent(node)
        if parent is not None and parent >= i:
            result.add(
                Severity.ERROR,
                "CHILD_BEFORE_PARENT",
                f"Node {i} is stored at or before its parent {parent}",
                index=i,
            )

        children = list(links.children(node))
        early = [c for c in children if c <= i]
        if early:
            result.add(
                Severity.ERROR,
                "CHILD_BEFORE_PARENT",
                f"Node {i} has children stored at or before it: {early}",
                index=i,
            )
        if any(a >= b for a, b in zip(children, children[1:])):
            result.add(
                Severity.ERROR,
                "SIBLING_ORDER",
                f"Children of node {i} are not strictly ascending: {children}",
                index=i,
            )

    return result


def link_relation(
    nodes: Sequence[Any], links: Links, key: Callable[[Any], Hashable] = id
) -> frozenset:
    """The graph's edges expressed through node identity instead of position.

    Two arrays that differ only by a normalization have equal relations.
    Child lists are kept as ordered tuples, since normalization preserves
    which sibling comes first.
    """
    edges = set()
    for node in nodes:
        parent = links.get_parent(node)
        if parent is not None:
            edges.add(("parent", key(node), key(nodes[parent])))
        edges.add(("children", key(node), tuple(key(nodes[c]) for c in links.children(node))))
    return frozenset(edges)


# --- Individual checks ---


def _in_range(value: Any, n: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < n


def _check_indices(nodes: Sequence[Any], links: Links, result: CheckResult):
    """Every parent and child must be an integer index into the array."""
    n = len(nodes)
    for i, node in enumerate(nodes):
        parent = links.get_parent(node)
        if parent is not None and not _in_range(parent, n):
            result.add(
                Severity.ERROR,
                "INDEX_OUT_OF_RANGE",
                f"Node {i} has parent {parent!r} outside [0, {n})",
                index=i,
            )
        for child in links.children(node):
            if not _in_range(child, n):
                result.add(
                    Severity.ERROR,
                    "INDEX_OUT_OF_RANGE",
                    f"Node {i} has child {child!r} outside [0, {n})",
                    index=i,
                )


def _check_duplicates(nodes: Sequence[Any], links: Links, result: CheckResult):
    for i, node in enumerate(nodes):
        children = list(links.children(node))
        if len(set(children)) != len(children):
            result.add(
                Severity.WARNING,
                "DUPLICATE_CHILD",
                f"Node {i} lists the same child more than once: {children}",
                index=i,
            )


def _check_parent_links(nodes: Sequence[Any], links: Links, result: CheckResult):
    """A parent field should point at a node that lists this one as a child."""
    for i, node in enumerate(nodes):
        parent = links.get_parent(node)
        if parent is not None and i not in links.children(nodes[parent]):
            result.add(
                Severity.WARNING,
                "PARENT_NOT_LINKED",
                f"Node {i} names {parent} as parent, but is not among its children",
                index=i,
            )


def _check_cycles(nodes: Sequence[Any], links: Links, result: CheckResult):
    """Reject child cycles, then sibling orders that contradict each other."""
    child_edges = [set(links.children(node)) for node in nodes]
    cycle = _find_cycle(child_edges)
    if cycle:
        result.add(
            Severity.ERROR,
            "CYCLE",
            f"Child links form a cycle through nodes {cycle}",
            index=cycle[0],
        )
        return

    cycle = _find_cycle(constraint_edges(nodes, links))
    if cycle:
        result.add(
            Severity.ERROR,
            "ORDER_CONFLICT",
            f"Sibling orders conflict; no layout can satisfy nodes {cycle}",
            index=cycle[0],
        )


def _find_cycle(succ: list[set[int]]) -> list[int] | None:
    """Return the nodes of one cycle in a successor graph, or None."""
    state = [0] * len(succ)  # 0 = unseen, 1 = on path, 2 = done
    for root in range(len(succ)):
        if state[root]:
            continue
        state[root] = 1
        path = [root]
        stack = [iter(sorted(succ[root]))]
        while stack:
            for target in stack[-1]:
                if state[target] == 1:
                    return path[path.index(target) :]
                if state[target] == 0:
                    state[target] = 1
                    path.append(target)
                    stack.append(iter(sorted(succ[target])))
                    break
            else:
                state[path.pop()] = 2
                stack.pop()
    return None
