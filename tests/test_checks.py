"""Tests for precondition and postcondition checks."""

from dagsort.checks.invariants import (
    CheckResult,
    Severity,
    check_graph,
    check_normalized,
    link_relation,
)
from dagsort.core.links import AttrLinks, KeyLinks
from dagsort.models.node import Node

LINKS = AttrLinks()


def _codes(result: CheckResult) -> list[str]:
    return [i.code for i in result.issues]


# --- Preconditions ---


def test_valid_graph_passes():
    nodes = [Node(1, []), Node(None, [0])]
    result = check_graph(nodes, LINKS)
    assert result.passed
    assert result.issues == []
    assert result.summary() == "[PASS] 0 error(s), 0 warning(s)"


def test_index_out_of_range():
    nodes = [Node(7, [1, -1]), Node(None, [])]
    result = check_graph(nodes, LINKS)
    assert not result.passed
    assert _codes(result).count("INDEX_OUT_OF_RANGE") == 2
    assert all(i.index == 0 for i in result.errors)


def test_non_integer_index():
    nodes = [{"children": ["1"]}, {"parent": True}]
    result = check_graph(nodes, KeyLinks())
    assert _codes(result) == ["INDEX_OUT_OF_RANGE", "INDEX_OUT_OF_RANGE"]


def test_cycle_detected():
    nodes = [Node(2, [1]), Node(0, [2]), Node(1, [0])]
    result = check_graph(nodes, LINKS)
    assert "CYCLE" in _codes(result)
    cycle_issue = result.errors[0]
    assert "0" in cycle_issue.message and "2" in cycle_issue.message


def test_self_child_is_a_cycle():
    result = check_graph([Node(None, [0])], LINKS)
    assert _codes(result) == ["CYCLE"]


def test_order_conflict():
    nodes = [Node(None, [2, 3]), Node(None, [3, 2]), Node(0, []), Node(0, [])]
    result = check_graph(nodes, LINKS)
    assert "ORDER_CONFLICT" in _codes(result)
    assert "CYCLE" not in _codes(result)


def test_sibling_order_against_child_link():
    # 2 is a child of 1, yet listed before 1 by node 0
    nodes = [Node(None, [2, 1]), Node(0, [2]), Node(1, [])]
    result = check_graph(nodes, LINKS)
    assert "ORDER_CONFLICT" in _codes(result)


def test_warnings_do_not_fail():
    nodes = [Node(None, [1, 1]), Node(0, []), Node(0, [])]
    result = check_graph(nodes, LINKS)
    assert result.passed
    assert set(_codes(result)) == {"DUPLICATE_CHILD", "PARENT_NOT_LINKED"}
    assert all(i.severity == Severity.WARNING for i in result.issues)
    assert result.warnings[0].index in (0, 2)


# --- Postconditions ---


def test_normalized_graph_passes():
    nodes = [Node(None, [1, 2]), Node(0, [2]), Node(0, [])]
    assert check_normalized(nodes, LINKS).passed


def test_child_before_parent_reported():
    nodes = [Node(1, []), Node(None, [0])]
    result = check_normalized(nodes, LINKS)
    assert _codes(result) == ["CHILD_BEFORE_PARENT", "CHILD_BEFORE_PARENT"]
    assert [i.index for i in result.issues] == [0, 1]


def test_sibling_order_reported():
    nodes = [Node(None, [2, 1]), Node(0, []), Node(0, [])]
    result = check_normalized(nodes, LINKS)
    assert _codes(result) == ["SIBLING_ORDER"]


# --- Relation ---


def test_link_relation_ignores_positions():
    a = Node(None, [1], "a")
    b = Node(0, [], "b")
    swapped_b = Node(1, [], "b")
    swapped_a = Node(None, [0], "a")

    key = lambda n: n.data  # noqa: E731
    assert link_relation([a, b], LINKS, key) == link_relation([swapped_b, swapped_a], LINKS, key)


def test_link_relation_sees_sibling_order():
    key = lambda n: n.data  # noqa: E731
    first = [Node(None, [1, 2], "r"), Node(0, [], "x"), Node(0, [], "y")]
    second = [Node(None, [2, 1], "r"), Node(0, [], "x"), Node(0, [], "y")]
    assert link_relation(first, LINKS, key) != link_relation(second, LINKS, key)
