"""Accessor capabilities for reading and rewriting a node's links.

The normalizer never assumes field names. It reaches a node's optional
parent index and its child-index list through a ``Links`` object, so any
node type (dataclass, dict, foreign object) can be normalized.
"""

from __future__ import annotations

from collections.abc import Callable, MutableSequence
from dataclasses import dataclass
from typing import Any, Protocol


class Links(Protocol):
    """Capability pair: the optional parent slot and the child-index list."""

    def get_parent(self, node: Any) -> int | None: ...

    def set_parent(self, node: Any, value: int | None) -> None: ...

    def children(self, node: Any) -> MutableSequence[int]:
        """Return the node's own child list; writes through it must stick."""
        ...


@dataclass(frozen=True)
class AttrLinks:
    """Links stored as attributes (the conventional ``parent``/``children`` shape)."""

    parent_attr: str = "parent"
    children_attr: str = "children"

    def get_parent(self, node: Any) -> int | None:
        return getattr(node, self.parent_attr)

    def set_parent(self, node: Any, value: int | None) -> None:
        setattr(node, self.parent_attr, value)

    def children(self, node: Any) -> MutableSequence[int]:
        return getattr(node, self.children_attr)


@dataclass(frozen=True)
class KeyLinks:
    """Links stored under mapping keys, as loaded from YAML/JSON documents."""

    parent_key: str = "parent"
    children_key: str = "children"

    def get_parent(self, node: dict) -> int | None:
        return node.get(self.parent_key)

    def set_parent(self, node: dict, value: int | None) -> None:
        # Don't materialize a parent key on roots that never had one
        if value is None and self.parent_key not in node:
            return
        node[self.parent_key] = value

    def children(self, node: dict) -> MutableSequence[int]:
        found = node.get(self.children_key)
        if found is None:
            # Leaves without a children key stay that way
            return []
        return found


@dataclass(frozen=True)
class CallableLinks:
    """Links reached through three plain callables."""

    get_parent_fn: Callable[[Any], int | None]
    set_parent_fn: Callable[[Any, int | None], None]
    children_fn: Callable[[Any], MutableSequence[int]]

    def get_parent(self, node: Any) -> int | None:
        return self.get_parent_fn(node)

    def set_parent(self, node: Any, value: int | None) -> None:
        self.set_parent_fn(node, value)

    def children(self, node: Any) -> MutableSequence[int]:
        return self.children_fn(node)
