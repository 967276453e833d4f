"""Node model — the conventional arena slot shape.

A node refers to other nodes purely by integer index into the same flat
array. ``fix`` normalizes arrays of these; any other node type goes through
``sort`` with a matching ``Links`` accessor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Node:
    """One slot of an index-addressed graph arena."""

    parent: int | None = None
    children: list[int] = field(default_factory=list)
    data: Any = None  # Caller payload, moves with the node
