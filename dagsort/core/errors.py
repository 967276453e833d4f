"""Exceptions raised by the normalizer.

Both are raised only by the optional hardening paths (``check=True``,
``max_passes``, the topological solver). Unchecked input is the caller's
contract.
"""

from __future__ import annotations


class GraphError(ValueError):
    """The graph violates a precondition of normalization."""

    def __init__(self, message: str, issues: list | None = None):
        super().__init__(message)
        self.issues = issues or []


class SolverError(RuntimeError):
    """The pass solver did not reach a fixed point within its pass limit."""

    def __init__(self, passes: int):
        super().__init__(f"Solver still changing after {passes} pass(es)")
        self.passes = passes
