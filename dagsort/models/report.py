"""Result models for a normalization run."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class Solution:
    """A generator permutation produced by one of the solvers.

    ``generator[i]`` is the final index of the node currently at ``i``.
    """

    generator: list[int]
    strategy: str
    passes: int = 0
    swaps: int = 0  # Transpositions applied to the generator while solving

    @property
    def moved(self) -> int:
        """How many nodes the generator sends somewhere else."""
        return sum(1 for i, g in enumerate(self.generator) if g != i)


@dataclass
class NormalizeReport:
    """What a ``sort``/``fix`` call did to the array."""

    node_count: int
    strategy: str
    passes: int = 0
    generator_swaps: int = 0
    moved: int = 0
    node_swaps: int = 0

    @property
    def changed(self) -> bool:
        return self.moved > 0

    def summary(self) -> str:
        if not self.changed:
            return f"{self.node_count} node(s) already normalized ({self.strategy}, {self.passes} pass(es))"
        return (
            f"{self.node_count} node(s): moved {self.moved} with {self.node_swaps} swap(s) "
            f"({self.strategy}, {self.passes} pass(es), {self.generator_swaps} generator swap(s))"
        )

    def to_dict(self) -> dict:
        result = asdict(self)
        result["changed"] = self.changed
        return result
