"""dagsort — in-place normalization of index-addressed DAG arenas.

Rewrites a flat array of nodes so that every child is stored after its
parent and every child list reads in ascending index order, by permuting
the array in place rather than building a new one.
"""

__version__ = "0.1.0"

from dagsort.core.links import AttrLinks, CallableLinks, KeyLinks, Links
from dagsort.core.normalize import fix, sort

__all__ = ["AttrLinks", "CallableLinks", "KeyLinks", "Links", "fix", "sort", "__version__"]
