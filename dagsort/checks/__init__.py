"""Optional hardening checks for graphs handed to the normalizer.

The normalizer trusts its input. These checks make that trust explicit:
1. Schema — structural validation of graph documents on disk
2. Preconditions — indices in range, no cycles, consistent sibling orders
3. Postconditions — parent-before-child and ascending children after a run
"""
