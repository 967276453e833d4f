"""Core normalization algorithm.

Three phases run strictly in order:
1. Solve — compute a generator permutation (old index -> new index)
2. Remap — rewrite parent/children indices through the generator
3. Retrace — swap nodes into place, walking each permutation cycle once
"""
