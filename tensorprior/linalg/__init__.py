"""
Linear-algebra primitives for Kronecker-structured constraints.

- Kronecker chains and single-block mode operators
- The strictly-increasing pair selector used by triangular tensors
- SVD-based right nullspace bases
"""

from tensorprior.linalg.kron import (
    kron_chain,
    mode_operator,
    strict_lower_selector,
)
from tensorprior.linalg.nullspace import (
    null_space_basis,
    zero_small_entries,
)

__all__ = [
    "kron_chain",
    "mode_operator",
    "strict_lower_selector",
    "null_space_basis",
    "zero_small_entries",
]
