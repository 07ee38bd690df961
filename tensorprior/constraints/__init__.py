"""
Explicit (A, b) constraint systems and the general constrained prior.

Internal verification layer: the family samplers never build A, but for
small (D, J) the explicit matrices make every sample checkable against
``A vec(W) = b``.
"""

from tensorprior.constraints.matrices import (
    axis_permutation_matrix,
    constraint_system,
    fixed_sum_constraint_matrix,
    fixed_sum_rhs,
    hankel_constraint_matrix,
    permutation_invariance_matrix,
    triangular_constraint_matrix,
)
from tensorprior.constraints.prior import ConstrainedGaussianPrior

__all__ = [
    "ConstrainedGaussianPrior",
    "axis_permutation_matrix",
    "constraint_system",
    "fixed_sum_constraint_matrix",
    "fixed_sum_rhs",
    "hankel_constraint_matrix",
    "permutation_invariance_matrix",
    "triangular_constraint_matrix",
]
