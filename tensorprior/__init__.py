"""
Gaussian priors of structured tensors for Bayesian inverse problems.

A tensor W of order D with every mode of dimension J is (A, b)-constrained
when ``A vec(W) = b``. This package samples the Gaussian prior of several
such families without materializing A.

Features:
---------
- Lower triangular tensors via a recursive Kronecker nullspace construction
- Tensors with a known sum over the last index via a closed-form basis
- Symmetric tensors via averaging over all axis permutations
- Hankel tensors via the permutation-cycle incidence matrix
- Explicit (A, b) systems and a general constrained prior for verification

Typical usage:
--------------
    import numpy as np
    from tensorprior import sample_triangular, sample_fixed_sum, sample_tensor

    rng = np.random.default_rng(0)

    W = sample_triangular(order=3, dim=4, rng=rng)       # shape (4, 4, 4)
    W, marginal = sample_fixed_sum(order=2, dim=5, rng=rng)
    H = sample_tensor("hankel", order=3, dim=5, rng=rng)

Reference:
    K. Batselier, "Constructing structured tensor priors for Bayesian
    inverse problems", arXiv:2406.17597.
"""

from tensorprior.errors import InvalidShapeError, NumericalInstabilityError
from tensorprior.samplers import (
    SAMPLERS,
    ConstraintFamily,
    SamplerConfig,
    SamplerSpec,
    fixed_sum_basis,
    get_sampler_spec,
    hankel_basis,
    hankel_cycle_count,
    sample_fixed_sum,
    sample_hankel,
    sample_symmetric,
    sample_tensor,
    sample_triangular,
    symmetrize,
    triangular_basis,
    triangular_basis_width,
)
from tensorprior.constraints import ConstrainedGaussianPrior, constraint_system

__version__ = "0.1.0"

__all__ = [
    # Errors
    "InvalidShapeError",
    "NumericalInstabilityError",
    # Configuration
    "SamplerConfig",
    # Samplers
    "sample_triangular",
    "sample_fixed_sum",
    "sample_symmetric",
    "sample_hankel",
    # Bases
    "triangular_basis",
    "triangular_basis_width",
    "fixed_sum_basis",
    "hankel_basis",
    "hankel_cycle_count",
    "symmetrize",
    # Registry
    "SAMPLERS",
    "ConstraintFamily",
    "SamplerSpec",
    "get_sampler_spec",
    "sample_tensor",
    # General constrained prior
    "ConstrainedGaussianPrior",
    "constraint_system",
]
