"""
Samplers of structured tensor priors.

This module provides one sampler per constraint family:
- Lower triangular tensors (recursive Kronecker nullspace)
- Tensors with a fixed sum over the last index (closed-form basis)
- Symmetric tensors (average over all axis permutations)
- Hankel tensors (permutation-cycle incidence matrix)

and a registry dispatching on the family name.
"""

from tensorprior.samplers.config import (
    SamplerConfig,
    resolve_rng,
)
from tensorprior.samplers.triangular import (
    sample_triangular,
    triangular_basis,
    triangular_basis_width,
)
from tensorprior.samplers.fixed_sum import (
    fixed_sum_basis,
    sample_fixed_sum,
)
from tensorprior.samplers.symmetric import (
    sample_symmetric,
    symmetrize,
)
from tensorprior.samplers.hankel import (
    hankel_basis,
    hankel_cycle_count,
    hankel_index_sums,
    sample_hankel,
)
from tensorprior.samplers.registry import (
    SAMPLERS,
    ConstraintFamily,
    SamplerSpec,
    get_sampler_spec,
    sample_tensor,
)

__all__ = [
    # Configuration
    "SamplerConfig",
    "resolve_rng",
    # Triangular
    "sample_triangular",
    "triangular_basis",
    "triangular_basis_width",
    # Fixed sum
    "fixed_sum_basis",
    "sample_fixed_sum",
    # Symmetric
    "sample_symmetric",
    "symmetrize",
    # Hankel
    "hankel_basis",
    "hankel_cycle_count",
    "hankel_index_sums",
    "sample_hankel",
    # Registry
    "SAMPLERS",
    "ConstraintFamily",
    "SamplerSpec",
    "get_sampler_spec",
    "sample_tensor",
]
