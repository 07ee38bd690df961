"""
Gaussian prior of lower triangular tensors.

A tensor W of order D and dimension J is lower triangular when every entry
with a strictly increasing pair of consecutive indices vanishes:

    w[j1, ..., jD] = 0   if  j_d < j_{d+1}  for some d

Only entries with non-increasing index sequences j1 >= j2 >= ... >= jD are
free. In matrix form ``A vec(W) = 0`` with

    A = [ S ⊗ I ⊗ ... ⊗ I ]
        [ I ⊗ S ⊗ ... ⊗ I ]
        [       ...       ]
        [ I ⊗ I ⊗ ... ⊗ S ]

where S selects the strictly increasing pairs of two consecutive modes
(``tensorprior.linalg.strict_lower_selector``). A has J**D columns and
(D-1)(J-1)J**(D-1)/2 rows, so it is never built: the nullspace basis is
obtained by intersecting the nullspaces of the blocks one at a time
(Algorithm 3.1 of Batselier, "Constructing structured tensor priors for
Bayesian inverse problems").

Sampling x ~ N(0, I_R) and returning V @ x draws from the Gaussian prior on
the constrained subspace. V is orthonormal, so the distribution does not
depend on the particular basis returned by the SVD.

Cost grows combinatorially with D (the basis has J**D rows); orders above 5
are outside the supported range.
"""

from __future__ import annotations

from math import comb

import numpy as np

from tensorprior.errors import NumericalInstabilityError
from tensorprior.linalg import (
    mode_operator,
    null_space_basis,
    strict_lower_selector,
    zero_small_entries,
)
from tensorprior.samplers.config import SamplerConfig, resolve_config, resolve_rng
from tensorprior.utils.shapes import unvectorize, validate_order_dim

ORDER_RANGE = (2, 5)
DIM_RANGE = (2, 6)


def triangular_basis_width(order: int, dim: int) -> int:
    """
    Dimension of the space of lower triangular tensors.

    Equal to the number of non-increasing index sequences of length D over
    J symbols, C(J + D - 1, D).

    Examples
    --------
    >>> triangular_basis_width(2, 2)
    3
    >>> triangular_basis_width(3, 3)
    10
    """
    return comb(dim + order - 1, order)


def triangular_basis(
    order: int,
    dim: int,
    config: SamplerConfig | None = None,
) -> np.ndarray:
    """
    Nullspace basis of the lower triangular constraint, built recursively.

    Steps:
    1. V = nullspace(S), shape (J**2, J(J+1)/2)
    2. V = V ⊗ I_J, repeated D-2 times
    3. For k = 2..D-1: A_k = I ⊗ ... ⊗ S (position k) ⊗ ... ⊗ I,
       V = V @ nullspace(A_k @ V)
    4. Entries below ``config.zero_tol`` in magnitude are set to zero

    Parameters
    ----------
    order : int
        Tensor order D
    dim : int
        Mode dimension J
    config : SamplerConfig, optional
        Tolerances and range checks

    Returns
    -------
    V : np.ndarray
        Basis, shape (J**D, C(J+D-1, D))

    Raises
    ------
    InvalidShapeError
        If (order, dim) is outside the supported range
    NumericalInstabilityError
        If the basis width disagrees with C(J+D-1, D) and
        ``config.check_rank`` is set
    """
    config = resolve_config(config)
    validate_order_dim(
        order, dim, ORDER_RANGE, DIM_RANGE, family="triangular", strict=config.strict_ranges
    )

    S = strict_lower_selector(dim)
    identity = np.eye(dim)

    V = null_space_basis(S, rcond=config.rcond)
    for _ in range(order - 2):
        V = np.kron(V, identity)

    for k in range(2, order):
        A_k = mode_operator(order, dim, S, position=k)
        V = V @ null_space_basis(A_k @ V, rcond=config.rcond)

        if config.verbose:
            print(f"Block {k}/{order - 1}: basis shape {V.shape}")

    V = zero_small_entries(V, config.zero_tol)

    if config.check_rank:
        expected = triangular_basis_width(order, dim)
        if V.shape[1] != expected:
            raise NumericalInstabilityError(
                f"Triangular basis for order={order}, dim={dim} has {V.shape[1]} "
                f"columns, expected {expected}"
            )

    return V


def sample_triangular(
    order: int,
    dim: int,
    rng: np.random.Generator | int | None = None,
    config: SamplerConfig | None = None,
) -> np.ndarray:
    """
    Draw a lower triangular tensor from its Gaussian prior.

    Parameters
    ----------
    order : int
        Tensor order D in [2, 5]
    dim : int
        Mode dimension J in [2, 6]
    rng : np.random.Generator, int or None
        Random source or seed
    config : SamplerConfig, optional
        Sampler configuration

    Returns
    -------
    W : np.ndarray
        Tensor of shape (J,)*D with W[..., a, b, ...] = 0 whenever a < b
        for two consecutive indices

    Examples
    --------
    >>> W = sample_triangular(2, 3, rng=0)
    >>> W.shape
    (3, 3)
    >>> bool(np.all(np.triu(W, k=1) == 0))
    True
    """
    V = triangular_basis(order, dim, config)
    x = resolve_rng(rng).standard_normal(V.shape[1])
    return unvectorize(V @ x, order, dim)
