"""
Gaussian prior of Hankel tensors.

A Hankel tensor has equal entries along every constant index sum:

    w[j1, ..., jD] = w[k1, ..., kD]   whenever  j1 + ... + jD = k1 + ... + kD

The corresponding permutation matrix P has a very large order (for D = 2,
J = 20 it is lcm(1, ..., 20) = 232,792,560), so the group average of the
symmetric sampler is out of reach. Theorem 5.1 of the reference article
instead gives sqrt(P0) as the incidence matrix of the permutation cycles:

    V[row, col] = 1  iff  entry ``row`` (column-major) has index sum ``col``

With 0-based indices the index sum ranges over 0..D(J-1), so there are
R = D(J-1) + 1 cycles. A sample is V @ x with x ~ N(0, I_R): one random value
per cycle, copied to every member of the cycle.

Two builders are provided for V: a vectorized NumPy one and a compiled
Numba loop over the rows, both valid for any order.
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange

from tensorprior.samplers.config import SamplerConfig, resolve_config, resolve_rng
from tensorprior.utils.shapes import tensor_shape, unvectorize, validate_order_dim, vectorize

ORDER_RANGE = (2, 4)
DIM_RANGE = (3, 10)


def hankel_cycle_count(order: int, dim: int) -> int:
    """
    Number of permutation cycles (distinct index sums) of a Hankel tensor.

    Examples
    --------
    >>> hankel_cycle_count(2, 3)
    5
    >>> hankel_cycle_count(3, 3)
    7
    """
    return order * (dim - 1) + 1


def _index_sums_numpy(order: int, dim: int) -> np.ndarray:
    """Index sum of every entry, in column-major (vec) order."""
    sums = np.indices(tensor_shape(order, dim)).sum(axis=0)
    return vectorize(sums).astype(np.int64)


@njit(parallel=True, cache=True)
def _index_sums_numba(order: int, dim: int) -> np.ndarray:
    """Index sum of every entry, decoded from the column-major linear index."""
    n_rows = dim**order
    sums = np.zeros(n_rows, dtype=np.int64)

    for row in prange(n_rows):
        remainder = row + 0
        accum = 0
        # First index varies fastest
        for _ in range(order):
            accum += remainder % dim
            remainder //= dim
        sums[row] = accum

    return sums


def hankel_index_sums(order: int, dim: int, backend: str = "numpy") -> np.ndarray:
    """
    0-based index sum of every tensor entry, in column-major (vec) order.

    Entry ``row`` of the result is the permutation cycle that the
    ``row``-th entry of ``vec(W)`` belongs to.

    Examples
    --------
    >>> hankel_index_sums(2, 2)
    array([0, 1, 1, 2])
    """
    if backend == "numpy":
        return _index_sums_numpy(order, dim)
    if backend == "numba":
        return _index_sums_numba(order, dim)
    raise ValueError(f"backend must be 'numpy' or 'numba', got {backend!r}")


def hankel_basis(order: int, dim: int, backend: str = "numpy") -> np.ndarray:
    """
    Cycle-incidence matrix of the Hankel permutation.

    Parameters
    ----------
    order : int
        Tensor order D
    dim : int
        Mode dimension J
    backend : str, default='numpy'
        'numpy' (vectorized) or 'numba' (compiled row loop)

    Returns
    -------
    V : np.ndarray
        Shape (J**D, D(J-1)+1), exactly one 1 per row

    Examples
    --------
    >>> hankel_basis(2, 3).shape
    (9, 5)
    """
    sums = hankel_index_sums(order, dim, backend=backend)

    V = np.zeros((dim**order, hankel_cycle_count(order, dim)))
    V[np.arange(dim**order), sums] = 1.0
    return V


def sample_hankel(
    order: int,
    dim: int,
    rng: np.random.Generator | int | None = None,
    config: SamplerConfig | None = None,
) -> np.ndarray:
    """
    Draw a Hankel tensor from its Gaussian prior.

    Parameters
    ----------
    order : int
        Tensor order D in [2, 4]
    dim : int
        Mode dimension J in [3, 10]
    rng : np.random.Generator, int or None
        Random source or seed
    config : SamplerConfig, optional
        Sampler configuration (``hankel_backend`` selects the builder)

    Returns
    -------
    W : np.ndarray
        Tensor of shape (J,)*D; entries sharing an index sum are identical

    Examples
    --------
    >>> W = sample_hankel(2, 4, rng=0)
    >>> bool(W[0, 3] == W[1, 2] == W[3, 0])
    True
    """
    config = resolve_config(config)
    validate_order_dim(
        order, dim, ORDER_RANGE, DIM_RANGE, family="hankel", strict=config.strict_ranges
    )

    V = hankel_basis(order, dim, backend=config.hankel_backend)

    if config.verbose:
        print(f"Hankel basis: {V.shape[0]} entries, {V.shape[1]} cycles")

    x = resolve_rng(rng).standard_normal(V.shape[1])
    return unvectorize(V @ x, order, dim)
