"""
Gaussian prior of tensors with a known sum over the last index.

Samples W of order D and dimension J with

    sum_{jD} w[j1, ..., j_{D-1}, jD] = 1   for all j1, ..., j_{D-1}

i.e. ``A vec(W) = b`` with ``A = 1_J^T ⊗ I_J ⊗ ... ⊗ I_J`` and ``b = 1``.
A basis of the nullspace of A is

    [  1   1  ...   1 ]
    [ -1   0  ...   0 ]
    [  0  -1  ...   0 ]  ⊗ I_J ⊗ ... ⊗ I_J
    [  0   0  ...  -1 ]

so with x partitioned into J-1 blocks x_1, ..., x_{J-1} of length J**(D-1)
the sample is obtained without forming the basis:

    vec(W) = 1/J + [x_1 + ... + x_{J-1}, -x_1, -x_2, ..., -x_{J-1}]
"""

from __future__ import annotations

import numpy as np

from tensorprior.samplers.config import SamplerConfig, resolve_config, resolve_rng
from tensorprior.utils.shapes import unvectorize, validate_order_dim

ORDER_RANGE = (2, 5)
DIM_RANGE = (5, 10)


def fixed_sum_basis(order: int, dim: int) -> np.ndarray:
    """
    Explicit nullspace basis of the fixed-sum constraint.

    Not used for sampling; materialized for verification only.

    Returns
    -------
    V : np.ndarray
        Basis, shape (J**D, (J-1) * J**(D-1))
    """
    block = np.vstack([np.ones((1, dim - 1)), -np.eye(dim - 1)])
    return np.kron(block, np.eye(dim ** (order - 1)))


def sample_fixed_sum(
    order: int,
    dim: int,
    rng: np.random.Generator | int | None = None,
    config: SamplerConfig | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Draw a tensor whose fibers along the last mode sum to one.

    Parameters
    ----------
    order : int
        Tensor order D in [2, 5]
    dim : int
        Mode dimension J in [5, 10]
    rng : np.random.Generator, int or None
        Random source or seed
    config : SamplerConfig, optional
        Sampler configuration (only range checks and verbosity apply)

    Returns
    -------
    sample : np.ndarray
        Tensor of shape (J,)*D
    marginal : np.ndarray
        Sum of ``sample`` over its last axis, shape (J,)*(D-1); all ones up
        to rounding

    Examples
    --------
    >>> W, marginal = sample_fixed_sum(3, 5, rng=0)
    >>> W.shape, marginal.shape
    ((5, 5, 5), (5, 5))
    >>> bool(np.allclose(marginal, 1.0))
    True
    """
    config = resolve_config(config)
    validate_order_dim(
        order, dim, ORDER_RANGE, DIM_RANGE, family="fixed_sum", strict=config.strict_ranges
    )

    n_fiber = dim ** (order - 1)
    x = resolve_rng(rng).standard_normal((n_fiber, dim - 1))

    # Particular solution: every fiber is uniform
    w0 = np.full(dim**order, 1.0 / dim)

    # Block j of the perturbation holds the entries with last index j
    perturbation = np.concatenate([x.sum(axis=1), -x.reshape(-1, order="F")])

    if config.verbose:
        print(f"Fixed-sum sample: {n_fiber} fibers, {x.size} free parameters")

    sample = unvectorize(w0 + perturbation, order, dim)
    marginal = sample.sum(axis=-1)
    return sample, marginal
