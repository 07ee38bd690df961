"""
Gaussian prior of symmetric tensors.

A symmetric tensor is invariant under every permutation of its indices,
``P vec(W) = vec(W)`` for the permutation matrices P of all axis
transpositions. By Theorem 4.5 of the reference article the square root of
the prior covariance is the group average

    sqrt(P0) = (P + P^2 + ... + P^K) / K

so a sample is the average of a standard normal tensor over all D! axis
permutations. For D = 2 this is (X + X^T) / 2.

The group has D! elements, so the cost grows factorially with the order.
The supported range stops at D = 3.
"""

from __future__ import annotations

from itertools import permutations
from math import factorial

import numpy as np

from tensorprior.samplers.config import SamplerConfig, resolve_config, resolve_rng
from tensorprior.utils.shapes import tensor_shape, validate_order_dim

ORDER_RANGE = (2, 3)
DIM_RANGE = (5, 10)


def symmetrize(tensor: np.ndarray) -> np.ndarray:
    """
    Average a tensor over all permutations of its axes.

    Parameters
    ----------
    tensor : np.ndarray
        Tensor with all modes of equal extent

    Returns
    -------
    sym : np.ndarray
        Symmetric tensor of the same shape

    Raises
    ------
    ValueError
        If the modes do not all have the same extent

    Examples
    --------
    >>> X = np.array([[0.0, 2.0], [0.0, 0.0]])
    >>> symmetrize(X)
    array([[0., 1.],
           [1., 0.]])
    """
    tensor = np.asarray(tensor, dtype=np.float64)
    if len(set(tensor.shape)) > 1:
        raise ValueError(f"All modes must have the same extent, got shape {tensor.shape}")

    total = np.zeros_like(tensor)
    for axes in permutations(range(tensor.ndim)):
        total += tensor.transpose(axes)
    return total / factorial(tensor.ndim)


def sample_symmetric(
    order: int,
    dim: int,
    rng: np.random.Generator | int | None = None,
    config: SamplerConfig | None = None,
) -> np.ndarray:
    """
    Draw a symmetric tensor from its Gaussian prior.

    Parameters
    ----------
    order : int
        Tensor order D in {2, 3}
    dim : int
        Mode dimension J in [5, 10]
    rng : np.random.Generator, int or None
        Random source or seed
    config : SamplerConfig, optional
        Sampler configuration

    Returns
    -------
    W : np.ndarray
        Tensor of shape (J,)*D, invariant under every axis permutation
    """
    config = resolve_config(config)
    validate_order_dim(
        order, dim, ORDER_RANGE, DIM_RANGE, family="symmetric", strict=config.strict_ranges
    )

    x = resolve_rng(rng).standard_normal(tensor_shape(order, dim))

    if config.verbose:
        print(f"Symmetric sample: averaging over {factorial(order)} axis permutations")

    return symmetrize(x)
