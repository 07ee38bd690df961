"""
Shape validation and vectorization for structured tensors.

Tensor Conventions
------------------
Every tensor handled by this package is "cubical":

    - order D (number of modes)
    - dimension J (extent of every mode)
    - shape (J, J, ..., J), D times

Constraints are written as ``A @ vec(W) = b`` where ``vec`` is the
column-major vectorization: the FIRST index varies fastest, so the entry
``W[j1, j2, ..., jD]`` (0-based) lives at

    j1 + j2 * J + j3 * J**2 + ... + jD * J**(D-1)

This matches ``W.reshape(-1, order="F")`` and is the ordering assumed by
every Kronecker-structured constraint matrix in ``tensorprior.linalg``.

This module provides utilities to:
1. Build the tensor shape for a given (D, J)
2. Vectorize / unvectorize tensors in column-major order
3. Validate (D, J) against the range supported by a sampler
"""

import warnings
from numbers import Integral

import numpy as np

from tensorprior.errors import InvalidShapeError


def tensor_shape(order: int, dim: int) -> tuple[int, ...]:
    """
    Shape of a cubical tensor.

    Examples
    --------
    >>> tensor_shape(3, 4)
    (4, 4, 4)
    """
    return (dim,) * order


def vectorize(tensor: np.ndarray) -> np.ndarray:
    """
    Column-major vectorization ``vec(W)``.

    Parameters
    ----------
    tensor : np.ndarray
        Tensor of any shape

    Returns
    -------
    vec : np.ndarray
        1D array with the first index varying fastest

    Examples
    --------
    >>> W = np.array([[1, 2], [3, 4]])
    >>> vectorize(W)
    array([1, 3, 2, 4])
    """
    return np.asarray(tensor).reshape(-1, order="F")


def unvectorize(vec: np.ndarray, order: int, dim: int) -> np.ndarray:
    """
    Inverse of :func:`vectorize` for a cubical tensor.

    Parameters
    ----------
    vec : np.ndarray
        Vector of length ``dim**order`` (a trailing singleton axis is accepted)
    order : int
        Tensor order D
    dim : int
        Mode dimension J

    Returns
    -------
    tensor : np.ndarray
        Tensor of shape (J,)*D

    Raises
    ------
    InvalidShapeError
        If the vector length is not ``dim**order``
    """
    vec = np.asarray(vec)
    if vec.size != dim**order:
        raise InvalidShapeError(
            f"Cannot reshape vector of length {vec.size} to order {order}, "
            f"dimension {dim} (expected length {dim**order})"
        )
    return vec.reshape(tensor_shape(order, dim), order="F")


def validate_order_dim(
    order: int,
    dim: int,
    order_range: tuple[int, int],
    dim_range: tuple[int, int],
    family: str = "tensor",
    strict: bool = True,
) -> None:
    """
    Validate order D and dimension J against a sampler's supported range.

    Checks:
    1. Both values are integers (bools are rejected)
    2. Neither value is below the lower bound of its range
    3. Neither value exceeds the upper bound (only when ``strict=True``)

    Parameters
    ----------
    order : int
        Tensor order D
    dim : int
        Mode dimension J
    order_range : tuple[int, int]
        Inclusive (min, max) for D
    dim_range : tuple[int, int]
        Inclusive (min, max) for J
    family : str, default="tensor"
        Family name used in error messages
    strict : bool, default=True
        If False, values above the upper bound are accepted with a
        UserWarning since the cost of sampling grows combinatorially

    Raises
    ------
    InvalidShapeError
        If D or J is not an integer or lies outside the supported range

    Examples
    --------
    >>> validate_order_dim(3, 4, (2, 5), (2, 6))  # OK
    >>> validate_order_dim(6, 4, (2, 5), (2, 6))  # Raises InvalidShapeError
    """
    for name, value, (low, high) in (
        ("order", order, order_range),
        ("dim", dim, dim_range),
    ):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidShapeError(f"{family}: {name} must be an integer, got {value!r}")

        if value < low:
            raise InvalidShapeError(
                f"{family}: {name}={value} is below the supported range [{low}, {high}]"
            )

        if value > high:
            if strict:
                raise InvalidShapeError(
                    f"{family}: {name}={value} is outside the supported range [{low}, {high}]"
                )
            warnings.warn(
                f"{family}: {name}={value} exceeds the supported range [{low}, {high}]. "
                "Sampling cost grows combinatorially with the tensor size.",
                UserWarning,
                stacklevel=3,
            )
