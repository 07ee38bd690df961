"""
Kronecker-structured building blocks for tensor constraint matrices.

Constraint matrices of structured tensors are Kronecker products of a small
"block" matrix acting on one or two modes and identities acting on the
remaining modes, e.g. for a lower triangular tensor of order 4:

    A_2 = I_J ⊗ S ⊗ I_J

NumPy's ``np.kron`` ordering is used throughout: in ``kron(X, Y)`` the index
of ``Y`` varies fastest. Combined with the column-major ``vec`` convention of
``tensorprior.utils.shapes``, the LAST factor of a Kronecker chain acts on the
FIRST tensor mode.
"""

from collections.abc import Sequence

import numpy as np


def kron_chain(factors: Sequence[np.ndarray]) -> np.ndarray:
    """
    Kronecker product of a sequence of matrices, left to right.

    Parameters
    ----------
    factors : Sequence[np.ndarray]
        Non-empty sequence of 2D arrays

    Returns
    -------
    K : np.ndarray
        ``factors[0] ⊗ factors[1] ⊗ ... ⊗ factors[-1]``

    Raises
    ------
    ValueError
        If ``factors`` is empty

    Examples
    --------
    >>> K = kron_chain([np.eye(2), np.ones((1, 3))])
    >>> K.shape
    (2, 6)
    """
    if len(factors) == 0:
        raise ValueError("kron_chain needs at least one factor")

    result = np.asarray(factors[0], dtype=np.float64)
    for factor in factors[1:]:
        result = np.kron(result, factor)
    return result


def mode_operator(order: int, dim: int, block: np.ndarray, position: int) -> np.ndarray:
    """
    Kronecker product of ``order - 1`` factors with ``block`` at ``position``.

    All other factors are ``I_J``. The block is expected to act on two
    consecutive modes (its column count is ``dim**2``), so the operator acts
    on the full ``dim**order`` vectorization.

    Parameters
    ----------
    order : int
        Tensor order D (>= 2)
    dim : int
        Mode dimension J
    block : np.ndarray
        Block matrix with ``dim**2`` columns
    position : int
        1-based factor index in ``[1, order - 1]``

    Returns
    -------
    A_k : np.ndarray
        Matrix of shape (block.shape[0] * J**(D-2), J**D)

    Examples
    --------
    >>> S = strict_lower_selector(3)
    >>> mode_operator(4, 3, S, position=2).shape
    (27, 81)
    """
    n_factors = order - 1
    if not 1 <= position <= n_factors:
        raise ValueError(f"position must be in [1, {n_factors}], got {position}")
    if block.shape[1] != dim**2:
        raise ValueError(f"block must have {dim**2} columns, got shape {block.shape}")

    identity = np.eye(dim)
    factors = [block if j == position else identity for j in range(1, n_factors + 1)]
    return kron_chain(factors)


def strict_lower_selector(dim: int) -> np.ndarray:
    """
    Selector ``S`` of the strictly increasing index pairs of a J x J matrix.

    ``S`` has shape (J(J-1)/2, J**2) and a single 1 per row: row ``r`` selects
    the entry ``(i, j)`` with ``i < j`` at column ``i + j * J`` (column-major
    position of ``W[i, j]``). Rows are ordered by ``i``, then ``j``.

    ``S @ vec(W) = 0`` forces every entry above the diagonal to zero, i.e.
    makes ``W`` lower triangular.

    Examples
    --------
    >>> strict_lower_selector(2)
    array([[0., 0., 1., 0.]])
    """
    S = np.zeros((dim * (dim - 1) // 2, dim**2))
    row = 0
    for i in range(dim - 1):
        for j in range(i + 1, dim):
            S[row, i + j * dim] = 1.0
            row += 1
    return S
