"""
Explicit constraint matrices of the structured tensor families.

The samplers never build these matrices: their size grows as J**D. They are
materialized here for small cases, to verify samples against ``A vec(W) = b``
and to feed the general :class:`~tensorprior.constraints.ConstrainedGaussianPrior`.

All matrices act on the column-major vectorization ``vec(W)``.
"""

from __future__ import annotations

import numpy as np

from tensorprior.linalg import mode_operator, strict_lower_selector
from tensorprior.samplers.hankel import hankel_index_sums
from tensorprior.samplers.registry import ConstraintFamily
from tensorprior.utils.shapes import unvectorize, vectorize


def triangular_constraint_matrix(order: int, dim: int) -> np.ndarray:
    """
    Stacked blocks ``A_k = I ⊗ ... ⊗ S ⊗ ... ⊗ I`` for k = 1..D-1.

    Returns
    -------
    A : np.ndarray
        Shape ((D-1) * J(J-1)/2 * J**(D-2), J**D)

    Examples
    --------
    >>> triangular_constraint_matrix(2, 2)
    array([[0., 0., 1., 0.]])
    """
    S = strict_lower_selector(dim)
    blocks = [mode_operator(order, dim, S, position=k) for k in range(1, order)]
    return np.vstack(blocks)


def fixed_sum_constraint_matrix(order: int, dim: int) -> np.ndarray:
    """
    ``A = 1_J^T ⊗ I_J ⊗ ... ⊗ I_J``: sums over the last mode.

    Returns
    -------
    A : np.ndarray
        Shape (J**(D-1), J**D)
    """
    return np.kron(np.ones((1, dim)), np.eye(dim ** (order - 1)))


def fixed_sum_rhs(order: int, dim: int) -> np.ndarray:
    """Right-hand side ``b = 1`` of the fixed-sum constraint."""
    return np.ones(dim ** (order - 1))


def axis_permutation_matrix(order: int, dim: int, axes: tuple[int, ...]) -> np.ndarray:
    """
    Permutation matrix of an axis transposition.

    ``P @ vectorize(W) == vectorize(W.transpose(axes))`` for every tensor W
    of shape (J,)*D.

    Parameters
    ----------
    order : int
        Tensor order D
    dim : int
        Mode dimension J
    axes : tuple[int, ...]
        Permutation of ``range(order)``, as accepted by ``np.transpose``

    Returns
    -------
    P : np.ndarray
        Shape (J**D, J**D)
    """
    if sorted(axes) != list(range(order)):
        raise ValueError(f"axes must be a permutation of range({order}), got {axes}")

    n = dim**order
    positions = unvectorize(np.arange(n), order, dim)
    source = vectorize(positions.transpose(axes))

    P = np.zeros((n, n))
    P[np.arange(n), source] = 1.0
    return P


def permutation_invariance_matrix(
    order: int, dim: int, generators: list[tuple[int, ...]] | None = None
) -> np.ndarray:
    """
    Stacked ``I - P`` for axis permutations generating a symmetry group.

    By default the adjacent transpositions (0 1), (1 2), ... are used; they
    generate the full symmetric group, so the nullspace is the space of
    symmetric tensors.

    Returns
    -------
    A : np.ndarray
        Shape (len(generators) * J**D, J**D)
    """
    if generators is None:
        generators = []
        for d in range(order - 1):
            axes = list(range(order))
            axes[d], axes[d + 1] = axes[d + 1], axes[d]
            generators.append(tuple(axes))

    identity = np.eye(dim**order)
    blocks = [identity - axis_permutation_matrix(order, dim, axes) for axes in generators]
    return np.vstack(blocks)


def hankel_constraint_matrix(order: int, dim: int) -> np.ndarray:
    """
    Equality constraints between entries sharing an index sum.

    One row ``e_a - e_b`` per pair of consecutive members ``a, b`` of each
    index-sum class, so the rows are linearly independent.

    Returns
    -------
    A : np.ndarray
        Shape (J**D - (D(J-1)+1), J**D)
    """
    sums = hankel_index_sums(order, dim)
    n = dim**order

    rows = []
    for s in range(int(sums.max()) + 1):
        members = np.flatnonzero(sums == s)
        for a, b in zip(members[:-1], members[1:]):
            row = np.zeros(n)
            row[a] = 1.0
            row[b] = -1.0
            rows.append(row)

    if not rows:
        return np.zeros((0, n))
    return np.vstack(rows)


def constraint_system(
    family: ConstraintFamily | str, order: int, dim: int
) -> tuple[np.ndarray, np.ndarray]:
    """
    Explicit ``(A, b)`` of a constraint family.

    Examples
    --------
    >>> A, b = constraint_system("fixed_sum", 2, 3)
    >>> A.shape, b.shape
    ((3, 9), (3,))
    """
    family = ConstraintFamily(family)

    if family is ConstraintFamily.TRIANGULAR:
        A = triangular_constraint_matrix(order, dim)
    elif family is ConstraintFamily.FIXED_SUM:
        return fixed_sum_constraint_matrix(order, dim), fixed_sum_rhs(order, dim)
    elif family is ConstraintFamily.SYMMETRIC:
        A = permutation_invariance_matrix(order, dim)
    else:
        A = hankel_constraint_matrix(order, dim)

    return A, np.zeros(A.shape[0])
