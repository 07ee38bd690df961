"""Right nullspace bases computed with SciPy's SVD."""

from __future__ import annotations

import numpy as np
from scipy.linalg import LinAlgError, null_space

from tensorprior.errors import NumericalInstabilityError


def null_space_basis(matrix: np.ndarray, rcond: float | None = None) -> np.ndarray:
    """Return an orthonormal column basis for the right null space of ``matrix``.

    Output shape is ``(n_cols, nullity)`` with columns ``v`` satisfying
    ``matrix @ v = 0``. Singular values below ``rcond * s_max`` count as zero;
    ``rcond=None`` keeps SciPy's default (``max(M, N) * eps``).
    """
    mat = np.asarray(matrix, dtype=float)
    if mat.ndim != 2:
        raise ValueError("matrix must be 2D.")
    if mat.shape[0] == 0:
        return np.eye(mat.shape[1])

    try:
        if rcond is None:
            return null_space(mat)
        return null_space(mat, rcond=rcond)
    except LinAlgError as exc:
        raise NumericalInstabilityError(
            f"SVD did not converge for matrix of shape {mat.shape}"
        ) from exc


def zero_small_entries(matrix: np.ndarray, tol: float) -> np.ndarray:
    """Copy of ``matrix`` with entries of magnitude below ``tol`` set to zero."""
    cleaned = np.array(matrix, dtype=float, copy=True)
    cleaned[np.abs(cleaned) < tol] = 0.0
    return cleaned
