"""
Gaussian prior of a general (A, b)-constrained tensor.

Theorem 3.1 of the reference article: if ``A w = b`` is consistent, every
solution is ``w = w0 + V x`` with ``w0`` a particular solution and the columns
of V a basis of the right nullspace of A. With ``x ~ N(0, I)`` the samples
follow a Gaussian prior with mean ``w0`` and covariance ``V V^T`` supported on
the constrained affine subspace.

This is the brute-force counterpart of the family samplers: it factorizes A
explicitly, so it only scales to small ``J**D``.
"""

from __future__ import annotations

import numpy as np
from scipy.linalg import lstsq

from tensorprior.errors import NumericalInstabilityError
from tensorprior.linalg import null_space_basis, zero_small_entries
from tensorprior.samplers.config import resolve_rng
from tensorprior.samplers.registry import ConstraintFamily
from tensorprior.utils.shapes import unvectorize


class ConstrainedGaussianPrior:
    """Gaussian prior on the solutions of ``A w = b``.

    Parameters:
        A: Constraint matrix, shape (I, n_variables).
        b: Right-hand side, shape (I,). Zero if None.
        rcond: Relative singular-value cutoff for the nullspace.
        zero_tol: Basis entries below this magnitude are set to zero.
        atol: Absolute tolerance on the residual ``||A w0 - b||``.

    Properties:
        n_variables: Length of ``w``.
        n_free: Dimension of the solution space (number of basis columns).
        mean: Particular (minimum-norm) solution w0.
        covariance_sqrt: Basis V, so the covariance is ``V @ V.T``.

    Example:
        >>> from tensorprior.constraints import ConstrainedGaussianPrior
        >>> prior = ConstrainedGaussianPrior.from_family("fixed_sum", order=2, dim=5)
        >>> W = prior.sample_tensor(order=2, dim=5, rng=0)
        >>> bool(np.allclose(W.sum(axis=-1), 1.0))
        True
    """

    def __init__(
        self,
        A: np.ndarray,
        b: np.ndarray | None = None,
        rcond: float | None = None,
        zero_tol: float = 1e-10,
        atol: float = 1e-8,
    ):
        A = np.asarray(A, dtype=np.float64)
        if A.ndim != 2:
            raise ValueError(f"A must be 2D, got shape {A.shape}")

        if b is None:
            b = np.zeros(A.shape[0])
        b = np.asarray(b, dtype=np.float64).reshape(-1)
        if b.shape[0] != A.shape[0]:
            raise ValueError(
                f"b must have length {A.shape[0]} to match A, got {b.shape[0]}"
            )

        if A.shape[0] == 0 or not np.any(b):
            w0 = np.zeros(A.shape[1])
        else:
            w0 = lstsq(A, b)[0]
            residual = np.linalg.norm(A @ w0 - b)
            if residual > atol * max(1.0, np.linalg.norm(b)):
                raise NumericalInstabilityError(
                    f"A w = b has no solution (least-squares residual {residual:.3e})"
                )

        self.A = A
        self.b = b
        self._mean = w0
        self._basis = zero_small_entries(null_space_basis(A, rcond=rcond), zero_tol)

    @classmethod
    def from_family(
        cls, family: ConstraintFamily | str, order: int, dim: int, **kwargs
    ) -> ConstrainedGaussianPrior:
        """Build the prior from the explicit constraint system of a family."""
        from tensorprior.constraints.matrices import constraint_system

        A, b = constraint_system(family, order, dim)
        return cls(A, b, **kwargs)

    @property
    def n_variables(self) -> int:
        """Number of unknowns (columns of A)."""
        return int(self.A.shape[1])

    @property
    def n_free(self) -> int:
        """Dimension of the solution space."""
        return int(self._basis.shape[1])

    @property
    def mean(self) -> np.ndarray:
        """Particular solution w0."""
        return self._mean

    @property
    def covariance_sqrt(self) -> np.ndarray:
        """Nullspace basis V, shape (n_variables, n_free)."""
        return self._basis

    def sample(self, rng: np.random.Generator | int | None = None) -> np.ndarray:
        """Draw ``w0 + V x`` with ``x ~ N(0, I)``."""
        x = resolve_rng(rng).standard_normal(self.n_free)
        return self._mean + self._basis @ x

    def sample_tensor(
        self, order: int, dim: int, rng: np.random.Generator | int | None = None
    ) -> np.ndarray:
        """Draw a sample and reshape it to a (J,)*D tensor (column-major)."""
        return unvectorize(self.sample(rng), order, dim)

    def residual(self, w: np.ndarray) -> float:
        """Max-norm of ``A w - b``."""
        w = np.asarray(w, dtype=np.float64).reshape(-1, order="F")
        if self.A.shape[0] == 0:
            return 0.0
        return float(np.max(np.abs(self.A @ w - self.b)))

    def __repr__(self) -> str:
        return (
            f"ConstrainedGaussianPrior(n_constraints={self.A.shape[0]}, "
            f"n_variables={self.n_variables}, n_free={self.n_free})"
        )
