"""
Tests for the lower triangular tensor sampler.

These tests verify:
1. Zero pattern of the samples (strictly increasing consecutive pairs vanish)
2. Basis width C(J+D-1, D), against brute-force nullspaces of the explicit A
3. The D=2, J=2 end-to-end case with A = [0, 0, 1, 0]
4. Configuration (zero tolerance, rank checks, verbosity)
"""

from math import comb

import pytest
import numpy as np
from numpy.testing import assert_allclose

from tensorprior import (
    InvalidShapeError,
    NumericalInstabilityError,
    SamplerConfig,
    sample_triangular,
    triangular_basis,
    triangular_basis_width,
)
from tensorprior.constraints import triangular_constraint_matrix
from tensorprior.linalg import null_space_basis
from tensorprior.utils.shapes import vectorize


def increasing_pair_mask(order: int, dim: int) -> np.ndarray:
    """True where some consecutive index pair is strictly increasing."""
    idx = np.indices((dim,) * order)
    mask = np.zeros((dim,) * order, dtype=bool)
    for d in range(order - 1):
        mask |= idx[d] < idx[d + 1]
    return mask


class TestTriangularConstraint:
    """Samples must be lower triangular."""

    @pytest.mark.parametrize("order", [2, 3, 4, 5])
    @pytest.mark.parametrize("dim", [2, 3])
    def test_zero_pattern(self, order, dim):
        """Entries with a strictly increasing consecutive pair are zero."""
        rng = np.random.default_rng(42)
        W = sample_triangular(order, dim, rng=rng)

        mask = increasing_pair_mask(order, dim)
        assert np.max(np.abs(W[mask]), initial=0.0) < 1e-8

    @pytest.mark.parametrize("order, dim", [(2, 6), (3, 4), (3, 5), (4, 4)])
    def test_zero_pattern_larger_dims(self, order, dim):
        """Zero pattern holds for larger dimensions as well."""
        W = sample_triangular(order, dim, rng=np.random.default_rng(0))

        assert np.max(np.abs(W[increasing_pair_mask(order, dim)])) < 1e-8

    def test_matrix_case_is_lower_triangular(self):
        """For D=2 the sample is a lower triangular matrix."""
        W = sample_triangular(2, 6, rng=np.random.default_rng(1))

        assert_allclose(np.triu(W, k=1), 0.0, atol=1e-8)
        assert np.all(np.abs(np.diag(W)) > 0)

    @pytest.mark.parametrize("order, dim", [(2, 3), (3, 2), (3, 3), (4, 2)])
    def test_explicit_constraint_satisfied(self, order, dim):
        """A vec(W) = 0 with the explicitly stacked A."""
        A = triangular_constraint_matrix(order, dim)
        W = sample_triangular(order, dim, rng=np.random.default_rng(3))

        assert_allclose(A @ vectorize(W), 0.0, atol=1e-8)

    def test_shape(self):
        """Output shape is (J,)*D."""
        for order in range(2, 6):
            W = sample_triangular(order, 2, rng=np.random.default_rng(0))
            assert W.shape == (2,) * order


class TestTriangularBasis:
    """Recursive basis construction."""

    def test_width_formula(self):
        """C(J+D-1, D) counts the non-increasing index sequences."""
        assert triangular_basis_width(2, 2) == 3
        assert triangular_basis_width(2, 6) == 21
        assert triangular_basis_width(3, 3) == 10
        assert triangular_basis_width(5, 6) == comb(10, 5)

    @pytest.mark.parametrize("order, dim", [(2, 2), (2, 5), (3, 2), (3, 3), (4, 2), (4, 3)])
    def test_width_matches_brute_force(self, order, dim):
        """Recursive basis has the same width as nullspace(A) with A built explicitly."""
        V = triangular_basis(order, dim)
        V_brute = null_space_basis(triangular_constraint_matrix(order, dim))

        assert V.shape == (dim**order, V_brute.shape[1])
        assert V.shape[1] == triangular_basis_width(order, dim)

    @pytest.mark.parametrize("order, dim", [(3, 3), (4, 2)])
    def test_same_subspace_as_brute_force(self, order, dim):
        """Recursive and brute-force bases span the same subspace."""
        V = triangular_basis(order, dim)
        V_brute = null_space_basis(triangular_constraint_matrix(order, dim))

        # Orthogonal projectors onto the two column spaces coincide
        assert_allclose(V @ V.T, V_brute @ V_brute.T, atol=1e-8)

    def test_basis_orthonormal(self):
        """Products of orthonormal nullspace bases stay orthonormal."""
        V = triangular_basis(4, 3)
        assert_allclose(V.T @ V, np.eye(V.shape[1]), atol=1e-8)

    def test_basis_small_entries_cleaned(self):
        """No entry survives with magnitude below zero_tol."""
        V = triangular_basis(4, 3)
        nonzero = np.abs(V[V != 0])

        assert np.all(nonzero >= 1e-10)

    def test_constrained_rows_exactly_zero(self):
        """Rows of constrained entries are cleaned to exact zeros."""
        order, dim = 3, 3
        V = triangular_basis(order, dim)
        constrained = vectorize(increasing_pair_mask(order, dim))

        assert np.all(V[constrained] == 0.0)


class TestTriangularEndToEnd:
    """D=2, J=2: A = [0, 0, 1, 0] zeroes W[0, 1]."""

    def test_explicit_matrix(self):
        """The explicit A selects the strictly upper entry (0, 1)."""
        assert_allclose(triangular_constraint_matrix(2, 2), [[0.0, 0.0, 1.0, 0.0]])

    def test_basis_has_three_columns(self):
        """Three free entries remain: (0,0), (1,0), (1,1)."""
        V = triangular_basis(2, 2)
        V_brute = null_space_basis(np.array([[0.0, 0.0, 1.0, 0.0]]))

        assert V.shape == (4, 3)
        assert V_brute.shape == (4, 3)

    def test_sample_entries(self):
        """W[0,1] vanishes, the other three entries are free."""
        rng = np.random.default_rng(2024)
        samples = np.stack([sample_triangular(2, 2, rng=rng) for _ in range(20)])

        assert np.max(np.abs(samples[:, 0, 1])) < 1e-8
        for i, j in [(0, 0), (1, 0), (1, 1)]:
            assert np.all(np.abs(samples[:, i, j]) > 0)
            # Free entries actually vary between draws
            assert np.std(samples[:, i, j]) > 1e-3


class TestTriangularConfig:
    """Configuration and error handling."""

    @pytest.mark.parametrize("order, dim", [(1, 3), (6, 3), (3, 1), (3, 7)])
    def test_out_of_range(self, order, dim):
        """Order outside [2,5] or dim outside [2,6] raises."""
        with pytest.raises(InvalidShapeError):
            sample_triangular(order, dim)

    def test_reproducible_with_seed(self):
        """Same seed gives the same sample."""
        W1 = sample_triangular(3, 3, rng=123)
        W2 = sample_triangular(3, 3, rng=123)

        assert_allclose(W1, W2)

    def test_rank_check_raises(self, monkeypatch):
        """A basis with the wrong width is reported."""
        from tensorprior.samplers import triangular

        real_null_space = triangular.null_space_basis

        def truncated(matrix, rcond=None):
            return real_null_space(matrix, rcond=rcond)[:, :-1]

        monkeypatch.setattr(triangular, "null_space_basis", truncated)

        with pytest.raises(NumericalInstabilityError, match="expected 6"):
            triangular_basis(2, 3)

    def test_rank_check_disabled(self, monkeypatch):
        """check_rank=False returns the inconsistent basis as-is."""
        from tensorprior.samplers import triangular

        real_null_space = triangular.null_space_basis

        def truncated(matrix, rcond=None):
            return real_null_space(matrix, rcond=rcond)[:, :-1]

        monkeypatch.setattr(triangular, "null_space_basis", truncated)

        V = triangular_basis(2, 3, SamplerConfig(check_rank=False))
        assert V.shape == (9, 5)

    def test_non_strict_allows_order_six(self):
        """strict_ranges=False accepts D=6 with a warning."""
        config = SamplerConfig(strict_ranges=False)

        with pytest.warns(UserWarning, match="exceeds"):
            W = sample_triangular(6, 2, rng=0, config=config)

        assert W.shape == (2,) * 6
        assert np.max(np.abs(W[increasing_pair_mask(6, 2)])) < 1e-8

    def test_verbose_prints_blocks(self, capsys):
        """verbose=True reports the basis shape after each block."""
        triangular_basis(4, 2, SamplerConfig(verbose=True))
        out = capsys.readouterr().out

        assert "Block 2/3" in out
        assert "Block 3/3" in out
