"""
Tests for the fixed-sum tensor sampler.

These tests verify:
1. Every fiber along the last mode sums to one
2. The returned marginal and the explicit (A, b) system
3. Agreement of the closed-form sample with the explicit block basis
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from tensorprior import InvalidShapeError, SamplerConfig, fixed_sum_basis, sample_fixed_sum
from tensorprior.constraints import fixed_sum_constraint_matrix, fixed_sum_rhs
from tensorprior.utils.shapes import vectorize


class TestFixedSumConstraint:
    """Sum over the last index is one."""

    @pytest.mark.parametrize("order", [2, 3, 4, 5])
    @pytest.mark.parametrize("dim", [5, 7, 10])
    def test_last_axis_sums_to_one(self, order, dim):
        """sample.sum(axis=-1) is all ones."""
        sample, _ = sample_fixed_sum(order, dim, rng=np.random.default_rng(42))

        assert sample.shape == (dim,) * order
        assert_allclose(sample.sum(axis=-1), np.ones((dim,) * (order - 1)), atol=1e-8)

    @pytest.mark.parametrize("order, dim", [(2, 5), (3, 6), (4, 5)])
    def test_marginal_returned(self, order, dim):
        """The marginal is the last-axis sum, of order D-1."""
        sample, marginal = sample_fixed_sum(order, dim, rng=np.random.default_rng(0))

        assert marginal.shape == (dim,) * (order - 1)
        assert_allclose(marginal, sample.sum(axis=-1))
        assert_allclose(marginal, 1.0, atol=1e-8)

    @pytest.mark.parametrize("order, dim", [(2, 5), (3, 5)])
    def test_explicit_system(self, order, dim):
        """A vec(W) = b with A = 1^T ⊗ I ⊗ ... ⊗ I, b = 1."""
        A = fixed_sum_constraint_matrix(order, dim)
        b = fixed_sum_rhs(order, dim)
        sample, _ = sample_fixed_sum(order, dim, rng=np.random.default_rng(5))

        assert A.shape == (dim ** (order - 1), dim**order)
        assert_allclose(A @ vectorize(sample), b, atol=1e-8)

    def test_samples_are_not_trivial(self):
        """The perturbation is actually applied (not only the 1/J offset)."""
        sample, _ = sample_fixed_sum(2, 5, rng=np.random.default_rng(9))

        assert np.std(sample) > 0.1
        assert not np.allclose(sample, 0.2)


class TestFixedSumBasis:
    """Closed-form basis [[I,...,I], [-I,0,...], ...]."""

    @pytest.mark.parametrize("order, dim", [(2, 5), (3, 5), (2, 8)])
    def test_basis_in_nullspace(self, order, dim):
        """A V = 0 and V has full column rank (J-1) J^(D-1)."""
        V = fixed_sum_basis(order, dim)
        A = fixed_sum_constraint_matrix(order, dim)

        assert V.shape == (dim**order, (dim - 1) * dim ** (order - 1))
        assert_allclose(A @ V, 0.0, atol=1e-12)
        assert np.linalg.matrix_rank(V) == V.shape[1]

    @pytest.mark.parametrize("order, dim", [(2, 5), (3, 6), (4, 5)])
    def test_closed_form_matches_basis(self, order, dim):
        """vec(sample) = 1/J + V vec(x) for the same standard normal draws."""
        seed = 7
        sample, _ = sample_fixed_sum(order, dim, rng=np.random.default_rng(seed))

        x = np.random.default_rng(seed).standard_normal((dim ** (order - 1), dim - 1))
        expected = 1.0 / dim + fixed_sum_basis(order, dim) @ x.reshape(-1, order="F")

        assert_allclose(vectorize(sample), expected, atol=1e-12)


class TestFixedSumConfig:
    """Range checks and configuration."""

    @pytest.mark.parametrize("order, dim", [(1, 5), (6, 5), (2, 4), (2, 11)])
    def test_out_of_range(self, order, dim):
        """Order outside [2,5] or dim outside [5,10] raises."""
        with pytest.raises(InvalidShapeError):
            sample_fixed_sum(order, dim)

    def test_non_strict_allows_larger_dim(self):
        """strict_ranges=False accepts J=11 with a warning."""
        with pytest.warns(UserWarning):
            sample, marginal = sample_fixed_sum(
                2, 11, rng=0, config=SamplerConfig(strict_ranges=False)
            )

        assert sample.shape == (11, 11)
        assert_allclose(marginal, 1.0, atol=1e-8)

    def test_verbose(self, capsys):
        """verbose=True reports the number of free parameters."""
        sample_fixed_sum(3, 5, rng=0, config=SamplerConfig(verbose=True))

        assert "100 free parameters" in capsys.readouterr().out
