"""
Registry of the structured tensor samplers.

Each constraint family is described by a :class:`SamplerSpec` holding its
supported (order, dim) ranges, the default values an interactive front end
should start from, and the sampling function. :func:`sample_tensor` is the
single entry point an event handler calls whenever the user changes the
family, the order or the dimension; it keeps no state between calls.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import numpy as np

from tensorprior.samplers import fixed_sum, hankel, symmetric, triangular
from tensorprior.samplers.config import SamplerConfig


class ConstraintFamily(str, Enum):
    """Structural constraint families with a closed-form prior."""

    TRIANGULAR = "triangular"
    FIXED_SUM = "fixed_sum"
    SYMMETRIC = "symmetric"
    HANKEL = "hankel"

    @property
    def is_permutation_invariant(self) -> bool:
        """True for families defined by ``(I - P) vec(W) = 0``."""
        return self in (ConstraintFamily.SYMMETRIC, ConstraintFamily.HANKEL)

    @property
    def is_homogeneous(self) -> bool:
        """True when the right-hand side ``b`` is zero."""
        return self is not ConstraintFamily.FIXED_SUM


def _sample_fixed_sum_tensor(order, dim, rng=None, config=None):
    sample, _ = fixed_sum.sample_fixed_sum(order, dim, rng=rng, config=config)
    return sample


@dataclass(frozen=True)
class SamplerSpec:
    """Supported ranges, defaults and sampling function of one family.

    Attributes:
        family: Constraint family.
        order_range: Inclusive (min, max) tensor order D.
        dim_range: Inclusive (min, max) mode dimension J.
        default_order: Initial order for interactive use.
        default_dim: Initial dimension for interactive use.
        sampler: Callable ``(order, dim, rng, config) -> np.ndarray``.
    """

    family: ConstraintFamily
    order_range: tuple[int, int]
    dim_range: tuple[int, int]
    default_order: int
    default_dim: int
    sampler: Callable[..., np.ndarray]

    def __post_init__(self):
        """Validate that the defaults lie inside the ranges."""
        if not self.order_range[0] <= self.default_order <= self.order_range[1]:
            raise ValueError("default_order must lie inside order_range")
        if not self.dim_range[0] <= self.default_dim <= self.dim_range[1]:
            raise ValueError("default_dim must lie inside dim_range")

    def sample(
        self,
        order: int | None = None,
        dim: int | None = None,
        rng: np.random.Generator | int | None = None,
        config: SamplerConfig | None = None,
    ) -> np.ndarray:
        """Sample with the given (order, dim), falling back to the defaults."""
        order = self.default_order if order is None else order
        dim = self.default_dim if dim is None else dim
        return self.sampler(order, dim, rng=rng, config=config)


SAMPLERS: dict[ConstraintFamily, SamplerSpec] = {
    ConstraintFamily.TRIANGULAR: SamplerSpec(
        family=ConstraintFamily.TRIANGULAR,
        order_range=triangular.ORDER_RANGE,
        dim_range=triangular.DIM_RANGE,
        default_order=2,
        default_dim=2,
        sampler=triangular.sample_triangular,
    ),
    ConstraintFamily.FIXED_SUM: SamplerSpec(
        family=ConstraintFamily.FIXED_SUM,
        order_range=fixed_sum.ORDER_RANGE,
        dim_range=fixed_sum.DIM_RANGE,
        default_order=2,
        default_dim=5,
        sampler=_sample_fixed_sum_tensor,
    ),
    ConstraintFamily.SYMMETRIC: SamplerSpec(
        family=ConstraintFamily.SYMMETRIC,
        order_range=symmetric.ORDER_RANGE,
        dim_range=symmetric.DIM_RANGE,
        default_order=2,
        default_dim=5,
        sampler=symmetric.sample_symmetric,
    ),
    ConstraintFamily.HANKEL: SamplerSpec(
        family=ConstraintFamily.HANKEL,
        order_range=hankel.ORDER_RANGE,
        dim_range=hankel.DIM_RANGE,
        default_order=2,
        default_dim=3,
        sampler=hankel.sample_hankel,
    ),
}


def get_sampler_spec(family: ConstraintFamily | str) -> SamplerSpec:
    """
    Look up a family by enum member or name.

    Raises
    ------
    ValueError
        If ``family`` does not name a known constraint family
    """
    try:
        key = ConstraintFamily(family)
    except ValueError:
        valid = ", ".join(f.value for f in ConstraintFamily)
        raise ValueError(f"Unknown constraint family {family!r}, expected one of: {valid}") from None
    return SAMPLERS[key]


def sample_tensor(
    family: ConstraintFamily | str,
    order: int | None = None,
    dim: int | None = None,
    rng: np.random.Generator | int | None = None,
    config: SamplerConfig | None = None,
) -> np.ndarray:
    """
    Sample a structured tensor of the given family.

    Parameters
    ----------
    family : ConstraintFamily or str
        'triangular', 'fixed_sum', 'symmetric' or 'hankel'
    order : int, optional
        Tensor order D (family default if None)
    dim : int, optional
        Mode dimension J (family default if None)
    rng : np.random.Generator, int or None
        Random source or seed
    config : SamplerConfig, optional
        Sampler configuration

    Returns
    -------
    W : np.ndarray
        Tensor of shape (J,)*D

    Examples
    --------
    >>> sample_tensor("hankel", rng=0).shape
    (3, 3)
    >>> sample_tensor(ConstraintFamily.TRIANGULAR, order=3, dim=4, rng=0).shape
    (4, 4, 4)
    """
    return get_sampler_spec(family).sample(order, dim, rng=rng, config=config)
