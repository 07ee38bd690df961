"""
Configuration and random-source handling shared by all samplers.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

HANKEL_BACKENDS = ("numpy", "numba")


@dataclass
class SamplerConfig:
    """
    Configuration for structured tensor samplers.

    Parameters
    ----------
    zero_tol : float, default=1e-10
        Basis entries with magnitude below this value are set to zero after
        the recursive nullspace construction of the triangular sampler
    rcond : float, optional
        Relative singular-value cutoff for nullspace computations
        (None keeps SciPy's ``max(M, N) * eps``)
    check_rank : bool, default=True
        Verify basis widths against the theoretical solution-space dimension
    strict_ranges : bool, default=True
        Reject (order, dim) outside a family's supported range. If False,
        larger values are accepted with a UserWarning
    hankel_backend : str, default='numpy'
        Builder for the Hankel incidence basis: 'numpy' or 'numba'
    verbose : bool, default=False
        Print basis sizes while sampling
    """

    zero_tol: float = 1e-10
    rcond: float | None = None
    check_rank: bool = True
    strict_ranges: bool = True
    hankel_backend: str = "numpy"
    verbose: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if self.zero_tol < 0:
            raise ValueError("zero_tol must be non-negative")
        if self.rcond is not None and not (0 <= self.rcond < 1):
            raise ValueError("rcond must be in [0, 1)")
        if self.hankel_backend not in HANKEL_BACKENDS:
            raise ValueError(f"hankel_backend must be one of {HANKEL_BACKENDS}")


def resolve_config(config: SamplerConfig | None) -> SamplerConfig:
    """Return ``config`` or the default configuration."""
    return SamplerConfig() if config is None else config


def resolve_rng(rng: np.random.Generator | int | None) -> np.random.Generator:
    """
    Normalize a random source to a ``np.random.Generator``.

    Accepts an existing Generator (used as-is), an integer seed, or None for
    fresh OS entropy.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)
