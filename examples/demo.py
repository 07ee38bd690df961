"""
Interactive-style demo: resample on every (family, order, dim) change.

A front end with sliders would call ``sample_tensor`` from its change
handler; here the "events" are a fixed list replayed in order.

Usage:
    python examples/demo.py
"""

import numpy as np

from tensorprior import SAMPLERS, sample_fixed_sum, sample_tensor

np.set_printoptions(precision=3, suppress=True, linewidth=120)


def on_change(family: str, order: int, dim: int, rng: np.random.Generator) -> None:
    """Handler a slider would trigger."""
    W = sample_tensor(family, order, dim, rng=rng)
    print(f"\n{family}: order {order}, dimension {dim}, shape {W.shape}")
    if order == 2:
        print(W)


def main() -> None:
    rng = np.random.default_rng()

    print("Supported ranges")
    for family, spec in SAMPLERS.items():
        print(f"  {family.value:>10}: D in {spec.order_range}, J in {spec.dim_range}")

    events = [
        ("triangular", 2, 2),
        ("triangular", 2, 5),
        ("triangular", 3, 3),
        ("fixed_sum", 2, 5),
        ("symmetric", 2, 5),
        ("symmetric", 3, 5),
        ("hankel", 2, 3),
        ("hankel", 2, 6),
        ("hankel", 4, 3),
    ]
    for family, order, dim in events:
        on_change(family, order, dim, rng)

    sample, marginal = sample_fixed_sum(3, 5, rng=rng)
    print("\nfixed_sum: order 3, dimension 5, sum over the last index:")
    print(marginal)


if __name__ == "__main__":
    main()
