"""
Benchmark for the lower triangular basis construction.

Measures:
- Recursive basis time vs. order D and dimension J
- Recursive construction vs. nullspace of the explicitly built A

The basis has J^D rows, so the cost grows combinatorially with D.

Usage:
    python benchmarks/benchmark_triangular.py
"""

import time

from tensorprior import triangular_basis, triangular_basis_width
from tensorprior.constraints import triangular_constraint_matrix
from tensorprior.linalg import null_space_basis


def benchmark_recursive_scaling() -> None:
    """Benchmark recursive basis time vs. (D, J)."""
    print("=" * 70)
    print("BENCHMARK 1: Recursive Basis Time vs. Order and Dimension")
    print("=" * 70)
    print(f"{'D':>4} {'J':>4} {'Rows':>8} {'Columns':>9} {'Time (s)':>12}")
    print("-" * 45)

    for order in range(2, 6):
        for dim in range(2, 7):
            start = time.perf_counter()
            V = triangular_basis(order, dim)
            elapsed = time.perf_counter() - start

            print(f"{order:4} {dim:4} {V.shape[0]:8,} {V.shape[1]:9,} {elapsed:12.4f}")


def benchmark_recursive_vs_explicit() -> None:
    """Compare against the SVD of the full constraint matrix."""
    print("\n" + "=" * 70)
    print("BENCHMARK 2: Recursive vs. Explicit Constraint Matrix")
    print("=" * 70)
    print(f"{'D':>4} {'J':>4} {'A shape':>16} {'Recursive (s)':>15} {'Explicit (s)':>14}")
    print("-" * 60)

    for order, dim in [(3, 3), (3, 5), (4, 3), (4, 4), (5, 3)]:
        start = time.perf_counter()
        triangular_basis(order, dim)
        t_recursive = time.perf_counter() - start

        start = time.perf_counter()
        A = triangular_constraint_matrix(order, dim)
        V = null_space_basis(A)
        t_explicit = time.perf_counter() - start

        assert V.shape[1] == triangular_basis_width(order, dim)
        print(
            f"{order:4} {dim:4} {str(A.shape):>16} {t_recursive:15.4f} {t_explicit:14.4f}"
        )


if __name__ == "__main__":
    benchmark_recursive_scaling()
    benchmark_recursive_vs_explicit()
