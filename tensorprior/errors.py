"""
Exceptions raised by the structured tensor samplers.

Both exceptions derive from the built-in types callers already catch
(``ValueError`` for bad arguments, ``RuntimeError`` for numerical failures),
so code written against plain NumPy/SciPy error handling keeps working.
"""


class InvalidShapeError(ValueError):
    """Order ``D`` or dimension ``J`` outside the range supported by a sampler."""


class NumericalInstabilityError(RuntimeError):
    """
    A nullspace computation failed or produced an inconsistent basis.

    Raised when the SVD does not converge, when a basis has a column count
    different from the theoretical dimension of the solution space, or when
    a linear system ``A w = b`` has no solution within tolerance.
    """
