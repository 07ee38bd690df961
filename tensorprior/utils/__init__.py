"""
Utility functions for structured tensor sampling.

This module provides helper functions for:
- Column-major vectorization of cubical tensors
- (order, dimension) range validation
"""

from tensorprior.utils.shapes import (
    tensor_shape,
    unvectorize,
    validate_order_dim,
    vectorize,
)

__all__ = [
    "tensor_shape",
    "unvectorize",
    "validate_order_dim",
    "vectorize",
]
