"""
Buffers shared by the elimination engines.

Both engines take a square coefficient matrix and a free-term vector, reduce
them in place, and leave the solution in the free-term buffer. NumPy arrays
of the right dtype are reduced in place; anything else (nested lists, arrays
of another dtype) is copied and the solution is written back into the
caller's free-term container where it can hold it.
"""

import logging
from typing import Any

import numpy as np
from beartype import beartype

from symlin.algebra.expr import Expression
from symlin.algebra.helpers import as_expression, evaluate_matrix, evaluate_vector, expression_array
from symlin.errors import InvalidSystemError

logger = logging.getLogger(__name__)


def check_system_shape(coefficients: Any, free_terms: Any) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """
    Raise ``InvalidSystemError`` unless the buffers describe an n x n system.

    Returns the shapes of both buffers.
    """
    if coefficients is None or free_terms is None:
        raise InvalidSystemError("coefficients and free_terms must both be provided")
    a_shape = np.shape(np.asarray(coefficients, dtype=object))
    b_shape = np.shape(np.asarray(free_terms, dtype=object))
    if len(a_shape) != 2 or a_shape[0] != a_shape[1]:
        raise InvalidSystemError(f"coefficients is not a square matrix (shape {a_shape})")
    if len(b_shape) != 1 or b_shape[0] != a_shape[0]:
        raise InvalidSystemError(
            f"free_terms has shape {b_shape}, expected ({a_shape[0]},) to match coefficients"
        )
    return a_shape, b_shape


def expression_buffer(values: Any) -> np.ndarray:
    """Object array of expressions; an object ndarray is converted and reused in place."""
    if isinstance(values, np.ndarray) and values.dtype == object:
        for index in np.ndindex(values.shape):
            if not isinstance(values[index], Expression):
                values[index] = as_expression(values[index])
        return values
    return expression_array(values)


def complex_buffer(values: Any) -> np.ndarray:
    """``complex128`` array; a ``complex128`` ndarray is reused in place."""
    if isinstance(values, np.ndarray) and values.dtype == np.complex128:
        return values
    source = np.asarray(values)
    if source.dtype == object:
        return evaluate_matrix(source) if source.ndim == 2 else evaluate_vector(source)
    return np.array(source, dtype=np.complex128)


def write_back(target: Any, solution: np.ndarray) -> None:
    """
    Copy the solution into the caller's free-term container if it was not reduced in place.

    Lists always receive it. An ndarray whose dtype cannot hold the solution
    (e.g. ``float64`` for a complex result) is left unchanged.
    """
    if target is solution:
        return
    if isinstance(target, list):
        target[:] = solution.tolist()
    elif isinstance(target, np.ndarray) and np.can_cast(solution.dtype, target.dtype):
        target[...] = solution
    else:
        logger.debug(
            "solution not written back: free_terms of type %s cannot hold %s",
            getattr(target, "dtype", type(target).__name__),
            solution.dtype,
        )


class EliminationSystem:
    """
    State shared by one run of an elimination engine.

    Holds the (possibly converted) coefficient matrix and free-term vector.
    An instance is single-use: ``solve`` consumes it.
    """

    def __init__(self, coefficients: np.ndarray, free_terms: np.ndarray) -> None:
        self.coefficients = coefficients
        self.free_terms = free_terms

    @property
    def size(self) -> int:
        """Number of equations."""
        return self.free_terms.shape[0]


@beartype
def residual(coefficients: Any, solution: Any, free_terms: Any) -> np.ndarray:
    """
    ``A @ x - b`` evaluated numerically.

    Any of the three may hold expressions; they are evaluated first. Pass
    copies of the original buffers: the solvers overwrite them.
    """
    check_system_shape(coefficients, free_terms)
    a = complex_buffer(coefficients)
    x = complex_buffer(solution)
    b = complex_buffer(free_terms)
    return a @ x - b
