"""
Simplified Gauss-Jordan elimination over expressions.

Works on any ``Expression`` matrix using only ``add/subtract/multiply/divide``,
so the solution it leaves in the free-term buffer is itself a vector of
expressions that can be re-evaluated whenever the underlying variables
change. Only the operations needed for the result are performed:

- forward elimination normalises each pivot row from the diagonal rightward
  and eliminates the rows below it from column ``i + 1`` onward; entries left
  of that are never read again and are not zeroed
- back substitution only updates the free terms; the coefficients above the
  diagonal are read but never rewritten

A pivot whose current value is exactly zero is repaired by swapping in the
first row below it with a non-zero entry in the same column. There is no
magnitude-based pivoting here, see ``symlin.linear.numeric`` for that.
"""

import logging
from typing import Any

import numpy as np
from beartype import beartype

from symlin import complexnum
from symlin.algebra.expr import Expression, ProductOfSums
from symlin.errors import SingularSystemError
from symlin.linear.system import EliminationSystem, check_system_shape, expression_buffer, write_back

logger = logging.getLogger(__name__)


class GaussJordanEliminator(EliminationSystem):
    """
    One run of the generic engine over object arrays of expressions.

    After ``solve`` the free-term array holds the solution expressions and
    the coefficient array is left in reduced lower-triangular form (with the
    below-diagonal entries stale).
    """

    def solve(self) -> np.ndarray:
        """Reduce the system and return the free-term array (the solution)."""
        self._forward_elimination()
        self._backward_elimination()
        return self.free_terms

    def _forward_elimination(self) -> None:
        n = self.size
        a = self.coefficients
        for i in range(n):
            if complexnum.is_zero(a[i, i].evaluate()):
                self._repair_pivot(i)
            self._divide_row_by_diagonal(i)
            for j in range(i + 1, n):
                self._subtract_rows(j, i, a[j, i], i + 1, n)

    def _backward_elimination(self) -> None:
        a = self.coefficients
        b = self.free_terms
        for i in range(self.size - 1, -1, -1):
            for j in range(i - 1, -1, -1):
                b[j] = b[j].subtract(b[i].multiply(a[j, i]))

    def _repair_pivot(self, row: int) -> None:
        """Swap ``row`` with the first row below it whose entry in column ``row`` is non-zero."""
        a = self.coefficients
        b = self.free_terms
        for candidate in range(row + 1, self.size):
            if not complexnum.is_zero(a[candidate, row].evaluate()):
                logger.debug("zero pivot at row %d, swapping with row %d", row, candidate)
                a[[row, candidate]] = a[[candidate, row]]
                b[[row, candidate]] = b[[candidate, row]]
                return
        raise SingularSystemError(
            f"No non-zero pivot in column {row}: the system has no unique solution", row=row
        )

    def _divide_row_by_diagonal(self, row: int) -> None:
        """Divide the entries right of the diagonal and the free term by the pivot."""
        a = self.coefficients
        divider = a[row, row]
        for k in range(row + 1, self.size):
            a[row, k] = a[row, k].divide(divider)
        self.free_terms[row] = self.free_terms[row].divide(divider)
        # pivot / pivot, as the empty product
        a[row, row] = ProductOfSums()

    def _subtract_rows(
        self, target: int, source: int, multiplier: Expression, start: int, stop: int
    ) -> None:
        """``row[target] -= multiplier * row[source]`` over columns ``[start, stop)`` and the free term."""
        a = self.coefficients
        b = self.free_terms
        for k in range(start, stop):
            a[target, k] = a[target, k].subtract(a[source, k].multiply(multiplier))
        b[target] = b[target].subtract(b[source].multiply(multiplier))


@beartype
def gauss_jordan_solve(coefficients: Any, free_terms: Any) -> np.ndarray:
    """
    Solve ``A x = b`` symbolically.

    Args:
        coefficients: Square matrix (object ndarray or nested lists) of
            expressions or numbers; reduced in place if it is an object ndarray
        free_terms: Vector of expressions or numbers, same length; a list or
            object ndarray is overwritten with the solution, other ndarrays
            are left unchanged

    Returns:
        Object array whose entry ``i`` is the expression for variable ``i``.
        Evaluate it (again) after changing any ``VariableSource``.

    Raises:
        InvalidSystemError: missing buffer, non-square matrix or size mismatch
        SingularSystemError: some column has no non-zero pivot candidate

    Example:
        >>> from symlin import VariableSource
        >>> g = VariableSource("G", 0.5)
        >>> i = VariableSource("I", 2.0)
        >>> x = gauss_jordan_solve([[g.variable]], [i.variable])
        >>> complex(x[0].evaluate())
        (4+0j)
    """
    check_system_shape(coefficients, free_terms)
    a = expression_buffer(coefficients)
    b = expression_buffer(free_terms)
    logger.debug("generic elimination of a %d x %d system", b.shape[0], b.shape[0])
    solution = GaussJordanEliminator(a, b).solve()
    write_back(free_terms, solution)
    return solution
