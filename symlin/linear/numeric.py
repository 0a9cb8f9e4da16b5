"""
Gauss-Jordan elimination over complex numbers with partial pivoting.

Same reduction as ``symlin.linear.gauss_jordan`` but on a ``complex128``
matrix, with two additions:

- best-pivot selection: the row with the largest-magnitude entry in the
  pivot column is used, not merely the first non-zero one
- identity-equation removal (opt-in): an equation whose row, column and free
  term are all exactly zero says ``0 = 0`` and leaves its variable free. Such
  equations are moved out of the active system, and their variables are
  reported as zero.

Row and column permutations are tracked in ``row_order`` / ``col_order``
index arrays (logical position -> physical index); the matrix itself is never
physically permuted. Logical column ``k`` is physical variable
``col_order[k]``, so undoing both permutations is a single scatter at the end.

Typical use is nodal analysis, where disconnected sub-networks produce zero
rows and columns in the admittance matrix:

    >>> A = np.array([[2, 0, 1], [0, 0, 0], [1, 0, 3]], dtype=complex)
    >>> b = np.array([3, 0, 4], dtype=complex)
    >>> numeric_solve(A, b, ignore_identity_equations=True)
    array([1.+0.j, 0.+0.j, 1.+0.j])
"""

import logging
from typing import Any

import numpy as np
from beartype import beartype

from symlin import complexnum
from symlin.errors import SingularSystemError
from symlin.linear.system import EliminationSystem, check_system_shape, complex_buffer, write_back

logger = logging.getLogger(__name__)


class NumericEliminator(EliminationSystem):
    """
    One run of the numeric engine over ``complex128`` buffers.

    Attributes:
        row_order: Physical row of each logical equation
        col_order: Physical column (variable) of each logical column
        active_size: Number of equations taking part in elimination
    """

    def __init__(self, coefficients: np.ndarray, free_terms: np.ndarray) -> None:
        super().__init__(coefficients, free_terms)
        self.row_order = np.arange(self.size)
        self.col_order = np.arange(self.size)
        self.active_size = self.size

    def solve(self, ignore_identity_equations: bool = False) -> np.ndarray:
        """
        Reduce the system and return the full-length solution in original variable order.

        The free-term buffer is reduced in place but, because rows are only
        permuted logically, it is not itself in variable order; use the
        returned vector.
        """
        if ignore_identity_equations:
            self._remove_identity_equations()
        self._forward_elimination()
        self._backward_elimination()
        return self._gather_solution()

    def _is_identity_equation(self, position: int) -> bool:
        row = self.row_order[position]
        col = self.col_order[position]
        a = self.coefficients
        return bool(
            complexnum.is_zero(self.free_terms[row])
            and np.all(a[row, :] == 0)
            and np.all(a[:, col] == 0)
        )

    def _remove_identity_equations(self) -> None:
        """Move every ``0 = 0`` equation (and its variable) past the end of the active system."""
        position = 0
        while position < self.active_size:
            if self._is_identity_equation(position):
                self.active_size -= 1
                last = self.active_size
                logger.debug(
                    "identity equation %d removed (variable %d is free)",
                    self.row_order[position],
                    self.col_order[position],
                )
                self._swap(self.row_order, position, last)
                self._swap(self.col_order, position, last)
            else:
                position += 1
        if self.active_size < self.size:
            logger.debug("active system size %d of %d", self.active_size, self.size)

    @staticmethod
    def _swap(order: np.ndarray, i: int, j: int) -> None:
        order[i], order[j] = order[j], order[i]

    def _select_pivot(self, position: int) -> None:
        """Bring the largest-magnitude candidate of the pivot column to ``position``."""
        rows = self.row_order[position : self.active_size]
        candidates = np.abs(self.coefficients[rows, self.col_order[position]])
        best = position + int(np.argmax(candidates))
        if best != position:
            logger.debug("pivot swap: equation %d <-> %d", position, best)
            self._swap(self.row_order, position, best)
        if complexnum.is_zero(self.coefficients[self.row_order[position], self.col_order[position]]):
            raise SingularSystemError(
                f"No non-zero pivot in column {self.col_order[position]}: "
                "the system has no unique solution",
                row=position,
            )

    def _forward_elimination(self) -> None:
        a = self.coefficients
        b = self.free_terms
        size = self.active_size
        for i in range(size):
            self._select_pivot(i)
            pivot_row = self.row_order[i]
            right = self.col_order[i + 1 : size]
            below = self.row_order[i + 1 : size]

            pivot = a[pivot_row, self.col_order[i]]
            a[pivot_row, right] /= pivot
            b[pivot_row] /= pivot
            a[pivot_row, self.col_order[i]] = 1.0

            if below.size == 0:
                continue
            multipliers = a[below, self.col_order[i]]
            a[np.ix_(below, right)] -= np.outer(multipliers, a[pivot_row, right])
            b[below] -= multipliers * b[pivot_row]

    def _backward_elimination(self) -> None:
        a = self.coefficients
        b = self.free_terms
        for i in range(self.active_size - 1, 0, -1):
            above = self.row_order[:i]
            b[above] -= a[above, self.col_order[i]] * b[self.row_order[i]]

    def _gather_solution(self) -> np.ndarray:
        solution = np.zeros(self.size, dtype=np.complex128)
        active = slice(0, self.active_size)
        solution[self.col_order[active]] = self.free_terms[self.row_order[active]]
        return solution


@beartype
def numeric_solve(
    coefficients: Any, free_terms: Any, ignore_identity_equations: bool = False
) -> np.ndarray:
    """
    Solve ``A x = b`` numerically with partial pivoting.

    Args:
        coefficients: Square matrix; a ``complex128`` ndarray is reduced in
            place, anything else (numbers or expressions) is copied
        free_terms: Vector of the same length; overwritten with the solution
            (in original variable order) when it can hold complex values
        ignore_identity_equations: Drop ``0 = 0`` equations before solving and
            report their variables as zero

    Returns:
        ``complex128`` solution vector of full length, in the caller's
        variable order.

    Raises:
        InvalidSystemError: missing buffer, non-square matrix or size mismatch
        SingularSystemError: the best pivot candidate is exactly zero
    """
    check_system_shape(coefficients, free_terms)
    a = complex_buffer(coefficients)
    b = complex_buffer(free_terms)
    eliminator = NumericEliminator(a, b)
    solution = eliminator.solve(ignore_identity_equations=ignore_identity_equations)
    write_back(free_terms, solution)
    return solution
