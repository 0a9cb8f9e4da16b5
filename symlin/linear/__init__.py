"""
Linear-system solvers.

- ``gauss_jordan_solve``: generic engine over expressions, the solution is a
  vector of re-evaluatable expressions
- ``numeric_solve``: ``complex128`` engine with partial pivoting and optional
  identity-equation removal
"""

from symlin.linear.system import EliminationSystem, check_system_shape, residual
from symlin.linear.gauss_jordan import GaussJordanEliminator, gauss_jordan_solve
from symlin.linear.numeric import NumericEliminator, numeric_solve

__all__ = [
    "EliminationSystem",
    "check_system_shape",
    "residual",
    "GaussJordanEliminator",
    "gauss_jordan_solve",
    "NumericEliminator",
    "numeric_solve",
]
