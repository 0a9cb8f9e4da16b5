"""
Symlin - Symbolic and numeric linear systems over a lazy expression algebra

Describe a square system A x = b whose entries are expressions built from
shared, externally mutable leaves, solve it once, and re-evaluate the
solution whenever the leaf values change.
"""

import logging

from beartype.claw import beartype_package

beartype_package(__name__)

__version__ = "0.1.0"

from . import complexnum
from . import algebra
from . import linear
from .errors import SymlinError, InvalidSystemError, SingularSystemError
from .algebra import (
    Expression,
    ExprKind,
    SumOfProducts,
    ProductOfSums,
    Variable,
    VariableSource,
)
from .linear import gauss_jordan_solve, numeric_solve, residual

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "complexnum",
    "algebra",
    "linear",
    # Errors
    "SymlinError",
    "InvalidSystemError",
    "SingularSystemError",
    # Expressions
    "Expression",
    "ExprKind",
    "SumOfProducts",
    "ProductOfSums",
    "Variable",
    "VariableSource",
    # Solvers
    "gauss_jordan_solve",
    "numeric_solve",
    "residual",
    "__version__",
]
