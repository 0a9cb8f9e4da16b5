"""
Expression algebra.

Closed set of node kinds (``Variable``, ``SumOfProducts``,
``ProductOfSums``) combined with ``add/subtract/multiply/divide`` and
``negate/reciprocal`` into lazily evaluated trees.
"""

from symlin.algebra.types import ExprKind
from symlin.algebra.expr import Expression, SumOfProducts, ProductOfSums
from symlin.algebra.variable import Variable, VariableSource, ValueCell
from symlin.algebra.helpers import (
    as_expression,
    expression_array,
    evaluate_vector,
    evaluate_matrix,
    iter_variables,
)

__all__ = [
    "ExprKind",
    "Expression",
    "SumOfProducts",
    "ProductOfSums",
    "Variable",
    "VariableSource",
    "ValueCell",
    "as_expression",
    "expression_array",
    "evaluate_vector",
    "evaluate_matrix",
    "iter_variables",
]
