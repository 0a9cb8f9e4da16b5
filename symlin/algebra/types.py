"""
Type definitions for the expression algebra.
"""

from enum import Enum, auto


class ExprKind(Enum):
    """Kind of expression node. The set is closed."""

    VARIABLE = auto()  # Leaf reading a shared complex cell
    SUM = auto()  # SumOfProducts: signed sum of children
    PRODUCT = auto()  # ProductOfSums: product of children, optionally reciprocated
