"""
Helpers for converting to expressions and evaluating arrays of them.
"""

from collections.abc import Iterator
from typing import Any

import numpy as np
from beartype import beartype

from symlin.algebra.expr import Expression, Memo, fold
from symlin.algebra.types import ExprKind
from symlin.algebra.variable import Variable


@beartype
def as_expression(x: Any) -> Expression:
    """Pass expressions through; turn numeric scalars into constant leaves."""
    if isinstance(x, Expression):
        return x
    if isinstance(x, (bool, np.bool_)):
        raise TypeError(f"Cannot convert {type(x)} to Expression")
    if isinstance(x, (int, float, complex, np.number)):
        return Variable.constant(x)
    if isinstance(x, np.ndarray) and x.size == 1:
        return as_expression(x.flat[0])
    raise TypeError(f"Cannot convert {type(x)} to Expression")


@beartype
def expression_array(values: Any) -> np.ndarray:
    """
    Object array of expressions with the shape of ``values``.

    Numbers become constant leaves, so a numeric matrix can be fed to the
    generic elimination engine:

        A = expression_array([[2, 1], [1, 3]])
    """
    source = np.asarray(values, dtype=object)
    result = np.empty(source.shape, dtype=object)
    for index in np.ndindex(source.shape):
        result[index] = as_expression(source[index])
    return result


@beartype
def evaluate_vector(expressions: Any) -> np.ndarray:
    """
    Evaluate a 1-D sequence of expressions into a ``complex128`` vector.

    Sub-trees shared between entries (as left by elimination) are evaluated once.
    """
    # Converted leaves stay referenced so their ids stay unique in the memo
    items = [as_expression(expr) for expr in expressions]
    memo: Memo = {}
    result = np.empty(len(items), dtype=np.complex128)
    with np.errstate(all="ignore"):
        for i, expr in enumerate(items):
            result[i] = fold(expr, memo)
    return result


@beartype
def evaluate_matrix(expressions: Any) -> np.ndarray:
    """Evaluate a 2-D array (or nested lists) of expressions into a ``complex128`` matrix."""
    source = np.asarray(expressions, dtype=object)
    if source.ndim != 2:
        raise ValueError(f"Expected a 2-D array of expressions, got shape {source.shape}")
    items = expression_array(source)
    memo: Memo = {}
    result = np.empty(source.shape, dtype=np.complex128)
    with np.errstate(all="ignore"):
        for index in np.ndindex(source.shape):
            result[index] = fold(items[index], memo)
    return result


def iter_variables(expr: Expression) -> Iterator[Variable]:
    """
    Yield the distinct leaves of ``expr`` in depth-first order.

    Variables sharing one cell are reported once (the first one met).
    Shared sub-trees are walked once.
    """
    seen_nodes: set[int] = set()
    seen_cells: set[int] = set()
    stack: list[Expression] = [expr]
    while stack:
        node = stack.pop()
        if id(node) in seen_nodes:
            continue
        seen_nodes.add(id(node))
        if node.kind == ExprKind.VARIABLE:
            if node.cell_key not in seen_cells:
                seen_cells.add(node.cell_key)
                yield node
        elif node.kind in (ExprKind.SUM, ExprKind.PRODUCT):
            stack.extend(reversed(node.children))
        else:
            raise TypeError(f"Unsupported expression type: {type(node)}")
