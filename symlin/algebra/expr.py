"""
Expression trees in sum-of-products / product-of-sums normal form.

Every expression is one of three node kinds:

- ``Variable`` (leaf, see ``symlin.algebra.variable``)
- ``SumOfProducts``: ``-(a + b + ...)`` if ``sign`` else ``(a + b + ...)``
- ``ProductOfSums``: ``1 / (a * b * ...)`` if ``power`` else ``(a * b * ...)``

Arithmetic never mutates an operand. Combining two sums concatenates their
summands, combining two products concatenates their factors, and mixing the
two promotes the operation by wrapping the other side. Negation of a sum and
reciprocal of a product only flip a flag. No expansion or distribution is
ever performed, so ``(a + b) * (c + d)`` stays a two-factor product.

Examples:
    a, b = VariableSource("a", 2).variable, VariableSource("b", 3).variable
    e = (a + b) / a          # ProductOfSums((a + b), [a^(-1)])
    e.evaluate()             # (2.5+0j)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np

from symlin import complexnum
from symlin.algebra.types import ExprKind

# Per-call evaluation cache: node id -> value
Memo = dict[int, complex]


@dataclass(frozen=True, eq=False, repr=False)
class Expression(ABC):
    """
    Base class for all expression nodes.

    Nodes compare and hash by identity. Subclasses only override the
    operations their normal form can perform without wrapping.
    """

    kind: ClassVar[ExprKind]

    def evaluate(self) -> complex:
        """
        Fold the tree to a single ``complex128`` using current leaf values.

        Shared sub-trees are evaluated once per call. Division by a zero
        value yields ``inf``/``nan`` instead of raising.
        """
        with np.errstate(all="ignore"):
            return fold(self, {})

    @property
    @abstractmethod
    def children(self) -> tuple[Expression, ...]:
        """Direct operands of this node (empty for leaves)."""

    @abstractmethod
    def _combine(self, values: list[complex]) -> complex:
        """Value of this node given the values of its children, in order."""

    def negate(self) -> Expression:
        """Return ``-self``."""
        return SumOfProducts((self,), sign=True)

    def reciprocal(self) -> Expression:
        """Return ``1 / self``."""
        return ProductOfSums((self,), power=True)

    def add(self, other: Expression) -> Expression:
        """Return ``self + other``."""
        return SumOfProducts((self,)).add(other)

    def subtract(self, other: Expression) -> Expression:
        """Return ``self - other``."""
        return self.add(other.negate())

    def multiply(self, other: Expression) -> Expression:
        """Return ``self * other``."""
        return ProductOfSums((self,)).multiply(other)

    def divide(self, other: Expression) -> Expression:
        """Return ``self / other``."""
        return self.multiply(other.reciprocal())

    # Arithmetic operators - plain numbers become constant leaves
    def __add__(self, other: Any) -> Expression:
        return self.add(_as_expression(other))

    def __radd__(self, other: Any) -> Expression:
        return _as_expression(other).add(self)

    def __sub__(self, other: Any) -> Expression:
        return self.subtract(_as_expression(other))

    def __rsub__(self, other: Any) -> Expression:
        return _as_expression(other).subtract(self)

    def __mul__(self, other: Any) -> Expression:
        return self.multiply(_as_expression(other))

    def __rmul__(self, other: Any) -> Expression:
        return _as_expression(other).multiply(self)

    def __truediv__(self, other: Any) -> Expression:
        return self.divide(_as_expression(other))

    def __rtruediv__(self, other: Any) -> Expression:
        return _as_expression(other).divide(self)

    def __neg__(self) -> Expression:
        return self.negate()

    def __pos__(self) -> Expression:
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


def _as_expression(x: Any) -> Expression:
    # Import here to avoid circular imports
    from symlin.algebra.helpers import as_expression

    return as_expression(x)


def fold(root: Expression, memo: Memo) -> complex:
    """
    Evaluate ``root`` with an explicit stack, caching every node in ``memo``.

    Nodes already in ``memo`` are not revisited, so passing one memo to
    several calls evaluates a shared DAG once. Callers are responsible for
    ``np.errstate``; see ``Expression.evaluate``.
    """
    stack: list[tuple[Expression, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        key = id(node)
        if key in memo:
            continue
        children = node.children
        if expanded or not children:
            memo[key] = node._combine([memo[id(child)] for child in children])
        else:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children) if id(child) not in memo)
    return memo[id(root)]


@dataclass(frozen=True, eq=False, repr=False)
class SumOfProducts(Expression):
    """
    Signed sum of expressions.

    ``sign`` set means the whole sum is negated. An empty sum is zero.
    Summands are stored as given; a single summand is not unwrapped and a
    nested sum is only flattened when two sums are added together.
    """

    kind: ClassVar[ExprKind] = ExprKind.SUM

    summands: tuple[Expression, ...] = ()
    sign: bool = False

    @classmethod
    def of(cls, *summands: Expression) -> SumOfProducts:
        """Sum of the given expressions: ``of()``, ``of(a)``, ``of(a, b)``, ..."""
        return cls(summands)

    @property
    def children(self) -> tuple[Expression, ...]:
        return self.summands

    def _combine(self, values: list[complex]) -> complex:
        total = complexnum.ZERO
        for value in values:
            total = total + value
        return -total if self.sign else total

    def negate(self) -> Expression:
        return SumOfProducts(self.summands, not self.sign)

    def add(self, other: Expression) -> Expression:
        if other.kind == ExprKind.SUM:
            if self.sign == other.sign:
                extra = other.summands
            else:
                extra = tuple(summand.negate() for summand in other.summands)
            return SumOfProducts(self.summands + extra, self.sign)
        return self.add(SumOfProducts((other,)))

    def __str__(self) -> str:
        if not self.summands:
            return "0"
        body = "(" + " + ".join(str(s) for s in self.summands) + ")"
        return f"-{body}" if self.sign else body


@dataclass(frozen=True, eq=False, repr=False)
class ProductOfSums(Expression):
    """
    Product of expressions, optionally raised to the power -1.

    ``power`` set means the whole product is reciprocated. An empty product
    is one; the elimination engines rely on this to place a literal unit
    pivot without an operand.
    """

    kind: ClassVar[ExprKind] = ExprKind.PRODUCT

    factors: tuple[Expression, ...] = ()
    power: bool = False

    @classmethod
    def of(cls, *factors: Expression) -> ProductOfSums:
        """Product of the given expressions: ``of()``, ``of(a)``, ``of(a, b)``, ..."""
        return cls(factors)

    @property
    def children(self) -> tuple[Expression, ...]:
        return self.factors

    def _combine(self, values: list[complex]) -> complex:
        total = complexnum.ONE
        for value in values:
            total = total * value
        return complexnum.reciprocal(total) if self.power else total

    def reciprocal(self) -> Expression:
        return ProductOfSums(self.factors, not self.power)

    def multiply(self, other: Expression) -> Expression:
        if other.kind == ExprKind.PRODUCT:
            if self.power == other.power:
                extra = other.factors
            else:
                extra = tuple(factor.reciprocal() for factor in other.factors)
            return ProductOfSums(self.factors + extra, self.power)
        return self.multiply(ProductOfSums((other,)))

    def __str__(self) -> str:
        if not self.factors:
            return "1"
        body = "(" + " * ".join(str(f) for f in self.factors) + ")"
        return f"[{body}^(-1)]" if self.power else body
