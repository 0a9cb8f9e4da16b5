"""
Variable leaves and the sources that own their values.

A ``VariableSource`` owns a mutable value cell. Its ``Variable`` (and any
relabelled copy of it) reads that cell but has no way to write it, so a
symbolic solution built from variables can be re-evaluated after the
sources change:

    r = VariableSource("R", 100.0)
    v = VariableSource("V", 5.0)
    i = v.variable / r.variable
    i.evaluate()        # 0.05
    v.value = 10.0
    i.evaluate()        # 0.1, no rebuild needed

The cell lives as long as its longest holder, source or variable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

import numpy as np

from symlin import complexnum
from symlin.algebra.expr import Expression
from symlin.algebra.types import ExprKind
from symlin.complexnum import ComplexLike


class ValueCell:
    """Mutable slot holding one ``complex128``, shared by a source and its variables."""

    __slots__ = ("value",)

    def __init__(self, value: ComplexLike = 0) -> None:
        self.value = complexnum.to_complex(value)

    def __repr__(self) -> str:
        return f"ValueCell({self.value})"


def _format_value(value: complex) -> str:
    if value.imag == 0:
        return f"{value.real:g}"
    return f"({value.real:g}{value.imag:+g}j)"


@dataclass(frozen=True, eq=False, repr=False)
class Variable(Expression):
    """
    Read-only leaf referencing a shared value cell.

    Obtain one from ``VariableSource.variable`` or, for a fixed number,
    ``Variable.constant``. Constructing one directly requires a cell.
    """

    kind: ClassVar[ExprKind] = ExprKind.VARIABLE

    # Predefined constants (assigned below)
    ONE: ClassVar[Variable]
    NEGATIVE_ONE: ClassVar[Variable]
    ZERO: ClassVar[Variable]
    IMAGINARY_ONE: ClassVar[Variable]
    NEGATIVE_IMAGINARY_ONE: ClassVar[Variable]

    _cell: ValueCell = field(repr=False)
    label: Optional[str] = None
    is_constant: bool = False

    @classmethod
    def constant(cls, value: ComplexLike, label: Optional[str] = None) -> Variable:
        """Leaf with its own private cell that nothing can write."""
        return cls(ValueCell(value), label, is_constant=True)

    @property
    def value(self) -> np.complex128:
        """Current value of the referenced cell."""
        return self._cell.value

    @property
    def is_pure_real(self) -> bool:
        """True if the imaginary component of the current value is exactly zero."""
        return complexnum.is_pure_real(self._cell.value)

    @property
    def is_pure_imaginary(self) -> bool:
        """True if the real component of the current value is exactly zero."""
        return complexnum.is_pure_imaginary(self._cell.value)

    def relabel(self, label: Optional[str]) -> Variable:
        """Another read-only facade over the same cell."""
        return Variable(self._cell, label, self.is_constant)

    def shares_cell(self, other: Variable) -> bool:
        return self._cell is other._cell

    @property
    def cell_key(self) -> int:
        """Identity of the referenced cell; equal for variables sharing one."""
        return id(self._cell)

    @property
    def children(self) -> tuple[Expression, ...]:
        return ()

    def _combine(self, values: list[complex]) -> complex:
        return self._cell.value

    def __str__(self) -> str:
        if self.label:
            return self.label
        return _format_value(self._cell.value)


Variable.ONE = Variable.constant(complexnum.ONE)
Variable.NEGATIVE_ONE = Variable.constant(complexnum.NEGATIVE_ONE)
Variable.ZERO = Variable.constant(complexnum.ZERO)
Variable.IMAGINARY_ONE = Variable.constant(complexnum.IMAGINARY_ONE)
Variable.NEGATIVE_IMAGINARY_ONE = Variable.constant(complexnum.NEGATIVE_IMAGINARY_ONE)


class VariableSource:
    """
    Owner of a value cell: the only object allowed to write it.

    Args:
        label: Optional name used when printing or lowering to SymPy
        value: Initial value (any real or complex scalar)
    """

    def __init__(self, label: Optional[str] = None, value: ComplexLike = 0) -> None:
        self._cell = ValueCell(value)
        self._variable = Variable(self._cell, label)

    @property
    def label(self) -> Optional[str]:
        return self._variable.label

    @property
    def value(self) -> np.complex128:
        return self._cell.value

    @value.setter
    def value(self, value: ComplexLike) -> None:
        self._cell.value = complexnum.to_complex(value)

    @property
    def variable(self) -> Variable:
        """Read-only view of this source's value."""
        return self._variable

    def __repr__(self) -> str:
        name = self.label if self.label else "<anonymous>"
        return f"VariableSource({name}={_format_value(self._cell.value)})"
