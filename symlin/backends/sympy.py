"""
SymPy backend for expression trees.

Lowers ``Variable`` / ``SumOfProducts`` / ``ProductOfSums`` trees to SymPy,
enabling:
- Simplification and pretty printing of symbolic solutions
- LaTeX export for documentation
- Vectorised evaluation over sweeps of source values with ``lambdify``

Each distinct value cell gets one ``sympy.Symbol``; variables sharing a cell
map to the same symbol. Constant leaves become SymPy numbers.
"""

from collections.abc import Callable, Sequence
from typing import Optional

import numpy as np
import sympy as sp
from sympy import lambdify, latex

from symlin.algebra.expr import Expression, ProductOfSums, SumOfProducts
from symlin.algebra.helpers import iter_variables
from symlin.algebra.variable import Variable


def _number(value: complex) -> sp.Expr:
    """SymPy number for a constant leaf value."""
    real, imag = float(value.real), float(value.imag)
    if imag == 0:
        return sp.Integer(int(real)) if real.is_integer() else sp.Float(real)
    return _number(complex(real, 0)) + sp.I * _number(complex(imag, 0))


class SympyConverter:
    """
    Converts expressions to SymPy, keeping one symbol per shared value cell.

    The same converter should be used for every expression of one system so
    that their symbols line up.

    Example:
        >>> from symlin import VariableSource
        >>> r = VariableSource("R", 100.0)
        >>> v = VariableSource("V", 5.0)
        >>> conv = SympyConverter()
        >>> conv.to_sympy(v.variable / r.variable)
        V/R
    """

    def __init__(self) -> None:
        # cell key -> symbol, in creation order
        self._symbols: dict[int, sp.Symbol] = {}
        self._leaves: dict[int, Variable] = {}
        self._names: set[str] = set()

    @property
    def symbols(self) -> dict[sp.Symbol, Variable]:
        """Symbols created so far and the variable each one stands for."""
        return {sym: self._leaves[key] for key, sym in self._symbols.items()}

    def symbol_for(self, variable: Variable) -> sp.Symbol:
        """Symbol standing for ``variable``'s cell, created on first use."""
        key = variable.cell_key
        if key not in self._symbols:
            self._symbols[key] = sp.Symbol(self._unique_name(variable.label))
            self._leaves[key] = variable
        return self._symbols[key]

    def _unique_name(self, label: Optional[str]) -> str:
        base = label if label else f"v{len(self._symbols)}"
        name = base
        suffix = 1
        while name in self._names:
            name = f"{base}_{suffix}"
            suffix += 1
        self._names.add(name)
        return name

    def to_sympy(self, expr: Expression) -> sp.Expr:
        """Convert an expression tree to a SymPy expression."""
        # Symbols are numbered in depth-first leaf order
        for leaf in iter_variables(expr):
            if not leaf.is_constant:
                self.symbol_for(leaf)
        return self._convert_expr(expr)

    def _convert_expr(self, root: Expression) -> sp.Expr:
        """Convert bottom-up with an explicit stack; shared nodes are converted once."""
        memo: dict[int, sp.Expr] = {}
        stack: list[tuple[Expression, bool]] = [(root, False)]
        while stack:
            expr, expanded = stack.pop()
            key = id(expr)
            if key in memo:
                continue
            if not expanded and expr.children:
                stack.append((expr, True))
                stack.extend((child, False) for child in reversed(expr.children) if id(child) not in memo)
                continue
            memo[key] = self._convert_node(expr, [memo[id(child)] for child in expr.children])
        return memo[id(root)]

    def _convert_node(self, expr: Expression, args: list[sp.Expr]) -> sp.Expr:
        """Convert one node whose children are already converted to ``args``."""
        if isinstance(expr, Variable):
            return _number(expr.value) if expr.is_constant else self.symbol_for(expr)

        elif isinstance(expr, SumOfProducts):
            result = sp.Add(*args)
            return -result if expr.sign else result

        elif isinstance(expr, ProductOfSums):
            result = sp.Mul(*args)
            return 1 / result if expr.power else result

        raise TypeError(f"Unsupported expression type: {type(expr)}")

    def to_latex(self, expr: Expression, simplified: bool = False) -> str:
        """LaTeX string for ``expr``, optionally simplified first."""
        sym_expr = self.to_sympy(expr)
        if simplified:
            sym_expr = sp.simplify(sym_expr)
        return latex(sym_expr)

    def substitutions(self) -> dict[sp.Symbol, complex]:
        """Current value of every known symbol's cell, for ``expr.subs(...)``."""
        return {sym: complex(self._leaves[key].value) for key, sym in self._symbols.items()}

    def lambdify(self, exprs: Sequence[Expression]) -> Callable[..., np.ndarray]:
        """
        Compile ``exprs`` to one NumPy function of all known symbols.

        The returned callable takes one argument per entry of ``symbols`` (in
        that order), scalars or equally shaped arrays, and returns an array
        with one row per expression.
        """
        converted = [self.to_sympy(e) for e in exprs]
        args = list(self._symbols.values())
        func = lambdify(args, converted, modules=["numpy"])

        def evaluate(*values):
            with np.errstate(all="ignore"):
                rows = func(*values)
            shape = np.broadcast_shapes(*[np.shape(v) for v in values])
            return np.array([np.broadcast_to(r, shape) for r in rows], dtype=np.complex128)

        return evaluate
