"""Tests for variable leaves and their sources (symlin.algebra.variable)."""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest
from beartype.roar import BeartypeCallHintParamViolation

from symlin.algebra import ValueCell, Variable, VariableSource


class TestVariableSource:
    def test_defaults(self) -> None:
        src = VariableSource()
        assert src.label is None
        assert src.value == 0
        assert isinstance(src.value, np.complex128)

    def test_label_and_value(self) -> None:
        src = VariableSource("R1", 100)
        assert src.label == "R1"
        assert src.variable.label == "R1"
        assert src.variable.value == 100 + 0j

    def test_variable_is_stable(self) -> None:
        src = VariableSource("x", 1)
        assert src.variable is src.variable

    def test_write_propagates(self) -> None:
        src = VariableSource("x", 1)
        expr = src.variable * 2 + 1
        assert expr.evaluate() == 3
        src.value = 2 + 1j
        assert expr.evaluate() == 5 + 2j

    def test_rejects_non_numeric_value(self) -> None:
        src = VariableSource("x", 1)
        with pytest.raises(BeartypeCallHintParamViolation):
            src.value = "2"

    def test_repr(self) -> None:
        assert repr(VariableSource("V", 5)) == "VariableSource(V=5)"
        assert repr(VariableSource(value=1 + 2j)) == "VariableSource(<anonymous>=(1+2j))"


class TestVariable:
    def test_variable_is_read_only(self) -> None:
        var = VariableSource("x", 1).variable
        with pytest.raises(AttributeError):
            var.value = 3
        with pytest.raises(dataclasses.FrozenInstanceError):
            var.label = "y"

    def test_relabel_shares_cell(self) -> None:
        src = VariableSource("x", 1)
        alias = src.variable.relabel("alias")
        assert alias.label == "alias"
        assert alias.shares_cell(src.variable)
        assert alias.cell_key == src.variable.cell_key
        src.value = 7
        assert alias.evaluate() == 7

    def test_distinct_sources_do_not_share(self) -> None:
        a, b = VariableSource("a", 1).variable, VariableSource("a", 1).variable
        assert not a.shares_cell(b)

    def test_constant(self) -> None:
        c = Variable.constant(2.5)
        assert c.is_constant
        assert c.evaluate() == 2.5
        assert str(c) == "2.5"

    def test_predefined_constants(self) -> None:
        assert Variable.ONE.evaluate() == 1
        assert Variable.NEGATIVE_ONE.evaluate() == -1
        assert Variable.ZERO.evaluate() == 0
        assert Variable.IMAGINARY_ONE.evaluate() == 1j
        assert Variable.NEGATIVE_IMAGINARY_ONE.evaluate() == -1j

    def test_pure_parts(self) -> None:
        src = VariableSource("x", 3)
        assert src.variable.is_pure_real
        assert not src.variable.is_pure_imaginary
        src.value = 2j
        assert src.variable.is_pure_imaginary
        assert not src.variable.is_pure_real

    def test_str_without_label_shows_value(self) -> None:
        assert str(VariableSource(value=3).variable) == "3"
        assert str(VariableSource(value=1 - 0.5j).variable) == "(1-0.5j)"

    def test_outlives_source(self) -> None:
        src = VariableSource("x", 4)
        var = src.variable
        del src
        assert var.evaluate() == 4


class TestValueCell:
    def test_converts_to_complex(self) -> None:
        cell = ValueCell(3)
        assert isinstance(cell.value, np.complex128)
        assert repr(cell) == "ValueCell((3+0j))"
