"""Tests for the complex-number core (symlin.complexnum)."""

from __future__ import annotations

import math

import numpy as np
import pytest
from beartype.roar import BeartypeCallHintParamViolation

from symlin import complexnum
from symlin.complexnum import AngleUnit, MidpointRounding


class TestConversions:
    def test_to_complex_from_int(self) -> None:
        c = complexnum.to_complex(3)
        assert isinstance(c, np.complex128)
        assert c == 3 + 0j

    def test_magnitude_is_euclidean(self) -> None:
        assert complexnum.magnitude(3 + 4j) == pytest.approx(5.0)

    def test_phase(self) -> None:
        assert complexnum.phase(1j) == pytest.approx(math.pi / 2)

    def test_rejects_non_number(self) -> None:
        with pytest.raises(BeartypeCallHintParamViolation):
            complexnum.to_complex("1")


class TestZeroAndParts:
    def test_exact_zero(self) -> None:
        assert complexnum.is_zero(0)
        assert complexnum.is_zero(-0.0 + 0j)
        assert not complexnum.is_zero(1e-300)

    def test_pure_real_and_imaginary(self) -> None:
        assert complexnum.is_pure_real(2.5)
        assert not complexnum.is_pure_real(2.5 + 1e-12j)
        assert complexnum.is_pure_imaginary(4j)
        assert not complexnum.is_pure_imaginary(1 + 4j)


class TestReciprocal:
    def test_regular(self) -> None:
        assert complexnum.reciprocal(2j) == pytest.approx(-0.5j)

    def test_zero_does_not_raise(self) -> None:
        r = complexnum.reciprocal(0)
        assert not np.isfinite(r)


class TestPolar:
    def test_radians(self) -> None:
        c = complexnum.from_polar(2.0, math.pi / 2)
        assert c.real == pytest.approx(0.0, abs=1e-12)
        assert c.imag == pytest.approx(2.0)

    def test_degrees(self) -> None:
        c = complexnum.from_polar(1, 180, AngleUnit.DEGREES)
        assert c == pytest.approx(-1 + 0j)


class TestRoundTo:
    @pytest.mark.parametrize(
        "value, multiple, expected",
        [
            (47 + 20j, 12, 48 + 24j),
            (40 + 11j, 9, 36 + 9j),
            (43 + 11j, 9, 45 + 9j),
            (38 + 14j, 9, 36 + 18j),
            (6.75 + 2.25j, 4.5, 9 + 4.5j),
        ],
    )
    def test_away_from_zero(self, value: complex, multiple: float, expected: complex) -> None:
        assert complexnum.round_to(value, multiple) == pytest.approx(expected)

    def test_to_even(self) -> None:
        result = complexnum.round_to(6.75 + 2.25j, 4.5, MidpointRounding.TO_EVEN)
        assert result == pytest.approx(9 + 0j)

    def test_negative_midpoint_away_from_zero(self) -> None:
        assert complexnum.round_to(-1.5 - 2.5j, 1) == pytest.approx(-2 - 3j)

    def test_zero_multiple_raises(self) -> None:
        with pytest.raises(ValueError, match="non-zero"):
            complexnum.round_to(1 + 1j, 0)


class TestAngles:
    def test_full_turn(self) -> None:
        assert complexnum.full_turn(AngleUnit.RADIANS) == pytest.approx(2 * math.pi)
        assert complexnum.full_turn(AngleUnit.DEGREES) == 360.0
        assert complexnum.full_turn(AngleUnit.TURNS) == 1.0

    @pytest.mark.parametrize(
        "angle, expected",
        [(0, 0.0), (370, 10.0), (-10, 350.0), (720, 0.0), (359.5, 359.5)],
    )
    def test_reduce_degrees(self, angle: float, expected: float) -> None:
        assert complexnum.reduce_angle(angle, AngleUnit.DEGREES) == pytest.approx(expected)

    def test_reduce_stays_below_full_turn(self) -> None:
        reduced = complexnum.reduce_angle(-1e-20, AngleUnit.TURNS)
        assert 0.0 <= reduced < 1.0

    def test_convert(self) -> None:
        assert complexnum.convert_angle(180, AngleUnit.DEGREES, AngleUnit.RADIANS) == pytest.approx(math.pi)
        assert complexnum.convert_angle(0.25, AngleUnit.TURNS, AngleUnit.DEGREES) == pytest.approx(90.0)
        assert complexnum.convert_angle(3, AngleUnit.TURNS, AngleUnit.TURNS) == 3.0
