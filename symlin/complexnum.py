"""
Complex-number core.

Every expression leaf evaluates to a NumPy ``complex128``. It is a subclass of
Python's ``complex`` so it interoperates with plain numbers, but unlike
``complex`` it does not raise on division by zero: the result is ``inf`` or
``nan``, which is the semantic the expression layer relies on.

Zero tests are exact. No tolerance is applied anywhere in this module.
"""

import math
from enum import Enum, auto
from typing import Union

import numpy as np
from beartype import beartype

RealLike = Union[int, float, np.integer, np.floating]
ComplexLike = Union[int, float, complex, np.number]

ZERO = np.complex128(0.0)
ONE = np.complex128(1.0)
NEGATIVE_ONE = np.complex128(-1.0)
IMAGINARY_ONE = np.complex128(1.0j)
NEGATIVE_IMAGINARY_ONE = np.complex128(-1.0j)


class AngleUnit(Enum):
    """Unit an angle is expressed in."""

    RADIANS = auto()  # 2*pi per turn
    DEGREES = auto()  # 360 per turn
    TURNS = auto()  # 1 per turn


class MidpointRounding(Enum):
    """How values exactly halfway between two multiples are rounded."""

    AWAY_FROM_ZERO = auto()
    TO_EVEN = auto()


@beartype
def to_complex(value: ComplexLike) -> np.complex128:
    """Convert any real or complex scalar to ``complex128``."""
    return np.complex128(value)


@beartype
def magnitude(value: ComplexLike) -> float:
    """Euclidean norm ``sqrt(re^2 + im^2)``, computed without overflow."""
    return float(np.abs(np.complex128(value)))


@beartype
def phase(value: ComplexLike) -> float:
    """Argument of ``value`` in radians, in ``(-pi, pi]``."""
    return float(np.angle(np.complex128(value)))


@beartype
def reciprocal(value: ComplexLike) -> np.complex128:
    """``1 / value``; returns ``inf``/``nan`` components for zero instead of raising."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return ONE / np.complex128(value)


@beartype
def is_zero(value: ComplexLike) -> bool:
    """Exact test against the additive identity (``-0.0`` counts as zero)."""
    return bool(np.complex128(value) == ZERO)


@beartype
def is_pure_real(value: ComplexLike) -> bool:
    """True if the imaginary component is exactly zero."""
    return bool(np.complex128(value).imag == 0.0)


@beartype
def is_pure_imaginary(value: ComplexLike) -> bool:
    """True if the real component is exactly zero."""
    return bool(np.complex128(value).real == 0.0)


@beartype
def from_polar(modulus: RealLike, argument: RealLike, unit: AngleUnit = AngleUnit.RADIANS) -> np.complex128:
    """Build a complex number from its modulus and argument."""
    radians = convert_angle(argument, unit, AngleUnit.RADIANS)
    return np.complex128(modulus * np.exp(1j * radians))


def _round_component(x: float, multiple: float, rounding: MidpointRounding) -> float:
    scaled = x / multiple
    if rounding == MidpointRounding.TO_EVEN:
        return float(np.round(scaled)) * multiple
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) * multiple


@beartype
def round_to(
    value: ComplexLike,
    multiple: RealLike,
    rounding: MidpointRounding = MidpointRounding.AWAY_FROM_ZERO,
) -> np.complex128:
    """
    Round both components of ``value`` to the nearest multiple of ``multiple``.

    Examples:
        round_to(47 + 20j, 12)                          # 48 + 24j
        round_to(6.75 + 2.25j, 4.5)                     # 9 + 4.5j
        round_to(6.75 + 2.25j, 4.5, MidpointRounding.TO_EVEN)  # 9 + 0j
    """
    if multiple == 0:
        raise ValueError("multiple must be non-zero")
    c = np.complex128(value)
    return np.complex128(
        complex(
            _round_component(float(c.real), float(multiple), rounding),
            _round_component(float(c.imag), float(multiple), rounding),
        )
    )


@beartype
def full_turn(unit: AngleUnit) -> float:
    """Size of one full turn in the given unit."""
    if unit == AngleUnit.RADIANS:
        return 2 * math.pi
    elif unit == AngleUnit.DEGREES:
        return 360.0
    elif unit == AngleUnit.TURNS:
        return 1.0
    raise ValueError(f"Unknown angle unit: {unit}")


@beartype
def reduce_angle(angle: RealLike, unit: AngleUnit = AngleUnit.RADIANS) -> float:
    """Remove whole turns so the angle lies in ``[0, full_turn)``."""
    turn = full_turn(unit)
    if 0 <= angle < turn:
        return float(angle)
    reduced = angle % turn
    # tiny negative angles round up to exactly one turn
    return 0.0 if reduced == turn else float(reduced)


@beartype
def convert_angle(angle: RealLike, from_unit: AngleUnit, to_unit: AngleUnit) -> float:
    """Convert an angle between units. Turns are not reduced."""
    if from_unit == to_unit:
        return float(angle)
    return float(angle) / full_turn(from_unit) * full_turn(to_unit)
