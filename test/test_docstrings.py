"""Runs the interactive examples embedded in module docstrings."""

from __future__ import annotations

import doctest

import pytest

import symlin.backends.sympy
import symlin.linear.gauss_jordan
import symlin.linear.numeric


@pytest.mark.parametrize(
    "module",
    [symlin.linear.gauss_jordan, symlin.linear.numeric, symlin.backends.sympy],
    ids=lambda m: m.__name__,
)
def test_docstring_examples(module) -> None:
    result = doctest.testmod(module, optionflags=doctest.NORMALIZE_WHITESPACE)
    assert result.attempted > 0
    assert result.failed == 0
