"""Tests for shared elimination buffers and validation (symlin.linear.system)."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from symlin import InvalidSystemError, VariableSource, numeric_solve, residual
from symlin.linear import check_system_shape
from symlin.linear.system import complex_buffer, expression_buffer, write_back


class TestCheckSystemShape:
    def test_valid(self) -> None:
        assert check_system_shape([[1, 2], [3, 4]], [5, 6]) == ((2, 2), (2,))

    @pytest.mark.parametrize(
        "coefficients, free_terms",
        [
            (None, [1]),
            ([[1]], None),
        ],
    )
    def test_missing_buffer(self, coefficients, free_terms) -> None:
        with pytest.raises(InvalidSystemError, match="must both be provided"):
            check_system_shape(coefficients, free_terms)

    def test_not_square(self) -> None:
        with pytest.raises(InvalidSystemError, match="square"):
            check_system_shape([[1, 2, 3], [4, 5, 6]], [1, 2])

    def test_one_dimensional_coefficients(self) -> None:
        with pytest.raises(InvalidSystemError, match="square"):
            check_system_shape([1, 2], [1, 2])

    def test_size_mismatch(self) -> None:
        with pytest.raises(InvalidSystemError, match="free_terms"):
            check_system_shape([[1, 2], [3, 4]], [1, 2, 3])

    def test_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            check_system_shape([[1, 2]], [1])


class TestBuffers:
    def test_complex_buffer_reuses_complex_array(self) -> None:
        a = np.eye(2, dtype=np.complex128)
        assert complex_buffer(a) is a

    def test_complex_buffer_copies_other_dtypes(self) -> None:
        a = np.eye(2)
        buf = complex_buffer(a)
        assert buf is not a
        assert buf.dtype == np.complex128

    def test_complex_buffer_evaluates_expressions(self) -> None:
        x = VariableSource("x", 3).variable
        np.testing.assert_allclose(complex_buffer([x, x + 1]), [3, 4])

    def test_expression_buffer_converts_object_array_in_place(self) -> None:
        a = np.array([1, 2], dtype=object)
        buf = expression_buffer(a)
        assert buf is a
        assert a[1].evaluate() == 2

    def test_write_back_list(self) -> None:
        target = [0, 0]
        write_back(target, np.array([1 + 1j, 2]))
        assert target == [1 + 1j, 2]

    def test_write_back_skips_incompatible_array(self) -> None:
        target = np.zeros(2)
        write_back(target, np.array([1 + 1j, 2]))
        np.testing.assert_array_equal(target, [0, 0])


class TestResidual:
    def test_zero_for_exact_solution(self) -> None:
        np.testing.assert_allclose(residual([[2, 0], [0, 4]], [1, 0.5], [2, 2]), [0, 0])

    def test_nonzero(self) -> None:
        np.testing.assert_allclose(residual([[1, 0], [0, 1]], [1, 1], [0, 0]), [1, 1])


class TestWriteBackLogging:
    def test_skipped_write_back_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="symlin")
        target = np.zeros(2)
        write_back(target, np.array([1 + 1j, 2]))
        assert "solution not written back" in caplog.text
        assert "float64" in caplog.text

    def test_real_free_terms_left_unchanged_by_numeric_solve(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="symlin")
        free_terms = np.array([3.0, 5.0])
        x = numeric_solve([[2, 1], [1, 3]], free_terms)
        np.testing.assert_allclose(x, [0.8, 1.4])
        np.testing.assert_array_equal(free_terms, [3.0, 5.0])
        assert "solution not written back" in caplog.text
