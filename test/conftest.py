"""Shared fixtures for the symlin test suite."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so random systems are reproducible."""
    return np.random.default_rng(20240611)


@pytest.fixture
def random_system(rng: np.random.Generator) -> Callable[[int], tuple[np.ndarray, np.ndarray]]:
    """Factory for well-conditioned random ``n x n`` complex systems (diagonally dominated)."""

    def make(n: int) -> tuple[np.ndarray, np.ndarray]:
        a = rng.normal(size=(n, n)) + 1j * rng.normal(size=(n, n))
        a += n * np.eye(n)
        b = rng.normal(size=n) + 1j * rng.normal(size=n)
        return a, b

    return make
