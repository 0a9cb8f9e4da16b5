"""
Exceptions raised by the linear engines.
"""

from typing import Optional


class SymlinError(Exception):
    """Base class for all symlin errors."""


class InvalidSystemError(SymlinError, ValueError):
    """
    The coefficient matrix or free-term vector cannot describe a square system.

    Raised for missing buffers, a non-square coefficient matrix, or a
    free-term vector whose length differs from the number of equations.
    Always raised before either buffer is touched.
    """


class SingularSystemError(SymlinError, ArithmeticError):
    """
    No usable pivot exists, so the system has no unique solution.

    The buffers passed to the solver are left partially reduced and must be
    discarded.
    """

    def __init__(self, message: str, row: Optional[int] = None) -> None:
        super().__init__(message)
        self.row = row
