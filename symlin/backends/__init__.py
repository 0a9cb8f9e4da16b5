"""
Backends lowering expression trees to other frameworks.

- SymPy: inspection, LaTeX export and vectorised evaluation of symbolic
  solutions
"""

from symlin.backends.sympy import SympyConverter

__all__ = ["SympyConverter"]
