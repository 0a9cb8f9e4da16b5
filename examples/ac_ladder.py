#!/usr/bin/env python3
"""
Example: Two-stage RC ladder

This demonstrates how to:
1. Describe node-admittance equations with shared variables
2. Solve them symbolically once
3. Re-evaluate the symbolic solution over a frequency sweep
4. Cross-check every point against the numeric engine
5. Evaluate the whole sweep at once through SymPy

    Vs --R1--+--R2--+
             |      |
             C1     C2
             |      |
    GND -----+------+
"""

import numpy as np

from symlin import VariableSource, gauss_jordan_solve, numeric_solve
from symlin.algebra import evaluate_matrix, evaluate_vector
from symlin.backends import SympyConverter


def main():
    r1, r2 = 1e3, 2.2e3
    c1, c2 = 100e-9, 47e-9

    # Sources
    vs = VariableSource("V_s", 1.0)
    g1 = VariableSource("G_1", 1 / r1)
    g2 = VariableSource("G_2", 1 / r2)
    y1 = VariableSource("Y_1")
    y2 = VariableSource("Y_2")

    V, G1, G2, Y1, Y2 = (s.variable for s in (vs, g1, g2, y1, y2))

    # Node equations for v1, v2
    A = [
        [G1 + G2 + Y1, -G2],
        [-G2, G2 + Y2],
    ]
    b = [G1 * V, 0]

    # Keep an evaluable copy of the system for the numeric cross-check
    system = [row[:] for row in A], b[:]

    solution = gauss_jordan_solve(A, b)
    print("v2 =", solution[1])

    frequencies = np.logspace(1, 5, 9)
    print(f"{'f [Hz]':>10} {'|v2|':>10} {'phase [deg]':>12} {'numeric diff':>13}")
    for f in frequencies:
        omega = 2 * np.pi * f
        y1.value = 1j * omega * c1
        y2.value = 1j * omega * c2

        v2 = complex(solution[1].evaluate())
        reference = numeric_solve(evaluate_matrix(system[0]), evaluate_vector(system[1]))
        diff = abs(v2 - reference[1])
        print(f"{f:10.1f} {abs(v2):10.4f} {np.degrees(np.angle(v2)):12.2f} {diff:13.2e}")

    # Whole sweep in one call
    conv = SympyConverter()
    transfer = conv.lambdify([solution[1]])
    args = []
    for sym, var in conv.symbols.items():
        if var.shares_cell(Y1):
            args.append(1j * 2 * np.pi * frequencies * c1)
        elif var.shares_cell(Y2):
            args.append(1j * 2 * np.pi * frequencies * c2)
        else:
            args.append(var.value)
    magnitude = np.abs(transfer(*args)[0])
    print("lambdified |v2|:", np.array2string(magnitude, precision=4))


if __name__ == "__main__":
    main()
