"""
simulation/linear_solver.py

Dense Gauss-Jordan elimination with partial pivoting, shared by the MNA
solver and the resistance probe.

Singular and near-singular systems do not raise. A column whose best pivot
is below ``pivot_epsilon`` is skipped and its unknown keeps whatever the
elimination left in the right-hand side (normally 0), which is what a
floating sub-network (a part placed but not yet wired to ground) reads.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_PIVOT_EPSILON = 1e-10


def solve_linear_system(matrix, rhs, pivot_epsilon: float = DEFAULT_PIVOT_EPSILON) -> np.ndarray:
    """
    Solve ``matrix @ x = rhs``.

    Args:
        matrix: Square (n, n) array-like.
        rhs: Length-n array-like.
        pivot_epsilon: Pivots with magnitude below this are treated as zero
            and their column is skipped.

    Returns:
        Solution vector of length n (empty for n == 0).
    """
    a = np.asarray(matrix, dtype=float)
    b = np.asarray(rhs, dtype=float)
    n = b.shape[0]
    if n == 0:
        return np.zeros(0)
    if a.shape != (n, n):
        raise ValueError(f"matrix shape {a.shape} does not match rhs length {n}")

    # Augmented matrix [A | b]
    m = np.empty((n, n + 1))
    m[:, :n] = a
    m[:, n] = b

    for i in range(n):
        pivot_row = i + int(np.argmax(np.abs(m[i:, i])))
        if pivot_row != i:
            m[[i, pivot_row]] = m[[pivot_row, i]]

        pivot = m[i, i]
        if abs(pivot) < pivot_epsilon:
            logger.debug("Skipping degenerate pivot in column %d (|%g| < %g)", i, pivot, pivot_epsilon)
            continue

        m[i, i:] /= pivot

        factors = m[:, i].copy()
        factors[i] = 0.0
        m[:, i:] -= np.outer(factors, m[i, i:])

    return m[:, n].copy()
