"""Optimal element pairing for unordered sequence comparison.

Wraps scipy's ``linear_sum_assignment`` (Hungarian algorithm).  Rectangular
matrices are supported: with ``m`` rows and ``n`` columns exactly
``min(m, n)`` pairs are returned.
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]


def optimal_assignment(cost_matrix: np.ndarray) -> list[tuple[int, int]]:
    """Compute the minimum-cost pairing of rows to columns.

    Args:
        cost_matrix: 2-D matrix of finite, non-negative costs, shape ``(m, n)``.

    Returns:
        ``(row, column)`` pairs sorted by row.  Empty when the matrix is empty.
    """
    if cost_matrix.size == 0:
        return []

    row_ind, col_ind = linear_sum_assignment(np.asarray(cost_matrix, dtype=float))
    pairs = zip(row_ind.tolist(), col_ind.tolist(), strict=True)
    return sorted(pairs)
