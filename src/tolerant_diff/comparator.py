"""TolerantComparator: orchestrator that wires ValueBuilder + TreeWalker.

This is the central wiring layer between the raw algorithm and the public
API.  It ingests plain Python data into Value trees, walks them, and returns
the ComparisonReport.

Architecture:
- compare() builds BOTH input trees first, so malformed input (cycles, depth
  beyond the policy limit, non-string keys) raises ``StructuralError`` before
  any outcome is produced.  A partial report is never returned.
- A fresh ``ValueBuilder`` is created per call: its cycle-tracking set is the
  only mutable state in the pipeline, and keeping it call-local makes a
  single comparator safe to share between threads.
- One DEBUG record summarises each comparison.  Per-mismatch logging is left
  to report consumers (see soft_assert.py).
"""

from __future__ import annotations

import logging
import time
from typing import Any

from tolerant_diff.algorithm.config import DEFAULT_POLICY, TolerancePolicy
from tolerant_diff.algorithm.walker import TreeWalker
from tolerant_diff.exceptions import StructuralError
from tolerant_diff.result import ComparisonReport
from tolerant_diff.tree.builder import ValueBuilder

__all__ = ["TolerantComparator"]

logger = logging.getLogger(__name__)


class TolerantComparator:
    """Compares expected and actual data trees under a fixed TolerancePolicy.

    Example::

        from tolerant_diff.comparator import TolerantComparator

        cmp = TolerantComparator()
        report = cmp.compare({"total": "10.50", "paid": "TRUE"}, {"total": 10.5, "paid": True})
        print(report.overall_match)   # True
    """

    def __init__(self, policy: TolerancePolicy | None = None) -> None:
        """Initialise the comparator.

        Args:
            policy: Tolerance and coercion settings.  Defaults to
                ``TolerancePolicy()`` when None.
        """
        self._policy: TolerancePolicy = policy if policy is not None else DEFAULT_POLICY
        self._walker = TreeWalker(self._policy)

    @property
    def policy(self) -> TolerancePolicy:
        return self._policy

    def compare(self, expected: Any, actual: Any) -> ComparisonReport:
        """Compare two data trees and return the full report.

        Args:
            expected: Expected data (dict, list, tuple, scalars, numpy values
                or a prebuilt ``Value``).
            actual:   Actual data, same accepted types.

        Returns:
            A ``ComparisonReport`` holding every outcome in walk order.

        Raises:
            StructuralError: If either input is cyclic, too deep, or has
                non-string mapping keys.
        """
        t0 = time.perf_counter()

        builder = ValueBuilder(max_depth=self._policy.max_depth)
        try:
            expected_tree = builder.build(expected)
            actual_tree = builder.build(actual)
        except RecursionError as exc:
            msg = (
                f"nesting depth exceeds the interpreter recursion limit "
                f"(max_depth={self._policy.max_depth})"
            )
            raise StructuralError(msg) from exc

        report = self._walker.compare(expected_tree, actual_tree)

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        logger.debug(
            "compared %d location(s): %d mismatch(es) in %.3f ms",
            len(report),
            len(report.mismatches),
            elapsed_ms,
        )
        return report
