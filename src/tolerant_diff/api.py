"""Public API functions for json-tolerant-diff.

This module provides the three user-facing functions: compare, is_match and
assert_match.  Each call creates a fresh TolerantComparator to guarantee zero
global state mutation between calls.
"""

from __future__ import annotations

from typing import Any

from tolerant_diff.algorithm.config import TolerancePolicy
from tolerant_diff.comparator import TolerantComparator
from tolerant_diff.result import ComparisonReport

__all__ = ["assert_match", "compare", "is_match"]


def compare(
    expected: Any,
    actual: Any,
    policy: TolerancePolicy | None = None,
) -> ComparisonReport:
    """Compare two data trees and return a ComparisonReport.

    Args:
        expected: Expected value (dict, list, str, int, float, bool, None, ...).
        actual:   Actual value.
        policy:   Tolerance settings.  Defaults to ``TolerancePolicy()`` when None.

    Returns:
        A ``ComparisonReport`` with every Match and Mismatch, and
        ``overall_match`` True iff there is no Mismatch.

    Raises:
        StructuralError: If either input is malformed (cyclic, too deep, or
            has non-string mapping keys).
    """
    return TolerantComparator(policy=policy).compare(expected, actual)


def is_match(
    expected: Any,
    actual: Any,
    policy: TolerancePolicy | None = None,
) -> bool:
    """Return True if ``actual`` matches ``expected`` under ``policy``."""
    return compare(expected, actual, policy=policy).overall_match


def assert_match(
    expected: Any,
    actual: Any,
    policy: TolerancePolicy | None = None,
    label: str | None = None,
) -> ComparisonReport:
    """Assert that ``actual`` matches ``expected``, listing every mismatch on failure.

    Args:
        expected: Expected value.
        actual:   Actual value.
        policy:   Tolerance settings.  Defaults to ``TolerancePolicy()`` when None.
        label:    Optional name for the comparison, prefixed to the message.

    Returns:
        The (matching) report, for further inspection.

    Raises:
        AssertionError: When the report has at least one Mismatch.  The
            message contains one line per mismatch.
    """
    report = compare(expected, actual, policy=policy)
    if not report.overall_match:
        prefix = f"{label}: " if label else ""
        raise AssertionError(f"{prefix}{report.format()}")
    return report
