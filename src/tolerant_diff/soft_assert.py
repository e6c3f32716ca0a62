"""Soft assertions: a report consumer that logs every mismatch and fails once.

Many verification steps in one test (e.g. every column of every row read back
from a database) are more useful when all of them run and the failures are
reported together.  ``SoftAssertions`` collects ``ComparisonReport`` objects,
logs each mismatch as soon as it is found, and raises a single
``AssertionError`` listing everything at the end.

Example::

    with SoftAssertions() as soft:
        soft.check(expected_row, actual_row, label="orders[0]")
        soft.check(expected_totals, actual_totals, label="totals")
    # AssertionError here if any check had a mismatch
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

from tolerant_diff.algorithm.config import TolerancePolicy
from tolerant_diff.comparator import TolerantComparator
from tolerant_diff.result import ComparisonReport

__all__ = ["SoftAssertions", "log_report"]

logger = logging.getLogger(__name__)


def log_report(
    report: ComparisonReport,
    log: logging.Logger | None = None,
    label: str | None = None,
    level: int = logging.WARNING,
) -> None:
    """Log every outcome of ``report``: mismatches at ``level``, matches at DEBUG.

    Args:
        report: Report to log.
        log:    Logger to use.  Defaults to this module's logger.
        label:  Optional comparison name prefixed to each record.
        level:  Level for mismatch records.  Defaults to WARNING.
    """
    log = log if log is not None else logger
    prefix = f"[{label}] " if label else ""
    for outcome in report:
        if outcome.matched:
            log.debug("%s%s", prefix, outcome.describe())
        else:
            log.log(level, "%s%s", prefix, outcome.describe())


class SoftAssertions:
    """Accumulates comparisons and fails once, listing every mismatch.

    Args:
        policy: Tolerance settings shared by every ``check``.  Defaults to
            ``TolerancePolicy()``.
        log:    Logger receiving per-outcome records.  Defaults to this
            module's logger.
    """

    def __init__(
        self,
        policy: TolerancePolicy | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._comparator = TolerantComparator(policy=policy)
        self._log = log if log is not None else logger
        self._results: list[tuple[str, ComparisonReport]] = []

    @property
    def results(self) -> list[tuple[str, ComparisonReport]]:
        """``(label, report)`` for every check so far, in call order."""
        return list(self._results)

    @property
    def failures(self) -> list[tuple[str, ComparisonReport]]:
        return [(label, r) for label, r in self._results if not r.overall_match]

    def check(self, expected: Any, actual: Any, label: str | None = None) -> ComparisonReport:
        """Compare, log and record; never raises for differing data.

        Args:
            expected: Expected value.
            actual:   Actual value.
            label:    Name for this check.  Defaults to ``"check #<n>"``.

        Returns:
            The comparison report.

        Raises:
            StructuralError: If either input is malformed.
        """
        name = label if label is not None else f"check #{len(self._results) + 1}"
        report = self._comparator.compare(expected, actual)
        log_report(report, self._log, label=name)
        self._results.append((name, report))
        return report

    def assert_all(self) -> None:
        """Raise one AssertionError describing every failed check.

        Raises:
            AssertionError: If any recorded check had a mismatch.
        """
        failures = self.failures
        if not failures:
            return
        total = sum(len(r.mismatches) for _, r in failures)
        lines = [
            f"{len(failures)} of {len(self._results)} check(s) failed "
            f"with {total} mismatch(es):"
        ]
        for label, report in failures:
            lines.append(f"{label}:")
            lines.extend(f"  {m.describe()}" for m in report.mismatches)
        raise AssertionError("\n".join(lines))

    def __enter__(self) -> SoftAssertions:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # An exception from the block takes precedence over collected failures.
        if exc_type is None:
            self.assert_all()
