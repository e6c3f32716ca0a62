"""Report model for tolerant comparison output.

This module provides the path type, the two outcome types and the report
returned by ``compare()`` calls.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

__all__ = [
    "ABSENT",
    "ROOT",
    "ComparisonOutcome",
    "ComparisonPath",
    "ComparisonReport",
    "Match",
    "Mismatch",
]

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


# =============================================================================
# Sentinel for Absent Values
# =============================================================================


class _Absent:
    """Sentinel for a side that has no value at a path (distinct from JSON null).

    None is a valid value (null), so a key that exists with value null must be
    distinguishable from a key that does not exist at all.
    """

    _instance = None

    def __new__(cls):  # type: ignore[no-untyped-def]
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<ABSENT>"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


# =============================================================================
# Paths
# =============================================================================


@dataclass(frozen=True, slots=True)
class ComparisonPath:
    """Location within a tree as an ordered tuple of key / index segments.

    Rendered JSONPath-style: ``$`` for the root, ``.key`` for identifier-like
    mapping keys, ``['other key']`` for any other key and ``[3]`` for sequence
    indices.  Rendering is injective, so distinct paths never print the same.
    """

    segments: tuple[str | int, ...] = ()

    def child_key(self, key: str) -> ComparisonPath:
        return ComparisonPath((*self.segments, key))

    def child_index(self, index: int) -> ComparisonPath:
        return ComparisonPath((*self.segments, index))

    @property
    def depth(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        parts = ["$"]
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif _IDENTIFIER_RE.fullmatch(segment):
                parts.append(f".{segment}")
            else:
                escaped = segment.replace("\\", "\\\\").replace("'", "\\'")
                parts.append(f"['{escaped}']")
        return "".join(parts)


ROOT = ComparisonPath()


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Match:
    """Expected and actual agree at ``path`` under the active policy."""

    path: ComparisonPath
    expected: Any
    actual: Any

    @property
    def matched(self) -> bool:
        return True

    def describe(self) -> str:
        return f"MATCH {self.path}"


@dataclass(frozen=True, slots=True)
class Mismatch:
    """Expected and actual disagree at ``path``.

    Attributes:
        path:     Location of the discrepancy.
        expected: Expected value as plain Python data, or ``ABSENT``.
        actual:   Actual value as plain Python data, or ``ABSENT``.
        reason:   Short human-readable cause, e.g. ``"missing key"``.
    """

    path: ComparisonPath
    expected: Any
    actual: Any
    reason: str

    @property
    def matched(self) -> bool:
        return False

    def describe(self) -> str:
        return (
            f"MISMATCH {self.path}: {self.reason} "
            f"(expected={self.expected!r}, actual={self.actual!r})"
        )


ComparisonOutcome = Match | Mismatch


# =============================================================================
# Report
# =============================================================================


@dataclass(frozen=True, slots=True)
class ComparisonReport:
    """Every outcome of one top-level comparison, in walk order.

    Attributes:
        outcomes: All Match and Mismatch entries (matches are kept for audit
            logging).  Order is deterministic for identical inputs and policy.
    """

    outcomes: tuple[ComparisonOutcome, ...] = ()

    @property
    def overall_match(self) -> bool:
        return not any(isinstance(o, Mismatch) for o in self.outcomes)

    @property
    def mismatches(self) -> list[Mismatch]:
        return [o for o in self.outcomes if isinstance(o, Mismatch)]

    @property
    def matches(self) -> list[Match]:
        return [o for o in self.outcomes if isinstance(o, Match)]

    @property
    def mismatch_paths(self) -> list[str]:
        return [str(o.path) for o in self.mismatches]

    def outcome_at(self, path: str) -> ComparisonOutcome | None:
        """Return the outcome recorded at the rendered ``path``, if any."""
        for outcome in self.outcomes:
            if str(outcome.path) == path:
                return outcome
        return None

    def format(self, include_matches: bool = False) -> str:
        """Render the report as text, one outcome per line.

        Args:
            include_matches: When True, MATCH lines are included as well.

        Returns:
            A summary line followed by one line per listed outcome.
        """
        n_mismatch = len(self.mismatches)
        status = "MATCH" if n_mismatch == 0 else "MISMATCH"
        lines = [
            f"{status}: {n_mismatch} mismatch(es) in {len(self.outcomes)} comparison(s)"
        ]
        for outcome in self.outcomes:
            if include_matches or isinstance(outcome, Mismatch):
                lines.append(f"  {outcome.describe()}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self) -> Iterator[ComparisonOutcome]:
        return iter(self.outcomes)

    def __bool__(self) -> bool:
        return self.overall_match
