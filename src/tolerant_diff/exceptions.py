"""Exception hierarchy for json-tolerant-diff.

Mismatches between expected and actual data are never exceptions: they are
recorded in the ``ComparisonReport``.  Exceptions are reserved for problems
that make a comparison meaningless:

- ``StructuralError``: the input itself is malformed (cycle, excessive depth,
  non-string mapping keys).  Indicates a caller bug, not a data discrepancy.
- ``PolicyError``: the ``TolerancePolicy`` is invalid.  Raised at
  construction time, before any comparison starts.
"""

from __future__ import annotations

__all__ = ["PolicyError", "StructuralError", "ToleranceDiffError"]


class ToleranceDiffError(Exception):
    """Base class for json-tolerant-diff errors."""


class StructuralError(ToleranceDiffError):
    """Input tree violates the Value model (cycle, depth limit, bad key).

    Attributes:
        path: Rendered path (e.g. ``"$.items[3]"``) where the problem was
            detected, or ``None`` when not known.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{message} (at {path})"
        super().__init__(message)


class PolicyError(ToleranceDiffError, ValueError):
    """Invalid tolerance configuration."""
