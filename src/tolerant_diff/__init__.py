"""Tolerant diff - soft-assertion structural comparison for test verification."""

from __future__ import annotations

import logging

from tolerant_diff.algorithm.classifier import Category, classify
from tolerant_diff.algorithm.config import KeyMatchMode, SequenceMode, TolerancePolicy
from tolerant_diff.api import assert_match, compare, is_match
from tolerant_diff.comparator import TolerantComparator
from tolerant_diff.exceptions import PolicyError, StructuralError, ToleranceDiffError
from tolerant_diff.result import (
    ABSENT,
    ComparisonOutcome,
    ComparisonPath,
    ComparisonReport,
    Match,
    Mismatch,
)
from tolerant_diff.soft_assert import SoftAssertions, log_report
from tolerant_diff.tree import Value, ValueBuilder, ValueKind

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "ABSENT",
    "Category",
    "ComparisonOutcome",
    "ComparisonPath",
    "ComparisonReport",
    "KeyMatchMode",
    "Match",
    "Mismatch",
    "PolicyError",
    "SequenceMode",
    "SoftAssertions",
    "StructuralError",
    "ToleranceDiffError",
    "TolerancePolicy",
    "TolerantComparator",
    "Value",
    "ValueBuilder",
    "ValueKind",
    "assert_match",
    "classify",
    "compare",
    "is_match",
    "log_report",
]
