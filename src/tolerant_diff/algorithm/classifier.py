"""Value classifier: assigns every Value exactly one comparison Category.

Classification is where textual coercion happens.  Fixture files are often
all-text (CSV cells, scraped UI labels), so ``"42"`` must be able to meet
``42`` and ``"TRUE"`` must be able to meet ``True``.  The grammar is narrow on
purpose:

- numeric literal: ``-?[0-9]+`` or ``-?[0-9]*\\.[0-9]+`` (no exponent, no
  leading ``+``, no thousands separators, ASCII digits only);
- boolean literal: ``true`` / ``false`` (case-insensitive unless the policy
  says otherwise).
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

from tolerant_diff.algorithm.config import DEFAULT_POLICY, TolerancePolicy
from tolerant_diff.tree.nodes import Value, ValueKind

__all__ = ["Category", "classify", "is_boolean_literal", "is_numeric_literal"]

_INTEGER_RE = re.compile(r"-?[0-9]+")
_DECIMAL_RE = re.compile(r"-?[0-9]*\.[0-9]+")


class Category(StrEnum):
    """Comparison category of a value (after coercion)."""

    NULL = auto()
    NUMERIC = auto()
    BOOLEAN = auto()
    TEXT = auto()
    SEQUENCE = auto()
    MAPPING = auto()
    OPAQUE = auto()


def is_numeric_literal(text: str) -> bool:
    """Return True if ``text`` is an integer or decimal literal."""
    return bool(_INTEGER_RE.fullmatch(text) or _DECIMAL_RE.fullmatch(text))


def is_boolean_literal(text: str, case_insensitive: bool = True) -> bool:
    """Return True if ``text`` spells ``true`` or ``false``."""
    if case_insensitive:
        text = text.lower()
    return text in ("true", "false")


def classify(value: Value, policy: TolerancePolicy = DEFAULT_POLICY) -> Category:
    """Return the comparison category of ``value``.

    Rules are applied in priority order; the first that applies wins.

    Args:
        value:  Value to classify.
        policy: Supplies the coercion switches.  Defaults to ``DEFAULT_POLICY``.

    Returns:
        The value's Category.  Every Value maps to exactly one Category.
    """
    kind = value.kind
    if kind == ValueKind.NULL:
        return Category.NULL
    if kind == ValueKind.NUMBER:
        return Category.NUMERIC
    if kind == ValueKind.BOOL:
        return Category.BOOLEAN
    if kind == ValueKind.STRING:
        text: str = value.payload
        if policy.coerce_string_numerics and is_numeric_literal(text):
            return Category.NUMERIC
        if is_boolean_literal(text, policy.case_insensitive_booleans):
            return Category.BOOLEAN
        return Category.TEXT
    if kind == ValueKind.SEQUENCE:
        return Category.SEQUENCE
    if kind == ValueKind.MAPPING:
        return Category.MAPPING
    return Category.OPAQUE
