"""Tolerant scalar comparator.

Decides whether two scalar Values are equal under a TolerancePolicy.  The
decision table is evaluated top to bottom; the first row that applies wins:

============================  ==========================================
condition                     verdict
============================  ==========================================
both NULL                     Match
exactly one NULL              Mismatch "null mismatch"
both NUMERIC                  numeric equality (below)
both BOOLEAN                  literal forms equal (case per policy)
both TEXT                     exact string equality
both OPAQUE                   ``expected == actual``
anything else                 Mismatch "type mismatch: expected X, actual Y"
============================  ==========================================

Numeric equality::

    e == a                                    -> Match
    |e - a| < absolute_epsilon                -> Match
    |e - a| / max(|e|, |a|) < relative_epsilon -> Match
    otherwise                                 -> Mismatch

The absolute bound handles round-off near zero; the relative bound scales the
tolerance with magnitude.  ``max(|e|, |a|)`` is never zero here because two
zeros are caught by the exact-equality row.
"""

from __future__ import annotations

import math
from collections.abc import Hashable
from decimal import Decimal
from fractions import Fraction
from typing import Any

from tolerant_diff.algorithm.classifier import Category, classify
from tolerant_diff.algorithm.config import TolerancePolicy
from tolerant_diff.exceptions import StructuralError
from tolerant_diff.result import ComparisonOutcome, ComparisonPath, Match, Mismatch
from tolerant_diff.tree.nodes import Value, ValueKind

__all__ = ["compare_scalars", "numbers_equal", "scalar_key"]


def compare_scalars(
    expected: Value,
    actual: Value,
    path: ComparisonPath,
    policy: TolerancePolicy,
) -> ComparisonOutcome:
    """Compare two scalar values and return the outcome at ``path``.

    Args:
        expected: Expected value.
        actual:   Actual value.
        path:     Location recorded on the outcome.
        policy:   Tolerance and coercion settings.

    Returns:
        ``Match`` or ``Mismatch``.  Never raises for differing data.

    Raises:
        StructuralError: If two opaque values cannot be compared with ``==``.
    """
    cat_e = classify(expected, policy)
    cat_a = classify(actual, policy)
    e_py = expected.to_python()
    a_py = actual.to_python()

    if cat_e == Category.NULL and cat_a == Category.NULL:
        return Match(path, e_py, a_py)
    if cat_e == Category.NULL or cat_a == Category.NULL:
        return Mismatch(path, e_py, a_py, "null mismatch")

    if cat_e == Category.NUMERIC and cat_a == Category.NUMERIC:
        equal, difference = numbers_equal(
            _numeric_payload(expected), _numeric_payload(actual), policy
        )
        if equal:
            return Match(path, e_py, a_py)
        return Mismatch(path, e_py, a_py, f"numeric mismatch: difference {difference}")

    if cat_e == Category.BOOLEAN and cat_a == Category.BOOLEAN:
        lit_e = _boolean_literal(expected)
        lit_a = _boolean_literal(actual)
        if policy.case_insensitive_booleans:
            lit_e, lit_a = lit_e.lower(), lit_a.lower()
        if lit_e == lit_a:
            return Match(path, e_py, a_py)
        return Mismatch(path, e_py, a_py, "boolean mismatch")

    if cat_e == Category.TEXT and cat_a == Category.TEXT:
        if expected.payload == actual.payload:
            return Match(path, e_py, a_py)
        return Mismatch(path, e_py, a_py, "text mismatch")

    if cat_e == Category.OPAQUE and cat_a == Category.OPAQUE:
        if _opaque_equal(expected.payload, actual.payload, path):
            return Match(path, e_py, a_py)
        return Mismatch(path, e_py, a_py, "opaque value mismatch")

    return Mismatch(path, e_py, a_py, f"type mismatch: expected {cat_e}, actual {cat_a}")


def numbers_equal(expected: Any, actual: Any, policy: TolerancePolicy) -> tuple[bool, Any]:
    """Tolerant numeric equality.

    Args:
        expected: int, float, Decimal or Fraction.
        actual:   int, float, Decimal or Fraction.
        policy:   Supplies the epsilons and the NaN switch.

    Returns:
        ``(equal, difference)`` where ``difference`` is the absolute
        difference (``0`` when exactly equal, NaN when undefined).
    """
    # Before ``==``: a signaling Decimal NaN raises InvalidOperation on comparison.
    e_nan = _is_nan(expected)
    a_nan = _is_nan(actual)
    if e_nan or a_nan:
        return policy.nan_equal and e_nan and a_nan, math.nan

    if expected == actual:
        return True, 0

    e_float = _to_float(expected)
    a_float = _to_float(actual)
    if math.isinf(e_float) or math.isinf(a_float):
        if _is_exact_finite(expected) and _is_exact_finite(actual):
            return _exact_tolerant_equal(expected, actual, policy)
        # Infinities only equal themselves, which the exact row already caught.
        return False, math.inf

    abs_diff = abs(e_float - a_float)
    if abs_diff < policy.absolute_epsilon:
        return True, abs_diff
    rel_diff = abs_diff / max(abs(e_float), abs(a_float))
    return rel_diff < policy.relative_epsilon, abs_diff


def scalar_key(value: Value, policy: TolerancePolicy) -> Hashable | None:
    """Hashable form of a scalar, equal for scalars that compare exactly equal.

    Two scalars with equal keys always yield a Match under ``policy``.  The
    converse does not hold: values equal only within tolerance get different
    keys.

    Returns:
        The key, or None for values without one (opaque values, and NaN
        unless ``policy.nan_equal``).
    """
    category = classify(value, policy)
    if category == Category.NULL:
        return (category,)
    if category == Category.NUMERIC:
        number = _numeric_payload(value)
        if _is_nan(number):
            return (category, "nan") if policy.nan_equal else None
        if not _is_exact_finite(number):
            return (category, _to_float(number))
        return (category, Fraction(number))
    if category == Category.BOOLEAN:
        literal = _boolean_literal(value)
        if policy.case_insensitive_booleans:
            literal = literal.lower()
        return (category, literal)
    if category == Category.TEXT:
        return (category, value.payload)
    return None


def _exact_tolerant_equal(expected: Any, actual: Any, policy: TolerancePolicy) -> tuple[bool, Any]:
    """Tolerance check in exact rational arithmetic for values beyond float range."""
    e_exact = Fraction(expected)
    a_exact = Fraction(actual)
    abs_diff = abs(e_exact - a_exact)
    if abs_diff < Fraction(policy.absolute_epsilon):
        return True, abs_diff
    rel_diff = abs_diff / max(abs(e_exact), abs(a_exact))
    return rel_diff < Fraction(policy.relative_epsilon), abs_diff


def _to_float(number: Any) -> float:
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf


def _is_nan(number: Any) -> bool:
    if isinstance(number, float):
        return math.isnan(number)
    if isinstance(number, Decimal):
        return number.is_nan()
    return False


def _is_exact_finite(number: Any) -> bool:
    if isinstance(number, float):
        return math.isfinite(number)
    if hasattr(number, "is_finite"):
        return bool(number.is_finite())
    return True


def _numeric_payload(value: Value) -> Any:
    if value.kind == ValueKind.NUMBER:
        return value.payload
    text: str = value.payload
    if "." in text:
        return float(text)
    return int(text)


def _boolean_literal(value: Value) -> str:
    if value.kind == ValueKind.BOOL:
        return "true" if value.payload else "false"
    return str(value.payload)


def _opaque_equal(expected: Any, actual: Any, path: ComparisonPath) -> bool:
    try:
        return bool(expected == actual)
    except (TypeError, ValueError) as exc:
        msg = f"cannot compare opaque values of type {type(expected).__name__}"
        raise StructuralError(msg, str(path)) from exc
