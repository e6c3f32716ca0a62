"""Deterministic object generators for performance benchmarks.

All generators produce fixed, reproducible objects. No random values.
Three tiers: 10-key flat, 100-key nested, 500-key deeply nested.
Each tier provides a "matching" pair (fixture text vs typed values) and a
"differing" pair where every leaf mismatches, so the report is full.
"""

from __future__ import annotations

from typing import Any

import pytest


def _typed_leaf(i: int) -> Any:
    """Cycle through the scalar categories so every comparator row is exercised."""
    kind = i % 4
    if kind == 0:
        return i * 0.1
    if kind == 1:
        return i
    if kind == 2:
        return i % 3 == 0
    return f"value_{i}"


def _as_fixture_text(value: Any) -> Any:
    """Render a typed leaf the way an all-text fixture file would."""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return repr(value)
    return value


def _make_flat(num_keys: int) -> tuple[dict[str, Any], dict[str, Any]]:
    actual = {f"field_{i}": _typed_leaf(i) for i in range(num_keys)}
    expected = {k: _as_fixture_text(v) for k, v in actual.items()}
    return expected, actual


def _make_nested_100() -> tuple[dict[str, Any], dict[str, Any]]:
    """10 sections x 9 leaf keys, plus one 9-element list per section."""
    expected: dict[str, Any] = {}
    actual: dict[str, Any] = {}
    for i in range(10):
        exp_section, act_section = _make_flat(9)
        exp_section["history"] = [_as_fixture_text(_typed_leaf(j)) for j in range(9)]
        act_section["history"] = [_typed_leaf(j) for j in range(9)]
        expected[f"section_{i}"] = exp_section
        actual[f"section_{i}"] = act_section
    return expected, actual


def _make_nested_500() -> tuple[dict[str, Any], dict[str, Any]]:
    """5 sections x 5 groups x (14 leaf keys + a 6-key detail object)."""
    expected: dict[str, Any] = {}
    actual: dict[str, Any] = {}
    for i in range(5):
        exp_mid: dict[str, Any] = {}
        act_mid: dict[str, Any] = {}
        for j in range(5):
            exp_leaf, act_leaf = _make_flat(14)
            exp_leaf["details"], act_leaf["details"] = _make_flat(6)
            exp_mid[f"group_{j}"] = exp_leaf
            act_mid[f"group_{j}"] = act_leaf
        expected[f"section_{i}"] = exp_mid
        actual[f"section_{i}"] = act_mid
    return expected, actual


def _perturb(obj: Any) -> Any:
    """Return a copy of ``obj`` with every leaf changed."""
    if isinstance(obj, dict):
        return {k: _perturb(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_perturb(v) for v in obj]
    if isinstance(obj, bool):
        return not obj
    if isinstance(obj, (int, float)):
        return obj + 1
    return f"{obj}_changed"


# --- Fixtures for each size tier ---


@pytest.fixture
def pair_10key_matching() -> tuple[dict[str, Any], dict[str, Any]]:
    return _make_flat(10)


@pytest.fixture
def pair_10key_differing() -> tuple[dict[str, Any], dict[str, Any]]:
    expected, actual = _make_flat(10)
    return expected, _perturb(actual)


@pytest.fixture
def pair_100key_matching() -> tuple[dict[str, Any], dict[str, Any]]:
    return _make_nested_100()


@pytest.fixture
def pair_100key_differing() -> tuple[dict[str, Any], dict[str, Any]]:
    expected, actual = _make_nested_100()
    return expected, _perturb(actual)


@pytest.fixture
def pair_500key_matching() -> tuple[dict[str, Any], dict[str, Any]]:
    """500-key deeply nested matching pair (5 sections x 5 groups x 20 leaves)."""
    return _make_nested_500()


@pytest.fixture
def pair_500key_differing() -> tuple[dict[str, Any], dict[str, Any]]:
    expected, actual = _make_nested_500()
    return expected, _perturb(actual)
