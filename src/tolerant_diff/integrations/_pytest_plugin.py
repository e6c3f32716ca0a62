"""pytest plugin for json-tolerant-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

The default policy for all fixtures can be tuned from the ini file::

    [tool.pytest.ini_options]
    tolerant_diff_absolute_epsilon = "1e-6"
    tolerant_diff_key_match_mode = "subset"

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from tolerant_diff.algorithm.config import TolerancePolicy
from tolerant_diff.api import assert_match
from tolerant_diff.soft_assert import SoftAssertions

INI_PREFIX = "tolerant_diff_"

_INI_OPTIONS: dict[str, str] = {
    "absolute_epsilon": "Absolute numeric tolerance (default 1e-9).",
    "relative_epsilon": "Relative numeric tolerance (default 1e-9).",
    "case_insensitive_booleans": "Coerce TRUE/False text to booleans (default true).",
    "coerce_string_numerics": "Coerce numeric-looking text to numbers (default true).",
    "nan_equal": "Treat NaN as equal to NaN (default false).",
    "key_match_mode": "strict (report extra actual keys) or subset (default strict).",
    "null_equals_missing": "A missing key matches a null value (default false).",
    "sequence_mode": "ordered or unordered sequence comparison (default ordered).",
    "max_depth": "Maximum nesting depth before a StructuralError (default 256).",
}


def pytest_addoption(parser: pytest.Parser) -> None:
    for name, help_text in _INI_OPTIONS.items():
        parser.addini(INI_PREFIX + name, help_text, default="")


def policy_from_config(config: pytest.Config) -> TolerancePolicy:
    """Build a TolerancePolicy from the ``tolerant_diff_*`` ini options.

    Options left empty keep the TolerancePolicy defaults.

    Raises:
        PolicyError: If an option holds an invalid value.
    """
    settings: dict[str, Any] = {}
    for name in _INI_OPTIONS:
        raw = config.getini(INI_PREFIX + name)
        if isinstance(raw, str) and raw.strip():
            settings[name] = raw
    return TolerancePolicy.from_mapping(settings)


@pytest.fixture(scope="session")
def tolerant_policy(pytestconfig: pytest.Config) -> TolerancePolicy:
    """The session-wide TolerancePolicy configured from the ini file."""
    return policy_from_config(pytestconfig)


@pytest.fixture(scope="session")
def assert_tolerant_match(tolerant_policy: TolerancePolicy) -> Any:
    """Fixture that returns a callable tolerant-equality asserter.

    Usage in tests::

        def test_price(assert_tolerant_match):
            assert_tolerant_match({"price": "4.30198"}, {"price": 4.3019799999999995})

        def test_missing(assert_tolerant_match):
            with pytest.raises(AssertionError, match=r"missing key"):
                assert_tolerant_match({"a": 1, "b": 2}, {"a": 1})

    Returns:
        A callable ``_assert(expected, actual, policy=None, label=None)`` that
        raises ``AssertionError`` listing every mismatch.  ``policy`` defaults
        to the ini-configured session policy.
    """

    def _assert(
        expected: Any,
        actual: Any,
        policy: TolerancePolicy | None = None,
        label: str | None = None,
    ) -> None:
        assert_match(
            expected,
            actual,
            policy=policy if policy is not None else tolerant_policy,
            label=label,
        )

    return _assert


@pytest.fixture
def soft_assertions(tolerant_policy: TolerancePolicy) -> Iterator[SoftAssertions]:
    """Per-test SoftAssertions; collected mismatches fail the test at teardown.

    Usage in tests::

        def test_rows(soft_assertions):
            for expected, actual in zip(expected_rows, actual_rows):
                soft_assertions.check(expected, actual)
    """
    soft = SoftAssertions(policy=tolerant_policy)
    yield soft
    soft.assert_all()
