"""Performance benchmark suite for json-tolerant-diff.

Timing targets on the default policy:
- 10-key flat objects: <10ms
- 100-key mixed nested objects: <100ms
- 500-key deeply nested objects: <1s
- nested unordered sequences (1554 records): <1s

Run with: pytest tests/benchmarks/ --benchmark-only -v
Skip during normal test runs: pytest --benchmark-disable
"""

from __future__ import annotations

import pytest

from tolerant_diff import SequenceMode, TolerancePolicy, compare

pytest.importorskip("pytest_benchmark")


class TestPerformance10Key:
    """Benchmark suite for 10-key flat objects. Target: <10ms."""

    def test_10key_matching(self, benchmark, pair_10key_matching):  # type: ignore[no-untyped-def]
        expected, actual = pair_10key_matching
        report = benchmark(compare, expected, actual)
        # Verify the report is valid (not just timing)
        assert report.overall_match

    def test_10key_differing(self, benchmark, pair_10key_differing):  # type: ignore[no-untyped-def]
        expected, actual = pair_10key_differing
        report = benchmark(compare, expected, actual)
        assert len(report.mismatches) == 10


class TestPerformance100Key:
    """Benchmark suite for 100-key mixed nested objects. Target: <100ms."""

    def test_100key_matching(self, benchmark, pair_100key_matching):  # type: ignore[no-untyped-def]
        expected, actual = pair_100key_matching
        report = benchmark(compare, expected, actual)
        assert report.overall_match

    def test_100key_differing(self, benchmark, pair_100key_differing):  # type: ignore[no-untyped-def]
        expected, actual = pair_100key_differing
        report = benchmark(compare, expected, actual)
        assert len(report.mismatches) == 180

    def test_100key_unordered(self, benchmark, pair_100key_matching):  # type: ignore[no-untyped-def]
        expected, actual = pair_100key_matching
        policy = TolerancePolicy(sequence_mode=SequenceMode.UNORDERED)
        report = benchmark(compare, expected, actual, policy)
        assert report.overall_match


class TestPerformance500Key:
    """Benchmark suite for 500-key deeply nested objects. Target: <1s."""

    def test_500key_matching(self, benchmark, pair_500key_matching):  # type: ignore[no-untyped-def]
        expected, actual = pair_500key_matching
        report = benchmark(compare, expected, actual)
        assert report.overall_match

    def test_500key_differing(self, benchmark, pair_500key_differing):  # type: ignore[no-untyped-def]
        expected, actual = pair_500key_differing
        report = benchmark(compare, expected, actual)
        assert len(report.mismatches) == 500


def _nested_records(width: int, depth: int, seed: int = 0) -> list[dict[str, object]]:
    if depth == 0:
        return []
    return [
        {
            "id": seed * width + i,
            "tags": ["x", "y"],
            "children": _nested_records(width, depth - 1, seed * width + i),
        }
        for i in range(width)
    ]


def _shuffled(obj: object) -> object:
    if isinstance(obj, list):
        return [_shuffled(item) for item in reversed(obj)]
    if isinstance(obj, dict):
        return {k: _shuffled(v) for k, v in obj.items()}
    return obj


class TestPerformanceNestedUnordered:
    """Nested unordered sequences, 6 wide and 4 deep (1554 records). Target: <1s."""

    def test_nested_unordered_permutation(self, benchmark):  # type: ignore[no-untyped-def]
        expected = _nested_records(6, 4)
        actual = _shuffled(expected)
        policy = TolerancePolicy(sequence_mode=SequenceMode.UNORDERED)
        report = benchmark(compare, expected, actual, policy)
        assert report.overall_match

    def test_nested_unordered_one_difference(self, benchmark):  # type: ignore[no-untyped-def]
        expected = _nested_records(6, 4)
        actual = _shuffled(expected)
        actual[0]["children"][0]["tags"] = ["x", "z"]  # type: ignore[index]
        policy = TolerancePolicy(sequence_mode=SequenceMode.UNORDERED)
        report = benchmark(compare, expected, actual, policy)
        assert len(report.mismatches) == 1
