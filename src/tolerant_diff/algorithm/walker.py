"""TreeWalker: recursive lock-step walk of two Value trees.

Walks an expected and an actual tree together and records an outcome for
every decision point, so a single call reports every discrepancy instead of
stopping at the first one (soft-assertion semantics).

Architecture:
- MAPPING pairs:  expected keys in expected order, then actual-only keys in
                  actual order.  Shared keys recurse; one-sided keys become
                  "missing key" / "unexpected key" mismatches.
- SEQUENCE pairs: a "length mismatch" is recorded at the sequence itself and
                  the overlapping elements are still compared.  ORDERED mode
                  pairs index i with index i; UNORDERED mode pairs exactly
                  equal elements first, then the rest by minimum total
                  mismatch count (Hungarian assignment).
- Anything else:  delegated to ``compare_scalars`` (which also produces the
                  "null mismatch" and "type mismatch" verdicts).

The walker keeps no state between calls; the outcome list is owned by the
caller.  Data differences never raise.  Only input that breaks the Value
model (depth beyond ``policy.max_depth`` or beyond the interpreter recursion
limit) raises ``StructuralError``.
"""

from __future__ import annotations

from collections import Counter, deque
from collections.abc import Hashable

import numpy as np

from tolerant_diff.algorithm.classifier import Category, classify
from tolerant_diff.algorithm.config import (
    DEFAULT_POLICY,
    KeyMatchMode,
    SequenceMode,
    TolerancePolicy,
)
from tolerant_diff.algorithm.matcher import optimal_assignment
from tolerant_diff.algorithm.scalars import compare_scalars, scalar_key
from tolerant_diff.exceptions import StructuralError
from tolerant_diff.result import (
    ABSENT,
    ROOT,
    ComparisonOutcome,
    ComparisonPath,
    ComparisonReport,
    Match,
    Mismatch,
)
from tolerant_diff.tree.nodes import Value, ValueKind

__all__ = ["TreeWalker", "compare_values"]


class TreeWalker:
    """Recursive comparison of two Value trees under one TolerancePolicy.

    Example::

        from tolerant_diff.tree import ValueBuilder

        builder = ValueBuilder()
        outcomes = []
        TreeWalker().walk(builder.build([1, 2, 3]), builder.build([1, 2]), ROOT, outcomes)
        # outcomes: Mismatch($, "length mismatch"), Match($[0]), Match($[1])
    """

    def __init__(self, policy: TolerancePolicy | None = None) -> None:
        self._policy = policy if policy is not None else DEFAULT_POLICY

    @property
    def policy(self) -> TolerancePolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def walk(
        self,
        expected: Value,
        actual: Value,
        path: ComparisonPath,
        outcomes: list[ComparisonOutcome],
    ) -> None:
        """Compare ``expected`` with ``actual`` at ``path``, appending outcomes.

        Args:
            expected: Expected subtree.
            actual:   Actual subtree.
            path:     Location of both subtrees.
            outcomes: Accumulator (mutated in place).

        Raises:
            StructuralError: If ``path`` is deeper than ``policy.max_depth``.
        """
        if path.depth > self._policy.max_depth:
            msg = f"nesting depth exceeds max_depth={self._policy.max_depth}"
            raise StructuralError(msg, str(path))

        cat_e = classify(expected, self._policy)
        cat_a = classify(actual, self._policy)

        if cat_e == Category.MAPPING and cat_a == Category.MAPPING:
            self._walk_mapping(expected, actual, path, outcomes)
        elif cat_e == Category.SEQUENCE and cat_a == Category.SEQUENCE:
            self._walk_sequence(expected, actual, path, outcomes)
        else:
            # Scalars, and composite-vs-other pairs (null / type mismatch)
            outcomes.append(compare_scalars(expected, actual, path, self._policy))

    def compare(self, expected: Value, actual: Value) -> ComparisonReport:
        """Walk both trees from the root and return the full report.

        Raises:
            StructuralError: If the trees nest deeper than ``policy.max_depth``
                or deeper than the interpreter recursion limit allows.
        """
        outcomes: list[ComparisonOutcome] = []
        try:
            self.walk(expected, actual, ROOT, outcomes)
        except RecursionError as exc:
            msg = (
                f"nesting depth exceeds the interpreter recursion limit "
                f"(max_depth={self._policy.max_depth})"
            )
            raise StructuralError(msg) from exc
        return ComparisonReport(tuple(outcomes))

    # ------------------------------------------------------------------
    # Mappings
    # ------------------------------------------------------------------

    def _walk_mapping(
        self,
        expected: Value,
        actual: Value,
        path: ComparisonPath,
        outcomes: list[ComparisonOutcome],
    ) -> None:
        expected_items = expected.items()
        actual_items = actual.items()

        if not expected_items and not actual_items:
            outcomes.append(Match(path, {}, {}))
            return

        expected_map = dict(expected_items)
        actual_map = dict(actual_items)

        for key, e_child in expected_items:
            child_path = path.child_key(key)
            a_child = actual_map.get(key)
            if a_child is not None:
                self.walk(e_child, a_child, child_path, outcomes)
            elif self._policy.null_equals_missing and e_child.kind == ValueKind.NULL:
                outcomes.append(Match(child_path, None, ABSENT))
            else:
                outcomes.append(
                    Mismatch(child_path, e_child.to_python(), ABSENT, "missing key")
                )

        for key, a_child in actual_items:
            if key in expected_map:
                continue
            child_path = path.child_key(key)
            if self._policy.null_equals_missing and a_child.kind == ValueKind.NULL:
                outcomes.append(Match(child_path, ABSENT, None))
            elif self._policy.key_match_mode == KeyMatchMode.STRICT:
                outcomes.append(
                    Mismatch(child_path, ABSENT, a_child.to_python(), "unexpected key")
                )

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------

    def _walk_sequence(
        self,
        expected: Value,
        actual: Value,
        path: ComparisonPath,
        outcomes: list[ComparisonOutcome],
    ) -> None:
        expected_elems = expected.elements()
        actual_elems = actual.elements()

        if len(expected_elems) != len(actual_elems):
            outcomes.append(
                Mismatch(path, len(expected_elems), len(actual_elems), "length mismatch")
            )
        elif not expected_elems:
            outcomes.append(Match(path, [], []))
            return

        if self._policy.sequence_mode == SequenceMode.UNORDERED:
            self._walk_unordered(expected_elems, actual_elems, path, outcomes)
            return

        for index in range(min(len(expected_elems), len(actual_elems))):
            self.walk(
                expected_elems[index],
                actual_elems[index],
                path.child_index(index),
                outcomes,
            )

    def _walk_unordered(
        self,
        expected_elems: tuple[Value, ...],
        actual_elems: tuple[Value, ...],
        path: ComparisonPath,
        outcomes: list[ComparisonOutcome],
    ) -> None:
        """Pair elements and record the outcomes of each pair.

        Elements with equal equivalence keys are paired first, in expected
        order; such a pair is always a full match and is walked once.  The
        remaining elements are paired by minimum mismatch count: every
        candidate pair is walked into a scratch list and the number of
        mismatches in it is the pair's cost.  Outcomes are recorded under the
        expected element's index.  Elements left unpaired (only when lengths
        differ) are covered by the "length mismatch" entry.
        """
        keys: dict[int, Hashable | None] = {}
        available: dict[Hashable, deque[int]] = {}
        for j, a_elem in enumerate(actual_elems):
            key = self._equivalence_key(a_elem, keys)
            if key is not None:
                available.setdefault(key, deque()).append(j)

        chosen: dict[int, list[ComparisonOutcome]] = {}
        rest_expected: list[int] = []
        paired_actual: set[int] = set()
        for i, e_elem in enumerate(expected_elems):
            key = self._equivalence_key(e_elem, keys)
            bucket = available.get(key) if key is not None else None
            if not bucket:
                rest_expected.append(i)
                continue
            j = bucket.popleft()
            paired_actual.add(j)
            scratch: list[ComparisonOutcome] = []
            self.walk(e_elem, actual_elems[j], path.child_index(i), scratch)
            chosen[i] = scratch
        rest_actual = [j for j in range(len(actual_elems)) if j not in paired_actual]

        if rest_expected and rest_actual:
            trials: list[list[list[ComparisonOutcome]]] = []
            cost_matrix = np.empty((len(rest_expected), len(rest_actual)), dtype=float)
            for row, i in enumerate(rest_expected):
                child_path = path.child_index(i)
                row_trials: list[list[ComparisonOutcome]] = []
                for col, j in enumerate(rest_actual):
                    scratch = []
                    self.walk(expected_elems[i], actual_elems[j], child_path, scratch)
                    cost_matrix[row, col] = sum(1 for o in scratch if isinstance(o, Mismatch))
                    row_trials.append(scratch)
                trials.append(row_trials)
            for row, col in optimal_assignment(cost_matrix):
                chosen[rest_expected[row]] = trials[row][col]

        for i in sorted(chosen):
            outcomes.extend(chosen[i])

    def _equivalence_key(
        self, value: Value, keys: dict[int, Hashable | None]
    ) -> Hashable | None:
        """Hashable form of ``value``; equal keys guarantee a full match.

        Only used in UNORDERED mode, so mapping keys ignore key order and
        sequence keys ignore element order.  None when some scalar inside has
        no key.  Results are cached in ``keys`` by node identity.
        """
        marker = id(value)
        if marker in keys:
            return keys[marker]

        key: Hashable | None
        category = classify(value, self._policy)
        if category == Category.MAPPING:
            children = [(k, self._equivalence_key(v, keys)) for k, v in value.items()]
            if any(child is None for _, child in children):
                key = None
            else:
                key = (category, frozenset(children))
        elif category == Category.SEQUENCE:
            elements = [self._equivalence_key(v, keys) for v in value.elements()]
            if any(element is None for element in elements):
                key = None
            else:
                key = (category, frozenset(Counter(elements).items()))
        else:
            key = scalar_key(value, self._policy)

        keys[marker] = key
        return key


def compare_values(
    expected: Value,
    actual: Value,
    policy: TolerancePolicy | None = None,
) -> ComparisonReport:
    """Compare two already-built Value trees and return the report."""
    return TreeWalker(policy).compare(expected, actual)
