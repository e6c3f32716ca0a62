"""ValueBuilder: converts plain Python data into an immutable Value tree.

Uses recursive dispatch to convert dicts, lists/tuples, numpy arrays and
scalar values into ``Value`` nodes.  This is the ingestion boundary: every
runtime type probe happens here, once, so the comparison walk only ever
switches on ``ValueKind``.

Malformed input is rejected with ``StructuralError``:
- a container that (directly or indirectly) contains itself;
- nesting deeper than ``max_depth``;
- a mapping key that is not a string.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from fractions import Fraction
from typing import Any

import numpy as np

from tolerant_diff.algorithm.config import DEFAULT_MAX_DEPTH
from tolerant_diff.exceptions import StructuralError
from tolerant_diff.result import ROOT, ComparisonPath
from tolerant_diff.tree.nodes import FALSE, NULL, TRUE, Value, ValueKind

_NUMBER_TYPES = (int, float, Decimal, Fraction)


class ValueBuilder:
    """Converts any supported Python value into a typed Value tree.

    The dispatch order is critical: bool MUST be checked before int because
    bool is a subclass of int in Python (isinstance(True, int) is True).

    Cycle detection tracks the ``id()`` of every container currently being
    converted; revisiting one of them raises ``StructuralError``.  Shared
    (non-cyclic) sub-objects are fine and are simply converted twice.

    Example::

        builder = ValueBuilder()
        tree = builder.build({"price": 4.3, "tags": ["a"]})
        # tree: MAPPING -> ("price", NUMBER 4.3), ("tags", SEQUENCE -> STRING "a")
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._max_depth = max_depth
        self._active: set[int] = set()

    def build(self, obj: Any, path: ComparisonPath = ROOT) -> Value:
        """Convert ``obj`` into a Value tree.

        Args:
            obj:  Plain Python data, numpy data or an existing Value.
            path: Location of ``obj`` within the input.  Defaults to root.

        Returns:
            The Value tree rooted at ``obj``.

        Raises:
            StructuralError: On cycles, excessive depth or non-string keys.
        """
        if path.depth > self._max_depth:
            msg = f"nesting depth exceeds max_depth={self._max_depth}"
            raise StructuralError(msg, str(path))

        if isinstance(obj, Value):
            return obj

        if obj is None:
            return NULL

        # CRITICAL: bool MUST be checked before int; bool subclasses int
        if isinstance(obj, (bool, np.bool_)):
            return TRUE if obj else FALSE

        if isinstance(obj, (np.integer, np.floating)):
            return Value(ValueKind.NUMBER, obj.item())

        if isinstance(obj, _NUMBER_TYPES):
            return Value(ValueKind.NUMBER, obj)

        if isinstance(obj, str):
            return Value(ValueKind.STRING, str(obj))

        if isinstance(obj, np.ndarray):
            obj = obj.tolist()

        if not isinstance(obj, (Mapping, list, tuple)):
            return Value(ValueKind.OPAQUE, obj)

        # Containers: each level of nesting costs exactly two stack frames
        # (build -> _build_mapping / _build_sequence -> build).
        marker = id(obj)
        if marker in self._active:
            msg = "cyclic reference in input"
            raise StructuralError(msg, str(path))
        self._active.add(marker)
        try:
            if isinstance(obj, Mapping):
                return self._build_mapping(obj, path)
            return self._build_sequence(obj, path)
        finally:
            self._active.discard(marker)

    def _build_mapping(self, obj: Mapping[Any, Any], path: ComparisonPath) -> Value:
        """Build a MAPPING node, preserving the mapping's iteration order."""
        pairs: list[tuple[str, Value]] = []
        for key, val in obj.items():
            if not isinstance(key, str):
                msg = f"mapping keys must be strings, got {type(key).__name__} {key!r}"
                raise StructuralError(msg, str(path))
            pairs.append((key, self.build(val, path.child_key(key))))
        return Value(ValueKind.MAPPING, tuple(pairs))

    def _build_sequence(self, obj: list[Any] | tuple[Any, ...], path: ComparisonPath) -> Value:
        """Build a SEQUENCE node with one child per element."""
        children: list[Value] = []
        for index, item in enumerate(obj):
            children.append(self.build(item, path.child_index(index)))
        return Value(ValueKind.SEQUENCE, tuple(children))
