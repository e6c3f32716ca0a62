"""Value dataclass and ValueKind StrEnum: the immutable tree compared by the engine.

A ``Value`` is built once per input by ``ValueBuilder`` (see builder.py) and
never mutated afterwards.  Composite payloads are tuples, so a ``Value`` tree
cannot contain a cycle once constructed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any


class ValueKind(StrEnum):
    """Enumeration of the seven Value variants.

    - NULL     -> "null"     : JSON null / Python None
    - BOOL     -> "bool"     : True / False
    - NUMBER   -> "number"   : int, float, Decimal, Fraction
    - STRING   -> "string"   : text
    - SEQUENCE -> "sequence" : ordered list of Values
    - MAPPING  -> "mapping"  : ordered (str key -> Value) pairs, keys unique
    - OPAQUE   -> "opaque"   : anything else, compared with ``==``
    """

    NULL = auto()
    BOOL = auto()
    NUMBER = auto()
    STRING = auto()
    SEQUENCE = auto()
    MAPPING = auto()
    OPAQUE = auto()


@dataclass(frozen=True, slots=True)
class Value:
    """A node in the Value tree.

    Attributes:
        kind:    Which variant this node is (see ValueKind).
        payload: The scalar for NULL/BOOL/NUMBER/STRING/OPAQUE nodes; a tuple
                 of child Values for SEQUENCE; a tuple of ``(key, Value)``
                 pairs for MAPPING.
    """

    kind: ValueKind
    payload: Any = None

    @property
    def is_composite(self) -> bool:
        return self.kind in (ValueKind.SEQUENCE, ValueKind.MAPPING)

    def items(self) -> tuple[tuple[str, Value], ...]:
        """Return the ``(key, Value)`` pairs of a MAPPING node."""
        if self.kind != ValueKind.MAPPING:
            msg = f"items() requires a mapping value, got {self.kind}"
            raise TypeError(msg)
        return self.payload  # type: ignore[no-any-return]

    def elements(self) -> tuple[Value, ...]:
        """Return the child Values of a SEQUENCE node."""
        if self.kind != ValueKind.SEQUENCE:
            msg = f"elements() requires a sequence value, got {self.kind}"
            raise TypeError(msg)
        return self.payload  # type: ignore[no-any-return]

    def __len__(self) -> int:
        if not self.is_composite:
            msg = f"{self.kind} value has no length"
            raise TypeError(msg)
        return len(self.payload)

    def to_python(self) -> Any:
        """Convert the tree back to plain Python data (dict, list, scalars)."""
        if self.kind == ValueKind.MAPPING:
            return {key: child.to_python() for key, child in self.payload}
        if self.kind == ValueKind.SEQUENCE:
            return [child.to_python() for child in self.payload]
        return self.payload


NULL = Value(ValueKind.NULL)
TRUE = Value(ValueKind.BOOL, True)
FALSE = Value(ValueKind.BOOL, False)
