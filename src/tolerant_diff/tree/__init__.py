"""Tree subpackage for Python-to-Value conversion primitives.

Re-exports the public API for the tree module:
- Value: immutable tagged tree node compared by the engine
- ValueKind: StrEnum of the seven Value variants
- ValueBuilder: converts plain Python / numpy data into a Value tree
"""

from tolerant_diff.tree.builder import ValueBuilder
from tolerant_diff.tree.nodes import Value, ValueKind

__all__ = ["Value", "ValueBuilder", "ValueKind"]
