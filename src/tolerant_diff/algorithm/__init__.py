"""algorithm subpackage: public API for the tolerant comparison engine.

Provides the classifier, the scalar comparator, the tree walker and the
policy that configures them.  Import from this module (not from sub-modules
directly) to stay on the stable public interface.

Example::

    from tolerant_diff.algorithm import TolerancePolicy, TreeWalker
    from tolerant_diff.tree import ValueBuilder

    builder = ValueBuilder()
    report = TreeWalker(TolerancePolicy()).compare(
        builder.build({"price": "4.30198"}), builder.build({"price": 4.3019799999999995})
    )
    # report.overall_match is True
"""

from __future__ import annotations

from tolerant_diff.algorithm.classifier import Category, classify
from tolerant_diff.algorithm.config import (
    DEFAULT_POLICY,
    KeyMatchMode,
    SequenceMode,
    TolerancePolicy,
)
from tolerant_diff.algorithm.scalars import compare_scalars
from tolerant_diff.algorithm.walker import TreeWalker, compare_values

__all__ = [
    "DEFAULT_POLICY",
    "Category",
    "KeyMatchMode",
    "SequenceMode",
    "TolerancePolicy",
    "TreeWalker",
    "classify",
    "compare_scalars",
    "compare_values",
]
