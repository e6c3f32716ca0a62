"""TolerancePolicy, KeyMatchMode and SequenceMode for comparison configuration.

TolerancePolicy is a frozen (immutable) dataclass holding every knob that
influences a verdict.  It is validated on construction, so an invalid policy
never reaches the walker.  KeyMatchMode selects how keys present only in the
actual mapping are treated; SequenceMode selects positional or set-like
sequence comparison.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from tolerant_diff.exceptions import PolicyError

DEFAULT_MAX_DEPTH = 256

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


class KeyMatchMode(StrEnum):
    """How keys present only in the actual mapping are treated.

    - STRICT: every actual-only key is an "unexpected key" mismatch.
    - SUBSET: actual-only keys are ignored (expected must be a subset).
    """

    STRICT = auto()
    SUBSET = auto()


class SequenceMode(StrEnum):
    """How two sequences are aligned.

    - ORDERED:   Positional alignment, index i against index i.
    - UNORDERED: Set-like alignment via optimal assignment (Hungarian).
    """

    ORDERED = auto()
    UNORDERED = auto()


@dataclass(frozen=True, slots=True)
class TolerancePolicy:
    """Immutable configuration for a tolerant comparison.

    Attributes:
        absolute_epsilon: Numbers closer than this are equal.  Must be >= 0.
        relative_epsilon: Numbers whose difference relative to the larger
            magnitude is below this are equal.  Must be >= 0.
        case_insensitive_booleans: When True, "TRUE" / "False" text coerces
            to a boolean and boolean literals compare case-insensitively.
            When False only lowercase "true" / "false" coerce.
        coerce_string_numerics: When True, text matching the numeric literal
            grammar (``-?\\d+`` or ``-?\\d*\\.\\d+``) classifies as numeric.
        nan_equal: When True, NaN equals NaN.  Default False (IEEE semantics).
        key_match_mode: Treatment of keys present only in actual.
        null_equals_missing: When True, a key missing on one side matches a
            null value on the other.  Default False.
        sequence_mode: Positional or set-like sequence comparison.
        max_depth: Maximum nesting depth accepted before a StructuralError.
    """

    absolute_epsilon: float = 1e-9
    relative_epsilon: float = 1e-9
    case_insensitive_booleans: bool = True
    coerce_string_numerics: bool = True
    nan_equal: bool = False
    key_match_mode: KeyMatchMode = KeyMatchMode.STRICT
    null_equals_missing: bool = False
    sequence_mode: SequenceMode = SequenceMode.ORDERED
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        for name in ("absolute_epsilon", "relative_epsilon"):
            eps = getattr(self, name)
            if isinstance(eps, bool) or not isinstance(eps, (int, float)):
                msg = f"{name} must be a number, got {eps!r}"
                raise PolicyError(msg)
            if not math.isfinite(eps) or eps < 0.0:
                msg = f"{name} must be a finite number >= 0.0, got {eps}"
                raise PolicyError(msg)
        for name in (
            "case_insensitive_booleans",
            "coerce_string_numerics",
            "nan_equal",
            "null_equals_missing",
        ):
            if not isinstance(getattr(self, name), bool):
                msg = f"{name} must be a bool, got {getattr(self, name)!r}"
                raise PolicyError(msg)
        object.__setattr__(
            self, "key_match_mode", _coerce_mode(KeyMatchMode, self.key_match_mode)
        )
        object.__setattr__(
            self, "sequence_mode", _coerce_mode(SequenceMode, self.sequence_mode)
        )
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            msg = f"max_depth must be an int, got {self.max_depth!r}"
            raise PolicyError(msg)
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise PolicyError(msg)

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> TolerancePolicy:
        """Build a policy from loosely typed settings (e.g. ini or env values).

        String values are parsed into the field's type; fields absent from
        ``settings`` keep their defaults.

        Raises:
            PolicyError: On unknown setting names or unparseable values.
        """
        known = {f.name: f for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        for name, raw in settings.items():
            if name not in known:
                msg = f"unknown tolerance setting {name!r}"
                raise PolicyError(msg)
            if raw is None:
                continue
            kwargs[name] = _parse_setting(name, raw)
        return cls(**kwargs)

    def replace(self, **changes: Any) -> TolerancePolicy:
        """Return a copy of this policy with ``changes`` applied (and validated)."""
        return dataclasses.replace(self, **changes)


def _coerce_mode(enum_cls: type[StrEnum], value: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    choices = ", ".join(m.value for m in enum_cls)
    msg = f"invalid {enum_cls.__name__} {value!r}; expected one of: {choices}"
    raise PolicyError(msg)


def _parse_setting(name: str, raw: Any) -> Any:
    if not isinstance(raw, str):
        return raw
    text = raw.strip()
    if name in ("absolute_epsilon", "relative_epsilon"):
        try:
            return float(text)
        except ValueError:
            msg = f"{name} must be a number, got {raw!r}"
            raise PolicyError(msg) from None
    if name == "max_depth":
        try:
            return int(text)
        except ValueError:
            msg = f"max_depth must be an integer, got {raw!r}"
            raise PolicyError(msg) from None
    if name in ("key_match_mode", "sequence_mode"):
        return text
    lowered = text.lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    msg = f"{name} must be a boolean, got {raw!r}"
    raise PolicyError(msg)


DEFAULT_POLICY = TolerancePolicy()
