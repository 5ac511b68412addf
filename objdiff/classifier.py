# =============================================================================
# objdiff -- STRUCTURAL OBJECT COMPARISON
# File:   objdiff/classifier.py
# =============================================================================
#
# SCOPE
# -----
# Type Classifier: decides how a field value is compared. One traversal
# algorithm (objdiff.comparator) is parameterized by one of two policies:
#
#   LaxClassification     -- unregistered types fall back to ==.
#                            No cycle guard.
#   StrictClassification  -- unregistered types raise UnclassifiedTypeError.
#                            Value types must be whitelisted explicitly.
#                            Descents are cycle-guarded.
#
# DECISION ORDER (after the None checks done by the comparator)
# ------------------------------------------------------------
#   SEQUENCE  value is a non-text collections.abc.Sequence
#   DESCEND   type(value) is registered descend-into
#   DECIMAL   type(value) is exactly decimal.Decimal
#   VALUE     strict: type(value) is a registered value type
#             lax:    anything else
#   UNCLASSIFIED  strict: anything else (the comparator raises)
#
# Lookups use the exact runtime type, never isinstance: registering a base
# class does not classify its subclasses.
#
# REGISTRIES
# ----------
# Descend-into types may be registered by type object or by fully-qualified
# name ("package.module.QualName"). The descend-into and value-type sets are
# disjoint. Enum types are atomic and can never be descend-into.
# Registries are configured before comparing and only read while comparing.
# =============================================================================

from __future__ import annotations

import collections.abc
import datetime
import decimal
import fractions
import uuid
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, FrozenSet, Set, Union

from objdiff.exceptions import InvalidConfigurationError
from objdiff.utils import qualified_name

TypeOrName = Union[type, str]

# Sequence types whose elements are characters or bytes, compared whole.
_TEXT_TYPES = (str, bytes, bytearray, memoryview)

DEFAULT_VALUE_TYPES: FrozenSet[type] = frozenset({
    str, bytes, bytearray, int, float, complex, bool,
    frozenset, set, dict,
    datetime.date, datetime.datetime, datetime.time, datetime.timedelta,
    datetime.timezone,
    uuid.UUID,
    fractions.Fraction,
})


class Strategy(str, Enum):
    """
    Comparison strategy for one field value.

    SEQUENCE     -- positional alignment via SequenceAligner.
    DESCEND      -- recursive field-by-field comparison.
    DECIMAL      -- DecimalComparator under the active DecimalPolicy.
    VALUE        -- direct == equality.
    UNCLASSIFIED -- strict mode, type registered in neither set.
    """
    SEQUENCE     = "SEQUENCE"
    DESCEND      = "DESCEND"
    DECIMAL      = "DECIMAL"
    VALUE        = "VALUE"
    UNCLASSIFIED = "UNCLASSIFIED"


def is_sequence(value: Any) -> bool:
    return (
        isinstance(value, collections.abc.Sequence)
        and not isinstance(value, _TEXT_TYPES)
    )


# =============================================================================
# BASE POLICY
# =============================================================================

class ClassificationPolicy(ABC):
    """
    Shared descend-into registry and decision steps common to both modes.

    Subclasses implement classify_fallback(), the last step of the decision
    order, and declare whether descents are cycle-guarded.
    """

    strict: bool = False
    uses_cycle_guard: bool = False

    def __init__(self) -> None:
        self._descend_types: Set[type] = set()
        self._descend_names: Set[str] = set()

    # -- descend-into registry ------------------------------------------------

    def add_descend_into_type(self, type_or_name: TypeOrName) -> None:
        if isinstance(type_or_name, str):
            if not type_or_name:
                raise InvalidConfigurationError(
                    "descend-into type name must be non-empty"
                )
            self._descend_names.add(type_or_name)
            return
        cls = _require_type(type_or_name, "descend-into type")
        if issubclass(cls, Enum):
            raise InvalidConfigurationError(
                "cannot descend into enum type " + qualified_name(cls)
            )
        self._check_not_value_type(cls)
        self._descend_types.add(cls)

    def remove_descend_into_type(self, type_or_name: TypeOrName) -> None:
        if isinstance(type_or_name, str):
            self._descend_names.discard(type_or_name)
            self._descend_types = {
                t for t in self._descend_types if qualified_name(t) != type_or_name
            }
            return
        self._descend_types.discard(type_or_name)
        self._descend_names.discard(qualified_name(type_or_name))

    def is_descend_into(self, cls: type) -> bool:
        return cls in self._descend_types or qualified_name(cls) in self._descend_names

    def _check_not_value_type(self, cls: type) -> None:
        """Hook for the strict policy; the lax policy has no value-type set."""

    # -- value types ----------------------------------------------------------

    def add_value_type(self, cls: type) -> None:
        raise InvalidConfigurationError(
            "value types are only meaningful in strict mode"
        )

    # -- classification -------------------------------------------------------

    def classify(self, value: Any) -> Strategy:
        """
        Strategy for a non-None field value.

        The strict policy answers UNCLASSIFIED for unregistered types; the
        comparator raises with path and stack context.
        """
        if is_sequence(value):
            return Strategy.SEQUENCE
        cls = type(value)
        if self.is_descend_into(cls):
            return Strategy.DESCEND
        if cls is decimal.Decimal:
            return Strategy.DECIMAL
        return self.classify_fallback(cls)

    @abstractmethod
    def classify_fallback(self, cls: type) -> Strategy:
        """Strategy for a type that is neither sequence, descend-into nor decimal."""


# =============================================================================
# CONCRETE POLICIES
# =============================================================================

class LaxClassification(ClassificationPolicy):
    """Unregistered types are compared with their own == semantics."""

    def classify_fallback(self, cls: type) -> Strategy:
        return Strategy.VALUE


class StrictClassification(ClassificationPolicy):
    """
    Every non-sequence, non-decimal field type must be registered as either
    descend-into or value type. classify_fallback() reports anything else as
    UNCLASSIFIED; the comparator turns that into UnclassifiedTypeError with
    full diagnostics.
    """

    strict = True
    uses_cycle_guard = True

    def __init__(self) -> None:
        super().__init__()
        self._value_types: Set[type] = set()

    def add_value_type(self, cls: type) -> None:
        cls = _require_type(cls, "value type")
        if self.is_descend_into(cls):
            raise InvalidConfigurationError(
                qualified_name(cls) + " is already registered as descend-into"
            )
        self._value_types.add(cls)

    def add_default_value_types(self) -> None:
        """Register DEFAULT_VALUE_TYPES, skipping any already descend-into."""
        for cls in DEFAULT_VALUE_TYPES:
            if not self.is_descend_into(cls):
                self._value_types.add(cls)

    def is_value_type(self, cls: type) -> bool:
        return cls in self._value_types

    def _check_not_value_type(self, cls: type) -> None:
        if cls in self._value_types:
            raise InvalidConfigurationError(
                qualified_name(cls) + " is already registered as a value type"
            )

    def classify_fallback(self, cls: type) -> Strategy:
        if cls in self._value_types:
            return Strategy.VALUE
        return Strategy.UNCLASSIFIED


def _require_type(candidate: Any, role: str) -> type:
    if not isinstance(candidate, type):
        raise InvalidConfigurationError(
            role + " must be a type or a qualified name, got " + repr(candidate)
        )
    return candidate


__all__ = [
    "DEFAULT_VALUE_TYPES",
    "Strategy",
    "is_sequence",
    "ClassificationPolicy",
    "LaxClassification",
    "StrictClassification",
]
