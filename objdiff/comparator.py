# =============================================================================
# objdiff -- STRUCTURAL OBJECT COMPARISON
# File:   objdiff/comparator.py
# =============================================================================
#
# SCOPE
# -----
# Recursive Comparator. Walks two same-typed objects field by field and
# returns every field-level difference as a FieldDifference.
#
#   ObjectDiff         -- the engine, parameterized by a ClassificationPolicy
#   StrictObjectDiff   -- ObjectDiff bound to StrictClassification
#   LaxObjectDiff      -- ObjectDiff bound to LaxClassification
#
# PER-FIELD DECISION ORDER
# ------------------------
#   1. both None                  -> no difference
#   2. exactly one None           -> difference, "null" for the absent side
#   3. sequence                   -> SequenceAligner, path unchanged
#   4. registered descend-into    -> recursive comparison
#   5. exactly decimal.Decimal    -> DecimalComparator, raw values reported
#   6. strict: value type         -> ==
#      strict: anything else      -> UnclassifiedTypeError
#      lax:    anything else      -> ==
#
# CYCLES
# ------
# Strict mode keeps a DescentStack of the objects and sequences being walked.
# One already on the stack is treated as equal to its counterpart and not
# walked again. Lax mode keeps no
# stack; a cyclic graph ends in RecursionError.
#
# Inputs are never mutated. Every compare() call returns a fresh list.
# Configuration must not change while a compare() call is in progress.
# =============================================================================

from __future__ import annotations

import dataclasses
import logging
from decimal import Decimal
from typing import Any, List, Optional, Set, Tuple

from objdiff.classifier import (
    ClassificationPolicy,
    LaxClassification,
    StrictClassification,
    Strategy,
    TypeOrName,
    is_sequence,
)
from objdiff.cycle_guard import DescentStack
from objdiff.data_models.field_difference import NULL_SENTINEL, FieldDifference, extend_path
from objdiff.decimal_comparator import DecimalComparator, DecimalPolicy
from objdiff.exceptions import (
    InvalidConfigurationError,
    NullInputError,
    TypeMismatchError,
    UnclassifiedTypeError,
)
from objdiff import report
from objdiff.fields import FieldEnumerator, FieldRef
from objdiff.sequence_aligner import SequenceAligner
from objdiff.utils import qualified_name

logger = logging.getLogger(__name__)

Path = Tuple[str, ...]


class ObjectDiff:
    """
    Structural comparison engine.

    Configure once, then call compare() any number of times:

        differ = StrictObjectDiff()
        differ.add_descend_into_type(Order)
        differ.add_value_type(str)
        differ.add_ignore_field(Order, "created_at")
        differ.set_max_decimal_scale(2)
        differences = differ.compare(expected, actual)
    """

    def __init__(
        self,
        policy:           Optional[ClassificationPolicy] = None,
        decimal_policy:   Optional[DecimalPolicy] = None,
        field_enumerator: Optional[FieldEnumerator] = None,
    ) -> None:
        self._policy:     ClassificationPolicy = policy if policy is not None else LaxClassification()
        self._decimals:   DecimalComparator = DecimalComparator(decimal_policy)
        self._fields:     FieldEnumerator = field_enumerator if field_enumerator is not None else FieldEnumerator()
        self._ignored:    Set[FieldRef] = set()

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    @property
    def strict(self) -> bool:
        return self._policy.strict

    @property
    def decimal_policy(self) -> DecimalPolicy:
        return self._decimals.policy

    @property
    def ignored_fields(self) -> Tuple[FieldRef, ...]:
        return tuple(sorted(self._ignored, key=str))

    def add_descend_into_type(self, type_or_name: TypeOrName) -> None:
        self._policy.add_descend_into_type(type_or_name)
        logger.debug("descend-into type registered: %s", _describe(type_or_name))

    def remove_descend_into_type(self, type_or_name: TypeOrName) -> None:
        self._policy.remove_descend_into_type(type_or_name)
        logger.debug("descend-into type removed: %s", _describe(type_or_name))

    def add_value_type(self, cls: type) -> None:
        """Whitelist cls for == comparison. Strict mode only."""
        self._policy.add_value_type(cls)
        logger.debug("value type registered: %s", _describe(cls))

    def add_default_value_types(self) -> None:
        """Whitelist the builtin scalar and date/time types. Strict mode only."""
        if not isinstance(self._policy, StrictClassification):
            raise InvalidConfigurationError(
                "value types are only meaningful in strict mode"
            )
        self._policy.add_default_value_types()

    def add_ignore_field(self, cls: type, field_name: str) -> None:
        """
        Exclude a field from every comparison.

        The field is resolved now; an unknown field raises
        InvalidConfigurationError instead of being silently ignored later.
        """
        ref = self._fields.resolve(cls, field_name)
        self._ignored.add(ref)
        logger.debug("ignoring field %s", ref)

    def set_ignore_decimal_trailing_zeros(self, ignore: bool) -> None:
        self._decimals = DecimalComparator(
            dataclasses.replace(self._decimals.policy, strip_trailing_zeros=ignore)
        )

    def set_max_decimal_scale(self, scale: Optional[int]) -> None:
        self._decimals = DecimalComparator(
            dataclasses.replace(self._decimals.policy, max_scale=scale)
        )

    # =========================================================================
    # ENTRY POINT
    # =========================================================================

    def compare(self, object1: Any, object2: Any) -> List[FieldDifference]:
        """
        Return every field-level difference between object1 and object2.

        Raises:
          NullInputError         -- either argument is None.
          TypeMismatchError      -- the runtime types differ, here or at any
                                    descended-into field.
          UnclassifiedTypeError  -- strict mode met an unregistered type.
        """
        if object1 is None or object2 is None:
            raise NullInputError(object1, object2)

        stack = DescentStack() if self._policy.uses_cycle_guard else None
        logger.debug(
            "comparing %s instances (%s mode)",
            qualified_name(type(object1)),
            "strict" if self.strict else "lax",
        )
        differences = self._compare_objects((), stack, object1, object2)
        logger.debug("comparison finished: %d difference(s)", len(differences))
        return differences

    def assert_no_differences(self, object1: Any, object2: Any) -> None:
        """Raise AssertionError listing every difference, if there are any."""
        report.assert_no_differences(self, object1, object2)

    # =========================================================================
    # TRAVERSAL
    # =========================================================================

    def _compare_objects(
        self,
        path:    Path,
        stack:   Optional[DescentStack],
        object1: Any,
        object2: Any,
    ) -> List[FieldDifference]:
        if stack is not None and stack.contains(object1):
            logger.debug("cycle detected at %s; subtree treated as equal", ".".join(path))
            return []

        if type(object1) is not type(object2):
            raise TypeMismatchError(type(object1), type(object2), path, _entries(stack))

        if stack is None:
            return self._compare_fields(path, stack, object1, object2)
        with stack.descend(object1):
            return self._compare_fields(path, stack, object1, object2)

    def _compare_fields(
        self,
        path:    Path,
        stack:   Optional[DescentStack],
        object1: Any,
        object2: Any,
    ) -> List[FieldDifference]:
        differences: List[FieldDifference] = []
        for field in self._fields.fields_of(object1, object2):
            if field in self._ignored:
                continue
            differences.extend(self._compare_values(
                extend_path(path, field.name),
                stack,
                self._fields.read(object1, field),
                self._fields.read(object2, field),
            ))
        return differences

    def _compare_values(
        self,
        path:   Path,
        stack:  Optional[DescentStack],
        value1: Any,
        value2: Any,
    ) -> List[FieldDifference]:
        if value1 is None and value2 is None:
            return []
        if value1 is None:
            return [FieldDifference(path, NULL_SENTINEL, value2)]
        if value2 is None:
            return [FieldDifference(path, value1, NULL_SENTINEL)]

        strategy = self._policy.classify(value1)

        if strategy is Strategy.SEQUENCE:
            if not is_sequence(value2):
                raise TypeMismatchError(type(value1), type(value2), path, _entries(stack))
            return self._compare_sequences(path, stack, value1, value2)

        if strategy is Strategy.DESCEND:
            return self._compare_objects(path, stack, value1, value2)

        if strategy is Strategy.DECIMAL:
            if type(value2) is not Decimal:
                raise TypeMismatchError(type(value1), type(value2), path, _entries(stack))
            if self._decimals.equal(value1, value2):
                return []
            return [FieldDifference(path, value1, value2)]

        if strategy is Strategy.UNCLASSIFIED:
            raise UnclassifiedTypeError(type(value1), path, _entries(stack))

        if value1 != value2:
            return [FieldDifference(path, value1, value2)]
        return []

    def _compare_sequences(
        self,
        path:   Path,
        stack:  Optional[DescentStack],
        value1: Any,
        value2: Any,
    ) -> List[FieldDifference]:
        aligner = SequenceAligner(
            lambda element_path, element1, element2: self._compare_values(
                element_path, stack, element1, element2
            )
        )
        if stack is None:
            return aligner.compare_sequences(path, value1, value2)

        # Sequences join the descent stack so a list reachable from its own
        # elements ends the walk like any other cycle.
        if stack.contains(value1):
            logger.debug("cycle detected at %s; sequence treated as equal", ".".join(path))
            return []
        with stack.descend(value1):
            return aligner.compare_sequences(path, value1, value2)


class StrictObjectDiff(ObjectDiff):
    """ObjectDiff requiring every field type to be classified. Cycle-safe."""

    def __init__(
        self,
        decimal_policy:   Optional[DecimalPolicy] = None,
        field_enumerator: Optional[FieldEnumerator] = None,
    ) -> None:
        super().__init__(StrictClassification(), decimal_policy, field_enumerator)


class LaxObjectDiff(ObjectDiff):
    """ObjectDiff comparing unregistered types with ==. No cycle guard."""

    def __init__(
        self,
        decimal_policy:   Optional[DecimalPolicy] = None,
        field_enumerator: Optional[FieldEnumerator] = None,
    ) -> None:
        super().__init__(LaxClassification(), decimal_policy, field_enumerator)


def _entries(stack: Optional[DescentStack]) -> Tuple[Any, ...]:
    return stack.entries() if stack is not None else ()


def _describe(type_or_name: TypeOrName) -> str:
    if isinstance(type_or_name, type):
        return qualified_name(type_or_name)
    return str(type_or_name)
