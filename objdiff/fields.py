# =============================================================================
# objdiff -- STRUCTURAL OBJECT COMPARISON
# File:   objdiff/fields.py
# =============================================================================
#
# SCOPE
# -----
# Field Enumerator: lists the comparable fields of an object and reads their
# current values. The comparator consumes this module and is agnostic to how
# the fields were discovered.
#
# FIELD SOURCES (first match wins)
# --------------------------------
#   1. Explicit capability: a class attribute __diff_fields__ holding the
#      ordered field names. Nothing else is enumerated.
#   2. Dataclasses: dataclasses.fields() in declaration order.
#   3. Plain classes: annotated attributes and __slots__ across the MRO,
#      base classes first, followed by instance __dict__ attributes not
#      already seen. Private names are included; ClassVar annotations are not.
#
# Every field carries its declaring class: the most-base class in the MRO
# that declares it. Instance-only attributes are declared on the runtime type.
#
# Declared fields are cached per type. The cache is only ever filled, never
# invalidated; classes are not expected to change shape after first use.
# =============================================================================

from __future__ import annotations

import dataclasses
import inspect
import typing
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from objdiff.exceptions import InvalidConfigurationError
from objdiff.utils import qualified_name

_CAPABILITY_ATTR = "__diff_fields__"

# Slot entries that never hold comparable state.
_SKIPPED_SLOTS = frozenset({"__dict__", "__weakref__"})


@dataclass(frozen=True)
class FieldRef:
    """
    Identity of one comparable field: the declaring type plus the name.

    Used both for enumeration and as the key of the ignore set.
    """
    declaring_type: type
    name:           str

    def __str__(self) -> str:
        return qualified_name(self.declaring_type) + "." + self.name


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def _own_annotations(cls: type) -> Dict[str, Any]:
    return dict(inspect.get_annotations(cls))


def _mangle(cls: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return "_" + cls.__name__.lstrip("_") + name
    return name


def _own_slots(cls: type) -> List[str]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [_mangle(cls, s) for s in slots if s not in _SKIPPED_SLOTS]


def _own_declared_names(cls: type) -> List[str]:
    names = [
        name
        for name, annotation in _own_annotations(cls).items()
        if not _is_classvar(annotation)
    ]
    for slot in _own_slots(cls):
        if slot not in names:
            names.append(slot)
    return names


def _declaring_type(cls: type, name: str) -> type:
    """Most-base class in cls's MRO that declares name; cls itself if none."""
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        if name in _own_declared_names(klass):
            return klass
        capability = klass.__dict__.get(_CAPABILITY_ATTR)
        if capability is not None and name in capability:
            return klass
    return cls


# =============================================================================
# FIELD ENUMERATOR
# =============================================================================

class FieldEnumerator:
    """
    Enumerates comparable fields and reads their values.

    Methods:
      declared_fields(cls)       -> tuple of FieldRef known from the type alone
      fields_of(obj1, obj2)      -> declared fields plus instance attributes
      resolve(cls, name)         -> FieldRef, or InvalidConfigurationError
      read(obj, field)           -> current value, None when unset
    """

    def __init__(self) -> None:
        self._declared: Dict[type, Tuple[FieldRef, ...]] = {}

    def declared_fields(self, cls: type) -> Tuple[FieldRef, ...]:
        cached = self._declared.get(cls)
        if cached is not None:
            return cached

        capability = getattr(cls, _CAPABILITY_ATTR, None)
        if capability is not None:
            names: Iterable[str] = tuple(capability)
        elif dataclasses.is_dataclass(cls):
            names = [f.name for f in dataclasses.fields(cls)]
        else:
            names = []
            for klass in reversed(cls.__mro__):
                if klass is object:
                    continue
                for name in _own_declared_names(klass):
                    if name not in names:
                        names.append(name)

        refs = tuple(FieldRef(_declaring_type(cls, name), name) for name in names)
        self._declared[cls] = refs
        return refs

    def fields_of(self, obj1: Any, obj2: Optional[Any] = None) -> Tuple[FieldRef, ...]:
        """
        Fields to compare for a pair of same-typed objects.

        Instance attributes missing from the declared set are appended in
        the order they appear on obj1, then obj2.
        """
        cls = type(obj1)
        declared = self.declared_fields(cls)
        if getattr(cls, _CAPABILITY_ATTR, None) is not None:
            return declared

        seen = {ref.name for ref in declared}
        extra: List[FieldRef] = []
        for obj in (obj1, obj2):
            instance_dict = getattr(obj, "__dict__", None)
            if not isinstance(instance_dict, dict):
                continue
            for name in instance_dict:
                if name not in seen:
                    seen.add(name)
                    extra.append(FieldRef(cls, name))
        return declared + tuple(extra)

    def resolve(self, cls: type, name: str) -> FieldRef:
        """
        Find the field called name on cls.

        A class that declares no fields at all is compared through its
        instance attributes, so any attribute name resolves to
        FieldRef(cls, name), the key fields_of() builds for it.

        Raises InvalidConfigurationError if cls declares fields and name is
        not one of them.
        """
        if not isinstance(cls, type):
            raise InvalidConfigurationError(
                "ignore field owner must be a type, got " + repr(cls)
            )
        if not isinstance(name, str) or not name:
            raise InvalidConfigurationError(
                "ignore field name must be a non-empty string, got " + repr(name)
            )
        declared = self.declared_fields(cls)
        for ref in declared:
            if ref.name == name:
                return ref
        if not declared and getattr(cls, _CAPABILITY_ATTR, None) is None:
            return FieldRef(cls, name)
        raise InvalidConfigurationError(
            "no such field: " + qualified_name(cls) + "." + str(name)
        )

    @staticmethod
    def read(obj: Any, field: FieldRef) -> Any:
        try:
            return getattr(obj, field.name)
        except AttributeError:
            return None
