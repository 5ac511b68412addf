# =============================================================================
# objdiff -- STRUCTURAL OBJECT COMPARISON
# File:   objdiff/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Exception hierarchy for the comparison engine.
# All exceptions are pure value objects: no side effects, no logging,
# no I/O of any kind.
#
# EXCEPTION HIERARCHY
# -------------------
#   ObjectDiffError(Exception)                  -- base; never raised directly
#     NullInputError(ObjectDiffError)           -- top-level argument is None
#     TypeMismatchError(ObjectDiffError)        -- runtime types differ
#     UnclassifiedTypeError(ObjectDiffError)    -- strict mode, unknown type
#     InvalidConfigurationError(ObjectDiffError) -- rejected registration
#
# MESSAGE CONTRACT
# ----------------
# Errors raised during traversal carry the comparison path (dot-joined) and
# the descent stack (one entry per line):
#
#   <headline>
#     PATH: a.b.items[2]
#     STACK: <Order ...>
#   <Line ...>
#
# Errors abort the whole comparison. Nothing is retried or salvaged.
# =============================================================================

from __future__ import annotations

from typing import Any, Sequence

from objdiff.utils import qualified_name


def _join(entries: Sequence[Any], separator: str) -> str:
    return separator.join(str(entry) for entry in entries)


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class ObjectDiffError(Exception):
    """
    Base class for all comparison engine exceptions.

    Never raised directly. Use a concrete subclass.

    Attributes:
        message:  Human-readable description. Always non-empty.
    """

    def __init__(self, message: str) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError(
                "ObjectDiffError: message must be a non-empty string"
            )
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return self.__class__.__name__ + "(message=" + repr(self.message) + ")"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectDiffError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class _TraversalError(ObjectDiffError):
    """
    Shared base for errors detected mid-traversal.

    Appends the PATH / STACK diagnostic block to the headline and keeps
    both on the instance for programmatic inspection.
    """

    def __init__(
        self,
        headline: str,
        path:     Sequence[str] = (),
        stack:    Sequence[Any] = (),
    ) -> None:
        self.headline: str = headline
        self.path:     tuple = tuple(path)
        self.stack:    tuple = tuple(stack)
        message = (
            headline
            + "\n  PATH: " + _join(self.path, ".")
            + "\n  STACK: " + _join(self.stack, "\n")
        )
        super().__init__(message)


# =============================================================================
# CONCRETE EXCEPTIONS
# =============================================================================

class NullInputError(ObjectDiffError):
    """
    Raised when either top-level argument to compare() is None.

    Field-level None values are legitimate and are reported as differences;
    only the entry point rejects them.
    """

    def __init__(self, object1: Any, object2: Any) -> None:
        super().__init__(
            "NullInputError: objects must not be None ("
            + repr(object1) + ", " + repr(object2) + ")"
        )
        self.object1: Any = object1
        self.object2: Any = object2


class TypeMismatchError(_TraversalError):
    """
    Raised when two objects that must share a runtime type do not.

    Applies to the top-level pair and to every pair of field values the
    engine descends into, aligns as sequences, or compares as decimals.
    """

    def __init__(
        self,
        type1: type,
        type2: type,
        path:  Sequence[str] = (),
        stack: Sequence[Any] = (),
    ) -> None:
        super().__init__(
            "TypeMismatchError: objects must be of same type ("
            + qualified_name(type1) + ", " + qualified_name(type2) + ")",
            path,
            stack,
        )
        self.type1: type = type1
        self.type2: type = type2


class UnclassifiedTypeError(_TraversalError):
    """
    Raised in strict mode when a field value's runtime type was registered
    neither as a value type nor as a descend-into type.
    """

    def __init__(
        self,
        offending_type: type,
        path:           Sequence[str],
        stack:          Sequence[Any],
    ) -> None:
        super().__init__(
            "UnclassifiedTypeError: the following type was not classified "
            "as value|descend-into: " + qualified_name(offending_type),
            path,
            stack,
        )
        self.offending_type: type = offending_type


class InvalidConfigurationError(ObjectDiffError):
    """
    Raised at registration time for configuration the engine cannot honour:
    enum types registered as descend-into, a type registered into both
    classification sets, an unknown ignore field, a bad decimal scale.
    """

    def __init__(self, detail: str) -> None:
        if not isinstance(detail, str) or not detail:
            raise ValueError(
                "InvalidConfigurationError: detail must be a non-empty string"
            )
        super().__init__("InvalidConfigurationError: " + detail)
        self.detail: str = detail


__all__ = [
    "ObjectDiffError",
    "NullInputError",
    "TypeMismatchError",
    "UnclassifiedTypeError",
    "InvalidConfigurationError",
]
