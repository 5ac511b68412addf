# objdiff/data_models/field_difference.py
# FieldDifference data class and comparison path helpers.
#
# A comparison path is a tuple of string segments. Paths are never mutated:
# every extension or annotation returns a new tuple.

from dataclasses import dataclass
from typing import Any, Tuple

# Stands in for the absent side of a null-vs-value difference.
NULL_SENTINEL = "null"


@dataclass(frozen=True)
class FieldDifference:
    """
    Record of a single field-level discrepancy.

    Fields:
      path   -- ordered, non-empty tuple of path segments, e.g.
                ("order", "lines[2]", "price") or ("order", "lines.size()").
      value1 -- value found in the first object, or NULL_SENTINEL.
      value2 -- value found in the second object, or NULL_SENTINEL.
    """
    path:   Tuple[str, ...]
    value1: Any
    value2: Any

    def __post_init__(self) -> None:
        if not isinstance(self.path, tuple):
            object.__setattr__(self, "path", tuple(self.path))
        if not self.path:
            raise ValueError("FieldDifference: path must be non-empty")

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    def __str__(self) -> str:
        return self.dotted_path + ": " + repr(self.value1) + " != " + repr(self.value2)


def extend_path(path: Tuple[str, ...], segment: str) -> Tuple[str, ...]:
    """Return a new path with segment appended."""
    return path + (segment,)


def annotate_last_segment(path: Tuple[str, ...], suffix: str) -> Tuple[str, ...]:
    """
    Return a new path whose last segment has suffix appended.

    Used for sequence positions ("items" -> "items[3]") and length
    mismatches ("items" -> "items.size()").
    """
    if not path:
        raise ValueError("annotate_last_segment: path must be non-empty")
    return path[:-1] + (path[-1] + suffix,)
