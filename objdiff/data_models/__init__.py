# objdiff/data_models/__init__.py
# Immutable result records produced by the comparator.

from .field_difference import (
    NULL_SENTINEL,
    FieldDifference,
    extend_path,
    annotate_last_segment,
)

__all__ = [
    "NULL_SENTINEL",
    "FieldDifference",
    "extend_path",
    "annotate_last_segment",
]
