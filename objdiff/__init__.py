# objdiff/__init__.py
# Structural object comparison for test assertions.
#
# Canonical import:
#   from objdiff import StrictObjectDiff, LaxObjectDiff, FieldDifference
#
# Runtime dependencies: stdlib only.

from .exceptions import (
    ObjectDiffError,
    NullInputError,
    TypeMismatchError,
    UnclassifiedTypeError,
    InvalidConfigurationError,
)
from .data_models import FieldDifference, NULL_SENTINEL
from .fields import FieldEnumerator, FieldRef
from .classifier import (
    DEFAULT_VALUE_TYPES,
    ClassificationPolicy,
    LaxClassification,
    StrictClassification,
    Strategy,
)
from .decimal_comparator import DecimalComparator, DecimalPolicy
from .cycle_guard import DescentStack
from .sequence_aligner import SequenceAligner
from .comparator import ObjectDiff, StrictObjectDiff, LaxObjectDiff
from .report import format_differences, assert_no_differences

__version__ = "1.0.0"

__all__ = [
    # Exceptions
    "ObjectDiffError",
    "NullInputError",
    "TypeMismatchError",
    "UnclassifiedTypeError",
    "InvalidConfigurationError",
    # Results
    "FieldDifference",
    "NULL_SENTINEL",
    # Field access
    "FieldEnumerator",
    "FieldRef",
    # Classification
    "DEFAULT_VALUE_TYPES",
    "ClassificationPolicy",
    "LaxClassification",
    "StrictClassification",
    "Strategy",
    # Decimals
    "DecimalComparator",
    "DecimalPolicy",
    # Traversal parts
    "DescentStack",
    "SequenceAligner",
    # Engines
    "ObjectDiff",
    "StrictObjectDiff",
    "LaxObjectDiff",
    # Reporting
    "format_differences",
    "assert_no_differences",
]
