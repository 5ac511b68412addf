# objdiff/report.py
# Text rendering of comparison results and the test-assertion helper.
#
# Output format, one line per difference in result order:
#
#   2 difference(s) between Order instances:
#     lines[1].price: Decimal('9.99') != Decimal('10.49')
#     lines.size(): 3 != 2

from __future__ import annotations

from typing import Any, Sequence

from objdiff.data_models.field_difference import FieldDifference

_INDENT = "  "


def format_differences(
    differences: Sequence[FieldDifference],
    subject:     str = "",
) -> str:
    """
    Render differences as a multi-line report.

    Returns "no differences" for an empty sequence so callers can log the
    result unconditionally.
    """
    if not differences:
        return "no differences"
    header = str(len(differences)) + " difference(s)"
    if subject:
        header += " between " + subject + " instances"
    lines = [header + ":"]
    lines.extend(_INDENT + str(difference) for difference in differences)
    return "\n".join(lines)


def assert_no_differences(differ: Any, object1: Any, object2: Any) -> None:
    """
    Compare with differ and raise AssertionError carrying the full report
    when any difference is found. Engine errors propagate unchanged.
    """
    differences = differ.compare(object1, object2)
    if differences:
        raise AssertionError(
            format_differences(differences, type(object1).__name__)
        )
