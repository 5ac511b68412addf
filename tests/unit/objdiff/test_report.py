from dataclasses import dataclass

import pytest

from objdiff import FieldDifference, LaxObjectDiff, assert_no_differences, format_differences


@dataclass
class Pair:
    left: int
    right: int


class TestFormatDifferences:

    def test_empty(self):
        assert format_differences([]) == "no differences"

    def test_one_line_per_difference(self):
        text = format_differences([
            FieldDifference(("a",), 1, 2),
            FieldDifference(("b.size()",), 3, 2),
        ])
        assert text.splitlines() == [
            "2 difference(s):",
            "  a: 1 != 2",
            "  b.size(): 3 != 2",
        ]

    def test_subject_in_header(self):
        text = format_differences([FieldDifference(("a",), 1, 2)], "Pair")
        assert text.splitlines()[0] == "1 difference(s) between Pair instances:"


class TestAssertNoDifferences:

    def test_passes_when_equal(self):
        assert_no_differences(LaxObjectDiff(), Pair(1, 2), Pair(1, 2))

    def test_raises_with_report(self):
        with pytest.raises(AssertionError) as excinfo:
            assert_no_differences(LaxObjectDiff(), Pair(1, 2), Pair(1, 3))
        assert "right: 2 != 3" in str(excinfo.value)
        assert "Pair instances" in str(excinfo.value)

    def test_engine_method_delegates(self):
        with pytest.raises(AssertionError, match="left: 1 != 5"):
            LaxObjectDiff().assert_no_differences(Pair(1, 2), Pair(5, 2))
