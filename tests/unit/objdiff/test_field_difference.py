import dataclasses

import pytest

from objdiff import NULL_SENTINEL, FieldDifference
from objdiff.data_models import annotate_last_segment, extend_path


class TestFieldDifference:

    def test_null_sentinel_is_literal_string(self):
        assert NULL_SENTINEL == "null"

    def test_is_frozen(self):
        diff = FieldDifference(("a",), 1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            diff.value1 = 3  # type: ignore[misc]

    def test_list_path_is_stored_as_tuple(self):
        diff = FieldDifference(["a", "b"], 1, 2)
        assert diff.path == ("a", "b")

    def test_empty_path_rejected(self):
        with pytest.raises(ValueError, match="non-empty"):
            FieldDifference((), 1, 2)

    def test_structural_equality(self):
        assert FieldDifference(("a",), 1, 2) == FieldDifference(("a",), 1, 2)
        assert FieldDifference(("a",), 1, 2) != FieldDifference(("b",), 1, 2)

    def test_dotted_path(self):
        diff = FieldDifference(("order", "lines[1]", "price"), 1, 2)
        assert diff.dotted_path == "order.lines[1].price"

    def test_str(self):
        diff = FieldDifference(("name",), "a", NULL_SENTINEL)
        assert str(diff) == "name: 'a' != 'null'"


class TestPathHelpers:

    def test_extend_path_returns_new_tuple(self):
        path = ("a",)
        extended = extend_path(path, "b")
        assert extended == ("a", "b")
        assert path == ("a",)

    def test_annotate_last_segment(self):
        assert annotate_last_segment(("a", "items"), "[3]") == ("a", "items[3]")
        assert annotate_last_segment(("items",), ".size()") == ("items.size()",)

    def test_annotate_empty_path_rejected(self):
        with pytest.raises(ValueError):
            annotate_last_segment((), "[0]")
