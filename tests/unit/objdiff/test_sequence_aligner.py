from objdiff import FieldDifference, SequenceAligner


class _Recorder:
    """compare_value stand-in: == per element, remembers every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, path, value1, value2):
        self.calls.append((path, value1, value2))
        if value1 == value2:
            return []
        return [FieldDifference(path, value1, value2)]


def _align(seq1, seq2, path=("items",)):
    recorder = _Recorder()
    differences = SequenceAligner(recorder).compare_sequences(path, seq1, seq2)
    return differences, recorder


class TestEqualLengths:

    def test_equal_sequences(self):
        differences, _ = _align([1, 2, 3], [1, 2, 3])
        assert differences == []

    def test_empty_sequences(self):
        differences, recorder = _align([], [])
        assert differences == []
        assert recorder.calls == []

    def test_element_paths_annotated_with_index(self):
        _, recorder = _align(["a", "b"], ["a", "b"], path=("order", "lines"))
        assert [call[0] for call in recorder.calls] == [
            ("order", "lines[0]"),
            ("order", "lines[1]"),
        ]

    def test_element_difference(self):
        differences, _ = _align([1, 2, 3], [1, 9, 3])
        assert differences == [FieldDifference(("items[1]",), 2, 9)]

    def test_mixed_iterable_kinds(self):
        differences, _ = _align((1, 2), [1, 2])
        assert differences == []


class TestLengthMismatch:

    def test_first_longer(self):
        differences, _ = _align([1, 2, 3], [1, 2])
        assert differences == [FieldDifference(("items.size()",), 3, 2)]

    def test_second_longer(self):
        differences, _ = _align([1], [1, 2, 3])
        assert differences == [FieldDifference(("items.size()",), 1, 3)]

    def test_one_side_empty(self):
        differences, recorder = _align([], [7, 8])
        assert differences == [FieldDifference(("items.size()",), 0, 2)]
        assert recorder.calls == []

    def test_matched_prefix_compared_then_single_size_difference(self):
        differences, recorder = _align([1, 9, 3], [1, 2])
        assert differences == [
            FieldDifference(("items[1]",), 9, 2),
            FieldDifference(("items.size()",), 3, 2),
        ]
        assert len(recorder.calls) == 2

    def test_nested_path_size_segment(self):
        differences, _ = _align([1], [], path=("order", "lines"))
        assert differences[0].path == ("order", "lines.size()")
