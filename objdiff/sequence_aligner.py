# objdiff/sequence_aligner.py
# SequenceAligner -- positional comparison of two ordered sequences.
#
# Elements at the same index are handed back to the comparator's field-value
# routine under a path whose last segment is annotated "[i]", so elements get
# the full null / sequence / descend / decimal / value decision order.
#
# On a length mismatch, alignment stops at the first index where one side is
# exhausted. The longer side is drained (counted, not compared) and exactly
# one "<name>.size()" difference carrying both total lengths is emitted.

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Tuple

from objdiff.data_models.field_difference import FieldDifference, annotate_last_segment

Path = Tuple[str, ...]
ValueComparer = Callable[[Path, Any, Any], List[FieldDifference]]

_EXHAUSTED = object()


def _drain(iterator) -> int:
    count = 0
    for _ in iterator:
        count += 1
    return count


class SequenceAligner:
    """
    Compares two sequences element by element.

    Method:
      compare_sequences(path, seq1, seq2) -> List[FieldDifference]
    """

    def __init__(self, compare_value: ValueComparer) -> None:
        self._compare_value = compare_value

    def compare_sequences(
        self,
        path: Path,
        seq1: Iterable[Any],
        seq2: Iterable[Any],
    ) -> List[FieldDifference]:
        differences: List[FieldDifference] = []
        itr1 = iter(seq1)
        itr2 = iter(seq2)

        index = 0
        while True:
            value1 = next(itr1, _EXHAUSTED)
            value2 = next(itr2, _EXHAUSTED)

            if value1 is _EXHAUSTED and value2 is _EXHAUSTED:
                break

            if value1 is _EXHAUSTED or value2 is _EXHAUSTED:
                size1 = index + (0 if value1 is _EXHAUSTED else 1 + _drain(itr1))
                size2 = index + (0 if value2 is _EXHAUSTED else 1 + _drain(itr2))
                differences.append(FieldDifference(
                    path=annotate_last_segment(path, ".size()"),
                    value1=size1,
                    value2=size2,
                ))
                break

            differences.extend(self._compare_value(
                annotate_last_segment(path, "[" + str(index) + "]"),
                value1,
                value2,
            ))
            index += 1

        return differences
