# objdiff/cycle_guard.py
# DescentStack -- the chain of objects currently being descended into.
#
# Membership is by reference identity (id()), never by ==, since a
# user-defined __eq__ may itself recurse through the cycle.
#
# descend() pushes on entry and pops on every exit path, including
# exceptions, so the stack always equals the live call chain.

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Tuple


class DescentStack:
    """
    Ordered stack of in-progress descents, used for cycle detection and
    for the STACK block of traversal error messages.
    """

    def __init__(self) -> None:
        self._entries: List[Any] = []

    def __len__(self) -> int:
        return len(self._entries)

    def contains(self, obj: Any) -> bool:
        return any(entry is obj for entry in self._entries)

    def entries(self) -> Tuple[Any, ...]:
        return tuple(self._entries)

    @contextmanager
    def descend(self, obj: Any) -> Iterator[None]:
        self._entries.append(obj)
        try:
            yield
        finally:
            popped = self._entries.pop()
            if popped is not obj:
                raise RuntimeError("descent stack out of sync")
