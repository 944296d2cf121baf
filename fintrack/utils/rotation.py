"""
Rotation state for the single insight card.

The dashboard shows one insight at a time. The index advances on a timer or
on explicit prev/next navigation and always wraps around the list.
"""
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class InsightRotator:
    def __init__(self, length: int, index: int = 0) -> None:
        self._length = max(length, 0)
        self._index = self._wrap(index)

    def _wrap(self, index: int) -> int:
        if self._length == 0:
            return 0
        return index % self._length

    @property
    def length(self) -> int:
        return self._length

    @property
    def current(self) -> int:
        return self._index

    def peek_next(self) -> int:
        return self._wrap(self._index + 1)

    def peek_previous(self) -> int:
        return self._wrap(self._index - 1)

    def next(self) -> int:
        self._index = self.peek_next()
        return self._index

    def previous(self) -> int:
        self._index = self.peek_previous()
        return self._index

    def select(self, items: Sequence[T]) -> Optional[T]:
        if not items:
            return None
        return items[self._index % len(items)]
