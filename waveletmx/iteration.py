"""Double-ended iteration over indexed, immutable sequences."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, Optional, TypeVar

__all__ = ["IndexedIterator"]

T = TypeVar("T")


class IndexedIterator(Generic[T]):
    """Iterate over ``getter(0) .. getter(length - 1)`` from both ends.

    The front and the back cursor move towards each other; once they meet
    the iterator is exhausted for good. Methods other than ``__next__``
    return ``None`` when no element is left.
    """

    def __init__(self, getter: Callable[[int], T], length: int) -> None:
        if length < 0:
            raise ValueError("length must be non-negative")
        self._getter = getter
        self._front = 0
        self._back = length  # exclusive

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self._front >= self._back:
            raise StopIteration
        value = self._getter(self._front)
        self._front += 1
        return value

    def __len__(self) -> int:
        return max(self._back - self._front, 0)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(front={self._front}, back={self._back})"

    def next_back(self) -> Optional[T]:
        """Take the element at the back, or return None if none is left."""
        if self._front >= self._back:
            return None
        value = self._getter(self._back - 1)
        self._back -= 1
        return value

    def nth(self, n: int) -> Optional[T]:
        """Skip ``n`` elements from the front and take the next one.

        If fewer than ``n`` elements remain, nothing is consumed and None
        is returned.
        """
        if n < 0:
            raise ValueError("n must be non-negative")
        if n > len(self):
            return None
        self._front += n
        return next(self, None)

    def nth_back(self, n: int) -> Optional[T]:
        """Skip ``n`` elements from the back and take the next one.

        If fewer than ``n`` elements remain, nothing is consumed and None
        is returned.
        """
        if n < 0:
            raise ValueError("n must be non-negative")
        if n > len(self):
            return None
        self._back -= n
        return self.next_back()

    def last(self) -> Optional[T]:
        """Return the last remaining element without consuming anything."""
        if self._front >= self._back:
            return None
        return self._getter(self._back - 1)