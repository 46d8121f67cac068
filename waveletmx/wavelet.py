"""The full wavelet matrix: predecessor and successor search and iteration."""

from __future__ import annotations

from typing import Callable, Iterator, Optional, Tuple

from .bitvec import BitVec
from .iteration import IndexedIterator
from .ranking import _bounds
from .statistics import QuantileMatrix

__all__ = ["WaveletMatrix"]

BitReader = Callable[[int], int]


class WaveletMatrix(QuantileMatrix):
    """A sequence of ``k``-bit words supporting access, rank, select,
    quantile, predecessor and successor queries.

    Example::

        matrix = WaveletMatrix.from_sequence([1, 4, 4, 1, 2, 7], 3)
        matrix.get_int(1)                       # 4
        matrix.rank_int(3, 4)                   # 2
        matrix.range_median_int(range(0, 3))    # 4
        matrix.predecessor_int(range(0, 6), 3)  # 2
    """

    # generic algorithms -------------------------------------------------------

    def _searchable(self, start: int, stop: int) -> bool:
        return 0 <= start < stop <= len(self) and not self.is_empty()

    def _predecessor_search(self, start: int, stop: int, bit_of: BitReader) -> Optional[int]:
        result = 0
        # state of the last node where a branch to smaller words was possible
        fallback: Optional[Tuple[int, int, int, int]] = None

        for level in range(self.bits_per_element):
            data = self._levels[level]
            zeros_start = data.rank0(start)
            zeros_end = data.rank0(stop)
            zeros = zeros_end - zeros_start

            if bit_of(level) == 0:
                if zeros == 0:
                    # every word left is larger: take the largest of the last smaller branch
                    if fallback is None:
                        return None
                    branch_level, prefix, branch_start, branch_stop = fallback
                    return self._quantile_search(
                        branch_start,
                        branch_stop,
                        branch_stop - branch_start - 1,
                        branch_level + 1,
                        prefix << 1,
                    )
                result <<= 1
                start, stop = zeros_start, zeros_end
            else:
                if zeros == stop - start:
                    # every word left is smaller: take the largest of them
                    return self._quantile_search(start, stop, stop - start - 1, level, result)
                if zeros_start < zeros_end:
                    fallback = (level, result, zeros_start, zeros_end)
                result = (result << 1) | 1
                offset = self._zero_counts[level]
                start = offset + (start - zeros_start)
                stop = offset + (stop - zeros_end)

        return result

    def _successor_search(self, start: int, stop: int, bit_of: BitReader) -> Optional[int]:
        result = 0
        # state of the last node where a branch to larger words was possible
        fallback: Optional[Tuple[int, int, int, int]] = None

        for level in range(self.bits_per_element):
            data = self._levels[level]
            zeros_start = data.rank0(start)
            zeros_end = data.rank0(stop)
            zeros = zeros_end - zeros_start
            offset = self._zero_counts[level]
            ones_start = offset + (start - zeros_start)
            ones_end = offset + (stop - zeros_end)

            if bit_of(level) == 0:
                if zeros == 0:
                    # every word left is larger: take the smallest of them
                    return self._quantile_search(start, stop, 0, level, result)
                if ones_start < ones_end:
                    fallback = (level, result, ones_start, ones_end)
                result <<= 1
                start, stop = zeros_start, zeros_end
            else:
                if zeros == stop - start:
                    # every word left is smaller: take the smallest of the last larger branch
                    if fallback is None:
                        return None
                    branch_level, prefix, branch_start, branch_stop = fallback
                    return self._quantile_search(
                        branch_start,
                        branch_stop,
                        0,
                        branch_level + 1,
                        (prefix << 1) | 1,
                    )
                result = (result << 1) | 1
                start, stop = ones_start, ones_end

        return result

    # predecessor and successor ------------------------------------------------

    def predecessor(self, positions: range, symbol: BitVec) -> Optional[BitVec]:
        """The largest word in ``positions`` not greater than ``symbol``.

        Returns None if the symbol's width differs from the words' width, the
        range is empty or out of bounds, or every word in it is larger.
        """
        start, stop = _bounds(positions)
        if not self._symbol_fits(symbol) or not self._searchable(start, stop):
            return None
        value = self._predecessor_search(start, stop, self._bit_reader(symbol))
        return None if value is None else self._to_bit_vec(value)

    def predecessor_int(self, positions: range, symbol: int) -> Optional[int]:
        """The largest word in ``positions`` not greater than the integer ``symbol``.

        Also returns None if words are wider than 64 bits.
        """
        start, stop = _bounds(positions)
        if not self._ints_supported() or not self._searchable(start, stop):
            return None
        return self._predecessor_search(start, stop, self._int_reader(symbol))

    def successor(self, positions: range, symbol: BitVec) -> Optional[BitVec]:
        """The smallest word in ``positions`` not less than ``symbol``.

        Returns None if the symbol's width differs from the words' width, the
        range is empty or out of bounds, or every word in it is smaller.
        """
        start, stop = _bounds(positions)
        if not self._symbol_fits(symbol) or not self._searchable(start, stop):
            return None
        value = self._successor_search(start, stop, self._bit_reader(symbol))
        return None if value is None else self._to_bit_vec(value)

    def successor_int(self, positions: range, symbol: int) -> Optional[int]:
        """The smallest word in ``positions`` not less than the integer ``symbol``.

        Also returns None if words are wider than 64 bits.
        """
        start, stop = _bounds(positions)
        if not self._ints_supported() or not self._searchable(start, stop):
            return None
        return self._successor_search(start, stop, self._int_reader(symbol))

    # iteration ----------------------------------------------------------------

    def iter_values(self) -> IndexedIterator[BitVec]:
        """Iterate over the words in sequence order as bit vectors."""
        return IndexedIterator(
            lambda index: self._to_bit_vec(self._get_int_unchecked(index)), len(self)
        )

    def iter_int(self) -> Optional[IndexedIterator[int]]:
        """Iterate over the words as integers, or None if they exceed 64 bits."""
        if not self._ints_supported():
            return None
        return IndexedIterator(self._get_int_unchecked, len(self))

    def iter_sorted(self) -> IndexedIterator[BitVec]:
        """Iterate over the words in ascending order as bit vectors."""
        total = len(self)
        return IndexedIterator(
            lambda index: self._to_bit_vec(self._quantile_search(0, total, index, 0, 0)),
            total,
        )

    def iter_sorted_int(self) -> Optional[IndexedIterator[int]]:
        """Iterate over the words in ascending order as integers, or None if they exceed 64 bits."""
        if not self._ints_supported():
            return None
        total = len(self)
        return IndexedIterator(
            lambda index: self._quantile_search(0, total, index, 0, 0), total
        )

    def __iter__(self) -> Iterator[BitVec]:
        return self.iter_values()