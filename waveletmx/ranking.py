"""Rank and select queries on wavelet matrices."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from .base import WaveletMatrixBase
from .bitvec import BitVec

__all__ = ["RankingMatrix"]

_MAX_INT_BITS = 64

BitReader = Callable[[int], int]


def _bounds(positions: range) -> Tuple[int, int]:
    """Return the start and stop of a half-open, step-one range of positions."""
    if positions.step != 1:
        raise ValueError("positions must be a range with step 1")
    return positions.start, positions.stop


def _check_symbol_int(symbol: int) -> None:
    if symbol < 0:
        raise ValueError("symbol must be non-negative")


class RankingMatrix(WaveletMatrixBase):
    """A wavelet matrix answering rank and select queries for symbols.

    Every query comes in two flavours: one taking the symbol as a
    :class:`BitVec` of ``bits_per_element`` bits (least significant bit
    first), and one (suffix ``_int``) taking it as an integer, available
    while words are at most 64 bits wide.
    """

    # symbol readers -----------------------------------------------------------

    def _bit_reader(self, symbol: BitVec) -> BitReader:
        top = self.bits_per_element - 1
        return lambda level: symbol.get(top - level)

    def _int_reader(self, symbol: int) -> BitReader:
        _check_symbol_int(symbol)
        top = self.bits_per_element - 1
        return lambda level: (symbol >> (top - level)) & 1

    # generic algorithms -------------------------------------------------------

    def _rank_between(self, start: int, stop: int, bit_of: BitReader) -> int:
        if start < 0 or stop < start:
            raise ValueError(f"invalid position range {start}..{stop}")
        for level in range(self.bits_per_element):
            bit = bit_of(level)
            start = self._descend(level, start, bit)
            stop = self._descend(level, stop, bit)
        return stop - start

    def _select_from(self, offset: int, rank: int, bit_of: BitReader) -> int:
        if offset < 0 or rank < 0:
            raise ValueError("offset and rank must be non-negative")
        bits = [bit_of(level) for level in range(self.bits_per_element)]
        position = offset
        for level, bit in enumerate(bits):
            position = self._descend(level, position, bit)

        position += rank
        for level in reversed(range(self.bits_per_element)):
            data = self._levels[level]
            if bits[level]:
                position = data.select1(position - self._zero_counts[level])
            else:
                position = data.select0(position)
        return position

    def _range_in_bounds(self, start: int, stop: int) -> bool:
        return 0 <= start < len(self) and stop <= len(self)

    def _offset_in_bounds(self, offset: int, index: int) -> bool:
        return 0 <= offset <= index and offset < len(self) and index <= len(self)

    def _symbol_fits(self, symbol: BitVec) -> bool:
        return len(symbol) == self.bits_per_element

    def _ints_supported(self) -> bool:
        return self.bits_per_element <= _MAX_INT_BITS

    # rank ---------------------------------------------------------------------

    def rank_range_unchecked(self, positions: range, symbol: BitVec) -> int:
        """Count ``symbol`` in ``positions`` without checking the bounds.

        Raises ValueError for a range whose start lies past its stop and
        IndexError if ``symbol`` has fewer bits than the words.
        """
        start, stop = _bounds(positions)
        return self._rank_between(start, stop, self._bit_reader(symbol))

    def rank_range(self, positions: range, symbol: BitVec) -> Optional[int]:
        """Count ``symbol`` in the half-open ``positions``.

        Returns None if the range is out of bounds or the symbol's width
        differs from the words' width.
        """
        start, stop = _bounds(positions)
        if not self._range_in_bounds(start, stop) or not self._symbol_fits(symbol):
            return None
        return self._rank_between(start, stop, self._bit_reader(symbol))

    def rank_range_int(self, positions: range, symbol: int) -> Optional[int]:
        """Count the integer ``symbol`` in the half-open ``positions``.

        Returns None if the range is out of bounds or words exceed 64 bits.
        """
        start, stop = _bounds(positions)
        if not self._range_in_bounds(start, stop) or not self._ints_supported():
            return None
        return self._rank_between(start, stop, self._int_reader(symbol))

    def rank_offset(self, offset: int, index: int, symbol: BitVec) -> Optional[int]:
        """Count ``symbol`` between ``offset`` and ``index`` (exclusive)."""
        if not self._offset_in_bounds(offset, index) or not self._symbol_fits(symbol):
            return None
        return self._rank_between(offset, index, self._bit_reader(symbol))

    def rank_offset_int(self, offset: int, index: int, symbol: int) -> Optional[int]:
        """Count the integer ``symbol`` between ``offset`` and ``index`` (exclusive)."""
        if not self._offset_in_bounds(offset, index) or not self._ints_supported():
            return None
        return self._rank_between(offset, index, self._int_reader(symbol))

    def rank(self, index: int, symbol: BitVec) -> Optional[int]:
        """Count ``symbol`` before ``index``; ``index`` may equal the length."""
        if not 0 <= index <= len(self) or not self._symbol_fits(symbol):
            return None
        return self._rank_between(0, index, self._bit_reader(symbol))

    def rank_int(self, index: int, symbol: int) -> Optional[int]:
        """Count the integer ``symbol`` before ``index``; ``index`` may equal the length."""
        if not 0 <= index <= len(self) or not self._ints_supported():
            return None
        return self._rank_between(0, index, self._int_reader(symbol))

    # select -------------------------------------------------------------------

    def select_offset_unchecked(self, offset: int, rank: int, symbol: BitVec) -> int:
        """Position of the ``rank``-th ``symbol`` at or after ``offset``.

        Returns the length of the sequence if there is no such occurrence.
        """
        return self._select_from(offset, rank, self._bit_reader(symbol))

    def select_offset(self, offset: int, rank: int, symbol: BitVec) -> Optional[int]:
        """Position of the ``rank``-th ``symbol`` at or after ``offset``, or None."""
        if not 0 <= offset < len(self) or rank < 0 or not self._symbol_fits(symbol):
            return None
        position = self._select_from(offset, rank, self._bit_reader(symbol))
        return position if position < len(self) else None

    def select_offset_int(self, offset: int, rank: int, symbol: int) -> Optional[int]:
        """Position of the ``rank``-th integer ``symbol`` at or after ``offset``, or None."""
        if not 0 <= offset < len(self) or rank < 0 or not self._ints_supported():
            return None
        position = self._select_from(offset, rank, self._int_reader(symbol))
        return position if position < len(self) else None

    def select(self, rank: int, symbol: BitVec) -> Optional[int]:
        """Position of the ``rank``-th ``symbol`` in the sequence, or None."""
        if rank < 0 or not self._symbol_fits(symbol):
            return None
        position = self._select_from(0, rank, self._bit_reader(symbol))
        return position if position < len(self) else None

    def select_int(self, rank: int, symbol: int) -> Optional[int]:
        """Position of the ``rank``-th integer ``symbol`` in the sequence, or None."""
        if rank < 0 or not self._ints_supported():
            return None
        position = self._select_from(0, rank, self._int_reader(symbol))
        return position if position < len(self) else None