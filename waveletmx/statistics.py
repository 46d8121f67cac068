"""Quantile, minimum, maximum and median queries on wavelet matrices."""

from __future__ import annotations

from typing import Optional

from .bitvec import BitVec
from .ranking import RankingMatrix, _bounds

__all__ = ["QuantileMatrix"]

_MAX_INT_BITS = 64


class QuantileMatrix(RankingMatrix):
    """A wavelet matrix answering order-statistic queries over ranges.

    Ranges are half-open ``range`` objects with step one. Results come as a
    :class:`BitVec` of ``bits_per_element`` bits, least significant bit first,
    or (suffix ``_int``) as an integer while words are at most 64 bits wide.
    """

    # generic algorithm --------------------------------------------------------

    def _quantile_search(
        self, start: int, stop: int, k: int, start_level: int, prefix: int
    ) -> int:
        """Find the ``k``-th smallest word in ``start..stop`` of ``start_level``.

        ``prefix`` holds the bits of the levels above ``start_level``; the bits
        of the remaining levels are shifted in below it.
        """
        for level in range(start_level, self.bits_per_element):
            data = self._levels[level]
            zeros_start = data.rank0(start)
            zeros_end = data.rank0(stop)
            zeros = zeros_end - zeros_start
            prefix <<= 1
            if k < zeros:
                start, stop = zeros_start, zeros_end
            else:
                prefix |= 1
                k -= zeros
                offset = self._zero_counts[level]
                start = offset + (start - zeros_start)
                stop = offset + (stop - zeros_end)
        return prefix

    def _to_bit_vec(self, value: int) -> BitVec:
        return BitVec.pack_sequence([value], self.bits_per_element)

    def _quantile_value(self, start: int, stop: int, k: int) -> Optional[int]:
        if k < 0 or not 0 <= start < len(self) or stop > len(self) or k >= stop - start:
            return None
        return self._quantile_search(start, stop, k, 0, 0)

    def _ints_supported(self) -> bool:
        return self.bits_per_element <= _MAX_INT_BITS

    # quantile -----------------------------------------------------------------

    def quantile(self, positions: range, k: int) -> Optional[BitVec]:
        """The ``k``-th smallest word in ``positions`` (``k = 0`` is the smallest).

        Returns None if the range is out of bounds or ``k`` is not smaller
        than the size of the range.
        """
        start, stop = _bounds(positions)
        value = self._quantile_value(start, stop, k)
        return None if value is None else self._to_bit_vec(value)

    def quantile_int(self, positions: range, k: int) -> Optional[int]:
        """The ``k``-th smallest word in ``positions`` as an integer.

        Also returns None if words are wider than 64 bits.
        """
        start, stop = _bounds(positions)
        if not self._ints_supported():
            return None
        return self._quantile_value(start, stop, k)

    def get_sorted(self, index: int) -> Optional[BitVec]:
        """The ``index``-th smallest word of the whole sequence, or None."""
        if not 0 <= index < len(self):
            return None
        return self._to_bit_vec(self._quantile_search(0, len(self), index, 0, 0))

    def get_sorted_int(self, index: int) -> Optional[int]:
        """The ``index``-th smallest word of the whole sequence as an integer, or None."""
        if not 0 <= index < len(self) or not self._ints_supported():
            return None
        return self._quantile_search(0, len(self), index, 0, 0)

    # convenience --------------------------------------------------------------

    def range_min(self, positions: range) -> Optional[BitVec]:
        """The smallest word in ``positions``, or None if the range is empty or out of bounds."""
        return self.quantile(positions, 0)

    def range_min_int(self, positions: range) -> Optional[int]:
        """The smallest word in ``positions`` as an integer, or None."""
        return self.quantile_int(positions, 0)

    def range_max(self, positions: range) -> Optional[BitVec]:
        """The largest word in ``positions``, or None if the range is empty or out of bounds."""
        start, stop = _bounds(positions)
        if stop <= start:
            return None
        return self.quantile(positions, stop - start - 1)

    def range_max_int(self, positions: range) -> Optional[int]:
        """The largest word in ``positions`` as an integer, or None."""
        start, stop = _bounds(positions)
        if stop <= start:
            return None
        return self.quantile_int(positions, stop - start - 1)

    def range_median(self, positions: range) -> Optional[BitVec]:
        """The median word in ``positions``; for an even count the lower one."""
        start, stop = _bounds(positions)
        if stop <= start:
            return None
        return self.quantile(positions, (stop - 1 - start) // 2)

    def range_median_int(self, positions: range) -> Optional[int]:
        """The median word in ``positions`` as an integer; for an even count the lower one."""
        start, stop = _bounds(positions)
        if stop <= start or not self._ints_supported() or stop > len(self):
            return None
        return self.quantile_int(positions, (stop - 1 - start) // 2)