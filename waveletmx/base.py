"""Construction and element access for wavelet matrices."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Union

from .bitvec import BitVec, RankSelectVector

__all__ = ["WaveletMatrixBase"]

_MAX_BITS_PER_ELEMENT = 0xFFFF
_MAX_INT_BITS = 64


def _reverse_bits(value: int, width: int) -> int:
    """Reverse the lowest ``width`` bits of ``value``."""
    return int(format(value, f"0{width}b")[::-1], 2)


def _check_values(values: Sequence[int]) -> None:
    if any(value < 0 for value in values):
        raise ValueError("values must be non-negative")


def _unpack(bit_vec: BitVec, bits_per_element: int) -> List[int]:
    if bits_per_element < 1:
        raise ValueError("bits_per_element must be positive for a packed bit vector")
    if bits_per_element > _MAX_BITS_PER_ELEMENT:
        raise ValueError(f"bits_per_element cannot exceed {_MAX_BITS_PER_ELEMENT}")
    if len(bit_vec) % bits_per_element:
        raise ValueError(
            "The number of bits in the bit vector must be a multiple of the "
            "number of bits per element."
        )
    count = len(bit_vec) // bits_per_element
    return [
        bit_vec.get_bits(element * bits_per_element, bits_per_element)
        for element in range(count)
    ]


class WaveletMatrixBase:
    """A sequence of ``k``-bit words stored as ``k`` levels of rank/select bit vectors.

    Level 0 holds the most significant bit of every word; each following level
    holds the next bit, with the words stably sorted by the bits above it.
    """

    def __init__(
        self, levels: Iterable[Union[RankSelectVector, BitVec, Iterable[int]]]
    ) -> None:
        self._levels: List[RankSelectVector] = [
            level if isinstance(level, RankSelectVector) else RankSelectVector(level)
            for level in levels
        ]
        if len({len(level) for level in self._levels}) > 1:
            raise ValueError("all levels must have the same length")
        self._zero_counts: List[int] = [
            level.rank0(len(level)) for level in self._levels
        ]

    # construction -----------------------------------------------------------

    @classmethod
    def _permutation_sorting(cls, values: Sequence[int], bits_per_element: int):
        permutation = list(range(len(values)))
        levels: List[List[int]] = []
        for level in range(bits_per_element):
            shift = bits_per_element - level - 1
            bits = [(values[p] >> shift) & 1 for p in permutation]
            levels.append(bits)
            if level < bits_per_element - 1:
                zeros = [p for p, bit in zip(permutation, bits) if not bit]
                ones = [p for p, bit in zip(permutation, bits) if bit]
                permutation = zeros + ones
        return cls(levels)

    @classmethod
    def _prefix_counting(cls, values: Sequence[int], bits_per_element: int):
        k = bits_per_element
        if k == 0:
            return cls([])
        if any(value >= 1 << k for value in values):
            raise ValueError(f"values must fit into {k} bits")
        n = len(values)
        histogram = [0] * (1 << k)
        borders = [0] * (1 << k)
        data = [[0] * n for _ in range(k)]

        for i, value in enumerate(values):
            histogram[value] += 1
            data[0][i] = (value >> (k - 1)) & 1

        for level in range(k - 1, 0, -1):
            for h in range(1 << level):
                histogram[h] = histogram[2 * h] + histogram[2 * h + 1]

            # node order in a wavelet matrix follows bit-reversed prefixes
            borders[0] = 0
            for h in range(1, 1 << level):
                previous = _reverse_bits(h - 1, level)
                borders[_reverse_bits(h, level)] = borders[previous] + histogram[previous]

            shift = k - level - 1
            for value in values:
                prefix = value >> (k - level)
                data[level][borders[prefix]] = (value >> shift) & 1
                borders[prefix] += 1

        return cls(data)

    @classmethod
    def from_bit_vec(cls, bit_vec: BitVec, bits_per_element: int):
        """Build from words packed into ``bit_vec``, least significant bit first."""
        return cls._permutation_sorting(_unpack(bit_vec, bits_per_element), bits_per_element)

    @classmethod
    def from_sequence(cls, sequence: Iterable[int], bits_per_element: int):
        """Build from integers, each holding a word in its lowest ``bits_per_element`` bits."""
        if not 0 <= bits_per_element <= _MAX_INT_BITS:
            raise ValueError("The number of bits per element cannot exceed 64.")
        values = list(sequence)
        _check_values(values)
        return cls._permutation_sorting(values, bits_per_element)

    @classmethod
    def from_bit_vec_pc(cls, bit_vec: BitVec, bits_per_element: int):
        """Build from a packed bit vector by prefix counting (for small alphabets)."""
        values = _unpack(bit_vec, bits_per_element)
        if bits_per_element > _MAX_INT_BITS:
            raise ValueError("The number of bits per element cannot exceed 64.")
        return cls._prefix_counting(values, bits_per_element)

    @classmethod
    def from_sequence_pc(cls, sequence: Iterable[int], bits_per_element: int):
        """Build from integers by prefix counting (for small alphabets)."""
        if not 0 <= bits_per_element <= _MAX_INT_BITS:
            raise ValueError("The number of bits per element cannot exceed 64.")
        values = list(sequence)
        _check_values(values)
        return cls._prefix_counting(values, bits_per_element)

    # access -------------------------------------------------------------------

    def _descend(self, level: int, position: int, bit: int) -> int:
        """Map ``position`` on ``level`` into the next level's partition of ``bit``."""
        data = self._levels[level]
        if bit:
            return self._zero_counts[level] + data.rank1(position)
        return data.rank0(position)

    def _get_int_unchecked(self, index: int) -> int:
        value = 0
        for level, data in enumerate(self._levels):
            bit = data.get(index)
            value = (value << 1) | bit
            index = self._descend(level, index, bit)
        return value

    def _in_bounds(self, index: int) -> bool:
        return 0 <= index < len(self)

    def get_value(self, index: int) -> Optional[BitVec]:
        """Return the word at ``index`` as a bit vector, or None if out of bounds."""
        if not self._levels or not self._in_bounds(index):
            return None
        return BitVec.pack_sequence([self._get_int_unchecked(index)], self.bits_per_element)

    def get_int(self, index: int) -> Optional[int]:
        """Return the word at ``index`` as an integer.

        Returns None if the index is out of bounds or words are wider than 64 bits.
        """
        if self.bits_per_element > _MAX_INT_BITS or not self._levels:
            return None
        if not self._in_bounds(index):
            return None
        return self._get_int_unchecked(index)

    @property
    def bits_per_element(self) -> int:
        """Number of bits in each word."""
        return len(self._levels)

    def __len__(self) -> int:
        return len(self._levels[0]) if self._levels else 0

    def is_empty(self) -> bool:
        """Whether the matrix holds no words."""
        return len(self) == 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(len={len(self)}, bits_per_element={self.bits_per_element})"