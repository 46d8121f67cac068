"""Growable bit vectors and a static vector with rank and select support."""

from __future__ import annotations

from bisect import bisect_left
from itertools import accumulate
from typing import Iterable, Iterator, List, Union

__all__ = ["BitVec", "RankSelectVector"]


def _check_bit(bit: int) -> int:
    if bit not in (0, 1):
        raise ValueError(f"a bit must be 0 or 1, got {bit!r}")
    return int(bit)


class BitVec:
    """A mutable sequence of bits.

    Bit ``i`` is the ``i``-th least significant bit of the stored integer, so
    words packed into the vector keep their least significant bit first.
    """

    __slots__ = ("_value", "_length")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, bits: Iterable[int] = ()) -> None:
        value = 0
        length = 0
        for bit in bits:
            if _check_bit(bit):
                value |= 1 << length
            length += 1
        self._value = value
        self._length = length

    @classmethod
    def _from_int(cls, value: int, length: int) -> "BitVec":
        vec = cls()
        vec._value = value & ((1 << length) - 1)
        vec._length = length
        return vec

    @classmethod
    def from_zeros(cls, length: int) -> "BitVec":
        """Create a vector of ``length`` zero bits."""
        if length < 0:
            raise ValueError("length must be non-negative")
        return cls._from_int(0, length)

    @classmethod
    def from_ones(cls, length: int) -> "BitVec":
        """Create a vector of ``length`` one bits."""
        if length < 0:
            raise ValueError("length must be non-negative")
        return cls._from_int((1 << length) - 1, length)

    @classmethod
    def pack_sequence(cls, values: Iterable[int], bits_per_element: int) -> "BitVec":
        """Pack each value into ``bits_per_element`` bits, one after another.

        Bits of a value above ``bits_per_element`` are discarded; when the
        width exceeds the value's size the word is padded with zeros.
        """
        if bits_per_element < 0:
            raise ValueError("bits_per_element must be non-negative")
        mask = (1 << bits_per_element) - 1
        packed = 0
        count = 0
        for count, value in enumerate(values, start=1):
            if value < 0:
                raise ValueError("values must be non-negative")
            packed |= (value & mask) << ((count - 1) * bits_per_element)
        return cls._from_int(packed, count * bits_per_element)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._length:
            raise IndexError(f"bit index {index} out of range for length {self._length}")

    def get(self, index: int) -> int:
        """Return the bit at ``index``."""
        self._check_index(index)
        return (self._value >> index) & 1

    def set(self, index: int, bit: int) -> None:
        """Set the bit at ``index`` to ``bit``."""
        self._check_index(index)
        if _check_bit(bit):
            self._value |= 1 << index
        else:
            self._value &= ~(1 << index)

    def get_bits(self, position: int, length: int) -> int:
        """Return ``length`` bits starting at ``position`` as an integer."""
        if position < 0 or length < 0 or position + length > self._length:
            raise IndexError(
                f"bits {position}..{position + length} out of range for length {self._length}"
            )
        return (self._value >> position) & ((1 << length) - 1)

    def append_bit(self, bit: int) -> None:
        """Append one bit at the end."""
        if _check_bit(bit):
            self._value |= 1 << self._length
        self._length += 1

    def append_bits(self, value: int, length: int) -> None:
        """Append the ``length`` lowest bits of ``value``."""
        if length < 0:
            raise ValueError("length must be non-negative")
        if value < 0:
            raise ValueError("value must be non-negative")
        self._value |= (value & ((1 << length) - 1)) << self._length
        self._length += length

    def drop_last(self, count: int) -> None:
        """Remove the last ``count`` bits; removing more than exist empties the vector."""
        if count < 0:
            raise ValueError("count must be non-negative")
        self._length = max(self._length - count, 0)
        self._value &= (1 << self._length) - 1

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[int]:
        value = self._value
        for _ in range(self._length):
            yield value & 1
            value >>= 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitVec):
            return NotImplemented
        return self._length == other._length and self._value == other._value

    def __repr__(self) -> str:
        return f"BitVec('{''.join(map(str, self))}')"


class RankSelectVector:
    """An immutable bit vector answering rank and select queries quickly."""

    __slots__ = ("_bits", "_ones_before", "_one_positions", "_zero_positions")

    def __init__(self, bits: Union[BitVec, Iterable[int]]) -> None:
        self._bits: List[int] = [_check_bit(bit) for bit in bits]
        self._ones_before: List[int] = list(accumulate(self._bits, initial=0))
        self._one_positions: List[int] = []
        self._zero_positions: List[int] = []
        for position, bit in enumerate(self._bits):
            (self._one_positions if bit else self._zero_positions).append(position)

    def get(self, index: int) -> int:
        """Return the bit at ``index``."""
        if not 0 <= index < len(self._bits):
            raise IndexError(f"bit index {index} out of range for length {len(self._bits)}")
        return self._bits[index]

    def rank1(self, index: int) -> int:
        """Number of one bits before ``index``; indices past the end count all."""
        if index < 0:
            raise ValueError("index must be non-negative")
        return self._ones_before[min(index, len(self._bits))]

    def rank0(self, index: int) -> int:
        """Number of zero bits before ``index``; indices past the end count all."""
        if index < 0:
            raise ValueError("index must be non-negative")
        index = min(index, len(self._bits))
        return index - self._ones_before[index]

    def select1(self, rank: int) -> int:
        """Position of the ``rank``-th one bit, or the length if there is none."""
        if rank < 0:
            raise ValueError("rank must be non-negative")
        if rank < len(self._one_positions):
            return self._one_positions[rank]
        return len(self._bits)

    def select0(self, rank: int) -> int:
        """Position of the ``rank``-th zero bit, or the length if there is none."""
        if rank < 0:
            raise ValueError("rank must be non-negative")
        if rank < len(self._zero_positions):
            return self._zero_positions[rank]
        return len(self._bits)

    def __len__(self) -> int:
        return len(self._bits)

    def __repr__(self) -> str:
        return f"RankSelectVector('{''.join(map(str, self._bits))}')"

    def _position_of_one(self, position: int) -> int:
        # helper kept for symmetry with select; locates a one bit's rank
        return bisect_left(self._one_positions, position)