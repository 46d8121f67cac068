"""Bit manipulation helpers."""

from __future__ import annotations

__all__ = ["pdep"]


def pdep(value: int, mask: int) -> int:
    """Parallel bits deposit.

    Scatter the contiguous low-order bits of ``value`` into the positions of
    the set bits of ``mask``, from least to most significant. Every bit of
    the result that is not set in ``mask`` is zero.
    """
    if mask < 0:
        raise ValueError("mask must be non-negative")
    result = 0
    source_bit = 1
    while mask:
        lowest = mask & -mask
        if value & source_bit:
            result |= lowest
        mask ^= lowest
        source_bit <<= 1
    return result