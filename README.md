# waveletmx

A pure-Python wavelet matrix. It stores a sequence of `n` words of `k` bits
each and answers queries on that sequence by walking its `k` levels:

- access: read back the `i`-th word
- rank: count how often a word occurs before a position, between two
  positions, or within a range
- select: find the position of the `r`-th occurrence of a word, optionally
  counting from an offset
- quantile: the `k`-th smallest word in a range, with minimum, maximum and
  median shortcuts, and the `i`-th smallest word of the whole sequence
- predecessor / successor: the largest word not above, or the smallest word
  not below, a query word within a range

The package has no dependencies outside the standard library.

## Installation

```
pip install waveletmx
```

## Usage

```python
from waveletmx.bitvec import BitVec
from waveletmx.wavelet import WaveletMatrix

# pack six 3-bit words into a bit vector and build the matrix
bits = BitVec.pack_sequence([1, 4, 4, 1, 2, 7], 3)
matrix = WaveletMatrix.from_bit_vec(bits, 3)

len(matrix)                             # 6
matrix.bits_per_element                 # 3
matrix.get_int(0)                       # 1
matrix.get_value(1)                     # BitVec holding 4
matrix.rank_int(3, 4)                   # 2  (occurrences of 4 before index 3)
matrix.rank_range_int(range(2, 4), 4)   # 1
matrix.select_int(0, 7)                 # 5  (first occurrence of 7)
matrix.quantile_int(range(0, 3), 1)     # 4
matrix.range_median_int(range(0, 3))    # 4
matrix.predecessor_int(range(0, 6), 3)  # 2
matrix.successor_int(range(0, 3), 5)    # None

list(matrix.iter_int())         # [1, 4, 4, 1, 2, 7]
list(matrix.iter_sorted_int())  # [1, 1, 2, 4, 4, 7]
```

A matrix can also be built directly from non-negative integers:

```python
matrix = WaveletMatrix.from_sequence([1, 4, 4, 1, 2, 7], 3)
```

### Two forms of every query

The plain form of a query (`get_value`, `rank`, `select`, `quantile`,
`range_min`, `predecessor`, ...) takes and returns a `BitVec` whose width is
`bits_per_element`, least significant bit first, so words may be wider than
64 bits. The `_int` form (`get_int`, `rank_int`, `select_int`,
`quantile_int`, `range_min_int`, `predecessor_int`, ...) takes and returns
Python integers and works while words are at most 64 bits wide; for wider
words it returns `None`.

Checked queries return `None` when the range or index is out of bounds, a
`BitVec` symbol has the wrong width, or the answer does not exist.
`rank_range_unchecked` and `select_offset_unchecked` skip the bounds checks;
the latter returns the sequence length when there is no such occurrence.

Ranges are Python `range` objects with step 1 and are half-open; any other
step raises `ValueError`.

### Construction

- `from_bit_vec(bit_vec, k)` and `from_sequence(values, k)` build the matrix
  by stable sorting and suit any alphabet. `from_bit_vec` accepts widths up
  to 65535 bits; `from_sequence` up to 64. The bit vector's length must be a
  multiple of `k`, otherwise `ValueError` is raised.
- `from_bit_vec_pc(bit_vec, k)` and `from_sequence_pc(values, k)` count
  prefixes instead. They need memory proportional to `2**k` while building,
  accept widths up to 64 bits, and raise `ValueError` for values that do not
  fit into `k` bits.

### Bit vectors

`waveletmx.bitvec.BitVec` is a mutable bit sequence with `from_zeros`,
`from_ones`, `pack_sequence`, `get`, `set`, `get_bits`, `append_bit`,
`append_bits` and `drop_last`. `RankSelectVector` in the same module is the
immutable per-level vector with `rank0`, `rank1`, `select0` and `select1`.

`waveletmx.bitops.pdep(value, mask)` deposits the low bits of `value` into
the set bit positions of `mask`.

## Iteration

`iter_values()`, `iter_int()`, `iter_sorted()` and `iter_sorted_int()` return
a `waveletmx.iteration.IndexedIterator`; iterating over a matrix directly is
the same as `iter_values()`. Besides the iterator protocol, the iterator
knows its remaining length (`len()`) and can be consumed from both ends with
`next_back()`, `nth(n)` and `nth_back(n)`; `last()` peeks at the final
remaining element without consuming it.

## What it does not do

Matrices are immutable once built and live only in memory: there is no way
to save one to a file or load it back, and no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```