import bisect
import random

import pytest

from waveletmx.bitvec import BitVec
from waveletmx.wavelet import WaveletMatrix


def bv(value, width):
    return BitVec.pack_sequence([value], width)


@pytest.fixture
def example():
    return WaveletMatrix.from_bit_vec(BitVec.pack_sequence([1, 4, 4, 1, 2, 7], 3), 3)


@pytest.fixture
def gapped():
    return WaveletMatrix.from_bit_vec(BitVec.pack_sequence([1, 10, 1, 3, 9, 5], 4), 4)


@pytest.fixture
def ten():
    return WaveletMatrix.from_bit_vec(
        BitVec.pack_sequence([1, 4, 4, 1, 3, 1, 4, 3, 2, 0], 4), 4
    )


def test_documented_examples(example):
    assert example.predecessor(range(0, 3), bv(7, 3)) == bv(4, 3)
    assert example.predecessor(range(0, 3), bv(4, 3)) == bv(4, 3)
    assert example.predecessor(range(0, 6), bv(7, 3)) == bv(7, 3)
    assert example.predecessor_int(range(0, 3), 7) == 4
    assert example.predecessor_int(range(0, 3), 4) == 4
    assert example.predecessor_int(range(0, 6), 7) == 7
    assert example.predecessor_int(range(0, 6), 3) == 2
    assert example.successor(range(0, 3), bv(2, 3)) == bv(4, 3)
    assert example.successor(range(0, 3), bv(5, 3)) is None
    assert example.successor(range(0, 6), bv(2, 3)) == bv(2, 3)
    assert example.successor_int(range(0, 3), 2) == 4
    assert example.successor_int(range(0, 3), 5) is None
    assert example.successor_int(range(0, 6), 2) == 2
    assert list(example.iter_int()) == [1, 4, 4, 1, 2, 7]
    assert list(example.iter_sorted_int()) == [1, 1, 2, 4, 4, 7]


@pytest.mark.parametrize(
    "positions, query, expected",
    [
        (range(0, 6), 0, None),
        (range(0, 6), 1, 1),
        (range(0, 6), 2, 1),
        (range(0, 6), 3, 3),
        (range(0, 6), 4, 3),
        (range(0, 6), 9, 9),
        (range(0, 6), 10, 10),
        (range(0, 6), 11, 10),
        (range(0, 6), 15, 10),
        (range(2, 4), 5, 3),
        (range(0, 3), 3, 1),
        (range(3, 6), 10, 9),
        (range(3, 5), 1, None),
        (range(5, 6), 4, None),
    ],
)
def test_predecessor(gapped, positions, query, expected):
    assert gapped.predecessor_int(positions, query) == expected
    result = gapped.predecessor(positions, bv(query, 4))
    assert result == (None if expected is None else bv(expected, 4))


@pytest.mark.parametrize(
    "query, expected",
    [(0, None), (3, 3), (4, 3), (8000, 3), (8999, 3), (9000, 9000), (10000, 9000)],
)
def test_predecessor_large_gap(query, expected):
    matrix = WaveletMatrix.from_bit_vec(BitVec.pack_sequence([3, 9000], 16), 16)
    result = matrix.predecessor(range(0, 2), bv(query, 16))
    assert result == (None if expected is None else bv(expected, 16))


@pytest.mark.parametrize(
    "query, expected",
    [(0, 1), (1, 1), (2, 3), (3, 3), (4, 5), (9, 9), (10, 10), (11, None), (15, None)],
)
def test_successor(gapped, query, expected):
    assert gapped.successor_int(range(0, 6), query) == expected
    result = gapped.successor(range(0, 6), bv(query, 4))
    assert result == (None if expected is None else bv(expected, 4))


@pytest.mark.parametrize(
    "query, expected",
    [(0, 3), (3, 3), (4, 9000), (9000, 9000), (10000, None)],
)
def test_successor_large_gap(query, expected):
    matrix = WaveletMatrix.from_bit_vec(BitVec.pack_sequence([3, 9000], 16), 16)
    result = matrix.successor(range(0, 2), bv(query, 16))
    assert result == (None if expected is None else bv(expected, 16))


def test_pred_succ_randomized():
    rng = random.Random(100)
    data = [rng.randrange(0, 1 << 64) for _ in range(1000)]
    matrix = WaveletMatrix.from_bit_vec(BitVec.pack_sequence(data, 64), 64)
    sorted_data = sorted(data)

    for _ in range(300):
        query = rng.randrange(0, (1 << 64) - 1)
        pred_pos = bisect.bisect_right(sorted_data, query)
        succ_pos = bisect.bisect_left(sorted_data, query)
        pred = sorted_data[pred_pos - 1] if pred_pos else None
        succ = sorted_data[succ_pos] if succ_pos < len(sorted_data) else None
        assert matrix.predecessor_int(range(0, 1000), query) == pred
        assert matrix.successor_int(range(0, 1000), query) == succ


def test_pred_succ_randomized_subranges():
    rng = random.Random(7)
    data = [rng.randrange(0, 256) for _ in range(300)]
    matrix = WaveletMatrix.from_sequence(data, 8)
    for _ in range(300):
        i, j = sorted(rng.sample(range(301), 2))
        query = rng.randrange(0, 256)
        window = data[i:j]
        smaller = [x for x in window if x <= query]
        larger = [x for x in window if x >= query]
        assert matrix.predecessor_int(range(i, j), query) == (max(smaller) if smaller else None)
        assert matrix.successor_int(range(i, j), query) == (min(larger) if larger else None)


def test_pred_succ_invalid_arguments(gapped):
    assert gapped.predecessor(range(0, 6), bv(1, 3)) is None
    assert gapped.successor(range(0, 6), bv(1, 5)) is None
    assert gapped.predecessor_int(range(2, 2), 5) is None
    assert gapped.successor_int(range(0, 7), 5) is None
    with pytest.raises(ValueError):
        gapped.predecessor_int(range(0, 6), -1)


def test_pred_succ_wide_and_empty():
    long_matrix = WaveletMatrix.from_bit_vec(BitVec.from_zeros(90), 90)
    assert long_matrix.predecessor_int(range(0, 1), 0) is None
    assert long_matrix.successor_int(range(0, 1), 0) is None
    assert long_matrix.predecessor(range(0, 1), BitVec.from_zeros(90)) == BitVec.from_zeros(90)
    assert long_matrix.successor(range(0, 1), BitVec.from_zeros(90)) == BitVec.from_zeros(90)

    empty = WaveletMatrix.from_bit_vec(BitVec(), 4)
    assert empty.predecessor(range(0, 0), BitVec.from_zeros(4)) is None
    assert empty.successor_int(range(0, 1), 0) is None


def test_wavelet_iter(ten):
    expected = [1, 4, 4, 1, 3, 1, 4, 3, 2, 0]
    assert list(ten.iter_values()) == [bv(v, 4) for v in expected]
    assert list(ten) == [bv(v, 4) for v in expected]

    it = ten.iter_values()
    assert next(it) == bv(1, 4)
    assert it.next_back() == bv(0, 4)
    assert it.next_back() == bv(2, 4)
    assert next(it) == bv(4, 4)
    assert next(it) == bv(4, 4)
    assert it.next_back() == bv(3, 4)
    assert it.next_back() == bv(4, 4)
    assert next(it) == bv(1, 4)
    assert next(it) == bv(3, 4)
    assert next(it) == bv(1, 4)
    assert next(it, None) is None
    assert it.next_back() is None

    assert list(ten.iter_int()) == expected


def test_single_element_iter():
    matrix = WaveletMatrix.from_bit_vec(BitVec.pack_sequence([1], 1), 1)
    it = iter(matrix)
    assert next(it) == bv(1, 1)
    assert next(it, None) is None
    it_int = matrix.iter_int()
    assert next(it_int) == 1
    assert next(it_int, None) is None


def test_iter_randomized():
    rng = random.Random(100)
    for _ in range(5):
        data = [rng.randrange(0, 256) for _ in range(500)]
        matrix = WaveletMatrix.from_bit_vec(BitVec.pack_sequence(data, 8), 8)
        assert list(matrix.iter_values()) == [bv(v, 8) for v in data]
        assert list(matrix.iter_int()) == data


def test_empty_iter():
    matrix = WaveletMatrix.from_bit_vec(BitVec(), 4)
    it = matrix.iter_values()
    assert it.next_back() is None
    assert next(it, None) is None
    it_int = matrix.iter_int()
    assert it_int.next_back() is None
    assert next(it_int, None) is None


def test_sorted_iter():
    data = [1, 4, 4, 1, 3, 1, 4, 3, 13, 11, 12, 13, 2, 0, 4, 6, 7, 5, 8, 9, 10]
    matrix = WaveletMatrix.from_bit_vec(BitVec.pack_sequence(data, 4), 4)
    ordered = sorted(data)
    assert list(matrix.iter_sorted()) == [bv(v, 4) for v in ordered]
    assert list(matrix.iter_sorted_int()) == ordered
    backwards = matrix.iter_sorted_int()
    assert backwards.next_back() == 13
    assert len(backwards) == len(data) - 1


def test_int_iterators_refuse_wide_words():
    long_matrix = WaveletMatrix.from_bit_vec(BitVec.from_zeros(90), 90)
    assert long_matrix.iter_int() is None
    assert long_matrix.iter_sorted_int() is None
    assert list(long_matrix.iter_sorted()) == [BitVec.from_zeros(90)]


def test_from_padded_bitvec():
    bits = BitVec()
    bits.append_bit(1)
    bits.append_bit(0)
    bits.append_bits((1 << 64) - 1, 10)
    bits.drop_last(10)
    bits.append_bit(0)
    bits.drop_last(1)

    matrix = WaveletMatrix.from_bit_vec(bits, 1)
    assert len(matrix) == 2
    assert matrix.rank(1, BitVec.from_zeros(1)) == 0
    assert matrix.rank(1, BitVec.from_ones(1)) == 1
    assert matrix.rank(2, BitVec.from_zeros(1)) == 1
    assert matrix.rank(2, BitVec.from_ones(1)) == 1
    assert matrix.rank(3, BitVec.from_zeros(1)) is None


def test_inherited_queries_work_on_full_matrix(example):
    assert example.get_int(0) == 1
    assert example.rank_int(3, 4) == 2
    assert example.select_int(0, 7) == 5
    assert example.range_median_int(range(0, 3)) == 4


def test_prefix_counting_constructor_matches():
    data = [1, 5, 3]
    matrix = WaveletMatrix.from_bit_vec_pc(BitVec.pack_sequence(data, 3), 3)
    assert list(matrix.iter_int()) == data
    assert matrix.predecessor_int(range(0, 3), 4) == 3
    assert matrix.successor_int(range(0, 3), 4) == 5