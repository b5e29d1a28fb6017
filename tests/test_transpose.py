import random
from collections import Counter

import pytest

from seqprims.transpose import block_transpose, transpose_buckets, transpose_matrix


def test_transpose_small_matrix():
    assert transpose_matrix([1, 2, 3, 4, 5, 6], 2, 3) == [1, 4, 2, 5, 3, 6]


@pytest.mark.parametrize("rows,cols", [(0, 0), (1, 5), (5, 1), (3, 4), (7, 7), (10, 3)])
def test_transpose_round_trip(rows, cols):
    a = list(range(rows * cols))
    t = transpose_matrix(a, rows, cols)
    assert transpose_matrix(t, cols, rows) == a


def test_transpose_element_positions():
    rows, cols = 4, 6
    a = [(i, j) for i in range(rows) for j in range(cols)]
    t = transpose_matrix(a, rows, cols)
    for i in range(rows):
        for j in range(cols):
            assert t[j * rows + i] == (i, j)


def test_transpose_wrong_length():
    with pytest.raises(ValueError):
        transpose_matrix([1, 2, 3], 2, 2)


def test_transpose_negative_dimension():
    with pytest.raises(ValueError):
        transpose_matrix([], -1, 0)


def test_block_transpose_unit_blocks_matches_matrix_transpose():
    a = list("abcdef")
    rows, cols = 2, 3
    source_offsets = list(range(7))
    dest_offsets = list(range(6))
    assert block_transpose(a, source_offsets, dest_offsets, rows, cols) == transpose_matrix(
        a, rows, cols
    )


def test_block_transpose_variable_runs():
    a = list("abcdefg")
    source_offsets = [0, 2, 3, 6, 7]
    dest_offsets = [0, 2, 5, 6]
    out = block_transpose(a, source_offsets, dest_offsets, 2, 2)
    assert out == a[0:2] + a[3:6] + a[2:3] + a[6:7]


def test_block_transpose_missing_offsets():
    with pytest.raises(ValueError):
        block_transpose([1, 2], [0, 1], [0, 1], 1, 2)


def _make_blocks(seed, n, block_size, num_blocks, num_buckets):
    rng = random.Random(seed)
    source = []
    counts = []
    for b in range(num_blocks):
        length = max(0, min(block_size, n - b * block_size))
        keys = sorted(rng.randrange(num_buckets) for _ in range(length))
        source.extend((k, b, pos) for pos, k in enumerate(keys))
        tally = Counter(keys)
        counts.extend(tally[j] for j in range(num_buckets))
    return source, counts


@pytest.mark.parametrize(
    "seed,n,block_size,num_blocks,num_buckets",
    [(1, 18, 5, 4, 3), (2, 100, 13, 8, 5), (3, 7, 2, 4, 1), (4, 40, 10, 4, 9)],
)
def test_transpose_buckets_groups_by_bucket(seed, n, block_size, num_blocks, num_buckets):
    source, counts = _make_blocks(seed, n, block_size, num_blocks, num_buckets)
    out, offsets = transpose_buckets(source, counts, n, block_size, num_blocks, num_buckets)
    assert out == sorted(source)
    assert len(offsets) == num_buckets + 1
    assert offsets[0] == 0
    assert offsets[-1] == n
    for j in range(num_buckets):
        assert all(item[0] == j for item in out[offsets[j] : offsets[j + 1]])


def test_transpose_buckets_bad_total():
    source, counts = _make_blocks(5, 10, 5, 2, 2)
    counts[0] += 1
    with pytest.raises(ValueError):
        transpose_buckets(source, counts, 10, 5, 2, 2)


def test_transpose_buckets_block_size_mismatch():
    source = [(0, 0, 0), (0, 0, 1), (0, 1, 0), (0, 1, 1)]
    counts = [3, 0, 1, 0]
    with pytest.raises(ValueError):
        transpose_buckets(source, counts, 4, 2, 2, 2)