from collections import Counter, defaultdict

import pytest

from seqprims.group_by import (
    group_by_index,
    group_by_key,
    group_by_key_sorted,
    histogram_by_index,
    histogram_by_key,
    reduce_by_index,
    reduce_by_key,
    remove_duplicate_integers,
    remove_duplicates,
)
from seqprims.monoid import maxm


def _pseudo_pairs(n, num_keys):
    return [((i * 7919 + 13) % num_keys, i) for i in range(n)]


def _grouped(pairs):
    groups = defaultdict(list)
    for k, v in pairs:
        groups[k].append(v)
    return groups


def test_group_by_key_sorted_small():
    pairs = [(2, "b"), (1, "a"), (2, "c")]
    assert group_by_key_sorted(pairs) == [(1, ["a"]), (2, ["b", "c"])]


def test_group_by_key_sorted_empty():
    assert group_by_key_sorted([]) == []


def test_group_by_key_sorted_custom_order():
    pairs = _pseudo_pairs(500, 17)
    result = group_by_key_sorted(pairs, lambda a, b: a > b)
    keys = [k for k, _ in result]
    assert keys == sorted(set(k for k, _ in pairs), reverse=True)
    groups = _grouped(pairs)
    for k, vals in result:
        assert vals == groups[k]


@pytest.mark.parametrize("n", [100, 20000])
def test_reduce_by_key_sums(n):
    pairs = _pseudo_pairs(n, 37)
    result = reduce_by_key(pairs)
    expected = {k: sum(v) for k, v in _grouped(pairs).items()}
    assert dict(result) == expected
    assert len(result) == len(expected)


def test_reduce_by_key_with_max_monoid():
    pairs = _pseudo_pairs(300, 11)
    result = dict(reduce_by_key(pairs, maxm()))
    assert result == {k: max(v) for k, v in _grouped(pairs).items()}


def test_reduce_by_key_heavy_key():
    pairs = [(5, 1)] * 15000 + [(k, 1) for k in range(1000, 2000)]
    result = dict(reduce_by_key(pairs))
    assert result[5] == 15000
    assert len(result) == 1001


@pytest.mark.parametrize("n", [50, 12000])
def test_group_by_key_keeps_input_order(n):
    pairs = [(f"k{k}", v) for k, v in _pseudo_pairs(n, 23)]
    result = group_by_key(pairs)
    groups = _grouped(pairs)
    assert {k: v for k, v in result} == dict(groups)
    assert len(result) == len(groups)


def test_group_by_key_custom_equal_and_hash():
    pairs = [("A", 1), ("a", 2), ("b", 3)]
    result = dict(group_by_key(pairs, lambda s: hash(s.lower()), lambda x, y: x.lower() == y.lower()))
    assert result == {"A": [1, 2], "b": [3]}


@pytest.mark.parametrize("n", [10, 30000])
def test_histogram_by_key_matches_counter(n):
    values = [(i * 31) % 101 for i in range(n)]
    result = histogram_by_key(values)
    assert dict(result) == dict(Counter(values))
    assert sum(c for _, c in result) == n


@pytest.mark.parametrize("n", [10, 30000])
def test_remove_duplicates(n):
    values = [(i * 13) % 257 for i in range(n)]
    result = remove_duplicates(values)
    assert sorted(result) == sorted(set(values))
    assert len(result) == len(set(result))


def test_reduce_by_index_sums():
    pairs = _pseudo_pairs(1000, 9)
    result = reduce_by_index(pairs, 9)
    groups = _grouped(pairs)
    assert result == [sum(groups[i]) for i in range(9)]


def test_reduce_by_index_empty_bucket_gets_identity():
    assert reduce_by_index([(0, 4), (2, 5)], 3) == [4, 0, 5]


def test_reduce_by_index_out_of_range():
    with pytest.raises(ValueError):
        reduce_by_index([(0, 1), (3, 1)], 3)


@pytest.mark.parametrize("n,buckets", [(500, 10), (20000, 10), (20000, 1000)])
def test_histogram_by_index(n, buckets):
    values = [7 if i % 3 == 0 else (i * 101) % buckets for i in range(n)]
    counts = Counter(values)
    assert histogram_by_index(values, buckets) == [counts[i] for i in range(buckets)]


def test_histogram_by_index_rejects_negative():
    with pytest.raises(ValueError):
        histogram_by_index([1, -1], 4)


def test_remove_duplicate_integers():
    values = [3, 1, 3, 0, 1]
    assert remove_duplicate_integers(values, 5) == [0, 1, 3]


def test_remove_duplicate_integers_large():
    values = [(i * 17) % 500 for i in range(20000)]
    assert remove_duplicate_integers(values, 1000) == sorted(set(values))


@pytest.mark.parametrize("n,buckets", [(20, 3), (5, 4), (20000, 1000)])
def test_group_by_index(n, buckets):
    pairs = _pseudo_pairs(n, buckets)
    groups = _grouped(pairs)
    assert group_by_index(pairs, buckets) == [groups.get(i, []) for i in range(buckets)]


@pytest.mark.parametrize("n", [20, 2])
def test_group_by_index_out_of_range(n):
    pairs = [(0, i) for i in range(n)] + [(5, 0)]
    with pytest.raises(ValueError):
        group_by_index(pairs, 3)