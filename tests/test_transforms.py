import operator
from dataclasses import dataclass

import pytest

from seqprims import transforms as t


@dataclass
class UnstablePair:
    x: int
    y: int


def _pair_less(a, b):
    return a.x < b.x


def _big_input(n=20000):
    return [(50021 * i + 61) % (1 << 20) for i in range(n)]


def test_sort_large_matches_sorted():
    s = _big_input()
    result = t.sort(s)
    assert result == sorted(s)
    assert t.is_sorted(result)


def test_sort_custom_compare():
    s = _big_input(5000)
    assert t.sort(s, operator.gt) == sorted(s, reverse=True)


def test_stable_sort_keeps_order():
    s = [UnstablePair((53 * i + 61) % (1 << 10), i) for i in range(20000)]
    result = t.stable_sort(s, _pair_less)
    assert result == sorted(s, key=lambda p: p.x)


def test_sort_inplace_and_stable_inplace():
    s = _big_input(3000)
    a = list(s)
    t.sort_inplace(a)
    assert a == sorted(s)
    pairs = [UnstablePair(i % 7, i) for i in range(500)]
    b = list(pairs)
    t.stable_sort_inplace(b, _pair_less)
    assert b == sorted(pairs, key=lambda p: p.x)


def test_integer_sort_and_errors():
    s = _big_input(1000)
    assert t.integer_sort(s) == sorted(s)
    pairs = [(i % 5, i) for i in range(100)]
    assert t.stable_integer_sort(pairs, lambda p: p[0]) == sorted(pairs, key=lambda p: p[0])
    with pytest.raises(ValueError):
        t.integer_sort([3, -1])
    with pytest.raises(TypeError):
        t.integer_sort([1.5])


def test_integer_sort_inplace():
    a = _big_input(500)
    expected = sorted(a)
    t.integer_sort_inplace(a)
    assert a == expected
    pairs = [(i % 3, i) for i in range(30)]
    b = list(pairs)
    t.stable_integer_sort_inplace(b, lambda p: p[0])
    assert b == sorted(pairs, key=lambda p: p[0])


def test_unique_and_remove_duplicates_ordered():
    s = [1, 1, 2, 2, 2, 3, 1, 1]
    u = t.unique(s)
    assert all(a != b for a, b in zip(u, u[1:]))
    assert t.remove_duplicates_ordered(s) == sorted(set(s))


def test_min_max_elements():
    s = [5, 2, 9, 2, 9, 1, 1]
    assert t.min_element(s) == s.index(min(s))
    assert t.max_element(s) == s.index(max(s))
    assert t.minmax_element([3, 1, 3, 1]) == (1, 0)
    assert t.min_element([]) == 0


def test_reverse_and_inplace():
    s = list(range(10))
    r = t.reverse(s)
    assert r == s[::-1]
    t.reverse_inplace(r)
    assert r == s


def test_rotate():
    assert t.rotate([1, 2, 3, 4], 1) == [4, 1, 2, 3]
    s = list(range(13))
    r = t.rotate(s, 5)
    assert r[5] == s[0]
    assert t.rotate(r, len(s) - 5) == s
    with pytest.raises(ValueError):
        t.rotate(s, 20)


def test_is_sorted_until():
    assert t.is_sorted([1, 2, 2, 3])
    assert not t.is_sorted([2, 1])
    s = [1, 2, 3, 0, 5]
    assert t.is_sorted_until(s) == s.index(0)
    assert t.is_sorted_until([]) == 0
    assert t.is_sorted_until(s[:3]) == len(s[:3])


def test_is_partitioned():
    even = lambda x: x % 2 == 0
    assert t.is_partitioned([2, 4, 6, 1, 3], even)
    assert not t.is_partitioned([2, 1, 4], even)
    assert t.is_partitioned([], even)


def test_remove_and_remove_if():
    s = [1, 2, 3, 2, 4]
    assert t.remove(s, 2) == [x for x in s if x != 2]
    assert t.remove_if(s, lambda x: x > 2) == [x for x in s if x <= 2]


def test_iota_flatten_append():
    assert list(t.iota(7)) == list(range(7))
    nested = [[1, 2], [], [3], [4, 5, 6]]
    flat = t.flatten(nested)
    assert len(flat) == sum(map(len, nested))
    assert flat == [x for n in nested for x in n]
    assert t.append([1, 2], (3,)) == [1, 2, 3]


@pytest.mark.parametrize("c", [" ", "\f", "\n", "\r", "\t", "\v", ord(" "), ord("\t")])
def test_is_whitespace_true(c):
    assert t.is_whitespace(c) is True


@pytest.mark.parametrize("c", ["a", "\x1c", ord("x"), "\u00a0"])
def test_is_whitespace_false(c):
    assert t.is_whitespace(c) is False


def test_tokens_match_split():
    text = "  the quick\tbrown\n\nfox  jumps\v"
    assert t.tokens(text) == text.split()
    assert t.tokens(text.encode()) == text.encode().split()
    assert t.tokens("") == []


def test_map_tokens_custom_space():
    text = "a,bb,,ccc"
    assert t.map_tokens(text, len, lambda c: c == ",") == [len(w) for w in text.split(",") if w]


def test_split_at():
    pieces = t.split_at([1, 2, 3, 4, 5], [False, True, False, False, True])
    assert pieces == [[1, 2], [3, 4, 5], []]
    flags = [c == "|" for c in "ab|cd|e"]
    parts = t.split_at("ab|cd|e", flags)
    assert "".join(parts) == "ab|cd|e"
    assert len(parts) == sum(flags) + 1


def test_map_split_at_errors_and_lengths():
    with pytest.raises(ValueError):
        t.map_split_at([1, 2, 3], [True], len)
    lengths = t.map_split_at(list(range(10)), [i % 3 == 2 for i in range(10)], len)
    assert sum(lengths) == 10
    assert len(lengths) == 4