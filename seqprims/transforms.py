"""Sorting, rearranging, tokenizing and splitting sequences."""

from __future__ import annotations

import operator
from collections.abc import MutableSequence, Sequence
from itertools import pairwise
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from .delayed_sequence import DelayedSequence, delayed_seq
from .sample_sort import sample_sort, sample_sort_inplace, seq_sort_inplace

Less = Callable[[Any, Any], bool]
Pred = Callable[[Any], bool]

_WHITESPACE_CHARS = frozenset(" \f\n\r\t\v")
_WHITESPACE_BYTES = frozenset(map(ord, _WHITESPACE_CHARS))


def _eq(a: Any, b: Any) -> bool:
    return a == b


def _write(target: MutableSequence, items: List[Any]) -> None:
    """Replace the contents of ``target`` with ``items`` of the same length."""
    if isinstance(target, (list, bytearray)):
        target[:] = items
    else:
        for i, value in enumerate(items):
            target[i] = value


def _as_sequence(r: Iterable) -> Sequence:
    return r if isinstance(r, Sequence) else list(r)


# ---------------------------------- Sorting ----------------------------------


def sort(r: Iterable, less: Less = operator.lt) -> List[Any]:
    """A sorted copy of ``r``; equal elements may be reordered."""
    return sample_sort(r, less, False)


def stable_sort(r: Iterable, less: Less = operator.lt) -> List[Any]:
    """A sorted copy of ``r`` keeping the order of equal elements."""
    return sample_sort(r, less, True)


def sort_inplace(r: MutableSequence, less: Less = operator.lt) -> None:
    """Sort ``r`` in place."""
    sample_sort_inplace(r, less)


def stable_sort_inplace(r: MutableSequence, less: Less = operator.lt) -> None:
    """Sort ``r`` in place, keeping the order of equal elements."""
    seq_sort_inplace(r, less, True)


def _unsigned_key(key: Optional[Callable[[Any], Any]]) -> Callable[[Any], int]:
    def checked(x: Any) -> int:
        value = x if key is None else key(x)
        if not isinstance(value, int):
            raise TypeError(f"integer sort key must be an int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"integer sort key must be non-negative, got {value}")
        return value

    return checked


def integer_sort(r: Iterable, key: Optional[Callable[[Any], int]] = None) -> List[Any]:
    """Sort by a non-negative integer key (the element itself by default); stable."""
    return sorted(r, key=_unsigned_key(key))


def integer_sort_inplace(r: MutableSequence, key: Optional[Callable[[Any], int]] = None) -> None:
    """Sort ``r`` in place by a non-negative integer key; stable."""
    _write(r, integer_sort(r, key))


def stable_integer_sort(r: Iterable, key: Callable[[Any], int]) -> List[Any]:
    """Stably sort by a non-negative integer key."""
    return integer_sort(r, key)


def stable_integer_sort_inplace(r: MutableSequence, key: Callable[[Any], int]) -> None:
    """Stably sort ``r`` in place by a non-negative integer key."""
    integer_sort_inplace(r, key)


# ------------------------------ Duplicates ------------------------------


def unique(r: Sequence, eq: Callable[[Any, Any], bool] = _eq) -> List[Any]:
    """Drop each element equal (by ``eq``) to the one just before it."""
    items = _as_sequence(r)
    return [x for i, x in enumerate(items) if i == 0 or not eq(x, items[i - 1])]


def remove_duplicates_ordered(r: Iterable, less: Less = operator.lt) -> List[Any]:
    """The distinct elements of ``r`` in sorted order."""
    return unique(stable_sort(r, less), lambda a, b: not less(a, b) and not less(b, a))


# ------------------------------- Min and max -------------------------------


def min_element(r: Sequence, less: Less = operator.lt) -> int:
    """Index of the first smallest element, or ``len(r)`` if empty."""
    items = _as_sequence(r)
    best = len(items)
    for i, x in enumerate(items):
        if best == len(items) or less(x, items[best]):
            best = i
    return best


def max_element(r: Sequence, less: Less = operator.lt) -> int:
    """Index of the first largest element, or ``len(r)`` if empty."""
    return min_element(r, lambda a, b: less(b, a))


def minmax_element(r: Sequence, less: Less = operator.lt) -> Tuple[int, int]:
    """Indices of the first smallest and the first largest elements."""
    return min_element(r, less), max_element(r, less)


# ------------------------------- Permutations -------------------------------


def reverse(r: Iterable) -> List[Any]:
    """A reversed copy of ``r``."""
    return list(_as_sequence(r))[::-1]


def reverse_inplace(r: MutableSequence) -> None:
    """Reverse ``r`` in place."""
    if hasattr(r, "reverse"):
        r.reverse()
    else:
        _write(r, list(r)[::-1])


def rotate(r: Sequence, t: int) -> List[Any]:
    """Rotate right by ``t``: element ``i`` moves to position ``i + t``."""
    items = list(r)
    n = len(items)
    if not 0 <= t <= n:
        raise ValueError(f"rotation {t} out of range for length {n}")
    return items[n - t:] + items[: n - t]


# --------------------------- Sortedness and partitions ---------------------------


def is_sorted(r: Iterable, less: Less = operator.lt) -> bool:
    """True if no element is less than the one before it."""
    return all(not less(b, a) for a, b in pairwise(r))


def is_sorted_until(r: Sequence, less: Less = operator.lt) -> int:
    """Length of the longest sorted prefix of ``r``."""
    items = _as_sequence(r)
    if not items:
        return 0
    return next((i + 1 for i, (a, b) in enumerate(pairwise(items)) if less(b, a)), len(items))


def is_partitioned(r: Iterable, f: Pred) -> bool:
    """True if every element satisfying ``f`` precedes every one that does not."""
    it = iter(r)
    for x in it:
        if not f(x):
            break
    return not any(f(x) for x in it)


# ---------------------------------- Remove ----------------------------------


def remove_if(r: Iterable, pred: Pred) -> List[Any]:
    """The elements of ``r`` that do not satisfy ``pred``."""
    return [x for x in r if not pred(x)]


def remove(r: Iterable, value: Any) -> List[Any]:
    """The elements of ``r`` not equal to ``value``."""
    return remove_if(r, lambda x: x == value)


# --------------------------- Iota, flatten, append ---------------------------


def iota(n: int) -> DelayedSequence:
    """The lazy sequence ``0, 1, ..., n - 1``."""
    return delayed_seq(n, int)


def flatten(r: Iterable[Iterable]) -> List[Any]:
    """Concatenate the inner sequences of ``r``."""
    return [x for inner in r for x in inner]


def append(s1: Iterable, s2: Iterable) -> List[Any]:
    """The elements of ``s1`` followed by those of ``s2``."""
    return [*s1, *s2]


# ----------------------------- Tokens and splitting -----------------------------


def is_whitespace(c: Any) -> bool:
    """True for space, form feed, newline, carriage return, tab and vertical tab."""
    if isinstance(c, int):
        return c in _WHITESPACE_BYTES
    return c in _WHITESPACE_CHARS


def _token_bounds(items: Sequence, is_space: Pred) -> Iterator[Tuple[int, int]]:
    start: Optional[int] = None
    for i, c in enumerate(items):
        if is_space(c):
            if start is not None:
                yield start, i
                start = None
        elif start is None:
            start = i
    if start is not None:
        yield start, len(items)


def map_tokens(
    r: Iterable, f: Callable[[Sequence], Any], is_space: Pred = is_whitespace
) -> List[Any]:
    """Apply ``f`` to each maximal run of non-space elements of ``r``."""
    return [f(token) for token in tokens(r, is_space)]


def tokens(r: Iterable, is_space: Pred = is_whitespace) -> List[Sequence]:
    """The maximal runs of non-space elements of ``r``."""
    items = _as_sequence(r)
    return [items[s:e] for s, e in _token_bounds(items, is_space)]


def _split_pieces(r: Iterable, flags: Iterable) -> List[Sequence]:
    items = _as_sequence(r)
    flag_list = list(flags)
    if len(flag_list) != len(items):
        raise ValueError(f"{len(items)} elements but {len(flag_list)} flags")
    cuts = [i + 1 for i, flag in enumerate(flag_list) if flag]
    starts = [0, *cuts]
    ends = [*cuts, len(items)]
    return [items[s:e] for s, e in zip(starts, ends)]


def map_split_at(r: Iterable, flags: Iterable, f: Callable[[Sequence], Any]) -> List[Any]:
    """Split after each flagged position and apply ``f`` to each piece.

    There is always one more piece than there are true flags; a flag on the
    last position produces an empty final piece.
    """
    return [f(piece) for piece in _split_pieces(r, flags)]


def split_at(r: Iterable, flags: Iterable) -> List[Sequence]:
    """Split ``r`` after each flagged position; strings stay strings."""
    if isinstance(r, (str, bytes, bytearray)):
        return _split_pieces(r, flags)
    return map_split_at(r, flags, list)