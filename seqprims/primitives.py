"""Sequence primitives: tabulation, reduction, scans, packing, searching."""

from __future__ import annotations

import functools
import heapq
import operator
from collections.abc import MutableSequence
from itertools import accumulate, compress, pairwise
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from .delayed_sequence import DelayedSequence, delayed_seq
from .monoid import Monoid, addm

Pred = Callable[[Any], bool]
BinPred = Callable[[Any, Any], bool]


def _eq(a: Any, b: Any) -> bool:
    return a == b


def _write(target: MutableSequence, values: Sequence[Any]) -> None:
    """Overwrite the first ``len(values)`` slots of ``target``."""
    if isinstance(target, (list, bytearray)):
        target[: len(values)] = values
    else:
        for i, value in enumerate(values):
            target[i] = value


def _sort_key(less: BinPred) -> Optional[Callable[[Any], Any]]:
    if less is operator.lt:
        return None

    def cmp(x: Any, y: Any) -> int:
        if less(x, y):
            return -1
        if less(y, x):
            return 1
        return 0

    return functools.cmp_to_key(cmp)


def _matches_at(r1: Sequence, r2: Sequence, start: int, p: BinPred) -> bool:
    return all(p(r1[start + j], y) for j, y in enumerate(r2))


# ----------------------------- Map and tabulate -----------------------------


def tabulate(n: int, f: Callable[[int], Any]) -> List[Any]:
    """The list ``f(0), ..., f(n - 1)``."""
    return [f(i) for i in range(n)]


def delayed_tabulate(n: int, f: Callable[[int], Any]) -> DelayedSequence:
    """A lazily evaluated sequence ``f(0), ..., f(n - 1)``."""
    return delayed_seq(n, f)


def delayed_map(r: Sequence, f: Callable[[Any], Any]) -> DelayedSequence:
    """A lazily evaluated sequence ``f(r[0]), ..., f(r[n - 1])``."""
    return delayed_seq(len(r), lambda i: f(r[i]))


def copy(src: Sequence, dst: MutableSequence) -> None:
    """Copy ``src`` into the front of ``dst``, which must be at least as long."""
    if len(dst) < len(src):
        raise ValueError(
            f"destination of length {len(dst)} is shorter than source of length {len(src)}"
        )
    _write(dst, list(src))


# ------------------------------ Reduce and scan ------------------------------


def reduce(r: Iterable, monoid: Optional[Monoid] = None) -> Any:
    """Combine all elements of ``r`` with ``monoid`` (addition by default)."""
    m = monoid or addm()
    return functools.reduce(m.f, r, m.identity)


def scan(r: Iterable, monoid: Optional[Monoid] = None) -> Tuple[List[Any], Any]:
    """Exclusive prefix sums of ``r`` and the total."""
    m = monoid or addm()
    sums = list(accumulate(r, m.f, initial=m.identity))
    return sums[:-1], sums[-1]


def scan_inclusive(r: Iterable, monoid: Optional[Monoid] = None) -> List[Any]:
    """Inclusive prefix sums of ``r``."""
    m = monoid or addm()
    return list(accumulate(r, m.f, initial=m.identity))[1:]


def scan_inplace(r: MutableSequence, monoid: Optional[Monoid] = None) -> Any:
    """Replace ``r`` by its exclusive prefix sums and return the total."""
    prefix, total = scan(r, monoid)
    _write(r, prefix)
    return total


def scan_inclusive_inplace(r: MutableSequence, monoid: Optional[Monoid] = None) -> Any:
    """Replace ``r`` by its inclusive prefix sums and return the total."""
    m = monoid or addm()
    sums = scan_inclusive(r, m)
    _write(r, sums)
    return sums[-1] if sums else m.identity


# ------------------------------- Pack and filter ------------------------------


def pack(r: Sequence, flags: Sequence) -> List[Any]:
    """The elements ``r[i]`` for which ``flags[i]`` is true."""
    if len(r) != len(flags):
        raise ValueError(f"{len(r)} elements but {len(flags)} flags")
    return list(compress(r, flags))


def pack_into(r: Sequence, flags: Sequence, out: MutableSequence) -> int:
    """Write the packed elements to the front of ``out``; return their count."""
    packed = pack(r, flags)
    if len(out) < len(packed):
        raise ValueError(f"output of length {len(out)} cannot hold {len(packed)} elements")
    _write(out, packed)
    return len(packed)


def pack_index(flags: Iterable) -> List[int]:
    """The indices ``i`` for which ``flags[i]`` is true."""
    return [i for i, flag in enumerate(flags) if flag]


def filter(r: Iterable, f: Pred) -> List[Any]:
    """The elements ``x`` of ``r`` for which ``f(x)`` is true."""
    return [x for x in r if f(x)]


def filter_into(r: Iterable, out: MutableSequence, f: Pred) -> int:
    """Write the filtered elements to the front of ``out``; return their count."""
    kept = filter(r, f)
    if len(out) < len(kept):
        raise ValueError(f"output of length {len(out)} cannot hold {len(kept)} elements")
    _write(out, kept)
    return len(kept)


# ----------------------------------- Merge -----------------------------------


def merge(r1: Iterable, r2: Iterable, less: BinPred = operator.lt) -> List[Any]:
    """Stably merge two sorted ranges; ties take the element of ``r1`` first."""
    return list(heapq.merge(r1, r2, key=_sort_key(less)))


# ------------------------------ Count and find -------------------------------


def find_if_index(n: int, p: Callable[[int], bool], granularity: int = 1000) -> int:
    """The smallest ``i < n`` with ``p(i)`` true, or ``n`` if there is none."""
    if granularity < 1:
        raise ValueError("granularity must be positive")
    return next((i for i in range(n) if p(i)), n)


def for_each(r: Iterable, f: Callable[[Any], Any]) -> None:
    """Call ``f`` on each element of ``r``."""
    for x in r:
        f(x)


def count_if(r: Iterable, p: Pred) -> int:
    """Number of elements satisfying ``p``."""
    return sum(1 for x in r if p(x))


def count(r: Iterable, value: Any) -> int:
    """Number of elements equal to ``value``."""
    return count_if(r, lambda x: x == value)


def all_of(r: Iterable, p: Pred) -> bool:
    return all(p(x) for x in r)


def any_of(r: Iterable, p: Pred) -> bool:
    return any(p(x) for x in r)


def none_of(r: Iterable, p: Pred) -> bool:
    return not any(p(x) for x in r)


def find_if(r: Sequence, p: Pred) -> int:
    """Index of the first element satisfying ``p``, or ``len(r)``."""
    return next((i for i, x in enumerate(r) if p(x)), len(r))


def find(r: Sequence, value: Any) -> int:
    """Index of the first element equal to ``value``, or ``len(r)``."""
    return find_if(r, lambda x: x == value)


def find_if_not(r: Sequence, p: Pred) -> int:
    """Index of the first element not satisfying ``p``, or ``len(r)``."""
    return find_if(r, lambda x: not p(x))


def find_first_of(r1: Sequence, r2: Sequence, p: BinPred = _eq) -> int:
    """Index of the first element of ``r1`` matching any element of ``r2``."""
    return find_if(r1, lambda x: any(p(x, y) for y in r2))


def find_end(r1: Sequence, r2: Sequence, p: BinPred = _eq) -> int:
    """Start of the last occurrence of ``r2`` in ``r1``, or ``len(r1)``."""
    n1, n2 = len(r1), len(r2)
    if n2 == 0 or n2 > n1:
        return n1
    return next(
        (s for s in range(n1 - n2, -1, -1) if _matches_at(r1, r2, s, p)), n1
    )


def adjacent_find(r: Sequence, p: BinPred = _eq) -> int:
    """Index of the first ``i`` with ``p(r[i], r[i + 1])``, or ``len(r)``."""
    return next((i for i, (a, b) in enumerate(pairwise(r)) if p(a, b)), len(r))


def mismatch(r1: Sequence, r2: Sequence, p: BinPred = _eq) -> int:
    """First index where the ranges differ, or the length of the shorter."""
    shorter = min(len(r1), len(r2))
    return next((i for i, (a, b) in enumerate(zip(r1, r2)) if not p(a, b)), shorter)


def search(r1: Sequence, r2: Sequence, p: BinPred = _eq) -> int:
    """Start of the first occurrence of ``r2`` in ``r1``, or ``len(r1)``."""
    n1, n2 = len(r1), len(r2)
    if n2 > n1:
        return n1
    return next((s for s in range(n1 - n2 + 1) if _matches_at(r1, r2, s, p)), n1)


def equal(r1: Sequence, r2: Sequence, p: BinPred = _eq) -> bool:
    """True if the ranges have equal length and matching elements."""
    return len(r1) == len(r2) and all(p(a, b) for a, b in zip(r1, r2))


def lexicographical_compare(r1: Sequence, r2: Sequence, less: BinPred = operator.lt) -> bool:
    """True if ``r1`` orders strictly before ``r2``."""
    for a, b in zip(r1, r2):
        if less(a, b):
            return True
        if less(b, a):
            return False
    return len(r1) < len(r2)