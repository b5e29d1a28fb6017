"""Grouping, reducing and counting elements by key."""

from __future__ import annotations

import functools
import operator
from itertools import pairwise
from typing import Any, Callable, Hashable, Iterable, List, Optional, Tuple

from .collect_reduce import collect_reduce, collect_reduce_sparse
from .monoid import Monoid, addm
from .primitives import pack
from .transforms import iota, stable_sort

Less = Callable[[Any, Any], bool]
HashFn = Callable[[Any], int]
EqualFn = Callable[[Any, Any], bool]


def _pairs(pairs: Iterable) -> List[Tuple[Any, Any]]:
    result = []
    for item in pairs:
        key, value = item
        result.append((key, value))
    return result


def _index_key(key: Any, num_buckets: int) -> int:
    if not isinstance(key, int) or not 0 <= key < num_buckets:
        raise ValueError(f"key {key!r} out of range for {num_buckets} buckets")
    return key


# ------------------------------ Sorted grouping ------------------------------


def group_by_key_sorted(pairs: Iterable, less: Less = operator.lt) -> List[Tuple[Any, List[Any]]]:
    """Group ``(key, value)`` pairs by key, returned in increasing key order.

    The values of each group keep their original relative order.
    """
    items = stable_sort(_pairs(pairs), lambda a, b: less(a[0], b[0]))
    if not items:
        return []
    starts = [0] + [i + 1 for i, (a, b) in enumerate(pairwise(items)) if less(a[0], b[0])]
    ends = starts[1:] + [len(items)]
    return [
        (items[s][0], [value for _, value in items[s:e]])
        for s, e in zip(starts, ends)
    ]


# ------------------------------- Hash grouping -------------------------------


class _KeyedHelper:
    def __init__(self, hash_fn: Optional[HashFn], equal_fn: Optional[EqualFn]) -> None:
        self._hash = hash_fn or hash
        self._equal = equal_fn or operator.eq

    def hash(self, key: Any) -> int:
        return self._hash(key)

    def equal(self, a: Any, b: Any) -> bool:
        return self._equal(a, b)


class _ReduceByKeyHelper(_KeyedHelper):
    def __init__(self, monoid: Monoid, hash_fn, equal_fn) -> None:
        super().__init__(hash_fn, equal_fn)
        self._monoid = monoid

    @staticmethod
    def get_key(x: Tuple[Any, Any]) -> Any:
        return x[0]

    @staticmethod
    def init(x: Tuple[Any, Any]) -> Tuple[Any, Any]:
        return (x[0], x[1])

    def update(self, result: Tuple[Any, Any], x: Tuple[Any, Any]) -> Tuple[Any, Any]:
        return (result[0], self._monoid.f(result[1], x[1]))

    def reduce(self, block: List[Tuple[Any, Any]]) -> Tuple[Any, Any]:
        m = self._monoid
        return (block[0][0], functools.reduce(m.f, (v for _, v in block), m.identity))


class _GroupByKeyHelper(_KeyedHelper):
    @staticmethod
    def get_key(x: Tuple[Any, Any]) -> Any:
        return x[0]

    @staticmethod
    def init(x: Tuple[Any, Any]) -> Tuple[Any, List[Any]]:
        return (x[0], [x[1]])

    @staticmethod
    def update(result: Tuple[Any, List[Any]], x: Tuple[Any, Any]) -> Tuple[Any, List[Any]]:
        result[1].append(x[1])
        return result

    @staticmethod
    def reduce(block: List[Tuple[Any, Any]]) -> Tuple[Any, List[Any]]:
        return (block[0][0], [v for _, v in block])


class _CountByKeyHelper(_KeyedHelper):
    @staticmethod
    def get_key(x: Any) -> Any:
        return x

    @staticmethod
    def init(x: Any) -> Tuple[Any, int]:
        return (x, 1)

    @staticmethod
    def update(result: Tuple[Any, int], x: Any) -> Tuple[Any, int]:
        return (result[0], result[1] + 1)

    @staticmethod
    def reduce(block: List[Any]) -> Tuple[Any, int]:
        return (block[0], len(block))


class _RemoveDuplicatesHelper(_KeyedHelper):
    @staticmethod
    def get_key(x: Any) -> Any:
        return x

    @staticmethod
    def init(x: Any) -> Any:
        return x

    @staticmethod
    def update(result: Any, x: Any) -> Any:
        return result

    @staticmethod
    def reduce(block: List[Any]) -> Any:
        return block[0]


def reduce_by_key(
    pairs: Iterable,
    monoid: Optional[Monoid] = None,
    hash: Optional[HashFn] = None,
    equal: Optional[EqualFn] = None,
) -> List[Tuple[Any, Any]]:
    """Combine the values of equal keys with ``monoid`` (addition by default).

    Returns one ``(key, combined)`` pair per distinct key, in an order that
    depends on the hash function.
    """
    helper = _ReduceByKeyHelper(monoid or addm(), hash, equal)
    return collect_reduce_sparse(_pairs(pairs), helper)


def group_by_key(
    pairs: Iterable,
    hash: Optional[HashFn] = None,
    equal: Optional[EqualFn] = None,
) -> List[Tuple[Any, List[Any]]]:
    """Collect the values of equal keys into lists, in hash-dependent key order."""
    return collect_reduce_sparse(_pairs(pairs), _GroupByKeyHelper(hash, equal))


def histogram_by_key(
    values: Iterable[Hashable],
    hash: Optional[HashFn] = None,
    equal: Optional[EqualFn] = None,
) -> List[Tuple[Any, int]]:
    """Pairs of each distinct value and how many times it appears."""
    return collect_reduce_sparse(list(values), _CountByKeyHelper(hash, equal))


def remove_duplicates(
    values: Iterable[Hashable],
    hash: Optional[HashFn] = None,
    equal: Optional[EqualFn] = None,
) -> List[Any]:
    """One copy of each distinct value, in hash-dependent order."""
    return collect_reduce_sparse(list(values), _RemoveDuplicatesHelper(hash, equal))


# ------------------------------- Index grouping -------------------------------


class _ReduceByIndexHelper:
    def __init__(self, monoid: Monoid) -> None:
        self._monoid = monoid

    @staticmethod
    def get_key(x: Tuple[int, Any]) -> int:
        return x[0]

    @staticmethod
    def get_val(x: Tuple[int, Any]) -> Any:
        return x[1]

    def init(self) -> Any:
        return self._monoid.identity

    def update(self, acc: Any, value: Any) -> Any:
        return self._monoid.f(acc, value)

    def combine(self, block: List[Tuple[int, Any]]) -> Any:
        m = self._monoid
        return functools.reduce(m.f, (v for _, v in block), m.identity)


class _IntegerKeyHelper:
    """Helper whose elements are themselves bucket indices."""

    def __init__(self, num_buckets: int) -> None:
        self._num_buckets = num_buckets

    def get_key(self, x: int) -> int:
        return _index_key(x, self._num_buckets)


class _HistogramHelper(_IntegerKeyHelper):
    def get_val(self, x: int) -> int:
        self.get_key(x)
        return 1

    @staticmethod
    def init() -> int:
        return 0

    @staticmethod
    def update(acc: int, value: int) -> int:
        return acc + value

    @staticmethod
    def combine(block: List[int]) -> int:
        return len(block)


class _PresenceHelper(_IntegerKeyHelper):
    def get_val(self, x: int) -> bool:
        self.get_key(x)
        return True

    @staticmethod
    def init() -> bool:
        return False

    @staticmethod
    def update(acc: bool, value: bool) -> bool:
        return acc or value

    @staticmethod
    def combine(block: List[int]) -> bool:
        return bool(block)


class _GroupByIndexHelper:
    @staticmethod
    def get_key(x: Tuple[int, Any]) -> int:
        return x[0]

    @staticmethod
    def get_val(x: Tuple[int, Any]) -> List[Any]:
        return [x[1]]

    @staticmethod
    def init() -> List[Any]:
        return []

    @staticmethod
    def update(acc: List[Any], values: List[Any]) -> List[Any]:
        acc.extend(values)
        return acc

    @staticmethod
    def combine(block: List[Tuple[int, Any]]) -> List[Any]:
        return [v for _, v in block]


def reduce_by_index(
    pairs: Iterable, num_buckets: int, monoid: Optional[Monoid] = None
) -> List[Any]:
    """Combine the values of ``(index, value)`` pairs into ``num_buckets`` slots.

    Slot ``i`` holds the ``monoid`` combination of all values with index
    ``i``; an index outside ``[0, num_buckets)`` raises ``ValueError``.
    """
    return collect_reduce(_pairs(pairs), _ReduceByIndexHelper(monoid or addm()), num_buckets)


def histogram_by_index(values: Iterable[int], num_buckets: int) -> List[int]:
    """Count of each integer in ``[0, num_buckets)``; others raise ``ValueError``."""
    return collect_reduce(list(values), _HistogramHelper(num_buckets), num_buckets)


def remove_duplicate_integers(values: Iterable[int], max_value: int) -> List[int]:
    """The distinct integers of ``values`` in increasing order.

    All values must lie in ``[0, max_value)``.
    """
    flags = collect_reduce(list(values), _PresenceHelper(max_value), max_value)
    return pack(iota(max_value), flags)


def group_by_index(pairs: Iterable, num_buckets: int) -> List[List[Any]]:
    """Lists of values by index; slot ``i`` holds values with index ``i`` in input order."""
    items = _pairs(pairs)
    if len(items) > num_buckets * num_buckets:
        groups: List[List[Any]] = [[] for _ in range(num_buckets)]
        for key, value in items:
            groups[_index_key(key, num_buckets)].append(value)
        return groups
    return collect_reduce(items, _GroupByIndexHelper(), num_buckets)