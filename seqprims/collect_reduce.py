"""Combining values that share a key, into dense or sparse buckets."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Any, Iterable, List, Protocol

CR_SEQ_THRESHOLD = 8192
SPARSE_SEQ_THRESHOLD = 10000

_CACHE_PER_THREAD = 1_000_000
_ELEMENT_BYTES = 8
_COPY_CUTOFF = 5
_MASK64 = (1 << 64) - 1


class DenseHelper(Protocol):
    """Operations used to reduce values into integer-keyed buckets."""

    def init(self) -> Any: ...
    def get_key(self, x: Any) -> int: ...
    def get_val(self, x: Any) -> Any: ...
    def update(self, acc: Any, value: Any) -> Any: ...
    def combine(self, block: List[Any]) -> Any: ...


class SparseHelper(Protocol):
    """Operations used to reduce elements that share an arbitrary key."""

    def get_key(self, x: Any) -> Any: ...
    def hash(self, key: Any) -> int: ...
    def equal(self, a: Any, b: Any) -> bool: ...
    def init(self, x: Any) -> Any: ...
    def update(self, result: Any, x: Any) -> Any: ...
    def reduce(self, block: List[Any]) -> Any: ...


def _mix64(x: int) -> int:
    x &= _MASK64
    x = ((x ^ (x >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    x = ((x ^ (x >> 27)) * 0x94D049BB133111EB) & _MASK64
    return x ^ (x >> 31)


def _hash64(i: int) -> int:
    return _mix64(i + 0x9E3779B97F4A7C15)


def _log2_up(x: int) -> int:
    return (x - 1).bit_length() if x > 1 else 0


def _num_workers() -> int:
    return os.cpu_count() or 1


def _as_list(a: Iterable) -> List[Any]:
    return a if isinstance(a, list) else list(a)


def _checked_key(k: int, num_buckets: int) -> int:
    if not 0 <= k < num_buckets:
        raise ValueError(f"key {k} out of range for {num_buckets} buckets")
    return k


def seq_collect_reduce(a: Iterable, helper: DenseHelper, num_buckets: int) -> List[Any]:
    """Reduce each element's value into bucket ``get_key(x)``, sequentially."""
    out = [helper.init() for _ in range(num_buckets)]
    for x in a:
        k = _checked_key(helper.get_key(x), num_buckets)
        out[k] = helper.update(out[k], helper.get_val(x))
    return out


def collect_reduce_few(a: Iterable, helper: DenseHelper, num_buckets: int) -> List[Any]:
    """Dense collect-reduce suited to few buckets: reduce blocks, then merge them.

    Partial bucket results are merged with ``update``.
    """
    items = _as_list(a)
    n = len(items)
    workers = _num_workers()
    num_blocks = min(4 * workers, n // max(num_buckets, 1) // 64) + 1
    if n < CR_SEQ_THRESHOLD or num_blocks == 1 or workers == 1:
        return seq_collect_reduce(items, helper, num_buckets)

    block_size = (n - 1) // num_blocks + 1
    partials = [
        seq_collect_reduce(items[start : start + block_size], helper, num_buckets)
        for start in range(0, n, block_size)
    ]
    result = []
    for i in range(num_buckets):
        value = helper.init()
        for part in partials:
            value = helper.update(value, part[i])
        result.append(value)
    return result


class BucketHasher:
    """Maps elements to ``2 ** bits`` buckets, giving frequent keys their own.

    A sample of the input is counted; keys seen at least five times become
    heavy hitters and are numbered ``0, 1, ...``. Every other element is
    hashed into the remaining buckets.
    """

    def __init__(self, a: Sequence, hasheq: Any, bits: int) -> None:
        n = len(a)
        if n == 0:
            raise ValueError("cannot sample an empty sequence")
        self.hasheq = hasheq
        num_buckets = 1 << bits
        num_samples = num_buckets
        table_size = 4 * num_samples
        self.table_mask = table_size - 1
        self.bucket_mask = num_buckets - 1

        counts: List[Any] = [None] * table_size  # [key, extra copies] or None
        for i in range(num_samples):
            key = hasheq.get_key(a[_hash64(i) % n])
            idx = hasheq.hash(key) & self.table_mask
            while True:
                slot = counts[idx]
                if slot is None:
                    counts[idx] = [key, 0]
                    break
                if hasheq.equal(slot[0], key):
                    slot[1] += 1
                    break
                idx = (idx + 1) & self.table_mask

        self.heavy_hitters = 0
        self._table: List[Any] = [None] * table_size
        for slot in counts:
            if slot is not None and slot[1] + 2 > _COPY_CUTOFF:
                idx = hasheq.hash(slot[0]) & self.table_mask
                if self._table[idx] is None:
                    self._table[idx] = (slot[0], self.heavy_hitters)
                    self.heavy_hitters += 1

    def __call__(self, value: Any) -> int:
        hasheq = self.hasheq
        key = hasheq.get_key(value)
        hash_val = hasheq.hash(key)
        if self.heavy_hitters > 0:
            entry = self._table[hash_val & self.table_mask]
            if entry is not None and hasheq.equal(entry[0], key):
                return entry[1]
            hash_val &= self.bucket_mask
            if hash_val < self.heavy_hitters:
                return hash_val % (self.bucket_mask + 1 - self.heavy_hitters) + self.heavy_hitters
            return hash_val
        return hash_val & self.bucket_mask


class _DenseHashEq:
    def __init__(self, helper: DenseHelper) -> None:
        self._helper = helper

    def get_key(self, x: Any) -> int:
        return self._helper.get_key(x)

    @staticmethod
    def hash(key: int) -> int:
        # Keys sharing their low four bits land together unless heavy.
        return _mix64((key + 1) & ~15)

    @staticmethod
    def equal(a: int, b: int) -> bool:
        return a == b


def collect_reduce(a: Iterable, helper: DenseHelper, num_buckets: int) -> List[Any]:
    """Reduce each element's value into bucket ``get_key(x)`` of ``num_buckets``.

    Large inputs are first partitioned by key so that every frequent key is
    reduced in one go with ``combine``.
    """
    items = _as_list(a)
    n = len(items)
    bits = max(_log2_up(1 + (2 * _ELEMENT_BYTES * n) // _CACHE_PER_THREAD), 4)
    num_blocks = 1 << bits
    if num_buckets <= 4 * num_blocks or n < CR_SEQ_THRESHOLD:
        return collect_reduce_few(items, helper, num_buckets)

    gb = BucketHasher(items, _DenseHashEq(helper), bits)
    blocks: List[List[Any]] = [[] for _ in range(num_blocks)]
    for x in items:
        blocks[gb(x)].append(x)

    sums = [helper.init() for _ in range(num_buckets)]
    for i, block in enumerate(blocks):
        if not block:
            continue
        if i < gb.heavy_hitters:
            k = _checked_key(helper.get_key(block[0]), num_buckets)
            sums[k] = helper.combine(block)
        else:
            for x in block:
                k = _checked_key(helper.get_key(x), num_buckets)
                sums[k] = helper.update(sums[k], helper.get_val(x))
    return sums


def seq_collect_reduce_sparse(a: Iterable, helper: SparseHelper) -> List[Any]:
    """One result per distinct key, using an open-addressing table sequentially."""
    items = _as_list(a)
    table_size = int(1.5 * len(items))
    if table_size == 0:
        return []
    table: List[Any] = [None] * table_size  # (key, result) or None
    for x in items:
        key = helper.get_key(x)
        k = helper.hash(key) % table_size
        while table[k] is not None and not helper.equal(table[k][0], key):
            k = 0 if k + 1 == table_size else k + 1
        if table[k] is None:
            table[k] = (key, helper.init(x))
        else:
            table[k] = (table[k][0], helper.update(table[k][1], x))
    return [slot[1] for slot in table if slot is not None]


def collect_reduce_sparse(a: Iterable, helper: SparseHelper) -> List[Any]:
    """One result per distinct key, in an order that depends on the hash."""
    items = _as_list(a)
    n = len(items)
    if n < SPARSE_SEQ_THRESHOLD:
        return seq_collect_reduce_sparse(items, helper)

    bits = max(_log2_up(int(1 + (1.2 * 2 * _ELEMENT_BYTES * n) / _CACHE_PER_THREAD)), 4)
    num_buckets = 1 << bits
    gb = BucketHasher(items, helper, bits)
    buckets: List[List[Any]] = [[] for _ in range(num_buckets)]
    for x in items:
        buckets[gb(x)].append(x)

    results: List[Any] = []
    for i, block in enumerate(buckets):
        if i < gb.heavy_hitters:
            if block:
                results.append(helper.reduce(block))
        else:
            results.extend(seq_collect_reduce_sparse(block, helper))
    return results