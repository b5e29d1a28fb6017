"""Sample sort: split into blocks, sort them, and redistribute by pivot buckets."""

from __future__ import annotations

import functools
import math
import operator
import random
from collections.abc import MutableSequence
from itertools import pairwise
from typing import Any, Callable, Iterable, List, Optional, Sequence

from .transpose import transpose_buckets

QUICKSORT_THRESHOLD = 16384
OVER_SAMPLE = 8

Less = Callable[[Any, Any], bool]


def _log2_up(x: int) -> int:
    return (x - 1).bit_length() if x > 1 else 0


def _sort_key(less: Less) -> Optional[Callable[[Any], Any]]:
    if less is operator.lt:
        return None

    def cmp(x: Any, y: Any) -> int:
        if less(x, y):
            return -1
        if less(y, x):
            return 1
        return 0

    return functools.cmp_to_key(cmp)


def _sorted(items: Iterable[Any], less: Less) -> List[Any]:
    return sorted(items, key=_sort_key(less))


def _store(target: MutableSequence, items: List[Any]) -> None:
    if isinstance(target, list):
        target[:] = items
    elif hasattr(target, "clear") and hasattr(target, "extend"):
        target.clear()
        target.extend(items)
    else:
        for i, value in enumerate(items):
            target[i] = value


def get_bucket_counts(a: Sequence[Any], pivots: Sequence[Any], less: Less = operator.lt) -> List[int]:
    """Count how many elements of sorted ``a`` fall into each pivot bucket.

    Bucket ``j`` holds the elements below ``pivots[j]`` and not below the
    previous pivot. When two consecutive pivots are equal, the bucket between
    them holds exactly the elements equal to that pivot. The result has
    ``len(pivots) + 1`` entries.
    """
    n = len(a)
    num_pivots = len(pivots)
    counts = [0] * (num_pivots + 1)
    if n == 0:
        return counts
    if num_pivots == 0:
        counts[0] = n
        return counts

    ia = ib = ic = 0
    while True:
        while less(a[ia], pivots[ib]):
            counts[ic] += 1
            ia += 1
            if ia == n:
                return counts
        ib += 1
        ic += 1
        if ib == num_pivots:
            break
        if not less(pivots[ib - 1], pivots[ib]):
            while not less(pivots[ib], a[ia]):
                counts[ic] += 1
                ia += 1
                if ia == n:
                    return counts
            ib += 1
            ic += 1
            if ib == num_pivots:
                break
    counts[ic] = n - ia
    return counts


def seq_sort_inplace(a: MutableSequence, less: Less = operator.lt, stable: bool = False) -> None:
    """Sort ``a`` in place sequentially with respect to ``less``.

    The sort is always stable, which satisfies both settings of ``stable``.
    """
    key = _sort_key(less)
    if isinstance(a, list):
        a.sort(key=key)
    else:
        _store(a, sorted(a, key=key))


def sample_sort(a: Iterable[Any], less: Less = operator.lt, stable: bool = False) -> List[Any]:
    """Return a new list with the elements of ``a`` sorted by ``less``.

    With ``stable`` set, equal elements keep their original relative order.
    """
    items = list(a)
    n = len(items)
    if n < QUICKSORT_THRESHOLD:
        seq_sort_inplace(items, less, stable)
        return items

    root = math.isqrt(n)
    num_blocks = 1 << _log2_up(root // 4 + 1)
    block_size = (n - 1) // num_blocks + 1
    num_buckets = root // 4 + 1
    sample_set_size = num_buckets * OVER_SAMPLE

    rng = random.Random(n)
    samples = _sorted((items[rng.randrange(n)] for _ in range(sample_set_size)), less)
    pivots = samples[::OVER_SAMPLE][: num_buckets - 1]

    sorted_blocks: List[Any] = []
    counts: List[int] = []
    for start in range(0, num_blocks * block_size, block_size):
        block = _sorted(items[start : start + block_size], less)
        counts.extend(get_bucket_counts(block, pivots, less))
        sorted_blocks.extend(block)

    out, offsets = transpose_buckets(
        sorted_blocks, counts, n, block_size, num_blocks, num_buckets
    )

    for j, (start, end) in enumerate(pairwise(offsets)):
        # A bucket between two equal pivots holds only equal elements.
        if j == 0 or j == num_buckets - 1 or less(pivots[j - 1], pivots[j]):
            out[start:end] = _sorted(out[start:end], less)
    return out


def sample_sort_inplace(a: MutableSequence, less: Less = operator.lt) -> None:
    """Sort ``a`` in place with respect to ``less``."""
    _store(a, sample_sort(a, less, False))