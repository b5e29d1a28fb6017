"""Matrix transposition and moving sorted blocks into bucket order."""

from __future__ import annotations

from itertools import accumulate
from typing import Any, List, Sequence, Tuple


def transpose_matrix(a: Sequence[Any], rows: int, cols: int) -> List[Any]:
    """Transpose a row-major ``rows`` x ``cols`` matrix stored flat in ``a``.

    The result is the row-major ``cols`` x ``rows`` matrix, so that element
    ``a[i * cols + j]`` ends up at position ``j * rows + i``.
    """
    if rows < 0 or cols < 0:
        raise ValueError("matrix dimensions must be non-negative")
    if len(a) != rows * cols:
        raise ValueError(
            f"expected {rows * cols} elements for a {rows}x{cols} matrix, got {len(a)}"
        )
    flat = list(a)
    return [x for j in range(cols) for x in flat[j::cols]]


def block_transpose(
    a: Sequence[Any],
    source_offsets: Sequence[int],
    dest_offsets: Sequence[int],
    rows: int,
    cols: int,
) -> List[Any]:
    """Transpose a matrix whose cells are variable-length runs of ``a``.

    Cell ``(i, j)`` is the run ``a[source_offsets[k]:source_offsets[k + 1]]``
    with ``k = i * cols + j``; it is copied to start at
    ``dest_offsets[j * rows + i]`` of the result.
    """
    m = rows * cols
    if rows < 0 or cols < 0:
        raise ValueError("matrix dimensions must be non-negative")
    if len(source_offsets) < m + 1:
        raise ValueError(f"need {m + 1} source offsets, got {len(source_offsets)}")
    if len(dest_offsets) < m:
        raise ValueError(f"need {m} destination offsets, got {len(dest_offsets)}")
    items = list(a)
    out: List[Any] = [None] * len(items)
    for i in range(rows):
        for j in range(cols):
            k = i * cols + j
            start, stop = source_offsets[k], source_offsets[k + 1]
            if not 0 <= start <= stop <= len(items):
                raise ValueError(f"invalid source run [{start}, {stop}) for cell ({i}, {j})")
            dest = dest_offsets[j * rows + i]
            length = stop - start
            if dest < 0 or dest + length > len(out):
                raise ValueError(f"destination run for cell ({i}, {j}) is out of range")
            out[dest : dest + length] = items[start:stop]
    return out


def transpose_buckets(
    source: Sequence[Any],
    counts: Sequence[int],
    n: int,
    block_size: int,
    num_blocks: int,
    num_buckets: int,
) -> Tuple[List[Any], List[int]]:
    """Move elements from block order to bucket order.

    ``source`` holds ``num_blocks`` consecutive blocks of ``block_size``
    elements (the last ones may be shorter or empty), each sorted by bucket.
    ``counts`` is block-major: ``counts[i * num_buckets + j]`` is the number of
    elements of block ``i`` that belong to bucket ``j``.

    Returns the rearranged elements, grouped by bucket with block order kept
    inside each bucket, and the ``num_buckets + 1`` bucket offsets ending in ``n``.
    """
    if num_blocks < 1 or num_buckets < 1:
        raise ValueError("there must be at least one block and one bucket")
    m = num_blocks * num_buckets
    if len(counts) < m:
        raise ValueError(f"need {m} counts, got {len(counts)}")
    if len(source) < n:
        raise ValueError(f"source has {len(source)} elements, expected {n}")
    cell_counts = list(counts[:m])
    if sum(cell_counts) != n:
        raise ValueError(f"counts sum to {sum(cell_counts)}, expected {n}")
    for i in range(num_blocks):
        expected = max(0, min(block_size, n - i * block_size))
        got = sum(cell_counts[i * num_buckets : (i + 1) * num_buckets])
        if got != expected:
            raise ValueError(f"block {i} has {got} counted elements, expected {expected}")

    bucket_major = transpose_matrix(cell_counts, num_blocks, num_buckets)
    dest_offsets = [0, *accumulate(bucket_major)][:m]
    source_offsets = [0, *accumulate(cell_counts)]

    out = block_transpose(
        list(source[:n]), source_offsets, dest_offsets, num_blocks, num_buckets
    )
    bucket_offsets = [dest_offsets[j * num_blocks] for j in range(num_buckets)]
    bucket_offsets.append(n)
    return out, bucket_offsets