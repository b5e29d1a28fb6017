# seqprims

A library of sequence primitives. It provides lazily evaluated sequences,
monoids, scans, packing and filtering, searching, a sample sort,
collect-reduce and group-by.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Overview

- `seqprims.monoid`: `Monoid` pairs an associative function with its
  identity. You build one with `make_monoid`. The module also has
  ready-made monoids: `addm`, `maxm`, `minm`, `xorm` and `minmaxm`.
  `pair_monoid` combines two monoids over pairs, and `array_monoid`
  applies one element-wise over tuples of a fixed length.
- `seqprims.delayed_sequence`: `DelayedSequence` is an immutable
  sequence that computes each element from its index when you ask for
  it. It supports `at`, `front`, `back` and `swap`. You create one with
  `delayed_seq`, `delayed_range` or `constant_seq`.
- `seqprims.stream`: `ForwardDelayedSequence` is a lazy stream with a
  known size that you can iterate more than once. The module builds
  these streams with `map_stream`, `zip_with`, `zipped` and `scan`. It
  also has `reduce`, `apply`, `zip_apply`, `filter_map` and `filter_op`.
- `seqprims.primitives` has these functions:
  - building sequences: `tabulate`, `delayed_tabulate`, `delayed_map`, `copy`
  - sums and prefix sums: `reduce`, the `scan` family
  - selecting elements: `pack`, `pack_into`, `pack_index`, `filter`, `filter_into`
  - combining: `merge`
  - counting: `count_if`, `count`, `all_of`, `any_of`, `none_of`
  - searching: `find_if`, `find`, `find_if_not`, `find_first_of`, `find_end`, `adjacent_find`, `mismatch`, `search`
  - comparing: `equal`, `lexicographical_compare`

  The search functions return an index. If nothing is found, they
  return the length of the range.
- `seqprims.transforms` has these functions:
  - sorting: `sort`, `stable_sort` and their in-place variants
  - integer sorting by a non-negative key: the `integer_sort` family
  - duplicates: `unique`, `remove_duplicates_ordered`
  - extremes: `min_element`, `max_element`, `minmax_element`
  - reordering: `reverse`, `reverse_inplace`, `rotate`
  - checks: `is_sorted`, `is_sorted_until`, `is_partitioned`
  - removal: `remove_if`, `remove`
  - building: `iota`, `flatten`, `append`
  - tokenizing: `is_whitespace`, `tokens`, `map_tokens`
  - splitting: `split_at`, `map_split_at`
- `seqprims.sample_sort`: `sample_sort` returns a sorted list and can
  keep the order of equal elements if you ask it to. It splits large
  inputs into blocks and redistributes them by pivot buckets. The
  module also has `sample_sort_inplace`, `seq_sort_inplace` and
  `get_bucket_counts`.
- `seqprims.transpose`: `transpose_matrix` transposes a flat
  matrix. `block_transpose` transposes a matrix whose cells are
  variable-length runs. `transpose_buckets` moves elements from block
  order to bucket order.
- `seqprims.collect_reduce`: reduces values that share a key, into
  dense integer-keyed buckets (`collect_reduce`, `collect_reduce_few`,
  `seq_collect_reduce`) or into one result per distinct key
  (`collect_reduce_sparse`, `seq_collect_reduce_sparse`).
  `BucketHasher` gives frequent keys buckets of their own.
- `seqprims.group_by`: covers the following functions.
  - Hash-based, results in an order that depends on the hash:
    `reduce_by_key`, `group_by_key`, `histogram_by_key`,
    `remove_duplicates`.
  - Sorted by key: `group_by_key_sorted`.
  - Index-based, for keys in `[0, num_buckets)`: `reduce_by_index`,
    `histogram_by_index`, `remove_duplicate_integers`,
    `group_by_index`.
- `seqprims.uninitialized`: `UninitializedSequence` is a fixed-length
  scratch buffer. Its slots hold `None` until they are written.
- `seqprims.file_map`: `FileMap` maps a regular file into memory for
  reading. You can index it and use it as a context manager.
- `seqprims.timer`: `Timer` measures elapsed wall-clock time across
  laps and prints lap and total times.

## Example

```python
from seqprims.delayed_sequence import delayed_seq
from seqprims.monoid import addm
from seqprims.primitives import reduce, scan
from seqprims.transforms import sort, tokens

squares = delayed_seq(10, lambda i: i * i)
print(squares[3], len(squares))          # 9 10

print(reduce(list(squares), addm()))     # 285
prefix, total = scan([1, 2, 3, 4], addm())
print(prefix, total)                     # [0, 1, 3, 6] 10

print(sort([5, 2, 9, 1]))                # [1, 2, 5, 9]
print(tokens("  hello   world "))        # ['hello', 'world']
```

## What it does not do

- Everything runs sequentially in the calling thread. The block and
  bucket structure of the algorithms is kept, but no work is spread
  across threads or processes.
- The package is a library only. It provides no command-line program.

## Running the tests

```
pytest
```