"""Sequential, lazily evaluated streams over sized sequences."""

from __future__ import annotations

import functools
import itertools
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class ForwardDelayedSequence:
    """A re-iterable stream of exactly ``size`` lazily produced values.

    ``make_iter`` is called afresh for each iteration, so the stream can be
    traversed more than once.
    """

    make_iter: Callable[[], Iterator[Any]]
    size: int

    def __iter__(self) -> Iterator[Any]:
        return itertools.islice(self.make_iter(), self.size)

    def __len__(self) -> int:
        return self.size


def zip_with(s1: Sequence, s2: Iterable, f: Callable[[Any, Any], T]) -> ForwardDelayedSequence:
    """Stream of ``f(a, b)`` for corresponding elements; length of ``s1``."""
    return ForwardDelayedSequence(lambda: map(f, s1, s2), len(s1))


def zipped(s1: Sequence, s2: Iterable) -> ForwardDelayedSequence:
    """Stream of pairs of corresponding elements."""
    return zip_with(s1, s2, lambda a, b: (a, b))


def map_stream(s: Sequence, f: Callable[[Any], T]) -> ForwardDelayedSequence:
    """Stream of ``f(x)`` for each element of ``s``."""
    return ForwardDelayedSequence(lambda: map(f, s), len(s))


def scan(
    f: Callable[[T, Any], T], init: T, s: Sequence, inclusive: bool = False
) -> ForwardDelayedSequence:
    """Stream of running ``f``-sums of ``s`` starting from ``init``.

    The exclusive scan yields the sum before each element; the inclusive one
    yields the sum including it.
    """

    def values() -> Iterator[T]:
        it = iter(s)
        value = init
        if inclusive:
            value = f(value, next(it))
        yield value
        for x in it:
            value = f(value, x)
            yield value

    return ForwardDelayedSequence(values, len(s))


def reduce(f: Callable[[T, Any], T], init: T, s: Iterable) -> T:
    """Left fold of ``s`` with ``f`` starting from ``init``."""
    return functools.reduce(f, s, init)


def apply(s: Iterable, f: Callable[[Any], Any]) -> None:
    """Call ``f`` on every element of ``s`` in order."""
    for x in s:
        f(x)


def zip_apply(s1: Iterable, s2: Iterable, f: Callable[[Any, Any], Any]) -> None:
    """Call ``f(a, b)`` for corresponding elements, driven by ``s1``."""
    it2 = iter(s2)
    for a in s1:
        f(a, next(it2))


def filter_map(
    s: Iterable, f: Callable[[Any], bool], g: Callable[[Any], U]
) -> List[U]:
    """``g(x)`` for each ``x`` of ``s`` that satisfies ``f``."""
    return [g(x) for x in s if f(x)]


def filter_op(s: Iterable, f: Callable[[Any], Optional[U]]) -> List[U]:
    """The non-``None`` results of ``f`` over ``s``."""
    return [v for v in map(f, s) if v is not None]