"""Immutable sequences whose elements are computed on demand from their index."""

from __future__ import annotations

import operator
from collections.abc import Sequence
from typing import Callable, Generic, Iterator, TypeVar, overload

T = TypeVar("T")


class DelayedSequence(Sequence, Generic[T]):
    """The values ``f(first), f(first + 1), ..., f(last - 1)``, generated lazily."""

    def __init__(self, first: int, last: int, f: Callable[[int], T]) -> None:
        if first > last:
            raise ValueError(f"invalid bounds [{first}, {last})")
        self._first = first
        self._last = last
        self._f = f

    @property
    def first(self) -> int:
        return self._first

    @property
    def last(self) -> int:
        return self._last

    def __len__(self) -> int:
        return self._last - self._first

    @overload
    def __getitem__(self, key: int) -> T: ...

    @overload
    def __getitem__(self, key: slice) -> "DelayedSequence[T]": ...

    def __getitem__(self, key):
        if isinstance(key, slice):
            positions = range(self._first, self._last)[key]
            if positions.step == 1:
                return DelayedSequence(positions.start, positions.stop, self._f)
            f = self._f
            return DelayedSequence(0, len(positions), lambda k: f(positions[k]))
        i = operator.index(key)
        n = len(self)
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"index {key} out of range for length {n}")
        return self._f(self._first + i)

    def __iter__(self) -> Iterator[T]:
        f = self._f
        for i in range(self._first, self._last):
            yield f(i)

    def __reversed__(self) -> Iterator[T]:
        f = self._f
        for i in range(self._last - 1, self._first - 1, -1):
            yield f(i)

    def at(self, i: int) -> T:
        """Element at absolute index ``i``, checked against ``[first, last)``."""
        if i < self._first or i >= self._last:
            raise IndexError(
                f"delayed sequence access out of range at {i} for a sequence "
                f"with bounds [{self._first}, {self._last})"
            )
        return self._f(i)

    def front(self) -> T:
        if not self:
            raise IndexError("front of an empty delayed sequence")
        return self._f(self._first)

    def back(self) -> T:
        if not self:
            raise IndexError("back of an empty delayed sequence")
        return self._f(self._last - 1)

    def swap(self, other: "DelayedSequence[T]") -> None:
        """Exchange contents with another delayed sequence."""
        self._first, other._first = other._first, self._first
        self._last, other._last = other._last, self._last
        self._f, other._f = other._f, self._f

    def __repr__(self) -> str:
        return f"DelayedSequence(first={self._first}, last={self._last})"


def delayed_seq(n: int, f: Callable[[int], T]) -> DelayedSequence[T]:
    """The sequence ``f(0), ..., f(n - 1)``."""
    return DelayedSequence(0, n, f)


def delayed_range(first: int, last: int, f: Callable[[int], T]) -> DelayedSequence[T]:
    """The sequence ``f(first), ..., f(last - 1)``."""
    return DelayedSequence(first, last, f)


def constant_seq(n: int, value: T) -> DelayedSequence[T]:
    """A sequence of ``n`` copies of ``value``."""
    return DelayedSequence(0, n, lambda _i: value)