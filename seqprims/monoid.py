"""Monoids: an associative binary operation paired with its identity."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Monoid(Generic[T]):
    """An associative function ``f`` together with its identity element."""

    f: Callable[[T, T], T]
    identity: T

    def __call__(self, a: T, b: T) -> T:
        return self.f(a, b)


def make_monoid(f: Callable[[T, T], T], identity: T) -> Monoid[T]:
    """Build a monoid from a binary function and its identity."""
    return Monoid(f, identity)


def pair_monoid(m1: Monoid, m2: Monoid) -> Monoid[tuple]:
    """Combine two monoids component-wise over pairs."""

    def combine(a: tuple, b: tuple) -> tuple:
        return (m1.f(a[0], b[0]), m2.f(a[1], b[1]))

    return Monoid(combine, (m1.identity, m2.identity))


def array_monoid(m: Monoid, n: int) -> Monoid[tuple]:
    """Apply ``m`` element-wise over fixed-length tuples of length ``n``."""
    if n < 0:
        raise ValueError("array length must be non-negative")

    def combine(a: tuple, b: tuple) -> tuple:
        if len(a) != n or len(b) != n:
            raise ValueError(f"expected tuples of length {n}")
        return tuple(m.f(x, y) for x, y in zip(a, b))

    return Monoid(combine, (m.identity,) * n)


def addm() -> Monoid[Any]:
    """Addition with identity 0."""
    return Monoid(operator.add, 0)


def maxm() -> Monoid[Any]:
    """Maximum with identity negative infinity."""
    return Monoid(max, -math.inf)


def minm() -> Monoid[Any]:
    """Minimum with identity positive infinity."""
    return Monoid(min, math.inf)


def xorm() -> Monoid[int]:
    """Bitwise exclusive or with identity 0."""
    return Monoid(operator.xor, 0)


def _minmax(a: tuple, b: tuple) -> tuple:
    return (min(a[0], b[0]), max(a[1], b[1]))


def minmaxm() -> Monoid[tuple]:
    """Simultaneous minimum and maximum over (low, high) pairs."""
    return Monoid(_minmax, (math.inf, -math.inf))