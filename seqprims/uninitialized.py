"""A fixed-size buffer whose slots start out empty and are filled later."""

from __future__ import annotations

import operator
from collections.abc import Sequence
from typing import Any, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class UninitializedSequence(Sequence, Generic[T]):
    """A sequence of fixed length used as scratch space by out-of-place algorithms.

    Slots hold ``None`` until written. The length never changes.
    """

    def __init__(self, n: int) -> None:
        n = operator.index(n)
        if n < 0:
            raise ValueError(f"length must be non-negative, got {n}")
        self._data: List[Optional[T]] = [None] * n

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self._data[key]
        return self._data[operator.index(key)]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, slice):
            values = list(value)
            if len(range(len(self._data))[key]) != len(values):
                raise ValueError("slice assignment must not change the length")
            self._data[key] = values
        else:
            self._data[operator.index(key)] = value

    def __iter__(self) -> Iterator[Optional[T]]:
        return iter(self._data)

    def at(self, i: int) -> Optional[T]:
        """Slot ``i``, checked against ``[0, len)``; negative indices are rejected."""
        i = operator.index(i)
        if i < 0 or i >= len(self._data):
            raise IndexError(
                f"access out of bounds: length = {len(self._data)}, index = {i}"
            )
        return self._data[i]

    def swap(self, other: "UninitializedSequence[T]") -> None:
        """Exchange contents (and lengths) with another buffer."""
        self._data, other._data = other._data, self._data

    def fill(self, values: Iterable[Any]) -> None:
        """Write ``values`` into the slots from the front."""
        items = list(values)
        if len(items) > len(self._data):
            raise ValueError(
                f"cannot write {len(items)} values into {len(self._data)} slots"
            )
        self._data[: len(items)] = items

    def __repr__(self) -> str:
        return f"UninitializedSequence(size={len(self._data)})"