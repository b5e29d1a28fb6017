"""Read-only access to the bytes of a file through a memory map."""

from __future__ import annotations

import mmap
import os
import stat
from collections.abc import Sequence
from typing import Iterator, Union

_Buffer = Union[mmap.mmap, bytes]


class FileMap(Sequence):
    """The contents of a regular file, mapped read-only into memory.

    Indexing gives byte values as integers and slicing gives ``bytes``, as
    for ``bytes`` objects. After :meth:`close` the map is empty.
    """

    def __init__(self, filename: Union[str, os.PathLike]) -> None:
        path = os.fspath(filename)
        info = os.stat(path)
        if not stat.S_ISREG(info.st_mode):
            raise ValueError(f"not a regular file: {path!r}")
        self._data: _Buffer
        with open(path, "rb") as fh:
            size = os.fstat(fh.fileno()).st_size
            if size:
                self._data = mmap.mmap(fh.fileno(), 0, access=mmap.ACCESS_READ)
            else:
                self._data = b""
        self._closed = False

    @property
    def closed(self) -> bool:
        """True once the map has been closed or swapped with a closed one."""
        return self._closed

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, key):
        return self._data[key]

    def __iter__(self) -> Iterator[int]:
        return iter(self._data[:])

    def __bytes__(self) -> bytes:
        return bytes(self._data[:])

    def close(self) -> None:
        """Release the mapping; the map becomes empty."""
        if isinstance(self._data, mmap.mmap):
            self._data.close()
        self._data = b""
        self._closed = True

    def swap(self, other: "FileMap") -> None:
        """Exchange the mapped contents with another file map."""
        self._data, other._data = other._data, self._data
        self._closed, other._closed = other._closed, self._closed

    def __enter__(self) -> "FileMap":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"size={len(self)}"
        return f"FileMap({state})"