"""Growable input buffer with an explicit doubling policy."""

from __future__ import annotations

import sys
from typing import Any

from mozlz4.errors import ReadError

INITIAL_CAPACITY = 32 * 1024


class GrowableBuffer:
    """
    Owned, contiguous byte buffer filled from a source of unknown length.

    ``length`` is the number of valid bytes; ``capacity`` the allocated size.
    The two differ only while the buffer is being filled: ``detach()`` hands
    out a bytearray trimmed to ``length`` and gives up ownership.

    Growth policy: double the capacity, refuse to go past ``max_capacity``
    (the platform size limit unless a smaller one is given).
    """

    def __init__(self, initial_capacity: int = INITIAL_CAPACITY, *, max_capacity: int = sys.maxsize):
        if initial_capacity <= 0:
            raise ValueError(f"initial_capacity must be > 0, got {initial_capacity}")
        if max_capacity < initial_capacity:
            raise ValueError(
                f"max_capacity ({max_capacity}) smaller than initial_capacity ({initial_capacity})"
            )
        self.max_capacity = int(max_capacity)
        try:
            self._buf = bytearray(int(initial_capacity))
        except MemoryError as err:
            raise ReadError(f"cannot allocate {initial_capacity} bytes for input") from err
        self.length = 0

    @property
    def capacity(self) -> int:
        return len(self._buf)

    @property
    def room(self) -> int:
        return self.capacity - self.length

    def is_full(self) -> bool:
        return self.length == self.capacity

    def next_capacity(self) -> int:
        cap = self.capacity
        if cap > self.max_capacity // 2:
            raise ReadError(
                f"input too large: cannot grow buffer past {cap} bytes (limit {self.max_capacity})"
            )
        return cap * 2

    def grow(self) -> None:
        new_cap = self.next_capacity()
        try:
            self._buf.extend(bytes(new_cap - self.capacity))
        except MemoryError as err:
            raise ReadError(f"cannot grow input buffer to {new_cap} bytes") from err

    def fill_from(self, src: Any) -> int | None:
        """Read once from ``src`` into the unfilled tail.

        Returns the number of bytes read (0 at end of stream), or whatever
        non-integer the source returned (``None`` for "no data yet").
        """
        if self.room == 0:
            return 0

        readinto = getattr(src, "readinto", None)
        if readinto is not None:
            with memoryview(self._buf) as view, view[self.length :] as dst:
                n = readinto(dst)
            if n is None:
                return None
        else:
            chunk = src.read(self.room)
            if chunk is None:
                return None
            n = len(chunk)
            if n > self.room:
                raise ReadError(f"source returned {n} bytes, asked for at most {self.room}")
            self._buf[self.length : self.length + n] = chunk

        self.length += int(n)
        return int(n)

    def detach(self) -> bytearray:
        out = self._buf
        del out[self.length :]
        self._buf = bytearray()
        self.length = 0
        return out
