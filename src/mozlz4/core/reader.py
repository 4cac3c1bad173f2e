"""Whole-input ingestion.

Two paths:
  - regular file: size known up front (fstat), one exact allocation
  - stream (stdin, pipe, FIFO): size unknown, GrowableBuffer doubling loop

Either way the result is one contiguous bytearray holding the entire input,
or a ReadError. Partial input is never returned.
"""

from __future__ import annotations

import os
import stat
import sys
from typing import Any, BinaryIO

from mozlz4.core.growbuf import INITIAL_CAPACITY, GrowableBuffer
from mozlz4.errors import ReadError


def read_fixed(f: BinaryIO, size: int, *, name: str = "<input>") -> bytearray:
    try:
        buf = bytearray(size)
    except MemoryError as err:
        raise ReadError(f"cannot allocate {size} bytes for '{name}'") from err

    got = 0
    try:
        with memoryview(buf) as view:
            while got < size:
                with view[got:] as dst:
                    n = f.readinto(dst)
                if not n:
                    break
                got += n
    except OSError as err:
        raise ReadError(f"cannot read file '{name}': {err}") from err

    if got != size:
        raise ReadError(f"cannot read file '{name}': got {got} of {size} bytes")
    return buf


def read_stream(
    src: Any,
    *,
    name: str = "<stdin>",
    initial_capacity: int = INITIAL_CAPACITY,
    max_capacity: int = sys.maxsize,
) -> bytearray:
    """Read ``src`` until end of stream.

    ``src`` needs ``readinto(buffer)`` or ``read(n)``. Short reads are fine;
    only a read returning 0 bytes ends the loop. Any OSError from the source
    fails the whole read, whatever was accumulated so far.
    """
    buf = GrowableBuffer(initial_capacity, max_capacity=max_capacity)
    while True:
        if buf.is_full():
            buf.grow()
        try:
            n = buf.fill_from(src)
        except OSError as err:
            raise ReadError(f"cannot read '{name}': {err}") from err
        if n is None:
            raise ReadError(f"cannot read '{name}': source has no data available (non-blocking?)")
        if n == 0:
            break
    return buf.detach()


def read_path(path: str | os.PathLike[str]) -> bytearray:
    name = os.fspath(path)
    try:
        f = open(name, "rb")
    except OSError as err:
        raise ReadError(f"cannot read file '{name}': {err.strerror or err}") from err

    with f:
        try:
            st = os.fstat(f.fileno())
        except OSError as err:
            raise ReadError(f"cannot stat file '{name}': {err}") from err
        if stat.S_ISREG(st.st_mode):
            return read_fixed(f, st.st_size, name=name)
        # FIFO, character device, ...: no usable size
        return read_stream(f, name=name)
