from __future__ import annotations

import io
import os
import threading
from pathlib import Path

import pytest

from mozlz4.core.growbuf import INITIAL_CAPACITY, GrowableBuffer
from mozlz4.core.reader import read_fixed, read_path, read_stream
from mozlz4.errors import ReadError


class ChunkedReader:
    """Unseekable source handing out at most ``chunk`` bytes per readinto()."""

    def __init__(self, data: bytes, chunk: int) -> None:
        self._data = data
        self._pos = 0
        self.chunk = chunk
        self.calls = 0

    def readinto(self, b) -> int:
        self.calls += 1
        n = min(len(b), self.chunk, len(self._data) - self._pos)
        b[:n] = self._data[self._pos : self._pos + n]
        self._pos += n
        return n


class ReadOnlySource:
    """Source exposing read(n) only."""

    def __init__(self, data: bytes, chunk: int) -> None:
        self._data = data
        self._pos = 0
        self.chunk = chunk

    def read(self, n: int) -> bytes:
        n = min(n, self.chunk)
        out = self._data[self._pos : self._pos + n]
        self._pos += len(out)
        return out


class FailingReader(ChunkedReader):
    def __init__(self, data: bytes, chunk: int, fail_after: int) -> None:
        super().__init__(data, chunk)
        self.fail_after = fail_after

    def readinto(self, b) -> int:
        if self._pos >= self.fail_after:
            raise OSError(5, "Input/output error")
        return super().readinto(b)


class NonBlockingReader:
    def readinto(self, b) -> None:
        return None


def _payload(n: int) -> bytes:
    return bytes((i * 7 + (i >> 8)) & 0xFF for i in range(n))


# -------------------
# GrowableBuffer
# -------------------
def test_growbuf_starts_at_initial_capacity() -> None:
    buf = GrowableBuffer()
    assert buf.capacity == INITIAL_CAPACITY == 32 * 1024
    assert buf.length == 0
    assert buf.room == buf.capacity


def test_growbuf_doubles() -> None:
    buf = GrowableBuffer(16)
    buf.grow()
    assert buf.capacity == 32
    buf.grow()
    assert buf.capacity == 64


def test_growbuf_refuses_to_pass_limit() -> None:
    buf = GrowableBuffer(16, max_capacity=40)
    buf.grow()
    assert buf.capacity == 32
    with pytest.raises(ReadError):
        buf.next_capacity()
    with pytest.raises(ReadError):
        buf.grow()
    assert buf.capacity == 32


def test_growbuf_detach_trims_to_length() -> None:
    buf = GrowableBuffer(16)
    assert buf.fill_from(io.BytesIO(b"abc")) == 3
    out = buf.detach()
    assert out == bytearray(b"abc")
    assert buf.capacity == 0


def test_growbuf_rejects_bad_config() -> None:
    with pytest.raises(ValueError):
        GrowableBuffer(0)
    with pytest.raises(ValueError):
        GrowableBuffer(64, max_capacity=32)


# -------------------
# Unknown-size path
# -------------------
@pytest.mark.parametrize("chunk", [1000, 4095, 32 * 1024, 70_000])
def test_stream_growth_is_exact_regardless_of_chunking(chunk: int) -> None:
    data = _payload(100_000)
    src = ChunkedReader(data, chunk)
    out = read_stream(src)
    assert len(out) == 100_000
    assert bytes(out) == data


@pytest.mark.parametrize("n", [0, 1, INITIAL_CAPACITY - 1, INITIAL_CAPACITY, INITIAL_CAPACITY + 1])
def test_stream_capacity_boundaries(n: int) -> None:
    data = _payload(n)
    assert bytes(read_stream(io.BytesIO(data))) == data


def test_stream_read_only_source() -> None:
    data = _payload(100_000)
    assert bytes(read_stream(ReadOnlySource(data, 3000))) == data


def test_stream_error_discards_partial_data() -> None:
    src = FailingReader(_payload(100_000), 1000, fail_after=50_000)
    with pytest.raises(ReadError):
        read_stream(src)


def test_stream_non_blocking_source_is_an_error() -> None:
    with pytest.raises(ReadError):
        read_stream(NonBlockingReader())


def test_stream_growth_overflow_is_an_error() -> None:
    with pytest.raises(ReadError, match="too large"):
        read_stream(io.BytesIO(b"x" * 100), initial_capacity=16, max_capacity=64)

    # same limit, input that fits
    assert bytes(read_stream(io.BytesIO(b"x" * 50), initial_capacity=16, max_capacity=64)) == b"x" * 50


# -------------------
# Known-size path
# -------------------
def test_read_path_regular_file(tmp_path: Path) -> None:
    data = _payload(123_457)
    p = tmp_path / "in.bin"
    p.write_bytes(data)
    out = read_path(p)
    assert isinstance(out, bytearray)
    assert bytes(out) == data


def test_read_path_empty_file(tmp_path: Path) -> None:
    p = tmp_path / "empty.bin"
    p.write_bytes(b"")
    assert read_path(p) == bytearray()


def test_read_path_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ReadError, match="cannot read file"):
        read_path(tmp_path / "nope.jsonlz4")


def test_read_path_directory(tmp_path: Path) -> None:
    with pytest.raises(ReadError):
        read_path(tmp_path)


def test_read_fixed_short_read() -> None:
    with pytest.raises(ReadError, match="got 3 of 10 bytes"):
        read_fixed(io.BytesIO(b"abc"), 10)


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs POSIX FIFOs")
def test_read_path_fifo_uses_stream_path(tmp_path: Path) -> None:
    data = _payload(80_000)
    fifo = tmp_path / "pipe"
    os.mkfifo(fifo)

    def _writer() -> None:
        with open(fifo, "wb") as f:
            for i in range(0, len(data), 5000):
                f.write(data[i : i + 5000])

    t = threading.Thread(target=_writer)
    t.start()
    try:
        out = read_path(fifo)
    finally:
        t.join(timeout=10)
    assert bytes(out) == data
