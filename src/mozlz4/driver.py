"""Frame driver: file/stream in, file/stream out.

Stages (each one a hard exit on failure):

    ReadInput -> ValidateFrame / SizeSource -> Allocate -> Codec -> WriteOutput

The output file is opened only after every upstream stage succeeded. When the
destination is stdout it is simply never written to on failure.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, BinaryIO

from mozlz4.core.codec_lz4 import CodecLZ4
from mozlz4.core.reader import read_path, read_stream
from mozlz4.diagnostics import warn
from mozlz4.engine.container import DecompressionResult, decompress_frame, encode_frame
from mozlz4.errors import WriteError
from mozlz4.stdio import binary_stdin, binary_stdout

Name = str | os.PathLike[str] | None


def is_std(name: Name) -> bool:
    return name is None or os.fspath(name) == "-"


# -------------------
# Stages
# -------------------
def read_input(in_name: Name, *, stdin: BinaryIO | None = None) -> bytearray:
    if is_std(in_name):
        src = stdin if stdin is not None else binary_stdin()
        return read_stream(src, name="<stdin>")
    return read_path(in_name)  # type: ignore[arg-type]


def _write_all(dst: Any, data: bytes | bytearray, name: str) -> None:
    n = dst.write(data)
    if n is not None and n != len(data):
        raise WriteError(f"cannot write to '{name}': short write ({n} of {len(data)} bytes)")


def write_output(data: bytes | bytearray, out_name: Name, *, stdout: BinaryIO | None = None) -> None:
    if is_std(out_name):
        dst = stdout if stdout is not None else binary_stdout()
        try:
            _write_all(dst, data, "<stdout>")
            dst.flush()
        except OSError as err:
            raise WriteError(f"cannot write to '<stdout>': {err}") from err
        return

    path = Path(out_name)  # type: ignore[arg-type]
    try:
        f = open(path, "wb")
    except OSError as err:
        raise WriteError(f"cannot open '{path}' for writing: {err.strerror or err}") from err

    done = False
    try:
        with f:
            _write_all(f, data, str(path))
        done = True
    except OSError as err:
        raise WriteError(f"cannot write to '{path}': {err}") from err
    finally:
        if not done:
            # never leave a truncated frame/output behind
            path.unlink(missing_ok=True)


# -------------------
# Conversions
# -------------------
def decompress_file(
    in_name: Name,
    out_name: Name = None,
    *,
    codec: CodecLZ4 | None = None,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
) -> DecompressionResult:
    codec = codec or CodecLZ4()
    blob = read_input(in_name, stdin=stdin)
    res = decompress_frame(blob, codec)
    del blob

    if res.size_mismatch:
        # declared size is advisory
        warn(
            f"decompressed size {res.produced} differs from declared size {res.declared_size}"
        )

    write_output(res.data, out_name, stdout=stdout)
    return res


def compress_file(
    in_name: Name,
    out_name: Name = None,
    *,
    codec: CodecLZ4 | None = None,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
) -> int:
    """Compress ``in_name`` into a mozLz40 frame. Returns the frame length."""
    codec = codec or CodecLZ4()
    data = read_input(in_name, stdin=stdin)
    frame = encode_frame(data, codec)
    del data

    write_output(frame, out_name, stdout=stdout)
    return len(frame)
