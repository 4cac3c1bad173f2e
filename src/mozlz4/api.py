"""In-memory helpers, e.g. for Firefox ``*.jsonlz4`` / ``*.mozlz4`` files.

    >>> blob = compress_bytes(b'{"a": 1}')
    >>> blob[:8]
    b'mozLz40\\x00'
    >>> decompress_bytes(blob)
    b'{"a": 1}'
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mozlz4.core.codec_lz4 import CodecLZ4
from mozlz4.core.reader import read_path
from mozlz4.diagnostics import warn
from mozlz4.engine.container import decompress_frame, encode_frame


def compress_bytes(data: bytes | bytearray, codec: CodecLZ4 | None = None) -> bytes:
    return bytes(encode_frame(data, codec or CodecLZ4()))


def decompress_bytes(blob: bytes | bytearray, codec: CodecLZ4 | None = None) -> bytes:
    res = decompress_frame(blob, codec or CodecLZ4())
    if res.size_mismatch:
        warn(f"decompressed size {res.produced} differs from declared size {res.declared_size}")
    return res.data


def load_jsonlz4(path: Path) -> Any:
    return json.loads(decompress_bytes(read_path(path)))


def dump_jsonlz4(obj: Any, path: Path, codec: CodecLZ4 | None = None) -> None:
    # Firefox writes compact UTF-8 JSON
    raw = json.dumps(obj, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    Path(path).write_bytes(compress_bytes(raw, codec))
