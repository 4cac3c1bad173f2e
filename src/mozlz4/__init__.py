"""Read and write Mozilla mozLz40 files (``*.jsonlz4``, ``*.mozlz4``, ``*.baklz4``)."""

from __future__ import annotations

from mozlz4.api import compress_bytes, decompress_bytes, dump_jsonlz4, load_jsonlz4
from mozlz4.engine.container import HEADER_SIZE, MAGIC

__all__ = [
    "HEADER_SIZE",
    "MAGIC",
    "compress_bytes",
    "decompress_bytes",
    "dump_jsonlz4",
    "load_jsonlz4",
]

__version__ = "0.1.0"
