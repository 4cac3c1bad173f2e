"""Byte-level standard streams.

Reading/writing the frame through stdin/stdout must be a pure byte
pass-through. On Windows that means switching the descriptor to O_BINARY;
elsewhere the ``.buffer`` of the text wrapper is already raw bytes.
Failing to switch is only a warning.
"""

from __future__ import annotations

import os
import sys
from typing import Any, BinaryIO

from mozlz4.diagnostics import warn


def ensure_binary(stream: Any) -> bool:
    """Request binary transfer mode for ``stream``. Returns False on failure."""
    if sys.platform != "win32":
        return True
    try:
        import msvcrt

        msvcrt.setmode(stream.fileno(), os.O_BINARY)
    except (AttributeError, OSError, ValueError):
        return False
    return True


def _binary(stream: Any, what: str) -> BinaryIO:
    raw = getattr(stream, "buffer", stream)
    if not ensure_binary(raw):
        warn(f"cannot set {what} to binary mode")
    return raw


def binary_stdin() -> BinaryIO:
    return _binary(sys.stdin, "stdin")


def binary_stdout() -> BinaryIO:
    return _binary(sys.stdout, "stdout")
