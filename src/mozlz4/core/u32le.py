"""Fixed-width little-endian unsigned 32-bit integer codec.

Used by both directions of the container codec, so that
``unpack_u32le(pack_u32le(n)) == n & U32_MASK`` holds for every ``n >= 0``.
"""

from __future__ import annotations

U32_SIZE = 4
U32_MASK = 0xFFFFFFFF


def pack_u32le(value: int) -> bytes:
    """Encode the low 32 bits of ``value``, least-significant byte first.

    Values above 2**32 - 1 wrap silently: the container format only has room
    for 32 bits.
    """
    if value < 0:
        raise ValueError(f"u32le: negative value not supported: {value}")
    return (value & U32_MASK).to_bytes(U32_SIZE, "little")


def unpack_u32le(buf: bytes | bytearray | memoryview, offset: int = 0) -> int:
    raw = bytes(buf[offset : offset + U32_SIZE])
    if len(raw) != U32_SIZE:
        raise ValueError(f"u32le: need {U32_SIZE} bytes at offset {offset}, got {len(raw)}")
    return int.from_bytes(raw, "little")
