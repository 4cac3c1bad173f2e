"""mozLz40 frame: magic, u32le declared size, raw LZ4 block payload."""

from __future__ import annotations

from dataclasses import dataclass

from mozlz4.core.codec_lz4 import CodecLZ4
from mozlz4.core.u32le import U32_SIZE, pack_u32le, unpack_u32le
from mozlz4.errors import AllocationError, BadMagic, CodecError, FrameTooShort

# -------------------
# mozLz40 frame
# [MAGIC(8) = "mozLz40\0"|DECOMPRESSED_SIZE(u32 LE)|PAYLOAD (raw LZ4 block, rest of file)]
# -------------------
MAGIC = b"mozLz40\x00"
MAGIC_SIZE = len(MAGIC)
SIZE_OFFSET = MAGIC_SIZE
HEADER_SIZE = MAGIC_SIZE + U32_SIZE


@dataclass(frozen=True)
class Frame:
    declared_size: int
    payload: memoryview

    @property
    def payload_size(self) -> int:
        return len(self.payload)


def has_magic(blob: bytes | bytearray | memoryview) -> bool:
    return bytes(blob[:MAGIC_SIZE]) == MAGIC


def decode_frame(blob: bytes | bytearray | memoryview) -> Frame:
    """Validate the header and split ``blob`` into declared size and payload.

    The payload is a read-only view into ``blob`` (no copy).
    """
    if not has_magic(blob):
        raise BadMagic("incorrect header: not a mozLz40 frame (bad magic)")
    if len(blob) < HEADER_SIZE:
        raise FrameTooShort(f"file too small: {len(blob)} bytes, header needs {HEADER_SIZE}")

    declared_size = unpack_u32le(blob, SIZE_OFFSET)
    payload = memoryview(blob).toreadonly()[HEADER_SIZE:]
    return Frame(declared_size=declared_size, payload=payload)


def encode_header(input_size: int) -> bytes:
    return MAGIC + pack_u32le(input_size)


def encode_frame(data: bytes | bytearray | memoryview, codec: CodecLZ4) -> bytearray:
    """Build a complete frame for ``data``.

    The output is sized for the worst case (header + codec bound) and trimmed
    to what the codec actually produced. Inputs of 2**32 bytes or more get a
    wrapped size field; the format cannot express more.
    """
    n = len(data)
    bound = codec.bound(n)
    if bound == 0:
        raise CodecError(f"compression failed: input too large ({n} bytes)")

    try:
        out = bytearray(HEADER_SIZE + bound)
    except MemoryError as err:
        raise AllocationError("cannot allocate memory for output") from err

    out[:HEADER_SIZE] = encode_header(n)
    comp = codec.compress(data, bound)
    end = HEADER_SIZE + len(comp)
    out[HEADER_SIZE:end] = comp
    del out[end:]
    return out


@dataclass(frozen=True)
class DecompressionResult:
    produced: int
    declared_size: int
    data: bytes

    @property
    def size_mismatch(self) -> bool:
        return self.produced != self.declared_size


def decompress_frame(blob: bytes | bytearray | memoryview, codec: CodecLZ4) -> DecompressionResult:
    """Decode and decompress a frame into at most ``declared_size`` bytes.

    A result shorter than declared is returned as is; see ``size_mismatch``.
    """
    frame = decode_frame(blob)
    if frame.declared_size == 0 and frame.payload_size == 0:
        data = b""
    else:
        data = codec.decompress(frame.payload, frame.declared_size)
    return DecompressionResult(produced=len(data), declared_size=frame.declared_size, data=data)
