"""Raw LZ4 block bridge over ``lz4.block``: bound, compress, bounded decompress."""

from __future__ import annotations

from dataclasses import dataclass

import lz4.block

from mozlz4.errors import AllocationError, CodecError

# Same limits as the reference lz4.h
LZ4_MAX_INPUT_SIZE = 0x7E000000
# lz4.block takes the output size as a C int
LZ4_MAX_OUTPUT_SIZE = 0x7FFFFFFF
# A raw block cannot decode to more than this many bytes per input byte
LZ4_MAX_EXPANSION = 255

MODES = ("default", "fast", "high_compression")


def lz4_compress_bound(n: int) -> int:
    """Worst-case raw block size for ``n`` input bytes (0 if ``n`` is too large)."""
    if n < 0 or n > LZ4_MAX_INPUT_SIZE:
        return 0
    return n + n // 255 + 16


def lz4_decompress_limit(src_size: int, dst_capacity: int) -> int:
    """Largest output a ``src_size``-byte raw block can produce, capped at ``dst_capacity``."""
    return min(dst_capacity, LZ4_MAX_EXPANSION * src_size + 16, LZ4_MAX_OUTPUT_SIZE)


@dataclass
class CodecLZ4:
    """
    Raw LZ4 block codec (no size prefix, no frame).

    mode:
      - "default": LZ4_compress_default, what Firefox writes
      - "fast": uses ``acceleration`` (higher is faster, larger output)
      - "high_compression": LZ4 HC at ``compression`` level
    """

    mode: str = "default"
    acceleration: int = 1
    compression: int = 9
    codec_id: str = "lz4_block"

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"lz4 mode must be one of {', '.join(MODES)}, got {self.mode!r}")
        if self.acceleration < 1:
            raise ValueError(f"lz4 acceleration must be >= 1, got {self.acceleration}")

    def bound(self, n: int) -> int:
        return lz4_compress_bound(n)

    def compress(self, src: bytes | bytearray | memoryview, dst_capacity: int) -> bytes:
        n = len(src)
        if self.bound(n) == 0:
            raise CodecError(f"compression failed: input too large ({n} bytes, max {LZ4_MAX_INPUT_SIZE})")
        try:
            out = lz4.block.compress(
                src,
                mode=self.mode,
                acceleration=int(self.acceleration),
                compression=int(self.compression),
                store_size=False,
            )
        except MemoryError as err:
            raise AllocationError("cannot allocate memory for compression") from err
        except lz4.block.LZ4BlockError as err:
            raise CodecError(f"compression failed: {err}") from err
        if (not out and n > 0) or len(out) > dst_capacity:
            raise CodecError(
                f"compression failed: produced {len(out)} bytes, capacity {dst_capacity}"
            )
        return out

    def decompress(self, src: bytes | bytearray | memoryview, dst_capacity: int) -> bytes:
        """Decode a raw block into at most ``dst_capacity`` bytes.

        May return fewer bytes than ``dst_capacity``; the caller decides what a
        short result means.
        """
        if dst_capacity < 0:
            raise CodecError(f"decompression failed: negative capacity {dst_capacity}")
        if dst_capacity == 0 and len(src) == 0:
            return b""
        if dst_capacity == 0:
            # The only raw block that decodes to nothing is a single empty-literal token.
            if bytes(src) == b"\x00":
                return b""
            raise CodecError("decompression failed: data does not fit in 0 bytes")
        # the declared size is only a ceiling; never size the buffer past what src can yield
        limit = lz4_decompress_limit(len(src), int(dst_capacity))
        try:
            return lz4.block.decompress(src, uncompressed_size=limit)
        except MemoryError as err:
            raise AllocationError(f"cannot allocate {limit} bytes for output") from err
        except (lz4.block.LZ4BlockError, ValueError, OverflowError) as err:
            raise CodecError(f"decompression failed: {err}") from err
