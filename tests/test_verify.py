from __future__ import annotations

from pathlib import Path

import pytest

from mozlz4.core.u32le import pack_u32le
from mozlz4.engine.container import MAGIC


def test_verify_light_and_full(tmp_path: Path) -> None:
    from mozlz4.api import compress_bytes
    from mozlz4.verify import verify_frame_file

    data = b'{"version":1,"windows":[]}' * 100
    p = tmp_path / "recovery.jsonlz4"
    p.write_bytes(compress_bytes(data))

    light = verify_frame_file(p)
    assert light.declared_size == len(data)
    assert light.frame_size == p.stat().st_size
    assert light.payload_size == light.frame_size - 12
    assert light.produced is None

    full = verify_frame_file(p, full=True)
    assert full.produced == len(data)
    assert "declared=" in full.summary() and "produced=" in full.summary()


def test_verify_detects_size_mismatch_only_in_full_mode(tmp_path: Path) -> None:
    from mozlz4.errors import SizeMismatch
    from mozlz4.verify import verify_frame_file

    p = tmp_path / "lying.jsonlz4"
    p.write_bytes(MAGIC + pack_u32le(6) + b"\x50hello")

    assert verify_frame_file(p).declared_size == 6
    with pytest.raises(SizeMismatch):
        verify_frame_file(p, full=True)


def test_verify_detects_tamper(tmp_path: Path) -> None:
    from mozlz4.api import compress_bytes
    from mozlz4.errors import BadMagic, CodecError, SizeMismatch
    from mozlz4.verify import verify_frame_file

    p = tmp_path / "x.jsonlz4"
    blob = bytearray(compress_bytes(b"abcdefgh" * 1000))

    # flip one byte inside the magic
    bad = bytearray(blob)
    bad[3] ^= 0x01
    p.write_bytes(bad)
    with pytest.raises(BadMagic):
        verify_frame_file(p)

    # truncate the payload: header still fine, full decode fails
    p.write_bytes(blob[:20])
    verify_frame_file(p)
    with pytest.raises((CodecError, SizeMismatch)):
        verify_frame_file(p, full=True)
