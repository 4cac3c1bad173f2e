"""Verification of mozLz40 files.

Light by default (header only: magic, size field, payload present).
``full=True`` also decompresses the payload and requires the produced size to
match the declared one: stricter than ``decompress``, which only warns.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mozlz4.core.codec_lz4 import CodecLZ4
from mozlz4.core.reader import read_path
from mozlz4.engine.container import decode_frame, decompress_frame
from mozlz4.errors import SizeMismatch


@dataclass(frozen=True)
class FrameReport:
    path: Path
    frame_size: int
    declared_size: int
    payload_size: int
    produced: int | None = None

    def summary(self) -> str:
        s = (
            f"{self.path}: frame={self.frame_size} declared={self.declared_size} "
            f"payload={self.payload_size}"
        )
        if self.produced is not None:
            s += f" produced={self.produced}"
        return s


def verify_frame_file(path: Path, *, full: bool = False, codec: CodecLZ4 | None = None) -> FrameReport:
    p = Path(path)
    blob = read_path(p)
    frame = decode_frame(blob)
    report = FrameReport(
        path=p,
        frame_size=len(blob),
        declared_size=frame.declared_size,
        payload_size=frame.payload_size,
    )
    del frame

    if not full:
        return report

    res = decompress_frame(blob, codec or CodecLZ4())
    if res.size_mismatch:
        raise SizeMismatch(
            f"{p}: decompressed size {res.produced} differs from declared size {res.declared_size}"
        )
    return FrameReport(
        path=p,
        frame_size=report.frame_size,
        declared_size=report.declared_size,
        payload_size=report.payload_size,
        produced=res.produced,
    )
