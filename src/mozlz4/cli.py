"""mozlz4 CLI.

Console scripts:
  - ``mozlz4``     umbrella command: compress / decompress / verify
  - ``dejsonlz4``  decompress: ``dejsonlz4 [-h] [IN_FILE] [OUT_FILE]``
  - ``jsonlz4``    compress:   ``jsonlz4 [-h] IN_FILE [OUT_FILE]``

``-`` (or an omitted file) means stdin/stdout. Exit code 0 on success, 1 on
any failure, usage errors included.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable

from mozlz4 import diagnostics
from mozlz4.core.codec_lz4 import MODES, CodecLZ4
from mozlz4.errors import EXIT_FAILURE, EXIT_OK, MozLz4Error, UsageError


class _Parser(argparse.ArgumentParser):
    """argparse exits 2 on bad usage; these tools exit 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        raise SystemExit(EXIT_FAILURE)


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _add_codec_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--mode",
        choices=MODES,
        default="default",
        help="LZ4 block mode (default: same as Firefox)",
    )
    p.add_argument(
        "--acceleration",
        type=int,
        default=1,
        help="Acceleration for --mode fast (>= 1, higher is faster)",
    )
    p.add_argument(
        "--level",
        type=int,
        default=9,
        help="Compression level for --mode high_compression",
    )


def _add_decompress_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("input", nargs="?", default="-", metavar="IN_FILE", help="Input file ('-': stdin)")
    p.add_argument(
        "output", nargs="?", default="-", metavar="OUT_FILE", help="Output file ('-' or omitted: stdout)"
    )
    _add_common_args(p)


def _add_compress_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("input", metavar="IN_FILE", help="Input file ('-': stdin)")
    p.add_argument(
        "output", nargs="?", default="-", metavar="OUT_FILE", help="Output file ('-' or omitted: stdout)"
    )
    _add_codec_args(p)
    _add_common_args(p)


def _codec_from_args(ns: argparse.Namespace) -> CodecLZ4:
    try:
        return CodecLZ4(mode=ns.mode, acceleration=ns.acceleration, compression=ns.level)
    except ValueError as err:
        raise UsageError(str(err)) from err


def _decompress(ns: argparse.Namespace) -> int:
    from mozlz4.driver import decompress_file

    decompress_file(ns.input, ns.output)
    return EXIT_OK


def _compress(ns: argparse.Namespace) -> int:
    from mozlz4.driver import compress_file

    codec = _codec_from_args(ns)
    compress_file(ns.input, ns.output, codec=codec)
    return EXIT_OK


def _verify(ns: argparse.Namespace) -> int:
    from mozlz4.verify import verify_frame_file

    report = verify_frame_file(ns.input, full=bool(ns.full))
    print("OK")
    print(report.summary())
    return EXIT_OK


def _run(ns: argparse.Namespace, fn: Callable[[argparse.Namespace], int]) -> int:
    try:
        return fn(ns)
    except SystemExit:
        raise
    except MozLz4Error as e:
        if getattr(ns, "debug", False):
            raise
        diagnostics.error(str(e))
        return int(getattr(e, "exit_code", EXIT_FAILURE) or EXIT_FAILURE)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        diagnostics.error(f"unexpected failure: {e}")
        return EXIT_FAILURE


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog="mozlz4", description="Read and write Mozilla mozLz40 (jsonlz4) files")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress a file into a mozLz40 frame")
    _add_compress_args(p_c)

    p_d = sub.add_parser("decompress", help="Decompress a mozLz40 frame")
    _add_decompress_args(p_d)

    p_v = sub.add_parser("verify", help="Check a mozLz40 file")
    p_v.add_argument("input", type=Path, metavar="IN_FILE")
    p_v.add_argument(
        "--full", action="store_true", help="Also decompress and require the declared size"
    )
    _add_common_args(p_v)

    return p


def build_decompress_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="dejsonlz4",
        description=(
            "Decompress Mozilla bookmark backup file IN_FILE to OUT_FILE. "
            "If OUT_FILE is not provided or is '-' then decompress to standard output."
        ),
    )
    _add_decompress_args(p)
    return p


def build_compress_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="jsonlz4",
        description=(
            "Compress IN_FILE to OUT_FILE with same format as Firefox bookmarks backup. "
            "'-' means standard input/output. Input and output are held entirely in memory."
        ),
    )
    _add_compress_args(p)
    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    diagnostics.set_prog("mozlz4")
    ns = build_parser().parse_args(argv)

    if ns.cmd == "compress":
        return _run(ns, _compress)
    if ns.cmd == "decompress":
        return _run(ns, _decompress)
    if ns.cmd == "verify":
        return _run(ns, _verify)
    raise AssertionError("unreachable")


def main_decompress(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    diagnostics.set_prog("dejsonlz4")
    ns = build_decompress_parser().parse_args(argv)
    return _run(ns, _decompress)


def main_compress(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    diagnostics.set_prog("jsonlz4")
    ns = build_compress_parser().parse_args(argv)
    return _run(ns, _compress)


if __name__ == "__main__":
    raise SystemExit(main())
