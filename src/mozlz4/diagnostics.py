"""Diagnostic lines on stderr: ``[prog] warning: ...`` / ``[prog] error: ...``."""

from __future__ import annotations

import sys

PROG = "mozlz4"


def set_prog(name: str) -> None:
    global PROG
    PROG = name


def warn(msg: str) -> None:
    print(f"[{PROG}] warning: {msg}", file=sys.stderr)


def error(msg: str) -> None:
    print(f"[{PROG}] error: {msg}", file=sys.stderr)
