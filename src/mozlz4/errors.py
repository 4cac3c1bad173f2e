"""Typed errors for mozlz4.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- Every failure of a conversion is terminal; there is no retry.
- The CLI maps errors to exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_FAILURE = 1


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success (also: -h/--help)"),
    ExitCodeInfo(
        EXIT_FAILURE,
        "FAILURE",
        "Any failure: usage, read, format, allocation, codec or write error",
    ),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/mozlz4/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("Exit codes of `mozlz4`, `dejsonlz4` and `jsonlz4`.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- All internal errors extend `MozLz4Error` and carry an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append(
        "- A decompressed size that differs from the declared size is a warning, "
        "not an error: the exit code stays 0.\n"
    )
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class MozLz4Error(Exception):
    """Base error for mozlz4."""

    exit_code: int = EXIT_FAILURE


class UsageError(MozLz4Error):
    pass


class ReadError(MozLz4Error):
    """Source unreadable, truncated, or too large to buffer."""


class FormatError(MozLz4Error):
    """The buffer is not a mozLz40 frame."""


class FrameTooShort(FormatError):
    pass


class BadMagic(FormatError):
    pass


class SizeMismatch(FormatError):
    """Raised by strict verification only; decompression just warns."""


class AllocationError(MozLz4Error):
    pass


class CodecError(MozLz4Error):
    pass


class WriteError(MozLz4Error):
    pass
