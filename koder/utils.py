"""Helpers for file names, command-line file arguments and colours."""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_NUMBER_CHARS = frozenset("-0123456789")
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class FileArgument(NamedTuple):
    """A file name with an optional line and column (-1 when absent)."""

    filename: str
    line: int = -1
    column: int = -1


def get_file_name(filename: str) -> str:
    """Return the file name without its last extension; dotfiles are kept whole."""
    pos = filename.rfind(".")
    if pos > 0:
        return filename[:pos]
    return filename


def get_file_extension(filename: str) -> str:
    """Return the last extension of a file name, or an empty string."""
    pos = filename.rfind(".")
    if pos > 0:
        return filename[pos + 1:]
    return ""


def _to_int32(text: str) -> int:
    """Read a leading integer the way a C string-to-int conversion does."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    value = int(match.group(1))
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"number out of range: {text!r}")
    return value


def _parse_position(text: str) -> Optional[int]:
    """Return -1 for an empty field, None for a malformed one, else the number."""
    if not text:
        return -1
    if text == "-" or not set(text) <= _NUMBER_CHARS:
        return None
    return _to_int32(text)


def parse_file_argument(argument: str) -> FileArgument:
    """Split an argument like ``a/b/file:10:92`` into name, line and column.

    Missing line or column come back as -1. When the line or column part is
    not a number the whole argument is taken as the file name.
    """
    first = argument.find(":")
    if first == -1:
        return FileArgument(argument)

    filename = argument[:first]
    second = argument.find(":", first + 1)
    line_text = argument[first + 1:] if second == -1 else argument[first + 1:second]
    line = _parse_position(line_text)
    if line is None:
        return FileArgument(argument)

    column = -1
    if second != -1:
        parsed = _parse_position(argument[second + 1:])
        if parsed is None:
            return FileArgument(argument)
        column = parsed
    return FileArgument(filename, line, column)


def rgb_to_sci_color(red: int, green: int, blue: int) -> int:
    """Pack colour channels into the editor component's BGR integer."""
    for channel in (red, green, blue):
        if not 0 <= channel <= 0xFF:
            raise ValueError(f"colour channel out of range: {channel}")
    return red | (green << 8) | (blue << 16)