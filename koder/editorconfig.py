"""Locating, reading and matching ``.editorconfig`` files."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, Mapping, Optional

Sections = Dict[str, Dict[str, str]]

_WHITESPACE = re.compile(r"[ \t\n\v\f\r]")


def find_editorconfig(file_path: "str | os.PathLike[str]") -> Optional[Path]:
    """Return the nearest ``.editorconfig`` above a file, or None."""
    current = Path(os.path.abspath(file_path))
    while True:
        current = current.parent
        candidate = current / ".editorconfig"
        if candidate.exists():
            return candidate
        if current.parent == current:
            return None


def parse(filename: "str | os.PathLike[str]") -> Sections:
    """Read an ``.editorconfig`` file into section name -> properties.

    Raises OSError when the file cannot be opened. Whitespace is removed
    from property lines; the first occurrence of a section or a key wins.
    """
    with open(filename, encoding="utf-8", newline="") as handle:
        text = handle.read()

    sections: Sections = {}
    current_name = ""
    current: Dict[str, str] = {}
    for line in text.split("\n"):
        if not line or line[0] in "#;":
            continue
        if line[0] == "[" and line[-1] == "]":
            if current_name and current:
                sections.setdefault(current_name, current)
                current = {}
            current_name = line[1:-1]
            continue
        stripped = _WHITESPACE.sub("", line)
        name, _, rest = stripped.partition("=")
        if not name:
            continue
        current.setdefault(name, rest.split("=", 1)[0])
    if current_name and current:
        sections.setdefault(current_name, current)
    return sections


def glob_to_regex(pattern: str) -> str:
    """Turn an ``.editorconfig`` section glob into a regular expression.

    Raises ValueError when braces are unbalanced.
    """
    text = pattern
    slash = text.find("/")
    dir_specific = slash > 0 and text[slash - 1] != "\\"

    def escaped(pos: int) -> bool:
        return pos > 0 and text[pos - 1] == "\\"

    def replace(pos: int, length: int, new: str) -> str:
        return text[:pos] + new + text[pos + length:]

    in_brace = 0
    c = 0
    while c < len(text):
        char = text[c]
        if char == "*":
            if escaped(c):
                c += 1
                continue
            if c < len(text) - 1 and text[c + 1] == "*":
                text = replace(c, 2, "(.+)")
                c += len("(.+)")
            else:
                star = "([^/]+)" if dir_specific else "(.+)"
                text = replace(c, 1, star)
                c += len(star)
            continue
        if char == "!":
            if escaped(c):
                c += 1
                continue
            text = replace(c, 1, "^")
        elif char == ".":
            text = replace(c, 1, "\\.")
            c += 2
            continue
        if text[c] == "{":
            if escaped(c):
                c += 1
                continue
            in_brace += 1
            text = replace(c, 1, "(")
        if in_brace > 0:
            if escaped(c):
                c += 1
                continue
            if text[c] == ",":
                text = replace(c, 1, "|")
            if text[c] == "}":
                in_brace -= 1
                text = replace(c, 1, ")")
        c += 1

    if in_brace != 0:
        raise ValueError(f"unbalanced braces in pattern: {pattern!r}")
    return text


def match_filename(filename: str, all_properties: Mapping[str, Mapping[str, str]]) -> Dict[str, str]:
    """Collect the properties of every section whose glob matches ``filename``.

    Later sections override earlier ones. Matching stops at the first
    section with unbalanced braces.
    """
    properties: Dict[str, str] = {}
    for pattern, section in all_properties.items():
        try:
            regex = glob_to_regex(pattern)
        except ValueError:
            break
        if re.fullmatch(regex, filename):
            for key, value in section.items():
                properties.pop(key, None)
                properties[key] = value
    return properties