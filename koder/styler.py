"""Colour themes: reading style files and resolving styles for languages."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from koder.utils import get_file_extension, get_file_name

BOLD = 1
ITALIC = 2
UNDERLINE = 4
DEFAULT_STYLE_ID = 32

_HEX_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")

# Global entries without an id that set editor-wide colours.
_FORCED_BACKGROUND = frozenset({"Current line"})
_FORCED_FOREGROUND = frozenset({"Caret", "Edge"})
_BACKGROUND_ONLY = frozenset({"Fold selected"})
_FOREGROUND_AND_BACKGROUND = frozenset(
    {"Whitespace", "Selected text", "Fold", "Fold marker", "Bookmark marker"}
)


class StyleFilesNotFoundError(FileNotFoundError):
    """No style file with the requested name exists in any data directory."""


@dataclass(frozen=True)
class Style:
    """Colours (BGR integers) and font attributes; -1 means unset."""

    fg_color: int = -1
    bg_color: int = -1
    style: int = -1

    @property
    def bold(self) -> bool:
        return self.style != -1 and bool(self.style & BOLD)

    @property
    def italic(self) -> bool:
        return self.style != -1 and bool(self.style & ITALIC)

    @property
    def underline(self) -> bool:
        return self.style != -1 and bool(self.style & UNDERLINE)

    def applied_over(self, base: "Style") -> "Style":
        """The result of applying this style on top of ``base``.

        Unset colours leave the base colour alone; attributes are only ever
        switched on.
        """
        fg = self.fg_color if self.fg_color != -1 else base.fg_color
        bg = self.bg_color if self.bg_color != -1 else base.bg_color
        bits = self.style & (BOLD | ITALIC | UNDERLINE) if self.style != -1 else 0
        if bits:
            style = (base.style if base.style > 0 else 0) | bits
        else:
            style = base.style
        return Style(fg, bg, style)


def _hex_to_int(text: str) -> int:
    match = _HEX_PREFIX.match(text)
    if match is None:
        raise ValueError(f"not a hexadecimal number: {text!r}")
    value = int(match.group(2), 16)
    return -value if match.group(1) == "-" else value


def css_to_int(css_color: str) -> int:
    """Convert ``#rrggbb`` to a BGR integer; anything else of the wrong shape gives -1."""
    if len(css_color) != 7 or css_color[0] != "#":
        return -1
    red = css_color[1:3]
    green = css_color[3:5]
    blue = css_color[5:7]
    return _hex_to_int(blue + green + red)


def _scalar_str(value: Any, what: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"{what} must be a scalar, not {type(value).__name__}")


def _scalar_int(value: Any, what: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"{what} must be an integer, not {value!r}")


def style_from_node(node: Any) -> Tuple[int, Style]:
    """Read a style entry into ``(id, Style)``; the id is -1 when absent.

    Raises ValueError when the entry is not a mapping.
    """
    if not isinstance(node, Mapping):
        raise ValueError(f"style entry must be a mapping, not {node!r}")
    style_id = _scalar_int(node["id"], "style id") if node.get("id") is not None else -1
    fg = bg = attributes = -1
    if node.get("foreground") is not None:
        fg = css_to_int(_scalar_str(node["foreground"], "foreground"))
    if node.get("background") is not None:
        bg = css_to_int(_scalar_str(node["background"], "background"))
    names = node.get("style")
    if isinstance(names, list):
        attributes = 0
        for name in names:
            name = _scalar_str(name, "style attribute")
            if name == "bold":
                attributes |= BOLD
            elif name == "italic":
                attributes |= ITALIC
            elif name == "underline":
                attributes |= UNDERLINE
    return style_id, Style(fg, bg, attributes)


@dataclass
class Theme:
    """A colour theme as assembled from the style files of every data directory.

    ``default`` and ``editor_styles`` are what the editor ends up showing,
    ``settings`` holds editor-wide colours such as the caret, and
    ``mapping`` maps theme style ids to styles for language lookups.
    """

    name: str
    default: Optional[Style] = None
    editor_styles: Dict[int, Style] = field(default_factory=dict)
    settings: Dict[str, Style] = field(default_factory=dict)
    mapping: Dict[int, Style] = field(default_factory=dict)

    def styles_for_language(self, style_mapping: Mapping[int, int]) -> Dict[int, Style]:
        """Resolve a lexer-class -> theme-style mapping into concrete styles."""
        resolved: Dict[int, Style] = {}
        for lexer_id, style_id in style_mapping.items():
            if lexer_id < 0:
                continue
            style = self.mapping.get(style_id)
            if style is not None:
                resolved[lexer_id] = style
        return resolved

    def _set_editor_style(self, style_id: int, style: Style) -> None:
        if style_id < 0:
            return
        base = self.editor_styles.get(style_id, self.default or Style())
        self.editor_styles[style_id] = style.applied_over(base)

    def _apply_setting(self, name: str, style: Style) -> None:
        if name in _FORCED_BACKGROUND:
            self.settings[name] = Style(bg_color=style.bg_color)
        elif name in _FORCED_FOREGROUND:
            self.settings[name] = Style(fg_color=style.fg_color)
        elif name in _BACKGROUND_ONLY:
            update = Style(bg_color=style.bg_color)
            self.settings[name] = update.applied_over(self.settings.get(name, Style()))
        elif name in _FOREGROUND_AND_BACKGROUND:
            update = Style(style.fg_color, style.bg_color)
            self.settings[name] = update.applied_over(self.settings.get(name, Style()))

    def _apply_file(self, data: Any) -> None:
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError("style file must hold a mapping")
        global_node = data.get("Global")
        if not isinstance(global_node, Mapping):
            global_node = {}

        if global_node.get("Default") is not None:
            _, default = style_from_node(global_node["Default"])
            self.default = default.applied_over(self.default or Style())
            # Clearing all styles copies the default onto every style.
            self.editor_styles.clear()

        for key, node in global_node.items():
            name = _scalar_str(key, "style name")
            style_id, style = style_from_node(node)
            if style_id != -1:
                self._set_editor_style(style_id, style)
                self.mapping.setdefault(style_id, style)
            else:
                self._apply_setting(name, style)

        for key, node in data.items():
            if _scalar_str(key, "style name") == "Global":
                continue
            style_id, style = style_from_node(node)
            self.mapping.setdefault(style_id, style)


def load_theme(name: str, data_dirs: Iterable["str | os.PathLike[str]"]) -> Theme:
    """Build the theme ``name`` from ``<dir>/styles/<name>.yaml`` in every data directory.

    ``data_dirs`` go from the most general to the most specific; the most
    specific directory's entries win in ``mapping``. Raises
    StyleFilesNotFoundError when no directory has the file.
    """
    theme = Theme(name)
    found = False
    for directory in reversed(list(data_dirs)):
        path = Path(directory) / "styles" / f"{name}.yaml"
        try:
            text = path.read_text(encoding="utf-8")
        except OSError:
            continue
        theme._apply_file(yaml.safe_load(text))
        found = True
    if not found:
        raise StyleFilesNotFoundError(
            f"Couldn't find style files for {name!r}. Make sure you have them "
            "installed in one of your data directories."
        )
    return theme


def available_styles(data_dirs: Iterable["str | os.PathLike[str]"]) -> List[str]:
    """Names of all ``.yaml`` style files in the data directories, sorted."""
    styles = set()
    for directory in data_dirs:
        styles_dir = Path(directory) / "styles"
        try:
            entries = list(styles_dir.iterdir())
        except OSError:
            continue
        for entry in entries:
            if entry.is_dir():
                continue
            if get_file_extension(entry.name) == "yaml":
                styles.add(get_file_name(entry.name))
    return sorted(styles)