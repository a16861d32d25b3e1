"""Editor preferences and their settings file."""

from __future__ import annotations

import copy
import enum
import errno
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from koder.backup import BackupFileGuard

ERROR_TITLE = "Editor settings"
_ERROR_UNKNOWN = "Unknown error."
_ERROR_BAD_VALUE = (
    "Something wrong has happened while opening the configuration file. "
    "Your personal settings will not be {}."
)
_ERROR_ACCESS_DENIED = (
    "Access was denied while opening the configuration file. Make sure you "
    "have {} permission for your settings directory."
)
_ERROR_NO_MEMORY = (
    "There is not enough memory available to {} the configuration file. "
    "Try closing a few applications and restart the editor."
)


class PreferencesError(Exception):
    """The settings file could not be opened for loading or saving."""

    title = ERROR_TITLE


class LineLimitMode(enum.IntEnum):
    """How overly long lines are marked."""

    NONE = 0
    LINE = 1
    BACKGROUND = 2


class IndentGuidesMode(enum.IntEnum):
    """Where indentation guides are drawn."""

    NONE = 0
    REAL = 1
    LOOK_FORWARD = 2
    LOOK_BOTH = 3


@dataclass(frozen=True)
class Rect:
    """A window frame given by its edges."""

    left: float
    top: float
    right: float
    bottom: float


@dataclass
class Preferences:
    """Every user-tunable editor setting, with its default value."""

    settings_path: Optional[Path] = None
    tab_width: int = 4
    tabs_to_spaces: bool = False
    line_highlighting: bool = True
    line_highlighting_mode: int = 0
    line_numbers: bool = True
    fold_margin: bool = True
    bookmark_margin: bool = True
    change_margin: bool = True
    eol_visible: bool = False
    white_space_visible: bool = False
    indent_guides_show: bool = True
    indent_guides_mode: IndentGuidesMode = IndentGuidesMode.REAL
    line_limit_show: bool = False
    line_limit_mode: LineLimitMode = LineLimitMode.LINE
    line_limit_column: int = 80
    wrap_lines: bool = False
    braces_highlighting: bool = True
    use_block_cursor: bool = False
    full_path_in_title: bool = True
    compact_lang_menu: bool = True
    toolbar: bool = True
    open_windows_in_stack: bool = True
    highlight_trailing_whitespace: bool = False
    trim_trailing_whitespace_on_save: bool = False
    append_nl_at_the_end_if_not_present: bool = True
    use_editorconfig: bool = True
    always_open_in_new_window: bool = False
    use_custom_font: bool = False
    font_family: str = "Noto Sans Mono"
    font_size: int = 12
    toolbar_icon_size_multiplier: int = 3
    style: str = "default"
    window_rect: Rect = Rect(50, 50, 450, 450)
    find_window_state: Dict[str, Any] = field(default_factory=dict)

    def load(self, filename: "str | os.PathLike[str]") -> None:
        """Read settings from ``filename``; missing or bad entries take defaults.

        A missing or unreadable-as-settings file silently yields defaults.
        Access, memory and invalid-path failures reset to defaults and then
        raise PreferencesError.
        """
        storage: Dict[str, Any] = {}
        failure: Optional[PreferencesError] = None
        try:
            with open(filename, "rb") as handle:
                raw = handle.read()
        except OSError as exc:
            failure = _open_error(exc, reading=True)
        else:
            try:
                decoded = json.loads(raw.decode("utf-8"))
            except ValueError:
                decoded = {}
            if isinstance(decoded, dict):
                storage = decoded

        defaults = Preferences()
        for attr, key, convert in _FIELDS:
            value = convert(storage[key]) if key in storage else None
            setattr(self, attr, getattr(defaults, attr) if value is None else value)

        if failure is not None:
            raise failure

    def save(self, filename: "str | os.PathLike[str]") -> None:
        """Write settings to ``filename``, keeping a backup until it succeeds.

        Raises PreferencesError when the file cannot be opened for writing.
        """
        storage = {key: _dump(getattr(self, attr)) for attr, key, _ in _FIELDS}
        with BackupFileGuard(filename) as guard:
            try:
                handle = open(filename, "w", encoding="utf-8")
            except OSError as exc:
                raise _open_error(exc, reading=False) from exc
            with handle:
                json.dump(storage, handle, indent=2, sort_keys=True)
            guard.save_successful()

    def copy(self) -> "Preferences":
        """Return an independent copy of these preferences."""
        return copy.deepcopy(self)


def _open_error(exc: OSError, reading: bool) -> Optional[PreferencesError]:
    if exc.errno in (errno.EACCES, errno.EPERM):
        return PreferencesError(_ERROR_ACCESS_DENIED.format("read" if reading else "write"))
    if exc.errno == errno.ENOMEM:
        return PreferencesError(_ERROR_NO_MEMORY.format("load" if reading else "save"))
    if exc.errno == errno.EINVAL:
        return PreferencesError(_ERROR_BAD_VALUE.format("loaded" if reading else "saved"))
    if reading:
        return None
    return PreferencesError(_ERROR_UNKNOWN)


def _as_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _unsigned(bits: int) -> Callable[[Any], Optional[int]]:
    limit = 2**bits

    def convert(value: Any) -> Optional[int]:
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < limit:
            return value
        return None

    return convert


def _as_enum(kind: type) -> Callable[[Any], Optional[enum.IntEnum]]:
    byte = _unsigned(8)

    def convert(value: Any) -> Optional[enum.IntEnum]:
        number = byte(value)
        if number is None:
            return None
        try:
            return kind(number)
        except ValueError:
            return None

    return convert


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_rect(value: Any) -> Optional[Rect]:
    if (
        isinstance(value, list)
        and len(value) == 4
        and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)
    ):
        return Rect(*value)
    return None


def _as_message(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def _dump(value: Any) -> Any:
    if isinstance(value, Rect):
        return [value.left, value.top, value.right, value.bottom]
    if isinstance(value, enum.IntEnum):
        return int(value)
    return value


_UINT8 = _unsigned(8)
_UINT32 = _unsigned(32)

_FIELDS: Tuple[Tuple[str, str, Callable[[Any], Any]], ...] = (
    ("tab_width", "tabWidth", _UINT8),
    ("tabs_to_spaces", "tabsToSpaces", _as_bool),
    ("line_highlighting", "lineHighlighting", _as_bool),
    ("line_highlighting_mode", "lineHighlightingMode", _UINT8),
    ("line_numbers", "lineNumbers", _as_bool),
    ("fold_margin", "foldMargin", _as_bool),
    ("bookmark_margin", "bookmarkMargin", _as_bool),
    ("change_margin", "changeMargin", _as_bool),
    ("white_space_visible", "whiteSpaceVisible", _as_bool),
    ("eol_visible", "EOLVisible", _as_bool),
    ("indent_guides_show", "indentGuidesShow", _as_bool),
    ("indent_guides_mode", "indentGuidesMode", _as_enum(IndentGuidesMode)),
    ("line_limit_show", "lineLimitShow", _as_bool),
    ("line_limit_mode", "lineLimitMode", _as_enum(LineLimitMode)),
    ("line_limit_column", "lineLimitColumn", _UINT32),
    ("wrap_lines", "wrapLines", _as_bool),
    ("braces_highlighting", "bracesHighlighting", _as_bool),
    ("use_block_cursor", "useBlockCursor", _as_bool),
    ("full_path_in_title", "fullPathInTitle", _as_bool),
    ("compact_lang_menu", "compactLangMenu", _as_bool),
    ("toolbar", "toolbar", _as_bool),
    ("open_windows_in_stack", "openWindowsInStack", _as_bool),
    ("highlight_trailing_whitespace", "highlightTrailingWhitespace", _as_bool),
    ("trim_trailing_whitespace_on_save", "trimTrailingWhitespaceOnSave", _as_bool),
    ("append_nl_at_the_end_if_not_present", "appendNLAtTheEndIfNotPresent", _as_bool),
    ("style", "style", _as_str),
    ("window_rect", "windowRect", _as_rect),
    ("find_window_state", "findWindowState", _as_message),
    ("always_open_in_new_window", "alwaysOpenInNewWindow", _as_bool),
    ("use_editorconfig", "useEditorconfig", _as_bool),
    ("use_custom_font", "useCustomFont", _as_bool),
    ("font_family", "fontFamily", _as_str),
    ("font_size", "fontSize", _UINT8),
    ("toolbar_icon_size_multiplier", "toolbarIconSizeMultiplier", _UINT8),
)