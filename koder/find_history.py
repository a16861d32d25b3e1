"""State of the find/replace panel: options, texts and recent-entry history."""

from __future__ import annotations

import enum
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Optional

from koder.backup import BackupFileGuard

MRU_LIMIT = 10
HISTORY_FILE_NAME = "findreplace_mru"

# Option name -> key used in the stored panel state.
_OPTIONS = {
    "in_selection": "inSelection",
    "match_case": "matchCase",
    "match_word": "matchWord",
    "wrap_around": "wrapAround",
    "regex": "regex",
    "backwards": "backwards",
}


class MruHistory:
    """Recently used entries, oldest first."""

    def __init__(self, items: Iterable[str] = (), limit: int = MRU_LIMIT) -> None:
        self._items: List[str] = list(items)
        self.limit = limit

    def add(self, text: str) -> None:
        """Record ``text`` unless it repeats the newest entry, then trim."""
        count = len(self._items)
        last = self._items[-1] if self._items else ""
        if last != text:
            self._items.append(text)
        while count >= self.limit:
            del self._items[0]
            count -= 1

    def take(self, index: int) -> str:
        """Remove and return the entry at ``index``, or "" if there is none."""
        if 0 <= index < len(self._items):
            return self._items.pop(index)
        return ""

    def clear(self) -> None:
        """Forget every entry."""
        self._items.clear()

    def items(self) -> List[str]:
        """The entries, oldest first."""
        return list(self._items)

    def _push(self, text: str) -> None:
        self._items.append(text)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))


class FindAction(enum.Enum):
    """What the user asked the panel to do."""

    FIND = "find"
    REPLACE = "replace"
    REPLACE_FIND = "replace_find"
    REPLACE_ALL = "replace_all"


@dataclass(frozen=True)
class FindRequest:
    """A search or replace command with everything needed to carry it out."""

    action: FindAction
    find_text: str
    replace_text: str
    new_search: bool
    in_selection: bool
    match_case: bool
    match_word: bool
    wrap_around: bool
    regex: bool
    backwards: bool


class FindPanel:
    """Find/replace panel state, with history kept in the settings directory."""

    def __init__(self, state: Mapping[str, Any], settings_dir: "str | os.PathLike[str]") -> None:
        self.settings_dir = Path(settings_dir)
        self.find_history = MruHistory()
        self.replace_history = MruHistory()
        self._flags_changed = False
        self._old_find_text = ""
        self._old_replace_text = ""
        self.load_history()

        self.options = {name: bool(state.get(key, False)) for name, key in _OPTIONS.items()}
        self.find_text: str = state.get("findText") or ""
        self.replace_text: str = state.get("replaceText") or ""

    @property
    def history_path(self) -> Path:
        return self.settings_dir / HISTORY_FILE_NAME

    @property
    def flags_changed(self) -> bool:
        return self._flags_changed

    def submit(
        self,
        action: FindAction,
        find_text: Optional[str] = None,
        replace_text: Optional[str] = None,
    ) -> FindRequest:
        """Record the texts in history and build the request for ``action``."""
        action = FindAction(action)
        if find_text is not None:
            self.find_text = find_text
        if replace_text is not None:
            self.replace_text = replace_text

        self.find_history.add(self.find_text)
        if action is not FindAction.FIND:
            self.replace_history.add(self.replace_text)

        new_search = (
            self._flags_changed
            or self._old_find_text != self.find_text
            or self._old_replace_text != self.replace_text
        )
        request = FindRequest(
            action=action,
            find_text=self.find_text,
            replace_text=self.replace_text,
            new_search=new_search,
            **self.options,
        )
        self._old_find_text = self.find_text
        self._old_replace_text = self.replace_text
        # Replacing everything forces the scope to be retargeted next time.
        self._flags_changed = action is FindAction.REPLACE_ALL
        return request

    def mark_flags_changed(self) -> None:
        """Make the next request start a new search."""
        self._flags_changed = True

    def set_option(self, name: str, value: bool) -> None:
        """Set a search option; all but ``regex`` start a new search."""
        if name not in _OPTIONS:
            raise ValueError(f"unknown option: {name!r}")
        self.options[name] = bool(value)
        if name != "regex":
            self._flags_changed = True

    def apply_find_item(self, index: int) -> str:
        """Use a history entry as the find text and move it to the newest place."""
        item = self.find_history.take(index)
        self.find_text = item
        self.find_history._push(item)
        return item

    def apply_replace_item(self, index: int) -> str:
        """Use a history entry as the replace text and move it to the newest place."""
        item = self.replace_history.take(index)
        self.replace_text = item
        self.replace_history._push(item)
        return item

    def clear_find_history(self) -> None:
        self.find_history.clear()

    def clear_replace_history(self) -> None:
        self.replace_history.clear()

    def load_history(self) -> None:
        """Read both histories; an absent or unreadable file changes nothing."""
        try:
            raw = self.history_path.read_bytes()
            data = json.loads(raw.decode("utf-8"))
        except (OSError, ValueError):
            return
        if not isinstance(data, dict):
            return
        for key, attr in (("find", "find_history"), ("replace", "replace_history")):
            entries = data.get(key)
            if isinstance(entries, list) and all(isinstance(e, str) for e in entries):
                setattr(self, attr, MruHistory(entries))

    def save_history(self) -> None:
        """Write both histories, keeping a backup until the write succeeds."""
        data = {"find": self.find_history.items(), "replace": self.replace_history.items()}
        with BackupFileGuard(self.history_path) as guard:
            try:
                handle = open(self.history_path, "w", encoding="utf-8")
            except OSError:
                return
            with handle:
                json.dump(data, handle)
            guard.save_successful()