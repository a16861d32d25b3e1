import json

import pytest

from koder.preferences import (
    IndentGuidesMode,
    LineLimitMode,
    Preferences,
    PreferencesError,
    Rect,
)


def test_defaults_match_source():
    prefs = Preferences()
    assert prefs.tab_width == 4
    assert prefs.line_limit_column == 80
    assert prefs.font_family == "Noto Sans Mono"
    assert prefs.style == "default"
    assert prefs.window_rect == Rect(50, 50, 450, 450)
    assert prefs.indent_guides_mode == IndentGuidesMode.REAL
    assert prefs.line_limit_mode == LineLimitMode.LINE
    assert prefs.find_window_state == {}


def test_stored_mode_numbers_follow_editor_constants(tmp_path):
    path = tmp_path / "settings"
    path.write_text(json.dumps({"lineLimitMode": 2, "indentGuidesMode": 3}))
    prefs = Preferences()
    prefs.load(path)
    assert prefs.line_limit_mode == LineLimitMode.BACKGROUND
    assert prefs.line_limit_mode == 2
    assert prefs.indent_guides_mode == IndentGuidesMode.LOOK_BOTH
    assert prefs.indent_guides_mode == 3


def test_load_missing_file_gives_defaults(tmp_path):
    prefs = Preferences()
    prefs.tab_width = 8
    prefs.style = "dark"
    prefs.load(tmp_path / "missing")
    assert prefs == Preferences()


def test_round_trip(tmp_path):
    path = tmp_path / "settings"
    prefs = Preferences()
    prefs.tab_width = 2
    prefs.tabs_to_spaces = True
    prefs.line_limit_mode = LineLimitMode.BACKGROUND
    prefs.indent_guides_mode = IndentGuidesMode.LOOK_FORWARD
    prefs.window_rect = Rect(10, 20, 300, 400)
    prefs.find_window_state = {"findText": "needle", "matchCase": True}
    prefs.font_family = "Mono"
    prefs.save(path)

    loaded = Preferences()
    loaded.load(path)
    assert loaded == prefs
    assert isinstance(loaded.line_limit_mode, LineLimitMode)


def test_save_leaves_no_backup(tmp_path):
    path = tmp_path / "settings"
    Preferences().save(path)
    Preferences().save(path)
    assert path.exists()
    assert not (tmp_path / "settings~").exists()


def test_invalid_entries_fall_back_to_defaults(tmp_path):
    path = tmp_path / "settings"
    path.write_text(
        json.dumps(
            {
                "tabWidth": 300,
                "toolbar": "yes",
                "lineLimitMode": 9,
                "windowRect": [1, 2],
                "style": "solarized",
            }
        )
    )
    prefs = Preferences()
    prefs.load(path)
    defaults = Preferences()
    assert prefs.tab_width == defaults.tab_width
    assert prefs.toolbar == defaults.toolbar
    assert prefs.line_limit_mode == defaults.line_limit_mode
    assert prefs.window_rect == defaults.window_rect
    assert prefs.style == "solarized"


def test_garbage_file_gives_defaults(tmp_path):
    path = tmp_path / "settings"
    path.write_bytes(b"\xff\x00not json")
    prefs = Preferences()
    prefs.use_custom_font = True
    prefs.load(path)
    assert prefs == Preferences()


def test_load_directory_is_silent(tmp_path):
    prefs = Preferences()
    prefs.font_size = 20
    prefs.load(tmp_path)
    assert prefs.font_size == Preferences().font_size


def test_save_to_directory_raises(tmp_path):
    target = tmp_path / "dir"
    target.mkdir()
    with pytest.raises(PreferencesError, match="Unknown error."):
        Preferences().save(target)


def test_copy_is_independent():
    prefs = Preferences()
    prefs.find_window_state = {"findText": "a"}
    clone = prefs.copy()
    assert clone == prefs
    clone.find_window_state["findText"] = "b"
    clone.tab_width = 7
    assert prefs.find_window_state["findText"] == "a"
    assert prefs.tab_width == Preferences().tab_width