import pytest

from koder.editorconfig import find_editorconfig, glob_to_regex, match_filename, parse


def test_find_editorconfig_in_ancestor(tmp_path):
    config = tmp_path / ".editorconfig"
    config.write_text("[*]\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    target = nested / "file.txt"
    target.write_text("x")
    assert find_editorconfig(target) == config


def test_find_editorconfig_prefers_nearest(tmp_path):
    (tmp_path / ".editorconfig").write_text("[*]\n")
    inner = tmp_path / "inner"
    inner.mkdir()
    nearest = inner / ".editorconfig"
    nearest.write_text("[*]\n")
    assert find_editorconfig(inner / "file.txt") == nearest


def test_parse_sections_and_properties(tmp_path):
    path = tmp_path / ".editorconfig"
    path.write_text(
        "# comment\n"
        "; another comment\n"
        "[*.py]\n"
        "indent_style = space\n"
        "indent_size = 4\n"
        "\n"
        "[Makefile]\n"
        "indent_style = tab\n"
    )
    assert parse(path) == {
        "*.py": {"indent_style": "space", "indent_size": "4"},
        "Makefile": {"indent_style": "tab"},
    }


def test_parse_preamble_carries_into_first_section(tmp_path):
    path = tmp_path / ".editorconfig"
    path.write_text("root = true\n[*]\nend_of_line = lf\n")
    assert parse(path) == {"*": {"root": "true", "end_of_line": "lf"}}


def test_parse_first_occurrence_wins(tmp_path):
    path = tmp_path / ".editorconfig"
    path.write_text("[*]\ncharset = utf-8\ncharset = latin1\n[*]\ncharset = utf-16\n")
    assert parse(path) == {"*": {"charset": "utf-8"}}


def test_parse_drops_empty_sections(tmp_path):
    path = tmp_path / ".editorconfig"
    path.write_text("[*.md]\n[*.c]\nindent_size = 2\n")
    assert parse(path) == {"*.c": {"indent_size": "2"}}


def test_parse_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse(tmp_path / "missing")


def test_glob_to_regex_star_and_dot():
    assert glob_to_regex("*.py") == r"(.+)\.py"


def test_glob_to_regex_dir_specific_star():
    assert glob_to_regex("src/*.c") == r"src/([^/]+)\.c"


def test_glob_to_regex_braces():
    assert glob_to_regex("{a,b}") == "(a|b)"


def test_glob_to_regex_double_star():
    assert glob_to_regex("**") == "(.+)"


def test_glob_to_regex_unbalanced_braces():
    with pytest.raises(ValueError):
        glob_to_regex("{a,b")


def test_match_filename_braces():
    sections = {"*.{py,txt}": {"indent_size": "4"}}
    assert match_filename("notes.txt", sections) == {"indent_size": "4"}
    assert match_filename("notes.md", sections) == {}


def test_match_filename_later_sections_override():
    sections = {"*": {"a": "1", "b": "2"}, "*.py": {"a": "3"}}
    result = match_filename("x.py", sections)
    assert result == {"a": "3", "b": "2"}
    assert list(result) == ["b", "a"]


def test_match_filename_dir_specific():
    sections = {"src/*.c": {"k": "v"}}
    assert match_filename("src/main.c", sections) == {"k": "v"}
    assert match_filename("src/sub/main.c", sections) == {}


def test_match_filename_negated_class():
    sections = {"[!a].txt": {"k": "v"}}
    assert match_filename("b.txt", sections) == {"k": "v"}
    assert match_filename("a.txt", sections) == {}


def test_match_filename_escaped_star():
    sections = {r"\*.md": {"k": "v"}}
    assert match_filename("*.md", sections) == {"k": "v"}
    assert match_filename("x.md", sections) == {}


def test_match_filename_stops_at_unbalanced_braces():
    sections = {"*": {"a": "1"}, "{x": {"a": "2"}, "*.py": {"a": "3"}}
    assert match_filename("x.py", sections) == {"a": "1"}