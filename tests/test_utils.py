import pytest

from koder.utils import (
    get_file_extension,
    get_file_name,
    parse_file_argument,
    rgb_to_sci_color,
)


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("test", "test"),
        (".test", ".test"),
        (".test.second", ".test"),
        (".test.", ".test"),
        ("test.", "test"),
        ("test.txt", "test"),
        ("testing.extension", "testing"),
        ("testing.long.extension", "testing.long"),
    ],
)
def test_get_file_name(filename, expected):
    assert get_file_name(filename) == expected


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("test", ""),
        (".test", ""),
        (".test.second", "second"),
        (".test.", ""),
        ("test.", ""),
        ("test.txt", "txt"),
        ("testing.extension", "extension"),
        ("testing.long.extension", "extension"),
    ],
)
def test_get_file_extension(filename, expected):
    assert get_file_extension(filename) == expected


@pytest.mark.parametrize(
    "argument",
    ["test.txt", "test.txt:", "test.txt:2", "test.txt:2:", "test.txt::", "test.txt:2:5"],
)
def test_parse_file_argument_filename(argument):
    assert parse_file_argument(argument).filename == "test.txt"


def test_parse_file_argument_line_only():
    result = parse_file_argument("test.txt:2")
    assert result.line == 2
    assert result.filename == "test.txt"


def test_parse_file_argument_line_no_column():
    result = parse_file_argument("test.txt:2:")
    assert result.line == 2
    assert result.column == -1
    assert result.filename == "test.txt"


def test_parse_file_argument_no_line_column():
    result = parse_file_argument("test.txt::32")
    assert result.line == -1
    assert result.column == 32
    assert result.filename == "test.txt"


def test_parse_file_argument_line_column():
    assert parse_file_argument("test.txt:2:5") == ("test.txt", 2, 5)


def test_parse_file_argument_large_values():
    assert parse_file_argument("test.txt:2332:512354") == ("test.txt", 2332, 512354)


def test_parse_file_argument_negative_values():
    assert parse_file_argument("test.txt:-23:-120") == ("test.txt", -23, -120)


def test_parse_file_argument_only_file_name():
    assert parse_file_argument("test.txt") == ("test.txt", -1, -1)


def test_parse_file_argument_empty_line_and_column():
    assert parse_file_argument("test.txt::") == ("test.txt", -1, -1)


def test_parse_file_argument_ignores_incomplete_negative_numbers():
    assert parse_file_argument("test.txt:-:-").filename == "test.txt:-:-"


def test_parse_file_argument_ignores_urls():
    url = "https://datatracker.ietf.org/drafts/current/"
    assert parse_file_argument(url).filename == url


def test_rgb_to_sci_color_packs_as_bgr():
    assert rgb_to_sci_color(0x12, 0x34, 0x56) == 0x563412


def test_rgb_to_sci_color_rejects_out_of_range():
    with pytest.raises(ValueError):
        rgb_to_sci_color(256, 0, 0)