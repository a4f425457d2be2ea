"""Tests for text helpers."""

import pytest

from hook_dump.formatting import compact_json, preview_line, pretty_json, relative_time

NOW = 1_700_000_000_000


def test_pretty_json_two_space_indent_keeps_key_order():
    assert pretty_json({"b": 1, "a": [1]}) == '{\n  "b": 1,\n  "a": [\n    1\n  ]\n}'


def test_pretty_json_keeps_unicode():
    assert pretty_json({"k": "é"}) == '{\n  "k": "é"\n}'


def test_compact_json():
    assert compact_json({"a": [1, 2], "b": None}) == '{"a":[1,2],"b":null}'


def test_preview_line_truncates():
    assert preview_line({"a": 1}, 80) == '{"a":1}'
    long = preview_line({"key": "x" * 200}, 20)
    assert len(long) == 20
    assert long.endswith("…")
    assert preview_line([1], 0) == ""


@pytest.mark.parametrize(
    "delta_ms,expected",
    [
        (0, "just now"),
        (999, "just now"),
        (1_000, "1 second ago"),
        (42_000, "42 seconds ago"),
        (60_000, "1 minute ago"),
        (3 * 3600_000, "3 hours ago"),
        (2 * 86400_000, "2 days ago"),
        (14 * 86400_000, "2 weeks ago"),
        (400 * 86400_000, "1 year ago"),
        (-5_000, "just now"),
    ],
)
def test_relative_time(delta_ms, expected):
    assert relative_time(str(NOW - delta_ms), now=NOW) == expected


def test_relative_time_invalid_id():
    assert relative_time("abc", now=NOW) == "Invalid timestamp"
