"""Tests for color math helpers."""

from hook_dump.palette import (
    _hex_to_hsl,
    _wcag_contrast,
    is_dark,
    mix,
    readable_text,
    shift_lightness,
)


def test_mix_endpoints_and_midpoint():
    assert mix("#000000", "#FFFFFF", 0.0) == "#000000"
    assert mix("#000000", "#FFFFFF", 1.0) == "#FFFFFF"
    assert mix("#000000", "#FFFFFF", 0.5) == "#808080"


def test_readable_text_picks_higher_contrast():
    assert readable_text("#000000") == "#FFFFFF"
    assert readable_text("#FFFFFF") == "#000000"
    assert readable_text("#FFFF00") == "#000000"


def test_is_dark():
    assert is_dark("#1E1E1E")
    assert not is_dark("#FAFAFA")


def test_shift_lightness_clamps():
    _, _, lightness = _hex_to_hsl(shift_lightness("#FFFFFF", 0.5))
    assert lightness <= 0.951
    _, _, lightness = _hex_to_hsl(shift_lightness("#000000", -0.5))
    assert lightness >= 0.049


def test_hex_to_hsl_unparseable_fallback():
    assert _hex_to_hsl("ansi_red") == (0.0, 0.5, 0.5)


def test_contrast_extremes():
    assert round(_wcag_contrast("#000000", "#FFFFFF"), 1) == 21.0
    assert _wcag_contrast("#777777", "#777777") == 1.0
