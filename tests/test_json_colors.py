"""Tests for token color resolution and the tone palette."""

import pytest
from textual.theme import BUILTIN_THEMES

from hook_dump.json_colors import (
    DEFAULT_TONES,
    GROUPS,
    INTENSITIES,
    Tone,
    TonePalette,
    _normalize_color,
    resolve_color,
)


class _FixedTones:
    """Tones stub: every lookup returns a readable name of the slot."""

    def pair(self, group, intensity):
        return Tone(f"{group}.{intensity}", f"{group}.{intensity}.text")


@pytest.mark.parametrize(
    "token,is_key,in_string,expected",
    [
        ("name", True, True, "secondary.base.text"),
        ("value", False, True, "primary.strong"),
        # inside a string punctuation is just text
        ("{", False, True, "primary.strong"),
        ("{", False, False, "background.weak"),
        ("}", False, False, "background.weak"),
        ("[", False, False, "background.weak"),
        ("]", False, False, "background.weak"),
        (":", False, False, "secondary.base"),
        (",", False, False, "background.strong"),
        ("42", False, False, "success.weak"),
        ("-1.5e3", False, False, "success.weak"),
        ("1e5", False, False, "success.weak"),
        # words float() would take but a strict number parser rejects
        ("1_000", False, False, "primary.weak"),
        ("１２", False, False, "primary.weak"),
        ("٣", False, False, "primary.weak"),
        ("true", False, False, "primary.weak"),
        ("null", False, False, "primary.weak"),
        ("garbage", True, False, "primary.weak"),
    ],
)
def test_resolve_color_precedence(token, is_key, in_string, expected):
    assert resolve_color(token, is_key, in_string, _FixedTones()) == expected


def test_default_tones_cover_every_slot():
    for group in GROUPS:
        for intensity in INTENSITIES:
            tone = DEFAULT_TONES.pair(group, intensity)
            assert tone.color.startswith("#") and len(tone.color) == 7
            assert tone.text in ("#FFFFFF", "#000000") or group == "background"


def test_unknown_slot_raises_key_error():
    with pytest.raises(KeyError):
        DEFAULT_TONES.pair("accent", "base")


def test_weak_tone_sits_between_base_and_background():
    tones = TonePalette(
        primary="#FF0000",
        secondary="#00FF00",
        success="#0000FF",
        background="#000000",
        foreground="#FFFFFF",
    )
    assert tones.pair("primary", "base").color == "#FF0000"
    assert tones.pair("primary", "weak").color == "#990000"
    assert tones.pair("background", "base") == Tone("#000000", "#FFFFFF")


def test_from_builtin_themes():
    for name in ("textual-dark", "textual-light", "nord", "gruvbox"):
        tones = TonePalette.from_theme(BUILTIN_THEMES[name])
        for group in GROUPS:
            for intensity in INTENSITIES:
                assert tones.pair(group, intensity).color.startswith("#")


def test_normalize_color():
    assert _normalize_color(None, "#123456") == "#123456"
    assert _normalize_color("ansi_default", "#123456") == "#123456"
    assert _normalize_color("#abcdef", "#000000") == "#ABCDEF"
    assert _normalize_color("not a color", "#000000") == "#000000"
    assert _normalize_color("rgb(255,0,0)", "#000000") == "#FF0000"
