"""Token → color lookup for the JSON outline.

// [LAW:single-enforcer] resolve_color is the only place a token picks a color.
// [LAW:locality-or-seam] Tones is the seam: the outline never sees a concrete theme.

The precedence table in resolve_color is fixed. Alternate color schemes plug
in by providing a different Tones object, not by editing the table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from textual.color import Color

import hook_dump.palette

GROUPS = ("primary", "secondary", "background", "success")
INTENSITIES = ("base", "weak", "strong")

_BRACKETS = frozenset("{}[]")


@dataclass(frozen=True)
class Tone:
    """A fill color plus the text color that reads well on top of it."""

    color: str
    text: str


class Tones(Protocol):
    """Named tone lookups: group in GROUPS, intensity in INTENSITIES."""

    def pair(self, group: str, intensity: str) -> Tone: ...


def _is_number(token: str) -> bool:
    # float() also takes digit separators, surrounding blanks and non-ASCII digits
    if not token.isascii() or "_" in token or token != token.strip():
        return False
    try:
        float(token)
    except ValueError:
        return False
    return True


def resolve_color(token: str, is_key: bool, in_string: bool, tones: Tones) -> str:
    """Color for one token.

    Strings: keys get the secondary label color, values the strong primary.
    Outside strings: brackets, colon and comma get their own muted tones,
    numbers the weak success tone, anything else the weak primary.
    """
    if in_string:
        if is_key:
            return tones.pair("secondary", "base").text
        return tones.pair("primary", "strong").color
    if token in _BRACKETS:
        return tones.pair("background", "weak").color
    if token == ":":
        return tones.pair("secondary", "base").color
    if token == ",":
        return tones.pair("background", "strong").color
    if _is_number(token):
        return tones.pair("success", "weak").color
    return tones.pair("primary", "weak").color


# ─── Concrete palette ────────────────────────────────────────────────────────


def _normalize_color(color: str | None, fallback: str) -> str:
    """Normalize a theme color to #RRGGBB hex.

    Textual's ANSI themes use names like "ansi_green"; those go through
    Color.parse(). "ansi_default" is unknowable at runtime and maps to the
    fallback.
    """
    if color is None or color == "ansi_default":
        return fallback
    if color.startswith("#") and len(color) == 7:
        return color.upper()
    try:
        c = Color.parse(color)
        r, g, b = c.rgb
        return "#{:02X}{:02X}{:02X}".format(r, g, b)
    except Exception:
        return fallback


class TonePalette:
    """Tones derived from five base colors.

    weak mixes a color toward the background, strong pushes it toward the
    foreground. The background group itself ramps from background toward
    foreground so weak/strong stay readable as muted text.
    """

    def __init__(
        self,
        *,
        primary: str,
        secondary: str,
        success: str,
        background: str,
        foreground: str,
    ):
        self.background = background
        self.foreground = foreground
        self._tones: dict[tuple[str, str], Tone] = {}

        for group, base in (
            ("primary", primary),
            ("secondary", secondary),
            ("success", success),
        ):
            self._set(group, "base", base)
            self._set(group, "weak", hook_dump.palette.mix(base, background, 0.4))
            self._set(group, "strong", hook_dump.palette.mix(base, foreground, 0.25))

        self._tones[("background", "base")] = Tone(background, foreground)
        self._set("background", "weak", hook_dump.palette.mix(background, foreground, 0.35))
        self._set("background", "strong", hook_dump.palette.mix(background, foreground, 0.55))

    def _set(self, group: str, intensity: str, color: str) -> None:
        self._tones[(group, intensity)] = Tone(color, hook_dump.palette.readable_text(color))

    def pair(self, group: str, intensity: str) -> Tone:
        return self._tones[(group, intensity)]

    @classmethod
    def from_theme(cls, theme) -> "TonePalette":
        """Map a Textual Theme onto tones. Missing colors get dark-mode defaults."""
        dark = bool(getattr(theme, "dark", True))
        background = _normalize_color(theme.background, "#1E1E1E" if dark else "#FAFAFA")
        foreground = _normalize_color(theme.foreground, "#E0E0E0" if dark else "#1E1E1E")
        primary = _normalize_color(theme.primary, "#0178D4")
        return cls(
            primary=primary,
            secondary=_normalize_color(theme.secondary, hook_dump.palette.shift_lightness(primary, -0.15)),
            success=_normalize_color(theme.success, "#4EBF71"),
            background=background,
            foreground=foreground,
        )


DEFAULT_TONES = TonePalette(
    primary="#0178D4",
    secondary="#004578",
    success="#4EBF71",
    background="#1E1E1E",
    foreground="#E0E0E0",
)
