"""Render-plan → Rich Text conversion for the JSON outline.

// [LAW:one-way-deps] Depends on json_outline/json_colors. No upward deps.

Every RenderLine becomes exactly one row of output, so row N of the Text
maps back to plan[N] for click handling.
"""

from rich.style import Style
from rich.text import Text

import hook_dump.json_colors
from hook_dump.json_colors import TonePalette, Tones
from hook_dump.json_outline import RenderLine, Role

INDENT_SIZE = 2
GUTTER_EXPANDED = "▼"
GUTTER_COLLAPSED = "▶"
GUTTER_BLANK = " "

_tones: Tones = hook_dump.json_colors.DEFAULT_TONES


def get_tones() -> Tones:
    return _tones


def set_theme(textual_theme) -> None:
    """Rebuild the module tones from a Textual Theme."""
    global _tones
    _tones = TonePalette.from_theme(textual_theme)


def _gutter(line: RenderLine) -> str:
    if not line.is_collapsible:
        return GUTTER_BLANK
    return GUTTER_COLLAPSED if line.is_collapsed else GUTTER_EXPANDED


def render_line_text(line: RenderLine, tones: Tones | None = None, line_numbers: bool = True) -> Text:
    """One RenderLine as a single-row Text: gutter, number, indent, tokens, fold summary."""
    tones = tones or _tones
    muted = tones.pair("background", "strong").color
    text = Text(no_wrap=True, overflow="ellipsis", end="")

    text.append(_gutter(line), style=Style(color=tones.pair("secondary", "base").color, bold=True))
    if line_numbers:
        text.append("{:>3} ".format(line.index + 1), style=Style(color=muted))
    text.append(" " * (line.indent_level * INDENT_SIZE))

    for token in line.tokens:
        text.append(token.text, style=Style(color=token.color))
        if token.role is Role.STRUCTURAL and token.text == ":":
            text.append(" ")

    marker = line.fold_marker
    if marker is not None:
        closing_color = hook_dump.json_colors.resolve_color(marker.closing_delimiter, False, False, tones)
        text.append(" {} lines ".format(marker.hidden_count), style=Style(color=muted, italic=True))
        text.append(marker.closing_delimiter, style=Style(color=closing_color))
    return text


def render_outline_text(plan: list[RenderLine], tones: Tones | None = None, line_numbers: bool = True) -> Text:
    """Whole plan as one Text, one row per RenderLine."""
    rows = [render_line_text(line, tones, line_numbers) for line in plan]
    return Text("\n", no_wrap=True, end="").join(rows)
