"""Foldable, colorized outline of pretty-printed JSON text.

The outline is computed from three inputs only: the document text, the
caller's collapsed-line set and a tone palette. Nothing is cached between
calls except the per-line token memo, which is keyed on the line text alone.

// [LAW:dataflow-not-control-flow] render_outline is a pure function of its inputs.
// [LAW:one-source-of-truth] Block boundaries come from collapse_counts() only.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Sequence, Set
from dataclasses import dataclass
from enum import Enum

from hook_dump.json_colors import Tones, resolve_color

OPENERS = ("{", "[")
CLOSERS = ("}", "]")
STRUCTURAL_CHARS = frozenset("{}[]:,")

# Matching closer for the opener that ends a collapsed line.
_CLOSING_FOR = {"{": "}", "[": "]"}


class Role(Enum):
    """Semantic classification of a token."""

    KEY = "key"
    STRING_VALUE = "string_value"
    LITERAL = "literal"
    STRUCTURAL = "structural"


@dataclass(frozen=True)
class Token:
    """One classified piece of a line.

    is_key is the tokenizer's advisory key/value state when the token was
    emitted; only KEY/STRING_VALUE roles carry it meaningfully.
    """

    text: str
    role: Role
    is_key: bool = False

    @property
    def in_string(self) -> bool:
        return self.role in (Role.KEY, Role.STRING_VALUE)


@dataclass(frozen=True)
class ColoredToken:
    text: str
    role: Role
    color: str


@dataclass(frozen=True)
class FoldMarker:
    """Summary shown in place of a collapsed block's interior."""

    hidden_count: int
    closing_delimiter: str


@dataclass(frozen=True)
class RenderLine:
    """Render plan for one visible source line."""

    index: int
    indent_level: int
    tokens: tuple[ColoredToken, ...]
    fold_marker: FoldMarker | None = None
    is_collapsible: bool = False
    is_collapsed: bool = False

    @property
    def text(self) -> str:
        """Token texts joined; whitespace outside strings is not restored."""
        return "".join(t.text for t in self.tokens)


# ─── Document ────────────────────────────────────────────────────────────────


def split_document(text: str) -> list[str]:
    """Split text into lines on '\\n' only.

    str.splitlines() also breaks on U+2028 and friends, which may legally
    appear raw inside JSON strings.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _starts_closing(trimmed: str) -> bool:
    return trimmed.startswith(CLOSERS)


def _ends_opening(trimmed: str) -> bool:
    return trimmed.endswith(OPENERS)


# ─── Tokenizer ───────────────────────────────────────────────────────────────


@functools.lru_cache(maxsize=4096)
def tokenize_line(line: str) -> tuple[Token, ...]:
    """Scan one line into tokens.

    Strings lose their quotes and have \\" unescaped in place; other escape
    sequences are kept verbatim. Whitespace outside strings is dropped.
    """
    tokens: list[Token] = []
    buf: list[str] = []
    in_string = False
    escaped = False
    is_key = True
    string_is_key = True

    def flush_bare() -> None:
        if buf:
            tokens.append(Token("".join(buf), Role.LITERAL, is_key))
            buf.clear()

    for c in line.strip():
        if in_string:
            if escaped:
                if c == '"':
                    # \" -> " : drop the backslash already buffered
                    buf[-1] = '"'
                else:
                    buf.append(c)
                escaped = False
            elif c == "\\":
                buf.append(c)
                escaped = True
            elif c == '"':
                role = Role.KEY if string_is_key else Role.STRING_VALUE
                tokens.append(Token("".join(buf), role, string_is_key))
                buf.clear()
                in_string = False
            else:
                buf.append(c)
        elif c == '"':
            flush_bare()
            in_string = True
            string_is_key = is_key
        elif c in STRUCTURAL_CHARS:
            flush_bare()
            tokens.append(Token(c, Role.STRUCTURAL))
            if c in ",{[":
                is_key = True
            elif c == ":":
                is_key = False
        elif c.isspace():
            flush_bare()
        else:
            buf.append(c)

    if in_string:
        # Unterminated string: keep what we have rather than dropping it.
        role = Role.KEY if string_is_key else Role.STRING_VALUE
        tokens.append(Token("".join(buf), role, string_is_key))
    else:
        flush_bare()
    return tuple(tokens)


# ─── Block matcher ───────────────────────────────────────────────────────────


def collapse_counts(lines: Sequence[str]) -> dict[int, int]:
    """Map each matched block-opening line index to its interior line count.

    Blocks are matched by indentation depth, not by bracket kind. Opens that
    never close (truncated input) have no entry. Line 0 is never a block start.
    """
    counts: dict[int, int] = {}
    indent_level = 0
    block_starts: list[tuple[int, int]] = []

    for idx, line in enumerate(lines):
        trimmed = line.strip()

        if _starts_closing(trimmed):
            indent_level = max(indent_level - 1, 0)
            if block_starts and block_starts[-1][1] == indent_level:
                start_idx, _ = block_starts.pop()
                counts[start_idx] = max(idx - start_idx - 1, 0)

        if _ends_opening(trimmed):
            if idx != 0:
                block_starts.append((idx, indent_level))
            indent_level += 1

    return counts


# ─── Fold renderer ───────────────────────────────────────────────────────────


def _as_lines(document: str | Sequence[str]) -> Sequence[str]:
    if isinstance(document, str):
        return split_document(document)
    return document


def render_outline(
    document: str | Sequence[str],
    collapsed: Set[int] | Iterable[int],
    tones: Tones,
) -> list[RenderLine]:
    """Build the render plan for every visible line of a JSON document.

    Interior lines of collapsed blocks produce no RenderLine at all; the
    closing-bracket line of a collapsed block stays visible. The collapsed
    set is only read.
    """
    lines = _as_lines(document)
    if not isinstance(collapsed, (set, frozenset)):
        collapsed = frozenset(collapsed)
    counts = collapse_counts(lines)

    out: list[RenderLine] = []
    indent_level = 0
    skip_depth: int | None = None

    for idx, line in enumerate(lines):
        trimmed = line.strip()
        closes = _starts_closing(trimmed)
        opens = _ends_opening(trimmed)

        if skip_depth is not None:
            depth_after_close = max(indent_level - 1, 0) if closes else indent_level
            if depth_after_close > skip_depth:
                indent_level = depth_after_close + (1 if opens else 0)
                continue
            skip_depth = None

        current_indent = indent_level
        if closes:
            indent_level = max(indent_level - 1, 0)

        is_collapsible = opens and idx != 0
        is_collapsed = idx in collapsed

        tokens: tuple[ColoredToken, ...] = ()
        if not (is_collapsible and is_collapsed and not trimmed):
            tokens = tuple(
                ColoredToken(t.text, t.role, resolve_color(t.text, t.is_key, t.in_string, tones))
                for t in tokenize_line(trimmed)
            )

        fold_marker = None
        if is_collapsible and is_collapsed:
            fold_marker = FoldMarker(
                hidden_count=counts.get(idx, 0),
                closing_delimiter=_CLOSING_FOR[trimmed[-1]],
            )
            skip_depth = indent_level

        out.append(
            RenderLine(
                index=idx,
                indent_level=current_indent,
                tokens=tokens,
                fold_marker=fold_marker,
                is_collapsible=is_collapsible,
                is_collapsed=is_collapsible and is_collapsed,
            )
        )

        if opens:
            indent_level += 1

    return out


def collapsible_lines(document: str | Sequence[str]) -> list[int]:
    """Indices of every line that can be folded."""
    return [
        idx
        for idx, line in enumerate(_as_lines(document))
        if idx != 0 and _ends_opening(line.strip())
    ]
