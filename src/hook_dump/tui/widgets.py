"""Custom widgets for the payload viewer."""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Static

# Use module-level imports so theme changes reach the renderer
import hook_dump.formatting
import hook_dump.json_outline
import hook_dump.tui.rendering
from hook_dump.tui.view_state import OutlineState


class JsonOutlineView(Static):
    """Foldable JSON text. Click a line with a ▼/▶ gutter to fold it."""

    DEFAULT_CSS = """
    JsonOutlineView {
        width: 1fr;
        height: auto;
        padding: 0 1;
    }
    """

    class Toggled(Message):
        """A fold was flipped on the given source line."""

        def __init__(self, line_index: int, collapsed: bool) -> None:
            self.line_index = line_index
            self.collapsed = collapsed
            super().__init__()

    def __init__(self, document: str, outline: OutlineState, **kwargs):
        super().__init__("", **kwargs)
        self._lines = hook_dump.json_outline.split_document(document)
        self._outline = outline
        self._plan: list[hook_dump.json_outline.RenderLine] = []

    @property
    def plan(self) -> list[hook_dump.json_outline.RenderLine]:
        return self._plan

    def on_mount(self) -> None:
        self.refresh_outline()

    def refresh_outline(self) -> None:
        """Recompute the render plan from scratch and redraw."""
        tones = hook_dump.tui.rendering.get_tones()
        self._plan = hook_dump.json_outline.render_outline(self._lines, self._outline.collapsed, tones)
        self.update(hook_dump.tui.rendering.render_outline_text(self._plan, tones))

    def line_at_row(self, row: int):
        """RenderLine shown on the given content row, or None."""
        if 0 <= row < len(self._plan):
            return self._plan[row]
        return None

    def toggle_line(self, line_index: int) -> bool:
        """Flip a fold if the source line is collapsible. Returns True if anything changed."""
        if line_index not in hook_dump.json_outline.collapsible_lines(self._lines):
            return False
        collapsed = self._outline.toggle(line_index)
        self.refresh_outline()
        self.post_message(self.Toggled(line_index, collapsed))
        return True

    def on_click(self, event) -> None:
        offset = event.get_content_offset(self)
        if offset is None:
            return
        line = self.line_at_row(offset.y)
        if line is not None and line.is_collapsible:
            event.stop()
            self.toggle_line(line.index)


class CardHeader(Static):
    """Clickable title row of a payload card."""

    ALLOW_SELECT = False
    DEFAULT_CSS = """
    CardHeader {
        width: 1fr;
        height: 1;
        color: $text;
    }
    """

    def __init__(self, label: str, payload_id: str, **kwargs):
        super().__init__(label, **kwargs)
        self.payload_id = payload_id

    def on_click(self, event) -> None:
        event.stop()
        self.post_message(PayloadCard.Selected(self.payload_id))


class PayloadCard(Vertical):
    """One stored payload: a one-line preview, or the full outline when expanded."""

    DEFAULT_CSS = """
    PayloadCard {
        height: auto;
        margin: 0 1 1 1;
        padding: 0 1;
        background: $panel;
    }

    PayloadCard.-expanded {
        border: round $secondary;
        background: $surface;
    }

    PayloadCard .card-time {
        width: auto;
        color: $text-muted;
    }

    PayloadCard Horizontal {
        height: 1;
    }
    """

    class Selected(Message):
        """Expand/collapse request for a payload."""

        def __init__(self, payload_id: str) -> None:
            self.payload_id = payload_id
            super().__init__()

    def __init__(self, payload_id: str, value, *, expanded: bool = False, outline: OutlineState | None = None):
        super().__init__(id="payload-{}".format(payload_id))
        self.payload_id = payload_id
        self.value = value
        self.expanded = expanded
        self.outline = outline if outline is not None else OutlineState()
        self.set_class(expanded, "-expanded")

    def compose(self) -> ComposeResult:
        label = "✕ close" if self.expanded else hook_dump.formatting.preview_line(self.value, 100)
        with Horizontal():
            yield CardHeader(label, self.payload_id)
            yield Static(hook_dump.formatting.relative_time(self.payload_id), classes="card-time")
        if self.expanded:
            yield JsonOutlineView(hook_dump.formatting.pretty_json(self.value), self.outline)

    def refresh_time(self) -> None:
        for label in self.query(".card-time"):
            label.update(hook_dump.formatting.relative_time(self.payload_id))
