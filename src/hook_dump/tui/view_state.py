"""UI state owned by the viewer: which payload is open, which lines are folded.

// [LAW:one-source-of-truth] The collapsed-set lives here, never inside a renderer.

The outline renderer only ever reads OutlineState.collapsed; toggles are the
sole mutation and happen on the UI thread.
"""

from dataclasses import dataclass, field


@dataclass
class OutlineState:
    """Collapsed line indices for one open payload."""

    collapsed: set[int] = field(default_factory=set)

    def toggle(self, line_index: int) -> bool:
        """Flip one line's membership. Returns True when it is now collapsed."""
        if line_index in self.collapsed:
            self.collapsed.discard(line_index)
            return False
        self.collapsed.add(line_index)
        return True

    def is_collapsed(self, line_index: int) -> bool:
        return line_index in self.collapsed

    def clear(self) -> None:
        self.collapsed.clear()


@dataclass
class ViewState:
    """At most one payload is expanded at a time."""

    expanded_id: str | None = None
    outline: OutlineState = field(default_factory=OutlineState)

    def expand(self, payload_id: str | None) -> None:
        """Open a payload (or close all with None); folds start fresh."""
        if payload_id != self.expanded_id:
            self.outline = OutlineState()
        self.expanded_id = payload_id

    def toggle_payload(self, payload_id: str) -> None:
        """Close the payload if it is open, otherwise open it and close the other."""
        self.expand(None if self.expanded_id == payload_id else payload_id)

    def forget(self, payload_id: str) -> None:
        """Drop state for a payload that no longer exists."""
        if self.expanded_id == payload_id:
            self.expand(None)
