"""Main TUI application using Textual.

// [LAW:locality-or-seam] Thin coordinator; delegates to theme_controller,
//   widgets and view_state.
// [LAW:one-source-of-truth] ViewState is the sole state for expansion and folds.
"""

import logging
import queue
import threading
import traceback

from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widgets import Footer, Header, Static
from textual.worker import get_current_worker

# Module-level imports so theme changes reach the renderer
import hook_dump.formatting
import hook_dump.tui.rendering
from hook_dump.event_types import EventKind, StorageUpdatedEvent
from hook_dump.tui import theme_controller as _theme
from hook_dump.tui.view_state import ViewState
from hook_dump.tui.widgets import JsonOutlineView, PayloadCard

logger = logging.getLogger(__name__)


class _HookEvent(Message, bubble=False):
    """Thread-safe bridge: drain thread → app message pump."""

    def __init__(self, event) -> None:
        self.event = event
        super().__init__()


class HookDumpApp(App):
    """TUI application for hook-dump."""

    TITLE = "hook-dump"

    CSS = """
    #status {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    #payload-scroll {
        height: 1fr;
    }

    #empty-hint {
        padding: 1 2;
        color: $text-muted;
    }
    """

    BINDINGS = [
        ("t", "cycle_theme(1)", "Theme"),
        ("T", "cycle_theme(-1)", "Prev theme"),
        ("d", "delete_expanded", "Delete"),
        ("x", "clear_all", "Clear all"),
        ("escape", "collapse", "Collapse"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        store,
        event_queue=None,
        host: str = "127.0.0.1",
        port: int = 0,
        theme_name: str | None = None,
        persist_settings: bool = True,
    ):
        super().__init__()
        self._store = store
        self._event_queue = event_queue
        self._host = host
        self._port = port
        self._requested_theme = theme_name
        self.persist_settings = persist_settings
        self.view_state = ViewState()
        self._drain_stop = threading.Event()
        self._error_log: list[str] = []
        self._theme_ready = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="status")
        yield VerticalScroll(id="payload-scroll")
        yield Footer()

    async def on_mount(self) -> None:
        _theme.restore_theme(self, self._requested_theme)
        hook_dump.tui.rendering.set_theme(self.current_theme)
        self._theme_ready = True

        newest = self._store.list()
        self.view_state.expand(newest[0][0] if newest else None)
        await self._rebuild_list()
        self._update_status()

        if self._event_queue is not None:
            self.run_worker(self._drain_events, thread=True, exclusive=False)
        self.set_interval(30, self._refresh_times)

    def on_unmount(self) -> None:
        self._drain_stop.set()

    # ─── Event bridge ──────────────────────────────────────────────────

    def _drain_events(self):
        """Bridge thread: queue.get → post_message into Textual's message pump."""
        worker = get_current_worker()
        while not (self._drain_stop.is_set() or worker.is_cancelled):
            try:
                event = self._event_queue.get(timeout=0.5)
            except queue.Empty:
                continue
            self.post_message(_HookEvent(event))

    async def on__hook_event(self, message: _HookEvent) -> None:
        await self._handle_event(message.event)

    async def _handle_event(self, event) -> None:
        try:
            await self._handle_event_inner(event)
        except Exception as e:
            tb = traceback.format_exc()
            self._error_log.append(f"CRASH in _handle_event: {e}")
            self._error_log.append(tb)
            logger.exception("Uncaught exception handling event: %s", e)

    async def _handle_event_inner(self, event) -> None:
        kind = event.kind
        if kind is EventKind.PAYLOAD_RECEIVED:
            # Newest payload takes over the expanded slot
            self.view_state.expand(event.payload_id)
            await self._rebuild_list()
            self.query_one("#payload-scroll", VerticalScroll).scroll_home(animate=False)
        elif kind is EventKind.PAYLOAD_REJECTED:
            self.notify(f"Rejected payload on {event.path}: {event.reason}", severity="warning")
        elif kind is EventKind.STORAGE_UPDATED:
            await self._rebuild_list()
        self._update_status()

    # ─── Rendering ─────────────────────────────────────────────────────

    async def _rebuild_list(self) -> None:
        scroll = self.query_one("#payload-scroll", VerticalScroll)
        await scroll.remove_children()
        records = self._store.list()
        if not records:
            await scroll.mount(Static(self.empty_hint(), id="empty-hint"))
            return
        expanded_id = self.view_state.expanded_id
        cards = [
            PayloadCard(
                payload_id,
                value,
                expanded=payload_id == expanded_id,
                outline=self.view_state.outline if payload_id == expanded_id else None,
            )
            for payload_id, value in records
        ]
        await scroll.mount_all(cards)

    def empty_hint(self) -> str:
        return (
            "No payloads yet.\n\n"
            f"  curl -X POST -H 'Content-Type: application/json' "
            f"-d '{{\"hello\": \"world\"}}' http://{self._host}:{self._port}/"
        )

    def status_text(self) -> str:
        count = len(self._store)
        return f"Listening on http://{self._host}:{self._port}  ·  {count} payload{'s' if count != 1 else ''}"

    def _update_status(self) -> None:
        self.query_one("#status", Static).update(self.status_text())

    def _refresh_times(self) -> None:
        for card in self.query(PayloadCard):
            card.refresh_time()

    def _refresh_outlines(self) -> None:
        for view in self.query(JsonOutlineView):
            view.refresh_outline()

    # ─── Messages from widgets ─────────────────────────────────────────

    async def on_payload_card_selected(self, message: PayloadCard.Selected) -> None:
        self.view_state.toggle_payload(message.payload_id)
        await self._rebuild_list()

    def on_json_outline_view_toggled(self, message: JsonOutlineView.Toggled) -> None:
        logger.debug(
            "line %d %s", message.line_index, "collapsed" if message.collapsed else "expanded"
        )

    # ─── Actions ───────────────────────────────────────────────────────

    def action_cycle_theme(self, direction: int) -> None:
        _theme.cycle_theme(self, direction)

    async def action_collapse(self) -> None:
        if self.view_state.expanded_id is not None:
            self.view_state.expand(None)
            await self._rebuild_list()

    async def action_delete_expanded(self) -> None:
        payload_id = self.view_state.expanded_id
        if payload_id is None:
            return
        try:
            removed = self._store.delete(payload_id)
        except OSError as e:
            logger.error("Failed to delete payload %s: %s", payload_id, e)
            self.notify(f"Delete failed: {e}", severity="error")
            return
        self.view_state.forget(payload_id)
        await self._handle_event(StorageUpdatedEvent(removed=int(removed)))

    async def action_clear_all(self) -> None:
        try:
            removed = self._store.clear()
        except OSError as e:
            logger.error("Failed to clear payloads: %s", e)
            self.notify(f"Clear failed: {e}", severity="error")
            return
        self.view_state.expand(None)
        await self._handle_event(StorageUpdatedEvent(removed=removed))

    # ─── Theme ─────────────────────────────────────────────────────────

    def watch_theme(self, theme_name: str) -> None:
        if not self._theme_ready:
            return
        _theme.apply_theme(self)
        self._refresh_outlines()
