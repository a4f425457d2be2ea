"""Webhook ingestion endpoint. Pure data source, no display logic.

POST any JSON body to any path; it is stored and announced on the event
queue. OPTIONS answers CORS preflight so browsers can post directly.
"""

import http.server
import json
import logging
import threading
import time

from hook_dump.event_types import PayloadReceivedEvent, PayloadRejectedEvent
import hook_dump.formatting

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 53821

_CORS_HEADERS = (
    ("Access-Control-Allow-Methods", "POST, OPTIONS"),
    (
        "Access-Control-Allow-Headers",
        "Content-Type, Authorization, Accept, Origin, X-Requested-With",
    ),
    ("Access-Control-Max-Age", "3600"),
)

logger = logging.getLogger(__name__)


class WebhookHandler(http.server.BaseHTTPRequestHandler):
    store = None  # set by make_handler_class before server starts
    event_queue = None  # set by make_handler_class before server starts

    server_version = "hook-dump"

    def log_message(self, fmt, *args):
        logger.debug("%s - %s", self.address_string(), fmt % args)

    def _reply(self, status: int, body: str) -> None:
        data = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def _emit(self, event) -> None:
        if self.event_queue is not None:
            self.event_queue.put(event)

    def do_POST(self):
        try:
            content_len = int(self.headers.get("Content-Length", 0))
        except ValueError:
            content_len = 0
        body_bytes = self.rfile.read(content_len) if content_len > 0 else b""

        try:
            value = json.loads(body_bytes)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("rejected non-JSON payload on %s: %s", self.path, e)
            self._emit(PayloadRejectedEvent(reason=str(e), path=self.path, recv_ns=time.monotonic_ns()))
            self._reply(400, f"invalid JSON: {e}\n")
            return

        try:
            payload_id = self.store.add(value)
        except OSError as e:
            logger.exception("failed to store payload: %s", e)
            self._reply(500, "failed to store payload\n")
            return

        self._emit(
            PayloadReceivedEvent(
                payload_id=payload_id,
                value=value,
                path=self.path,
                recv_ns=time.monotonic_ns(),
            )
        )
        self._reply(200, f"hello {hook_dump.formatting.compact_json(value)}!")

    def do_OPTIONS(self):
        self.send_response(200)
        self.send_header("Access-Control-Allow-Origin", "*")
        for name, value in _CORS_HEADERS:
            self.send_header(name, value)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def _method_not_allowed(self):
        self.send_response(405)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Allow", "POST, OPTIONS")
        self.send_header("Content-Length", "0")
        self.end_headers()

    do_GET = _method_not_allowed
    do_PUT = _method_not_allowed
    do_DELETE = _method_not_allowed
    do_PATCH = _method_not_allowed


def make_handler_class(store, event_queue=None) -> type[WebhookHandler]:
    """Create a WebhookHandler subclass bound to a store and event queue."""
    return type(
        "WebhookHandler_bound",
        (WebhookHandler,),
        {"store": store, "event_queue": event_queue},
    )


def start_server(host: str, port: int, handler_class):
    """Create and start the HTTP server. Returns (server, actual_port, thread)."""
    srv = http.server.ThreadingHTTPServer((host, port), handler_class)
    actual_port = srv.server_address[1]
    t = threading.Thread(target=srv.serve_forever, daemon=True, name="hook-dump-http")
    t.start()
    logger.info("listening on http://%s:%d", host, actual_port)
    return srv, actual_port, t


def stop_server(srv, timeout: float = 3.0) -> bool:
    """Shut down with a timeout. Returns True when shutdown finished in time."""
    shutdown_thread = threading.Thread(target=srv.shutdown, daemon=True)
    shutdown_thread.start()
    shutdown_thread.join(timeout=timeout)
    finished = not shutdown_thread.is_alive()
    if not finished:
        logger.warning("Timeout during shutdown - forcing close")
    srv.server_close()
    return finished
