"""CLI entry point for hook-dump."""

import argparse
import logging
import queue
import signal
import threading

import hook_dump.io.logging_setup
import hook_dump.server
from hook_dump.store import PayloadStore
from hook_dump.tui.app import HookDumpApp

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Local webhook inspector")
    parser.add_argument(
        "--host",
        type=str,
        default=hook_dump.server.DEFAULT_HOST,
        help=f"Bind address (default: {hook_dump.server.DEFAULT_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=hook_dump.server.DEFAULT_PORT,
        help=f"Bind port (default: {hook_dump.server.DEFAULT_PORT}, 0 for OS-assigned)",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Payload store directory (default: ~/.local/share/hook-dump). Env: HOOK_DUMP_DATA_DIR",
    )
    parser.add_argument(
        "--session",
        type=str,
        default="hook-dump",
        help="Session name used for the log file name (default: hook-dump)",
    )
    parser.add_argument(
        "--theme",
        type=str,
        default=None,
        help="Textual theme name (default: last used theme)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        default=False,
        help="Run only the HTTP endpoint, no viewer",
    )
    return parser


def _run_headless() -> None:
    stop = threading.Event()

    def _on_signal(signum, frame):
        stop.set()

    signal.signal(signal.SIGTERM, _on_signal)
    try:
        while not stop.wait(0.5):
            pass
    except KeyboardInterrupt:
        pass


def main(argv=None):
    args = build_parser().parse_args(argv)

    # [LAW:single-enforcer] Runtime logger configuration is centralized in io.logging_setup.
    log_runtime = hook_dump.io.logging_setup.configure(
        session_name=args.session,
        quiet_stderr=not args.headless,
    )
    logger.info(
        "logging configured level=%s file=%s",
        log_runtime.level_name,
        log_runtime.file_path,
    )

    store = PayloadStore(args.data_dir)
    event_q: queue.Queue = queue.Queue()
    handler = hook_dump.server.make_handler_class(store, event_q if not args.headless else None)

    try:
        srv, port, _ = hook_dump.server.start_server(args.host, args.port, handler)
    except OSError as e:
        logger.error("could not bind %s:%d: %s", args.host, args.port, e)
        return 1

    print("🚀 hook-dump listening")
    print(f"   Endpoint: http://{args.host}:{port}/")
    print(f"   Store: {store.path} ({len(store)} payloads)")

    try:
        if args.headless:
            _run_headless()
        else:
            app = HookDumpApp(
                store,
                event_q,
                host=args.host,
                port=port,
                theme_name=args.theme,
            )
            try:
                app.run()
            finally:
                if app._error_log:
                    logger.error("[hook-dump] Errors during session:")
                    for line in app._error_log:
                        logger.error("  %s", line)
    finally:
        logger.info("Shutting down...")
        if hook_dump.server.stop_server(srv):
            logger.info("Server stopped")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
