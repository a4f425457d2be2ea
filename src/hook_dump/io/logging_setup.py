"""Logging for a hook-dump run.

Each run writes one log file under the log directory. stderr gets the same
records, except while the viewer owns the terminal: then only warnings and
errors reach it.

// [LAW:single-enforcer] Handlers are attached to the "hook_dump" logger here only;
//   modules just call logging.getLogger(__name__).

Environment:
    HOOK_DUMP_LOG_LEVEL  level name, default INFO
    HOOK_DUMP_LOG_DIR    directory for per-run files, default ~/.local/share/hook-dump/logs
    HOOK_DUMP_LOG_FILE   exact file path, overrides HOOK_DUMP_LOG_DIR
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

PACKAGE_LOGGER = "hook_dump"
DEFAULT_LOG_DIR = "~/.local/share/hook-dump/logs"

_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(threadName)s] %(message)s"
_STDERR_FORMAT = "hook-dump: %(levelname)s %(message)s"
_MAX_BYTES = 5 * 1024 * 1024
_BACKUPS = 3


@dataclass(frozen=True)
class LoggingRuntime:
    """What configure() settled on."""

    level_name: str
    level: int
    file_path: str


_runtime: LoggingRuntime | None = None


def resolve_level(raw: str | None) -> tuple[str, int]:
    """Level name from the environment → (canonical name, numeric level). Unknown names mean INFO."""
    level = logging.getLevelName((raw or "").strip().upper())
    if not isinstance(level, int):
        level = logging.INFO
    return logging.getLevelName(level), level


def session_slug(session_name: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9_-]+", "-", session_name).strip("-_")
    return slug or "session"


def session_log_path(session_name: str) -> Path:
    """Fresh file for this run: <dir>/<session>-<local time>-<pid>.log."""
    explicit = os.environ.get("HOOK_DUMP_LOG_FILE")
    if explicit:
        return Path(os.path.expanduser(explicit))
    log_dir = Path(os.path.expanduser(os.environ.get("HOOK_DUMP_LOG_DIR") or DEFAULT_LOG_DIR))
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return log_dir / f"{session_slug(session_name)}-{stamp}-{os.getpid()}.log"


def configure(session_name: str = "hook-dump", quiet_stderr: bool = False) -> LoggingRuntime:
    """Attach the file and stderr handlers once; later calls return the first result.

    quiet_stderr is for TUI runs, where anything below WARNING on stderr
    would draw over the screen.
    """
    global _runtime
    if _runtime is not None:
        return _runtime

    level_name, level = resolve_level(os.environ.get("HOOK_DUMP_LOG_LEVEL"))
    path = session_log_path(session_name)
    path.parent.mkdir(parents=True, exist_ok=True)

    to_file = RotatingFileHandler(path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
    to_file.setLevel(level)
    to_file.setFormatter(logging.Formatter(_FILE_FORMAT))

    to_stderr = logging.StreamHandler()
    to_stderr.setLevel(max(level, logging.WARNING) if quiet_stderr else level)
    to_stderr.setFormatter(logging.Formatter(_STDERR_FORMAT))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.addHandler(to_stderr)
    package_logger.addHandler(to_file)

    _runtime = LoggingRuntime(level_name=level_name, level=level, file_path=str(path))
    return _runtime


def get_runtime() -> LoggingRuntime | None:
    return _runtime


def reset() -> None:
    """Detach and close our handlers so the next configure() starts over."""
    global _runtime
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    _runtime = None
