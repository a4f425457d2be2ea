"""Append-only payload store backed by a single JSON file.

Records are (id, value) pairs where id is a millisecond UTC timestamp string.
The file holds them oldest first; list() hands them out newest first.

Thread-safe: the HTTP endpoint appends from its request threads while the
viewer reads and deletes from the UI thread.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

import hook_dump.formatting

logger = logging.getLogger(__name__)

DATA_FILE_NAME = "data.json"


def default_data_dir() -> Path:
    """$HOOK_DUMP_DATA_DIR, else ~/.local/share/hook-dump."""
    env = os.environ.get("HOOK_DUMP_DATA_DIR")
    if env:
        return Path(os.path.expanduser(env))
    return Path(os.path.expanduser("~/.local/share/hook-dump"))


def _load_records(path: Path) -> list[tuple[str, object]]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return []
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("ignoring unreadable store file %s: %s", path, e)
        return []
    if not isinstance(raw, list):
        logger.warning("ignoring store file %s: expected a list", path)
        return []
    records = []
    for item in raw:
        if isinstance(item, list) and len(item) == 2 and isinstance(item[0], str):
            records.append((item[0], item[1]))
    return records


class PayloadStore:
    """Persistent list of received JSON payloads."""

    def __init__(self, data_dir: str | os.PathLike | None = None):
        self._dir = Path(data_dir) if data_dir is not None else default_data_dir()
        self._dir.mkdir(parents=True, exist_ok=True)
        self._path = self._dir / DATA_FILE_NAME
        self._lock = threading.Lock()
        self._records = _load_records(self._path)
        logger.debug("loaded %d payload(s) from %s", len(self._records), self._path)

    @property
    def path(self) -> Path:
        return self._path

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def add(self, value) -> str:
        """Append a payload and persist. Returns the new id."""
        with self._lock:
            stamp = hook_dump.formatting.now_ms()
            # ids stay unique and increasing under bursts
            if self._records and self._records[-1][0].isdigit():
                stamp = max(stamp, int(self._records[-1][0]) + 1)
            payload_id = str(stamp)
            records = self._records + [(payload_id, value)]
            self._save_locked(records)
            self._records = records
        logger.info("stored payload %s", payload_id)
        return payload_id

    def list(self) -> list[tuple[str, object]]:
        """All payloads, newest first."""
        with self._lock:
            return list(reversed(self._records))

    def get(self, payload_id: str):
        with self._lock:
            for record_id, value in self._records:
                if record_id == payload_id:
                    return value
        return None

    def delete(self, payload_id: str) -> bool:
        """Remove one payload. Returns False when the id was unknown."""
        with self._lock:
            kept = [r for r in self._records if r[0] != payload_id]
            found = len(kept) < len(self._records)
            if found:
                self._save_locked(kept)
                self._records = kept
        if found:
            logger.info("deleted payload %s", payload_id)
        return found

    def clear(self) -> int:
        """Remove every payload. Returns how many were removed."""
        with self._lock:
            removed = len(self._records)
            self._save_locked([])
            self._records = []
        logger.info("cleared %d payload(s)", removed)
        return removed

    def _save_locked(self, records: list[tuple[str, object]]) -> None:
        """Atomic write: temp file in the same directory, then rename.

        Callers assign self._records only after this returns.
        """
        fd, tmp_path = tempfile.mkstemp(dir=self._dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump([list(r) for r in records], f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self._path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
