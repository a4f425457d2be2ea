"""Text helpers shared by the store, endpoint and viewer."""

import json
import time

# (seconds per unit, singular name), largest first
_UNITS = (
    (365 * 24 * 3600, "year"),
    (30 * 24 * 3600, "month"),
    (7 * 24 * 3600, "week"),
    (24 * 3600, "day"),
    (3600, "hour"),
    (60, "minute"),
    (1, "second"),
)


def pretty_json(value) -> str:
    """2-space indented JSON, keys in insertion order."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def compact_json(value) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def preview_line(value, width: int = 80) -> str:
    """Single-line preview, truncated with an ellipsis."""
    text = compact_json(value)
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    return text[: max(width - 1, 0)] + "…"


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def relative_time(payload_id: str, now: int | None = None) -> str:
    """Describe a millisecond-timestamp id relative to now ("3 minutes ago")."""
    try:
        stamp = int(payload_id)
    except (TypeError, ValueError):
        return "Invalid timestamp"
    current = now_ms() if now is None else now
    elapsed = max(current - stamp, 0) // 1000
    if elapsed < 1:
        return "just now"
    for seconds, name in _UNITS:
        if elapsed >= seconds:
            count = elapsed // seconds
            return "{} {}{} ago".format(count, name, "" if count == 1 else "s")
    return "just now"
