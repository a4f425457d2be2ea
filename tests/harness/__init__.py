"""Textual in-process test harness for hook-dump.

Re-exports all public API for convenient imports:
    from tests.harness import run_app, outline_rows, card_ids
"""

from tests.harness.app_runner import run_app
from tests.harness.content import card_ids, expanded_outline, outline_rows

__all__ = [
    "run_app",
    "card_ids",
    "expanded_outline",
    "outline_rows",
]
