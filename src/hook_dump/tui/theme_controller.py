"""Theme management for the TUI app.

// [LAW:one-way-deps] Depends on rendering module. No upward deps.
// [LAW:locality-or-seam] All theme logic here; app.py just delegates.
"""

import logging

import hook_dump.settings
import hook_dump.tui.rendering

logger = logging.getLogger(__name__)


def cycle_theme(app, direction: int) -> None:
    """Cycle to the next (+1) or previous (-1) theme.

    Sets app.theme; watch_theme() handles all downstream effects.
    """
    names = sorted(app.available_themes.keys())
    try:
        current_index = names.index(app.theme)
    except ValueError:
        current_index = 0
    new_name = names[(current_index + direction) % len(names)]
    app.theme = new_name
    app.notify(f"Theme: {new_name}")


def restore_theme(app, requested: str | None = None) -> None:
    """Apply the CLI-requested or persisted theme if it exists."""
    name = requested or (hook_dump.settings.load_theme() if app.persist_settings else None)
    if name and name in app.available_themes:
        app.theme = name
    elif name:
        logger.warning("unknown theme %r, keeping %s", name, app.theme)


def apply_theme(app) -> None:
    """Push the app's current theme into the outline renderer and persist it."""
    hook_dump.tui.rendering.set_theme(app.current_theme)
    if app.persist_settings:
        try:
            hook_dump.settings.save_theme(app.theme)
        except OSError as e:
            logger.warning("could not persist theme: %s", e)
