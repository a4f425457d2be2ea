"""Tests for theme restore/cycle/apply against a stand-in app."""

from textual.theme import BUILTIN_THEMES

import hook_dump.settings
import hook_dump.tui.rendering as rendering
from hook_dump.tui import theme_controller


class _FakeApp:
    def __init__(self, theme="textual-dark", persist_settings=True):
        self.available_themes = dict(BUILTIN_THEMES)
        self.theme = theme
        self.persist_settings = persist_settings
        self.notices = []

    @property
    def current_theme(self):
        return self.available_themes[self.theme]

    def notify(self, message, **kwargs):
        self.notices.append(message)


def test_cycle_wraps_both_ways():
    names = sorted(BUILTIN_THEMES)
    app = _FakeApp(theme=names[-1])
    theme_controller.cycle_theme(app, 1)
    assert app.theme == names[0]
    theme_controller.cycle_theme(app, -1)
    assert app.theme == names[-1]
    assert app.notices == [f"Theme: {names[0]}", f"Theme: {names[-1]}"]


def test_restore_prefers_requested(tmp_settings):
    hook_dump.settings.save_theme("gruvbox")
    app = _FakeApp()
    theme_controller.restore_theme(app, "nord")
    assert app.theme == "nord"


def test_restore_uses_saved_theme(tmp_settings):
    hook_dump.settings.save_theme("gruvbox")
    app = _FakeApp()
    theme_controller.restore_theme(app)
    assert app.theme == "gruvbox"


def test_restore_ignores_saved_theme_when_not_persisting(tmp_settings):
    hook_dump.settings.save_theme("gruvbox")
    app = _FakeApp(persist_settings=False)
    theme_controller.restore_theme(app)
    assert app.theme == "textual-dark"


def test_restore_unknown_theme_keeps_current(tmp_settings):
    app = _FakeApp()
    theme_controller.restore_theme(app, "no-such-theme")
    assert app.theme == "textual-dark"


def test_apply_persists_and_updates_renderer(tmp_settings):
    original = rendering.get_tones()
    try:
        app = _FakeApp(theme="nord")
        theme_controller.apply_theme(app)
        assert hook_dump.settings.load_theme() == "nord"
        assert rendering.get_tones() is not original
    finally:
        rendering._tones = original


def test_apply_without_persist_writes_nothing(tmp_settings):
    original = rendering.get_tones()
    try:
        theme_controller.apply_theme(_FakeApp(persist_settings=False))
        assert not tmp_settings.exists()
    finally:
        rendering._tones = original
