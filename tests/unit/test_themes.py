"""Tests for the theme registry."""

from __future__ import annotations

from canvasmark.themes import (
    DEFAULT_EDITOR_THEME,
    DEFAULT_EXPORT_THEME,
    EDITOR_THEMES,
    EXPORT_THEMES,
    get_editor_theme,
    get_export_theme,
)


def test_defaults_are_registered() -> None:
    """Default theme ids resolve to registered themes."""
    assert get_editor_theme(DEFAULT_EDITOR_THEME) is EDITOR_THEMES[0]
    assert get_export_theme(DEFAULT_EXPORT_THEME) is EXPORT_THEMES[0]


def test_lookup_by_id() -> None:
    """Themes are found by id within their own registry only."""
    noir = get_editor_theme("noir")
    assert noir is not None
    assert noir.name == "Noir"
    assert get_export_theme("noir") is None
    assert get_editor_theme("ink-night") is None


def test_unknown_theme() -> None:
    """Unknown ids return None."""
    assert get_editor_theme("sepia") is None
    assert get_export_theme("") is None


def test_ids_are_unique() -> None:
    """No registry repeats an id."""
    for registry in (EDITOR_THEMES, EXPORT_THEMES):
        ids = [theme.id for theme in registry]
        assert len(ids) == len(set(ids))
