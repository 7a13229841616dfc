"""Editor and export theme registry.

Only theme identity lives here; stylesheet content belongs to the
presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeDefinition:
    """A selectable theme."""

    id: str
    name: str
    description: str


EDITOR_THEMES: tuple[ThemeDefinition, ...] = (
    ThemeDefinition(
        id="aurora",
        name="Aurora",
        description="Light interface for everyday writing, with clear hierarchy.",
    ),
    ThemeDefinition(
        id="noir",
        name="Noir",
        description="Dark interface that reduces glare at night or in dim rooms.",
    ),
)

EXPORT_THEMES: tuple[ThemeDefinition, ...] = (
    ThemeDefinition(
        id="classic",
        name="Classic",
        description="Serif headings and sans-serif body, for blogs and reports.",
    ),
    ThemeDefinition(
        id="ink-night",
        name="Ink Night",
        description="Dark theme tuned for dark web pages and projection.",
    ),
)

DEFAULT_EDITOR_THEME = "aurora"
DEFAULT_EXPORT_THEME = "classic"


def get_editor_theme(theme_id: str) -> ThemeDefinition | None:
    """Look up an editor theme by id."""
    return next((theme for theme in EDITOR_THEMES if theme.id == theme_id), None)


def get_export_theme(theme_id: str) -> ThemeDefinition | None:
    """Look up an export theme by id."""
    return next((theme for theme in EXPORT_THEMES if theme.id == theme_id), None)
