"""Shared pytest fixtures for CanvasMark tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from canvasmark.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Iterator[None]:
    """Clear the cached Settings so env changes in one test never leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
