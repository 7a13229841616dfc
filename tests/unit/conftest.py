"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from canvasmark.blocks.models import BlockSize, BlockSnapshot, create_empty_snapshot
from canvasmark.config import Settings
from canvasmark.documents.store import DocumentStore

SAMPLE_PREVIEW = "data:image/png;base64,iVBORw0KGgo="


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any .env file."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def store(settings: Settings) -> DocumentStore:
    """A store holding a fresh default document."""
    return DocumentStore(settings)


@pytest.fixture
def ready_snapshot() -> BlockSnapshot:
    """A snapshot with a rendered preview and a description."""
    return create_empty_snapshot("block-1").model_copy(
        update={"preview": SAMPLE_PREVIEW, "description": "Flow chart"}
    )


@pytest.fixture
def empty_snapshot() -> BlockSnapshot:
    """A snapshot that has not rendered a preview yet."""
    return BlockSnapshot(block_id="block-2", size=BlockSize(width=480, height=270))
