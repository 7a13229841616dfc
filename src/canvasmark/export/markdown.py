"""Prepare document markdown for the export renderer.

Pipeline:
1. Drop marker-only lines (layout intent is not printable content)
2. Replace placeholder lines with rendered block markup

The result is handed to the markdown-to-HTML and theming layer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from canvasmark.blocks.placeholders import find_placeholder_ids, inject_blocks
from canvasmark.pagination.markers import strip_pagination_markers

if TYPE_CHECKING:
    from collections.abc import Mapping

    from canvasmark.blocks.models import BlockSnapshot
    from canvasmark.documents.models import DocumentModel

logger = logging.getLogger(__name__)


def find_missing_blocks(
    markdown: str, blocks: Mapping[str, BlockSnapshot]
) -> list[str]:
    """Referenced block ids with no snapshot, in first-reference order."""
    missing: list[str] = []
    for block_id in find_placeholder_ids(markdown):
        if block_id not in blocks and block_id not in missing:
            missing.append(block_id)
    return missing


def prepare_export_markdown(
    markdown: str, blocks: Mapping[str, BlockSnapshot]
) -> str:
    """Strip marker lines and render placeholders.

    Args:
        markdown: Document content.
        blocks: Block table keyed by block id.

    Returns:
        Markdown with embedded ``<figure>`` fragments and no marker lines.
    """
    missing = find_missing_blocks(markdown, blocks)
    if missing:
        logger.warning(
            "Export references %d missing block(s): %s",
            len(missing),
            ", ".join(missing),
        )
    return inject_blocks(strip_pagination_markers(markdown), blocks)


def prepare_document_markdown(document: DocumentModel) -> str:
    """prepare_export_markdown for a whole document."""
    return prepare_export_markdown(document.content, document.blocks)
