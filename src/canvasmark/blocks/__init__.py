"""Embedded drawing blocks: snapshot models and placeholder rendering."""

from canvasmark.blocks.models import (
    BlockMeta,
    BlockSize,
    BlockSnapshot,
    DrawnixBlockData,
    DrawnixPoint,
    DrawnixStroke,
    create_empty_drawnix_data,
    create_empty_snapshot,
)
from canvasmark.blocks.placeholders import (
    build_placeholder,
    extract_placeholder_id,
    find_placeholder_ids,
    inject_blocks,
    render_block_html,
)

__all__ = [
    "BlockMeta",
    "BlockSize",
    "BlockSnapshot",
    "DrawnixBlockData",
    "DrawnixPoint",
    "DrawnixStroke",
    "build_placeholder",
    "create_empty_drawnix_data",
    "create_empty_snapshot",
    "extract_placeholder_id",
    "find_placeholder_ids",
    "inject_blocks",
    "render_block_html",
]
