"""Drawing block placeholders: recognition, rendering and substitution.

A placeholder line ``{{drawnix:<blockId>}}`` stands in for an embedded
drawing in the markdown source. At export time each placeholder line is
replaced with a ``<figure>`` fragment rendered from the block table.

Rendering never fails. A block id with no snapshot, or a snapshot without a
preview, renders fallback markup whose state class says what is missing.
"""

from __future__ import annotations

import html
import re
from typing import TYPE_CHECKING

from canvasmark.marker_constants import (
    IDENTIFIER_CLASS,
    PLACEHOLDER_PATTERN,
    PLACEHOLDER_TOKEN,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from canvasmark.blocks.models import BlockSnapshot

# Root class and per-state modifier classes of rendered fragments
BLOCK_CLASS = "canvasmark-drawnix"
STATE_READY = "ready"
STATE_MISSING = "missing"
STATE_EMPTY = "empty"

# Narrowest max-width applied to a rendered block, in px
_MIN_DISPLAY_WIDTH = 120

# Whole placeholder lines inside a document. Any whitespace except line
# breaks, so a match never swallows neighbouring lines and a CRLF terminator
# is left intact.
_INLINE_SPACE = r"[^\S\r\n]*"
_PLACEHOLDER_LINE = re.compile(
    "^"
    + _INLINE_SPACE
    + r"\{\{"
    + _INLINE_SPACE
    + PLACEHOLDER_TOKEN
    + ":("
    + IDENTIFIER_CLASS
    + "+)"
    + _INLINE_SPACE
    + r"\}\}"
    + _INLINE_SPACE
    + r"(?=\r?$)",
    re.MULTILINE,
)


def build_placeholder(block_id: str) -> str:
    """Build the placeholder line for a block id."""
    return f"{{{{{PLACEHOLDER_TOKEN}:{block_id}}}}}"


def extract_placeholder_id(text: str) -> str | None:
    """Return the block id of a placeholder line, or None.

    Whitespace around the token and inside the braces is ignored; any other
    text on the line means the line is not a placeholder.
    """
    match = PLACEHOLDER_PATTERN.fullmatch(text.strip())
    return match.group(1) if match else None


def find_placeholder_ids(markdown: str) -> list[str]:
    """Block ids referenced by placeholder lines, in document order."""
    return [match.group(1) for match in _PLACEHOLDER_LINE.finditer(markdown)]


def _format_px(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _size_style(block: BlockSnapshot | None) -> str:
    if block is None or not block.size.width:
        return ""
    width = max(block.size.width, _MIN_DISPLAY_WIDTH)
    return f' style="max-width:{_format_px(width)}px"'


def _figure_open(escaped_id: str, state: str, style: str = "") -> str:
    return (
        f'<figure class="{BLOCK_CLASS} {BLOCK_CLASS}--{state}" '
        f'data-block-id="{escaped_id}"{style}>'
    )


def render_block_html(block_id: str, block: BlockSnapshot | None = None) -> str:
    """Render a block as an HTML ``<figure>`` fragment.

    Args:
        block_id: The id referenced by the placeholder.
        block: The snapshot for that id, if the block table has one.

    Returns:
        Markup in one of three states:

        - ``missing``: no snapshot; the fallback text names the id.
        - ``empty``: snapshot without preview; fallback text plus caption.
        - ``ready``: the preview embedded verbatim as ``<img src>``, with
          alt text and a caption when a description is set.
    """
    escaped_id = html.escape(block_id)

    if block is None:
        return (
            _figure_open(escaped_id, STATE_MISSING)
            + f'<div class="{BLOCK_CLASS}__fallback">'
            f"Missing Drawnix block ({escaped_id}). "
            "Check the project package or insert the block again."
            "</div></figure>"
        )

    style = _size_style(block)
    description = (block.description or "").strip()
    caption = (
        f'<figcaption class="{BLOCK_CLASS}__caption">'
        f"{html.escape(description)}</figcaption>"
        if description
        else ""
    )

    if block.preview:
        alt_text = html.escape(description or f"Drawnix block {block_id}")
        return (
            _figure_open(escaped_id, STATE_READY, style)
            + f'<img src="{block.preview}" alt="{alt_text}" '
            'loading="lazy" decoding="async" />'
            + caption
            + "</figure>"
        )

    return (
        _figure_open(escaped_id, STATE_EMPTY, style)
        + f'<div class="{BLOCK_CLASS}__fallback">'
        f"Drawnix block ({escaped_id}) has no preview yet; "
        "it will be filled in on the next export."
        "</div>"
        + caption
        + "</figure>"
    )


def inject_blocks(markdown: str, blocks: Mapping[str, BlockSnapshot]) -> str:
    """Replace every placeholder line with its rendered block markup.

    Substitution is a single non-overlapping pass; markup produced for one
    placeholder is never rescanned. Text without placeholders is returned
    unchanged.

    Args:
        markdown: Document content.
        blocks: Block table keyed by block id.

    Returns:
        Content with placeholder lines replaced by ``<figure>`` fragments.
    """

    def render_match(match: re.Match[str]) -> str:
        block_id = match.group(1)
        return render_block_html(block_id, blocks.get(block_id))

    return _PLACEHOLDER_LINE.sub(render_match, markdown)
