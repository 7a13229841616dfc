"""Export preparation: turn document source into renderer-ready markdown."""

from canvasmark.export.markdown import (
    find_missing_blocks,
    prepare_document_markdown,
    prepare_export_markdown,
)

__all__ = [
    "find_missing_blocks",
    "prepare_document_markdown",
    "prepare_export_markdown",
]
