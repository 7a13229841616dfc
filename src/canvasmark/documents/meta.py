"""Statistics derived from document content.

DocumentMeta is never edited directly: the store recomputes it from the
current content, block count and previous save time after every mutation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime  # noqa: TC003 - dataclass field type

# Markdown punctuation that should not glue words together
_MARKDOWN_PUNCTUATION = re.compile(r"[`*_>#-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


@dataclass(frozen=True, slots=True)
class DocumentMeta:
    """Derived document statistics.

    Attributes:
        word_count: Whitespace-separated words, markdown punctuation ignored.
        paragraph_count: Non-blank chunks separated by blank lines.
        block_count: Entries in the block table.
        last_saved_at: When the document was last marked saved, if ever.
    """

    word_count: int
    paragraph_count: int
    block_count: int
    last_saved_at: datetime | None = None


def count_words(markdown: str) -> int:
    """Count words, treating markdown punctuation as whitespace."""
    text = _MARKDOWN_PUNCTUATION.sub(" ", markdown)
    text = _WHITESPACE_RUN.sub(" ", text).strip()
    return len([word for word in text.split(" ") if word])


def count_paragraphs(markdown: str) -> int:
    """Count non-blank chunks separated by two or more newlines."""
    return len([chunk for chunk in _PARAGRAPH_BREAK.split(markdown) if chunk.strip()])


def derive_meta(
    markdown: str, block_count: int, last_saved_at: datetime | None
) -> DocumentMeta:
    """Compute DocumentMeta from its inputs."""
    return DocumentMeta(
        word_count=count_words(markdown),
        paragraph_count=count_paragraphs(markdown),
        block_count=block_count,
        last_saved_at=last_saved_at,
    )
