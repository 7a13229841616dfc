"""Token constants for the inline micro-language embedded in documents.

Two kinds of double-brace tokens may occupy a line of markdown:

- pagination markers, ``{{page-break}}`` or ``{{page-break:odd}}``
- drawing block placeholders, ``{{drawnix:<blockId>}}``

Shared between:
- pagination/lexer.py (line tokenization for markers and diagnostics)
- blocks/placeholders.py (placeholder extraction and substitution)
"""

from __future__ import annotations

import re
from enum import StrEnum


class MarkerId(StrEnum):
    """The eight fixed pagination marker kinds."""

    PAGE_BREAK = "page-break"
    SECTION_BREAK = "section-break"
    NO_BREAK_START = "no-break-start"
    NO_BREAK_END = "no-break-end"
    KEEP_WITH_NEXT = "keep-with-next"
    KEEP_WITH_PREVIOUS = "keep-with-previous"
    PAGE_TOP = "page-top"
    PAGE_BOTTOM = "page-bottom"


class MarkerCondition(StrEnum):
    """Page alignment condition accepted by conditional markers."""

    ODD = "odd"
    EVEN = "even"


PLACEHOLDER_TOKEN = "drawnix"

# Character class for condition values and block ids
IDENTIFIER_CLASS = r"[a-zA-Z0-9_-]"

_MARKER_ID_ALTERNATION = "|".join(re.escape(marker_id) for marker_id in MarkerId)

# Non-capturing token bodies, used inside the Lark grammar
MARKER_TOKEN_PATTERN = (
    r"\{\{\s*(?:"
    + _MARKER_ID_ALTERNATION
    + r")(?::"
    + IDENTIFIER_CLASS
    + r"+)?\s*\}\}"
)
PLACEHOLDER_TOKEN_PATTERN = (
    r"\{\{\s*" + PLACEHOLDER_TOKEN + ":" + IDENTIFIER_CLASS + r"+\s*\}\}"
)

# Capturing forms for pulling the parts out of a single lexed token
# Groups: (1) marker id, (2) optional raw condition
MARKER_PATTERN = re.compile(
    r"\{\{\s*("
    + _MARKER_ID_ALTERNATION
    + r")(?::("
    + IDENTIFIER_CLASS
    + r"+))?\s*\}\}",
    re.IGNORECASE,
)
# Groups: (1) block id
PLACEHOLDER_PATTERN = re.compile(
    r"\{\{\s*" + PLACEHOLDER_TOKEN + ":(" + IDENTIFIER_CLASS + r"+)\s*\}\}"
)

# Line splitting accepts both LF and CRLF terminators
LINE_SPLIT_PATTERN = re.compile(r"\r?\n")
