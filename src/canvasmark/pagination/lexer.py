"""Line lexer for pagination markers and block placeholders.

Splits a single line of markdown into TEXT, MARKER and PLACEHOLDER tokens.
Everything that is not a complete marker or placeholder token is TEXT, so
the token values always concatenate back to the input line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lark import Lark

from canvasmark.marker_constants import (
    MARKER_TOKEN_PATTERN,
    PLACEHOLDER_TOKEN_PATTERN,
)


class LineTokenType(Enum):
    """Token types for the line lexer."""

    TEXT = "TEXT"
    MARKER = "MARKER"
    PLACEHOLDER = "PLACEHOLDER"


@dataclass(frozen=True, slots=True)
class LineToken:
    """A token from the line lexer.

    Attributes:
        type: The token type (TEXT, MARKER, PLACEHOLDER)
        value: The raw string value matched
        start_pos: Start position in the input line
        end_pos: End position in the input line
    """

    type: LineTokenType
    value: str
    start_pos: int
    end_pos: int


# Lark grammar for the line lexer
# MARKER ids are case-insensitive; the placeholder keyword is not.
# TEXT catches everything else with negative lookahead
_LINE_GRAMMAR = (
    "MARKER: /" + MARKER_TOKEN_PATTERN + "/i\n"
    "PLACEHOLDER: /" + PLACEHOLDER_TOKEN_PATTERN + "/\n"
    "TEXT: /(?:(?!(?i:"
    + MARKER_TOKEN_PATTERN
    + ")|"
    + PLACEHOLDER_TOKEN_PATTERN
    + ").)+/s\n"
)

# Compile once at module load
_line_lexer = Lark(_LINE_GRAMMAR, parser=None, lexer="basic")


def tokenize_line(text: str) -> list[LineToken]:
    """Tokenize one line of markdown into marker, placeholder and text tokens.

    Args:
        text: A single line (no line terminator expected).

    Returns:
        List of LineToken objects preserving order and positions.

    Example:
        >>> tokens = tokenize_line("see {{page-break}} here")
        >>> [(t.type.value, t.value) for t in tokens]
        [('TEXT', 'see '), ('MARKER', '{{page-break}}'), ('TEXT', ' here')]
    """
    if not text:
        return []

    tokens: list[LineToken] = []
    for lark_token in _line_lexer.lex(text):
        start_pos = lark_token.start_pos if lark_token.start_pos is not None else 0
        end_pos = lark_token.end_pos if lark_token.end_pos is not None else 0
        tokens.append(
            LineToken(
                type=LineTokenType[lark_token.type],
                value=lark_token.value,
                start_pos=start_pos,
                end_pos=end_pos,
            )
        )
    return tokens


def contains_marker_token(text: str) -> bool:
    """Return True if any complete pagination marker token appears in text."""
    return any(token.type is LineTokenType.MARKER for token in tokenize_line(text))


def sole_token(text: str) -> LineToken | None:
    """Return the only token of a trimmed line, or None.

    Surrounding whitespace is ignored. A line that lexes to more than one
    token (e.g. a marker with text beside it) has no sole token.
    """
    tokens = tokenize_line(text.strip())
    if len(tokens) != 1:
        return None
    return tokens[0]
