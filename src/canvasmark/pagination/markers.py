"""Pagination marker registry, parsing and serialization.

A pagination marker is a double-brace token that occupies a line of its own
and records the author's layout intent, e.g. ``{{page-break}}`` or
``{{page-break:odd}}``. Markers never compute layout themselves.
"""

from __future__ import annotations

from dataclasses import dataclass

from canvasmark.marker_constants import (
    LINE_SPLIT_PATTERN,
    MARKER_PATTERN,
    MarkerCondition,
    MarkerId,
)
from canvasmark.pagination.lexer import LineTokenType, sole_token


@dataclass(frozen=True, slots=True)
class MarkerDefinition:
    """Static description of one marker kind.

    Attributes:
        id: The marker kind.
        label: Short human-readable name.
        description: One-sentence explanation of the layout intent.
        allow_condition: Whether an ``odd``/``even`` condition is meaningful.
    """

    id: MarkerId
    label: str
    description: str
    allow_condition: bool = False


@dataclass(frozen=True, slots=True)
class ParsedMarker:
    """Result of successfully parsing a marker line."""

    id: MarkerId
    condition: MarkerCondition | None = None


@dataclass(frozen=True, slots=True)
class MarkerOption:
    """One selectable entry of the marker insertion menu."""

    id: MarkerId
    label: str
    description: str
    condition: MarkerCondition | None = None


PAGINATION_MARKERS: tuple[MarkerDefinition, ...] = (
    MarkerDefinition(
        id=MarkerId.PAGE_BREAK,
        label="Page break",
        description=(
            "Force a new page or image; supports odd/even page alignment."
        ),
        allow_condition=True,
    ),
    MarkerDefinition(
        id=MarkerId.SECTION_BREAK,
        label="Section break",
        description=(
            "Preferred split point for exported images; "
            "PDF output may start a new page."
        ),
    ),
    MarkerDefinition(
        id=MarkerId.NO_BREAK_START,
        label="No break (start)",
        description="Pairs with the end marker; wrapped content is never split.",
    ),
    MarkerDefinition(
        id=MarkerId.NO_BREAK_END,
        label="No break (end)",
        description="Pairs with the start marker; wrapped content is never split.",
    ),
    MarkerDefinition(
        id=MarkerId.KEEP_WITH_NEXT,
        label="Keep with next",
        description="Keep this block on the same page or image as the next one.",
    ),
    MarkerDefinition(
        id=MarkerId.KEEP_WITH_PREVIOUS,
        label="Keep with previous",
        description=(
            "Keep this block on the same page or image as the previous one."
        ),
    ),
    MarkerDefinition(
        id=MarkerId.PAGE_TOP,
        label="Prefer page top",
        description="Try to place the next block at the top of a page or image.",
    ),
    MarkerDefinition(
        id=MarkerId.PAGE_BOTTOM,
        label="Prefer page bottom",
        description=(
            "Try to place the next block at the bottom of a page or image."
        ),
    ),
)

_MARKERS_BY_ID: dict[MarkerId, MarkerDefinition] = {
    marker.id: marker for marker in PAGINATION_MARKERS
}

CONDITION_LABELS: dict[MarkerCondition, str] = {
    MarkerCondition.ODD: "odd pages",
    MarkerCondition.EVEN: "even pages",
}

_GENERIC_MARKER_LABEL = "Pagination marker"


def get_marker_definition(marker_id: MarkerId | str) -> MarkerDefinition | None:
    """Look up a marker definition by id, or None for unknown ids."""
    try:
        return _MARKERS_BY_ID.get(MarkerId(marker_id))
    except ValueError:
        return None


def build_marker_line(
    marker_id: MarkerId | str, condition: MarkerCondition | str | None = None
) -> str:
    """Serialize a marker to its line form.

    Args:
        marker_id: The marker kind.
        condition: Optional alignment condition.

    Returns:
        ``{{id}}`` or ``{{id:condition}}``.
    """
    if condition:
        return f"{{{{{marker_id}:{condition}}}}}"
    return f"{{{{{marker_id}}}}}"


def parse_marker(text: str) -> ParsedMarker | None:
    """Parse a line that should consist of exactly one pagination marker.

    The id is matched case-insensitively and whitespace is tolerated inside
    the braces and around the token. Unknown ids do not parse. A condition
    on a marker that does not allow one, or a condition other than
    ``odd``/``even``, is dropped and the marker parses as unconditioned.

    Args:
        text: One line of markdown.

    Returns:
        The parsed marker, or None if the line is not a marker line.
    """
    token = sole_token(text)
    if token is None or token.type is not LineTokenType.MARKER:
        return None

    match = MARKER_PATTERN.fullmatch(token.value)
    if match is None:
        return None

    marker_id = MarkerId(match.group(1).lower())
    definition = _MARKERS_BY_ID[marker_id]
    condition_raw = match.group(2)
    if not condition_raw or not definition.allow_condition:
        return ParsedMarker(id=marker_id)

    condition_raw = condition_raw.lower()
    if condition_raw in (MarkerCondition.ODD, MarkerCondition.EVEN):
        return ParsedMarker(id=marker_id, condition=MarkerCondition(condition_raw))

    return ParsedMarker(id=marker_id)


def describe_marker(marker: ParsedMarker) -> str:
    """Human-readable label for a parsed marker, including its condition."""
    definition = _MARKERS_BY_ID.get(marker.id)
    if definition is None:
        return _GENERIC_MARKER_LABEL

    if marker.condition:
        return f"{definition.label} · {CONDITION_LABELS[marker.condition]}"
    return definition.label


def is_placeholder_line(text: str) -> bool:
    """Return True if the line is a drawing block placeholder line."""
    token = sole_token(text)
    return token is not None and token.type is LineTokenType.PLACEHOLDER


def is_pagination_marker_line(text: str) -> bool:
    """Return True if the line is a marker line.

    Placeholder lines are never marker lines.
    """
    if is_placeholder_line(text):
        return False
    return parse_marker(text) is not None


def strip_pagination_markers(markdown: str) -> str:
    """Remove every marker-only line, keeping all other lines.

    Placeholder lines and lines with markers embedded in other text are
    kept. Lines are rejoined with ``\\n``.
    """
    lines = LINE_SPLIT_PATTERN.split(markdown)
    return "\n".join(line for line in lines if not is_pagination_marker_line(line))


def build_marker_options() -> list[MarkerOption]:
    """Build the marker insertion menu.

    Markers that allow a condition expand to a plain, an odd-aligned and an
    even-aligned option.
    """
    options: list[MarkerOption] = []
    for marker in PAGINATION_MARKERS:
        if not marker.allow_condition:
            options.append(
                MarkerOption(
                    id=marker.id, label=marker.label, description=marker.description
                )
            )
            continue

        options.append(
            MarkerOption(
                id=marker.id,
                label=f"{marker.label} (plain)",
                description=marker.description,
            )
        )
        for condition in MarkerCondition:
            options.append(
                MarkerOption(
                    id=marker.id,
                    condition=condition,
                    label=f"{marker.label} ({condition} page alignment)",
                    description=(
                        f"{marker.description} Aligns to {CONDITION_LABELS[condition]}."
                    ),
                )
            )
    return options


def serialize_option_value(option: MarkerOption) -> str:
    """Encode a menu option as ``id`` or ``id:condition``."""
    if option.condition:
        return f"{option.id}:{option.condition}"
    return str(option.id)


def parse_option_value(value: str) -> ParsedMarker | None:
    """Decode a value produced by serialize_option_value."""
    return parse_marker(f"{{{{{value}}}}}")
