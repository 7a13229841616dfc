"""Structural diagnostics for pagination markers.

Validates a whole document in one forward pass:

- pairs ``{{no-break-start}}`` with the next unmatched ``{{no-break-end}}``
  using a last-in-first-out stack of open regions
- flags openings that exceed the nesting bound (the opening is still
  tracked, so its later end pairs normally)
- flags marker tokens that share a line with other text

Problems are returned as data and never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from canvasmark.marker_constants import LINE_SPLIT_PATTERN, MarkerCondition, MarkerId
from canvasmark.pagination.lexer import contains_marker_token
from canvasmark.pagination.markers import (
    ParsedMarker,
    build_marker_line,
    describe_marker,
    parse_marker,
)

logger = logging.getLogger(__name__)

# Concurrently open no-break regions allowed before a nesting violation
MAX_NO_BREAK_DEPTH = 2


class IssueKind(StrEnum):
    """Kinds of marker problems."""

    MISSING_END = "missing-end"
    MISSING_START = "missing-start"
    NESTING_VIOLATION = "nesting-violation"
    INLINE_USAGE = "inline-usage"


class IssueSeverity(StrEnum):
    """Issue severity. Only ``error`` issues set ``has_error``."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class MarkerIssue:
    """A single diagnostics finding.

    Attributes:
        kind: What is wrong.
        severity: ``error`` or ``warning``.
        message: Human-readable explanation.
        line: 1-based line the issue refers to.
        related_marker_id: Marker on that line, for entry issues.
        related_condition: Condition of that marker, if any.
    """

    kind: IssueKind
    severity: IssueSeverity
    message: str
    line: int
    related_marker_id: MarkerId | None = None
    related_condition: MarkerCondition | None = None


@dataclass(slots=True)
class MarkerEntry:
    """A marker found on its own line, with any issues attached to it.

    Attributes:
        line: 1-based line number.
        text: The trimmed line text.
        marker: The parsed marker.
        paired_line: Line of the matching start/end marker, once paired.
        issues: Issues attached to this marker.
    """

    line: int
    text: str
    marker: ParsedMarker
    paired_line: int | None = None
    issues: list[MarkerIssue] = field(default_factory=list)

    def attach_issue(
        self, kind: IssueKind, message: str, severity: IssueSeverity
    ) -> MarkerIssue:
        """Create an issue for this entry's line and marker and attach it."""
        issue = MarkerIssue(
            kind=kind,
            severity=severity,
            message=message,
            line=self.line,
            related_marker_id=self.marker.id,
            related_condition=self.marker.condition,
        )
        self.issues.append(issue)
        return issue


@dataclass(frozen=True, slots=True)
class DiagnosticsResult:
    """Outcome of analysing a document.

    Attributes:
        entries: Marker entries in document order.
        inline_issues: Issues for marker tokens embedded in other text.
        has_error: True if any issue has severity ``error``.
    """

    entries: list[MarkerEntry]
    inline_issues: list[MarkerIssue]
    has_error: bool

    def all_issues(self) -> list[MarkerIssue]:
        """Entry issues followed by inline issues."""
        issues = [issue for entry in self.entries for issue in entry.issues]
        issues.extend(self.inline_issues)
        return issues


_NESTING_MESSAGE = "No-break markers cannot be nested more than {depth} levels deep."
_MISSING_START_MESSAGE = (
    "Unmatched {end}; add the corresponding {start} before it."
)
_MISSING_END_MESSAGE = "Missing {end}; add the corresponding end marker."
_INLINE_MESSAGE = (
    "Pagination markers must sit on their own line; "
    "remove the other text from this line."
)


def analyze_pagination_markers(
    markdown: str, max_depth: int = MAX_NO_BREAK_DEPTH
) -> DiagnosticsResult:
    """Analyse marker pairing, nesting and placement for a whole document.

    Args:
        markdown: Full document text. LF and CRLF line endings are accepted.
        max_depth: Concurrently open no-break regions allowed.

    Returns:
        DiagnosticsResult with entries in document order.

    Example:
        >>> result = analyze_pagination_markers(
        ...     "{{no-break-start}}\\nbody\\n{{no-break-end}}"
        ... )
        >>> [(e.line, e.paired_line) for e in result.entries]
        [(1, 3), (3, 1)]
    """
    entries: list[MarkerEntry] = []
    inline_issues: list[MarkerIssue] = []
    open_regions: list[MarkerEntry] = []

    for index, line in enumerate(LINE_SPLIT_PATTERN.split(markdown)):
        line_number = index + 1
        trimmed = line.strip()
        parsed = parse_marker(trimmed)

        if parsed is None:
            if trimmed and contains_marker_token(line):
                inline_issues.append(
                    MarkerIssue(
                        kind=IssueKind.INLINE_USAGE,
                        severity=IssueSeverity.ERROR,
                        message=_INLINE_MESSAGE,
                        line=line_number,
                    )
                )
            continue

        entry = MarkerEntry(line=line_number, text=trimmed, marker=parsed)
        entries.append(entry)

        if parsed.id == MarkerId.NO_BREAK_START:
            open_regions.append(entry)
            if len(open_regions) > max_depth:
                entry.attach_issue(
                    IssueKind.NESTING_VIOLATION,
                    _NESTING_MESSAGE.format(depth=max_depth),
                    IssueSeverity.ERROR,
                )
        elif parsed.id == MarkerId.NO_BREAK_END:
            if not open_regions:
                entry.attach_issue(
                    IssueKind.MISSING_START,
                    _MISSING_START_MESSAGE.format(
                        end=build_marker_line(MarkerId.NO_BREAK_END),
                        start=build_marker_line(MarkerId.NO_BREAK_START),
                    ),
                    IssueSeverity.ERROR,
                )
            else:
                start = open_regions.pop()
                start.paired_line = entry.line
                entry.paired_line = start.line

    # Anything still open never saw its end; report innermost first
    while open_regions:
        start = open_regions.pop()
        start.attach_issue(
            IssueKind.MISSING_END,
            _MISSING_END_MESSAGE.format(end=build_marker_line(MarkerId.NO_BREAK_END)),
            IssueSeverity.ERROR,
        )

    has_error = any(
        issue.severity is IssueSeverity.ERROR
        for entry in entries
        for issue in entry.issues
    ) or any(issue.severity is IssueSeverity.ERROR for issue in inline_issues)

    logger.debug(
        "Analysed pagination markers: %d entries, %d inline issues, has_error=%s",
        len(entries),
        len(inline_issues),
        has_error,
    )
    return DiagnosticsResult(
        entries=entries, inline_issues=inline_issues, has_error=has_error
    )


def summarize_marker_entry(entry: MarkerEntry) -> str:
    """One-line summary of an entry for a diagnostics panel."""
    label = describe_marker(entry.marker)
    if entry.paired_line:
        return f"{label} · paired with line {entry.paired_line}"
    return label
