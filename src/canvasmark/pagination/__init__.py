"""Pagination markers: grammar, registry and structural diagnostics."""

from canvasmark.marker_constants import MarkerCondition, MarkerId
from canvasmark.pagination.diagnostics import (
    MAX_NO_BREAK_DEPTH,
    DiagnosticsResult,
    IssueKind,
    IssueSeverity,
    MarkerEntry,
    MarkerIssue,
    analyze_pagination_markers,
    summarize_marker_entry,
)
from canvasmark.pagination.lexer import LineToken, LineTokenType, tokenize_line
from canvasmark.pagination.markers import (
    PAGINATION_MARKERS,
    MarkerDefinition,
    MarkerOption,
    ParsedMarker,
    build_marker_line,
    build_marker_options,
    describe_marker,
    get_marker_definition,
    is_pagination_marker_line,
    is_placeholder_line,
    parse_marker,
    parse_option_value,
    serialize_option_value,
    strip_pagination_markers,
)

__all__ = [
    "MAX_NO_BREAK_DEPTH",
    "PAGINATION_MARKERS",
    "DiagnosticsResult",
    "IssueKind",
    "IssueSeverity",
    "LineToken",
    "LineTokenType",
    "MarkerCondition",
    "MarkerDefinition",
    "MarkerEntry",
    "MarkerId",
    "MarkerIssue",
    "MarkerOption",
    "ParsedMarker",
    "analyze_pagination_markers",
    "build_marker_line",
    "build_marker_options",
    "describe_marker",
    "get_marker_definition",
    "is_pagination_marker_line",
    "is_placeholder_line",
    "parse_marker",
    "parse_option_value",
    "serialize_option_value",
    "strip_pagination_markers",
    "summarize_marker_entry",
    "tokenize_line",
]
