# Copyright (c) fsusage-analyzer Contributors.

"""
Entry formatting utilities for different output formats.

Provides functions to format parsed entries as table, JSON, CSV or NDJSON.
All functions are pure (no side effects) and return strings.
"""

import csv
import io
import json
from typing import Any, Optional

from fsusage.parsing.entry import LogEntry

# Every field of LogEntry.to_record(), in display order
ALL_FIELDS = [
    "timestamp",
    "operation",
    "fd",
    "bytes",
    "device",
    "path",
    "duration",
    "process",
]

# Default fields to display when --fields is not specified
DEFAULT_FIELDS = ["timestamp", "operation", "fd", "path", "duration", "process"]


def format_value(value: Any) -> str:
    """
    Format a value for display.

    - None -> empty string
    - float -> fixed six decimals (fs_usage duration precision)
    - other -> str()
    """
    if value is None:
        return ""
    if isinstance(value, float):
        return f"{value:.6f}"
    return str(value)


def get_display_fields(requested_fields: Optional[str] = None) -> list[str]:
    """
    Determine which fields to display.

    Args:
        requested_fields: Comma-separated field names, "*" or "all" for
            every field, or None for the defaults

    Returns:
        List of field names to display

    Raises:
        ValueError: If an unknown field is requested
    """
    if not requested_fields:
        return list(DEFAULT_FIELDS)

    if requested_fields.strip() in ("*", "all"):
        return list(ALL_FIELDS)

    fields = [f.strip() for f in requested_fields.split(",") if f.strip()]
    unknown = [f for f in fields if f not in ALL_FIELDS]
    if unknown:
        raise ValueError(
            f"Unknown field(s): {', '.join(unknown)}. "
            f"Available: {', '.join(ALL_FIELDS)}"
        )
    return fields


def _project(entry: LogEntry, fields: list[str]) -> dict[str, Any]:
    record = entry.to_record()
    return {f: record[f] for f in fields}


def format_entries_table(
    entries: list[LogEntry],
    fields: list[str],
    show_header: bool = True,
) -> str:
    """
    Format entries as a plain text table with aligned columns.

    Args:
        entries: Parsed entries
        fields: Field names to display
        show_header: Whether to show the table header

    Returns:
        Formatted table string
    """
    if not entries:
        return "No entries found."

    rows = [[format_value(v) for v in _project(e, fields).values()] for e in entries]

    col_widths = []
    for i, field in enumerate(fields):
        max_width = len(field) if show_header else 0
        for row in rows:
            max_width = max(max_width, len(row[i]))
        col_widths.append(max_width)

    lines = []
    if show_header:
        lines.append(
            "  ".join(f.upper().ljust(w) for f, w in zip(fields, col_widths)).rstrip()
        )
    for row in rows:
        lines.append("  ".join(v.ljust(w) for v, w in zip(row, col_widths)).rstrip())

    return "\n".join(lines)


def format_entries_json(entries: list[LogEntry], fields: list[str]) -> str:
    """Format entries as a pretty-printed JSON array."""
    if not entries:
        return "[]"
    return json.dumps([_project(e, fields) for e in entries], indent=2)


def format_entries_csv(
    entries: list[LogEntry],
    fields: list[str],
    show_header: bool = True,
) -> str:
    """
    Format entries as CSV.

    Args:
        entries: Parsed entries
        fields: Field names to include
        show_header: Whether to include the header row

    Returns:
        CSV formatted string
    """
    if not entries:
        return ""

    output = io.StringIO(newline="")
    writer = csv.writer(output)

    if show_header:
        writer.writerow(fields)

    for entry in entries:
        writer.writerow([format_value(v) for v in _project(entry, fields).values()])

    return output.getvalue().rstrip("\r\n").replace("\r\n", "\n").replace("\r", "")


def format_entries_ndjson(
    entries: list[LogEntry], fields: Optional[list[str]] = None
) -> str:
    """
    Format entries as NDJSON, one JSON object per line.

    Args:
        entries: Parsed entries
        fields: Optional field names to include. If None, all fields are included.

    Returns:
        NDJSON formatted string
    """
    if not entries:
        return ""

    fields = fields or ALL_FIELDS
    return "\n".join(json.dumps(_project(e, fields)) for e in entries)
