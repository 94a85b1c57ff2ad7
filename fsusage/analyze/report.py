# Copyright (c) fsusage-analyzer Contributors.

"""
Text and JSON rendering for summaries, time bins and descriptor activity.

Durations arrive in seconds and are shown in milliseconds.
"""

import csv
import io
import json
from typing import Any, Optional

from tabulate import tabulate

from fsusage.analyze.binning import summarize_bins, TimeBin
from fsusage.analyze.descriptors import PathActivity
from fsusage.analyze.stats import RankedTable, SummaryStats
from fsusage.config import DEFAULT_TOP_N
from fsusage.parsing.entry import DescriptorKey, format_time_of_day


def _ranking_to_list(table: RankedTable, top_n: Optional[int]) -> list[dict]:
    return [{"value": value, "count": count} for value, count in table.top(top_n)]


def summary_to_dict(
    stats: SummaryStats, top_n: Optional[int] = DEFAULT_TOP_N
) -> dict:
    """
    Convert SummaryStats to a dictionary for JSON output.

    Args:
        stats: Summary to convert
        top_n: Rows per ranking (None for the full ranking)

    Returns:
        Dictionary representation suitable for JSON serialization
    """
    return {
        "total_entries": stats.total_entries,
        "min_time": format_time_of_day(stats.min_time),
        "max_time": format_time_of_day(stats.max_time),
        "duration_seconds": stats.duration_seconds,
        "duration_ms": {
            "min": stats.min_duration_ms,
            "max": stats.max_duration_ms,
            "mean": stats.mean_duration_ms,
        },
        "operations": {
            "unique": stats.operation_counts.unique_count,
            "top": _ranking_to_list(stats.operation_counts, top_n),
        },
        "file_descriptors": {
            "unique": stats.fd_counts.unique_count,
            "top": _ranking_to_list(stats.fd_counts, top_n),
        },
        "paths": {
            "unique": stats.path_counts.unique_count,
            "top": _ranking_to_list(stats.path_counts, top_n),
        },
    }


def _format_ranking(
    title: str, label: str, table: RankedTable, top_n: Optional[int]
) -> list[str]:
    rows = table.top(top_n)
    lines = ["", f"{title} ({table.unique_count} unique)"]
    if not rows:
        lines.append("  (none)")
        return lines
    # Keep descriptor text such as "07" verbatim
    rendered = tabulate(
        rows, headers=[label, "COUNT"], tablefmt="plain", disable_numparse=True
    )
    lines.extend("  " + line for line in rendered.splitlines())
    return lines


def format_summary_text(
    stats: SummaryStats, top_n: Optional[int] = DEFAULT_TOP_N
) -> str:
    """
    Format a summary as human-readable text.

    Args:
        stats: Summary to render
        top_n: Rows per ranking (None for the full ranking)

    Returns:
        Formatted text string suitable for terminal output
    """
    lines = [
        "─" * 50,
        "Trace Summary",
        "─" * 50,
        f"  Total entries:   {stats.total_entries}",
        f"  Time range:      {format_time_of_day(stats.min_time)} - "
        f"{format_time_of_day(stats.max_time)} ({stats.duration_seconds:.3f} s)",
        f"  Duration (ms):   min {stats.min_duration_ms:.3f}  "
        f"max {stats.max_duration_ms:.3f}  avg {stats.mean_duration_ms:.3f}",
    ]
    lines += _format_ranking("Operations", "OPERATION", stats.operation_counts, top_n)
    lines += _format_ranking("File descriptors", "FD", stats.fd_counts, top_n)
    lines += _format_ranking("Paths", "PATH", stats.path_counts, top_n)
    return "\n".join(lines)


def bin_rows(bins: list[TimeBin]) -> list[dict[str, Any]]:
    """One row per bin: start, count and total duration in ms."""
    return [
        {
            "start": format_time_of_day(point.start),
            "count": point.count,
            "total_duration_ms": round(point.total_duration * 1000, 6),
        }
        for point in summarize_bins(bins)
    ]


def format_bins(
    bins: list[TimeBin],
    output_format: str = "table",
    show_header: bool = True,
) -> str:
    """
    Format time bins as table, JSON or CSV.

    Args:
        bins: Bins in start order
        output_format: "table", "json" or "csv"
        show_header: Whether to show headers (table and CSV)

    Returns:
        Formatted output string
    """
    rows = bin_rows(bins)

    if output_format == "json":
        return json.dumps(rows, indent=2)

    if not rows:
        return "No entries found." if output_format == "table" else ""

    fields = ["start", "count", "total_duration_ms"]
    if output_format == "csv":
        output = io.StringIO(newline="")
        writer = csv.writer(output)
        if show_header:
            writer.writerow(fields)
        for row in rows:
            writer.writerow([row[f] for f in fields])
        return output.getvalue().rstrip("\r\n").replace("\r\n", "\n")

    table_data = [[row[f] for f in fields] for row in rows]
    headers = ["START", "COUNT", "TOTAL_MS"] if show_header else []
    return tabulate(table_data, headers=headers, tablefmt="plain")


def descriptor_paths_to_dict(
    mapping: dict[DescriptorKey, list[PathActivity]],
    top_n: Optional[int] = None,
) -> list[dict]:
    """Convert a descriptor mapping to a JSON-serializable list."""
    result = []
    for key, activities in mapping.items():
        shown = activities if top_n is None else activities[:top_n]
        result.append(
            {
                "process": key.process,
                "fd": key.file_descriptor,
                "unique_paths": len(activities),
                "paths": [
                    {
                        "path": a.path,
                        "count": a.count,
                        "first_seen": format_time_of_day(a.first_seen),
                        "last_seen": format_time_of_day(a.last_seen),
                    }
                    for a in shown
                ],
            }
        )
    return result


def format_descriptor_paths_text(
    mapping: dict[DescriptorKey, list[PathActivity]],
    top_n: Optional[int] = None,
) -> str:
    """Format a descriptor mapping with one block per (process, fd)."""
    if not mapping:
        return "No descriptor activity found."

    parts = []
    for key, activities in mapping.items():
        shown = activities if top_n is None else activities[:top_n]
        parts.append(
            f"\n=== {key.process} fd {key.file_descriptor} "
            f"({len(activities)} paths) ==="
        )
        table_data = [
            [
                a.count,
                format_time_of_day(a.first_seen),
                format_time_of_day(a.last_seen),
                a.path,
            ]
            for a in shown
        ]
        parts.append(
            tabulate(
                table_data,
                headers=["COUNT", "FIRST", "LAST", "PATH"],
                tablefmt="plain",
            )
        )
    return "\n".join(parts)
