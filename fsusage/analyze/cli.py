# Copyright (c) fsusage-analyzer Contributors.

"""
CLI implementation for the analyze command group.

Provides summary statistics, time-binned series and per-descriptor path
activity for fs_usage traces.
"""

import json
from pathlib import Path
from typing import Optional

import click

from fsusage.analyze.binning import time_bins
from fsusage.analyze.descriptors import map_descriptor_paths, select_descriptors
from fsusage.analyze.report import (
    descriptor_paths_to_dict,
    format_bins,
    format_descriptor_paths_text,
    format_summary_text,
    summary_to_dict,
)
from fsusage.analyze.stats import get_summary_stats
from fsusage.config import AnalyzerConfig, DEFAULT_BIN_WIDTH, DEFAULT_TOP_N
from fsusage.query.cli import filter_options, load_entries, write_output
from fsusage.query.filters import EntryFilter


def _build_config(**kwargs) -> AnalyzerConfig:
    try:
        return AnalyzerConfig(**kwargs).validate()
    except ValueError as e:
        raise click.ClickException(str(e))


output_option = click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file path (default: stdout).",
)


@click.group(name="analyze")
def analyze_command() -> None:
    """
    Analyze trace data for patterns and insights.

    Available subcommands:
      summary      Totals, rankings and duration statistics
      bins         Entry counts per fixed-width time bin
      fd-paths     Paths used through each (process, fd) pair
    """
    pass


@click.command(name="summary")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@filter_options
@click.option(
    "--top",
    type=int,
    default=DEFAULT_TOP_N,
    show_default=True,
    help="Rows per ranking; 0 hides rankings.",
)
@click.option(
    "--full",
    is_flag=True,
    help="Show complete rankings (overrides --top).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format.",
)
@output_option
def summary_command(
    file: Path,
    fd: Optional[str],
    path_pattern: Optional[str],
    case_sensitive: bool,
    top: int,
    full: bool,
    output_format: str,
    output_file: Optional[Path],
) -> None:
    """
    Summarize entries from FILE.

    \b
    Examples:
      fsusage analyze summary capture.log
      fsusage analyze summary capture.log --path Library --top 20
      fsusage analyze summary capture.log --full --format json
    """
    config = _build_config(top_n=top)
    entries = load_entries(file, EntryFilter(fd, path_pattern, case_sensitive))

    stats = get_summary_stats(entries)
    top_n = None if full else config.top_n
    if stats is None:
        output = "null" if output_format == "json" else "No entries found."
    elif output_format == "json":
        output = json.dumps(summary_to_dict(stats, top_n), indent=2)
    else:
        output = format_summary_text(stats, top_n)

    write_output(output, output_file)


@click.command(name="bins")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--width",
    "-w",
    type=float,
    default=DEFAULT_BIN_WIDTH,
    show_default=True,
    help="Bin width in seconds (fractions allowed, e.g. 0.1).",
)
@filter_options
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "csv"]),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--no-header",
    is_flag=True,
    default=False,
    help="Hide the table/CSV header row.",
)
@output_option
def bins_command(
    file: Path,
    width: float,
    fd: Optional[str],
    path_pattern: Optional[str],
    case_sensitive: bool,
    output_format: str,
    no_header: bool,
    output_file: Optional[Path],
) -> None:
    """
    Count entries of FILE per time bin.

    Bins start at the earliest entry; empty bins are not listed.

    \b
    Examples:
      fsusage analyze bins capture.log
      fsusage analyze bins capture.log --width 0.1 --format csv
    """
    config = _build_config(bin_width=width)
    entries = load_entries(file, EntryFilter(fd, path_pattern, case_sensitive))

    try:
        bins = time_bins(entries, config.bin_width)
    except ValueError as e:
        raise click.ClickException(str(e))
    output = format_bins(bins, output_format, show_header=not no_header)
    write_output(output, output_file)


@click.command(name="fd-paths")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--process",
    "-p",
    type=str,
    default=None,
    help="Only this process (full token or name without PID).",
)
@click.option(
    "--fd",
    type=str,
    default=None,
    help="Only this file descriptor.",
)
@click.option(
    "--top",
    type=int,
    default=None,
    help="Paths shown per descriptor (default: all).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format.",
)
@output_option
def fd_paths_command(
    file: Path,
    process: Optional[str],
    fd: Optional[str],
    top: Optional[int],
    output_format: str,
    output_file: Optional[Path],
) -> None:
    """
    Show which paths each (process, fd) pair touched in FILE.

    Descriptor numbers are reused across processes, so every process
    gets its own group.

    \b
    Examples:
      fsusage analyze fd-paths capture.log
      fsusage analyze fd-paths capture.log --process Finder --fd 5
    """
    if top is not None:
        _build_config(top_n=top)

    mapping = select_descriptors(
        map_descriptor_paths(load_entries(file)), process=process, fd=fd
    )

    if output_format == "json":
        output = json.dumps(descriptor_paths_to_dict(mapping, top), indent=2)
    else:
        output = format_descriptor_paths_text(mapping, top)

    write_output(output, output_file)


# Register subcommands
analyze_command.add_command(summary_command)
analyze_command.add_command(bins_command)
analyze_command.add_command(fd_paths_command)
