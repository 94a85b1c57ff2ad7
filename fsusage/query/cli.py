# Copyright (c) fsusage-analyzer Contributors.

"""
CLI implementation for the query subcommand.

Provides command-line interface for listing parsed fs_usage entries.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from fsusage.parsing.compression import compress_text
from fsusage.parsing.entry import LogEntry
from fsusage.parsing.file_parser import UnreadableLogError
from fsusage.query.filters import EntryFilter
from fsusage.query.formatters import (
    format_entries_csv,
    format_entries_json,
    format_entries_ndjson,
    format_entries_table,
    get_display_fields,
)
from fsusage.query.reader import LogReader, select_entries

logger = logging.getLogger(__name__)


def write_output(
    output: str,
    output_file: Optional[Path],
    compress: bool = False,
    entry_count: Optional[int] = None,
) -> None:
    """Write output to file or stdout."""
    if output_file:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        if compress:
            output_file.write_bytes(compress_text(output + "\n"))
        else:
            output_file.write_text(output + "\n")
        if entry_count is not None:
            click.echo(f"{entry_count} entries written to {output_file}", err=True)
        else:
            click.echo(f"Output written to {output_file}", err=True)
    else:
        click.echo(output)


def open_reader(file: Path) -> LogReader:
    """Create a LogReader, reporting failures as click errors."""
    try:
        return LogReader(file)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))


def load_entries(
    file: Path, entry_filter: Optional[EntryFilter] = None
) -> list[LogEntry]:
    """
    Read and optionally filter every entry of FILE.

    The filter is applied to the complete parsed collection.
    """
    reader = open_reader(file)
    try:
        entries = reader.read_entries()
    except UnreadableLogError as e:
        raise click.ClickException(str(e))

    logger.info(
        "Read %d entries from %s (%d lines skipped)",
        len(entries),
        file,
        reader.lines_skipped,
    )

    if entry_filter is not None and entry_filter.is_active:
        entries = entry_filter.apply(entries)
        logger.info("%d entries match %s", len(entries), entry_filter)
    return entries


def filter_options(func):
    """Attach the shared --fd/--path/--case-sensitive options."""
    func = click.option(
        "--case-sensitive",
        is_flag=True,
        default=False,
        help="Match --path case-sensitively.",
    )(func)
    func = click.option(
        "--path",
        "path_pattern",
        type=str,
        default=None,
        help="Keep entries whose path contains this text.",
    )(func)
    func = click.option(
        "--fd",
        type=str,
        default=None,
        help="Keep entries with this exact file descriptor.",
    )(func)
    return func


@click.command(name="query")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--head",
    "-n",
    type=int,
    default=10,
    show_default=True,
    help="Number of entries to show from the beginning.",
)
@click.option(
    "--tail",
    "-t",
    type=int,
    default=None,
    help="Number of entries to show from the end (overrides --head).",
)
@click.option(
    "--all",
    "-a",
    "all_entries",
    is_flag=True,
    help="Show all entries (overrides --head and --tail).",
)
@filter_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "csv", "ndjson"]),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--fields",
    type=str,
    default=None,
    help="Comma-separated list of fields to display (e.g. 'timestamp,path'), "
    "or '*'/'all' for all fields.",
)
@click.option(
    "--no-header",
    is_flag=True,
    default=False,
    help="Hide the table/CSV header row.",
)
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file path (default: stdout).",
)
@click.option(
    "--compress",
    is_flag=True,
    default=False,
    help="Compress output with Zstd (requires --output).",
)
def query_command(
    file: Path,
    head: int,
    tail: Optional[int],
    all_entries: bool,
    fd: Optional[str],
    path_pattern: Optional[str],
    case_sensitive: bool,
    output_format: str,
    fields: Optional[str],
    no_header: bool,
    output_file: Optional[Path],
    compress: bool,
) -> None:
    """
    Query and view parsed entries from FILE.

    Reads fs_usage text output (plain or Zstd-compressed), drops lines
    that cannot be parsed, and displays the remaining entries.

    \b
    Examples:
      fsusage query capture.log
      fsusage query capture.log.zst --head 20
      fsusage query capture.log --tail 5
      fsusage query capture.log --fd 3 --all
      fsusage query capture.log --path /Users/me --format csv
      fsusage query capture.log --all --format ndjson -o out.ndjson.zst --compress
    """
    if compress and not output_file:
        raise click.ClickException("--compress requires --output")

    try:
        display_fields = get_display_fields(fields)
    except ValueError as e:
        raise click.ClickException(str(e))

    entry_filter = EntryFilter(
        file_descriptor=fd, path=path_pattern, case_sensitive=case_sensitive
    )

    reader = open_reader(file)
    entries = reader.iter_entries()

    if entry_filter.is_active:
        predicate = entry_filter.predicate()
        entries = (e for e in entries if predicate(e))

    try:
        if all_entries:
            selected = list(entries)
        else:
            selected = select_entries(entries, head=head, tail=tail)
    except UnreadableLogError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        output = format_entries_json(selected, display_fields)
    elif output_format == "csv":
        output = format_entries_csv(
            selected, display_fields, show_header=not no_header
        )
    elif output_format == "ndjson":
        output = format_entries_ndjson(selected, display_fields)
    else:  # table
        output = format_entries_table(
            selected, display_fields, show_header=not no_header
        )

    write_output(output, output_file, compress, entry_count=len(selected))
