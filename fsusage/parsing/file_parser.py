# Copyright (c) fsusage-analyzer Contributors.

"""
Whole-file parsing for fs_usage traces.

Content is consumed lazily, a chunk of lines at a time, so very large
traces never exist as a second full list of lines in memory. The chunk
generator is also the point where a host can regain control (update a
progress bar, check for cancellation) between batches. Chunking never
changes the result: lines are never split and order is preserved.
"""

import io
import logging
from itertools import islice
from typing import Callable, Iterable, Iterator, Optional, Union

from fsusage.config import DEFAULT_CHUNK_SIZE
from fsusage.parsing.entry import LogEntry
from fsusage.parsing.line_parser import parse_line

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


class UnreadableLogError(ValueError):
    """Raised when trace content cannot be decoded as text."""

    pass


def decode_content(content: Union[str, bytes]) -> str:
    """
    Return content as text, decoding bytes as UTF-8.

    Raises:
        UnreadableLogError: If the bytes are not valid UTF-8
    """
    if isinstance(content, str):
        return content
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise UnreadableLogError(f"Trace content is not valid UTF-8: {e}") from e


def iter_entry_chunks(
    lines: Iterable[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress_callback: Optional[ProgressCallback] = None,
) -> Iterator[list[LogEntry]]:
    """
    Parse lines in batches, yielding the entries of each batch.

    Args:
        lines: Iterable of raw lines (consumed once)
        chunk_size: Maximum number of input lines per batch
        progress_callback: Called after each batch with the total number
            of lines consumed so far

    Yields:
        List of entries parsed from one batch, in input order. A batch
        whose lines were all rejected yields an empty list.

    Raises:
        ValueError: If chunk_size is less than 1
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

    line_iter = iter(lines)
    lines_read = 0
    entries_parsed = 0

    while True:
        batch = list(islice(line_iter, chunk_size))
        if not batch:
            break
        lines_read += len(batch)

        entries = []
        for line in batch:
            entry = parse_line(line)
            if entry is not None:
                entries.append(entry)
        entries_parsed += len(entries)

        if progress_callback is not None:
            progress_callback(lines_read)
        yield entries

    logger.debug(
        "Parsed %d entries from %d lines (%d skipped)",
        entries_parsed,
        lines_read,
        lines_read - entries_parsed,
    )


def parse_log_lines(
    lines: Iterable[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress_callback: Optional[ProgressCallback] = None,
) -> list[LogEntry]:
    """Parse an iterable of lines into the ordered list of accepted entries."""
    entries: list[LogEntry] = []
    for chunk in iter_entry_chunks(lines, chunk_size, progress_callback):
        entries.extend(chunk)
    return entries


def parse_log_content(
    content: Union[str, bytes],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress_callback: Optional[ProgressCallback] = None,
) -> list[LogEntry]:
    """
    Parse the full text of a trace.

    Unparseable lines are dropped silently; the number dropped is logged
    once at DEBUG level.

    Args:
        content: Trace text, or UTF-8 bytes
        chunk_size: Lines per batch (does not affect the result)
        progress_callback: See iter_entry_chunks

    Returns:
        Entries in input line order

    Raises:
        UnreadableLogError: If bytes content is not valid UTF-8

    Example:
        >>> entries = parse_log_content("12:00:00.123456 open F=3 /tmp/a 0.000050 sh")
        >>> entries[0].file_descriptor
        '3'
    """
    text = decode_content(content)
    # StringIO iterates line by line without materializing a list of lines
    return parse_log_lines(io.StringIO(text), chunk_size, progress_callback)
