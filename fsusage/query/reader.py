# Copyright (c) fsusage-analyzer Contributors.

"""
Trace reader for fs_usage captures.

This module provides the LogReader class for reading parsed entries from
trace files (plain or Zstd-compressed), plus head/tail selection.
"""

from collections import deque
from itertools import islice
from pathlib import Path
from typing import Iterator, Optional, Union

from fsusage.config import DEFAULT_CHUNK_SIZE
from fsusage.parsing.compression import is_zstd_file, open_log_file
from fsusage.parsing.entry import LogEntry
from fsusage.parsing.file_parser import (
    iter_entry_chunks,
    ProgressCallback,
    UnreadableLogError,
)


def select_entries(
    entries: Iterator[LogEntry],
    head: Optional[int] = None,
    tail: Optional[int] = None,
) -> list[LogEntry]:
    """
    Memory-efficient entry selection using streaming.

    - For head: Uses itertools.islice to stop early after N entries
    - For tail: Uses collections.deque(maxlen=N) to keep only last N entries

    Args:
        entries: Iterator of entries (consumed once!)
        head: Number of entries from the beginning (default: 10)
        tail: Number of entries from the end (overrides head)

    Returns:
        Selected subset of entries as a list
    """
    if tail is not None:
        if tail <= 0:
            return []
        return list(deque(entries, maxlen=tail))

    head = head if head is not None else 10
    if head <= 0:
        return []
    return list(islice(entries, head))


class LogReader:
    """
    Reader for fs_usage trace files.

    Parses the file lazily in chunks. After a full pass, ``lines_read``
    and ``lines_skipped`` hold the totals for that pass.

    Example:
        >>> reader = LogReader("capture.log")
        >>> for entry in reader.iter_entries():
        ...     print(entry.operation, entry.path)
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """
        Initialize the LogReader.

        Args:
            file_path: Path to the trace file (.log or .log.zst)
            chunk_size: Lines parsed per batch

        Raises:
            FileNotFoundError: If the file does not exist
        """
        self.file_path = Path(file_path)

        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {self.file_path}")

        self.compression = "zstd" if is_zstd_file(self.file_path) else "none"
        self.chunk_size = chunk_size
        self.lines_read = 0
        self.lines_skipped = 0

    def iter_chunks(
        self, progress_callback: Optional[ProgressCallback] = None
    ) -> Iterator[list[LogEntry]]:
        """
        Iterate over batches of parsed entries.

        Raises:
            UnreadableLogError: If the file is not valid UTF-8 text
        """
        self.lines_read = 0
        self.lines_skipped = 0

        def track(lines_done: int) -> None:
            self.lines_read = lines_done
            if progress_callback is not None:
                progress_callback(lines_done)

        parsed = 0
        try:
            with open_log_file(self.file_path) as f:
                for chunk in iter_entry_chunks(f, self.chunk_size, track):
                    parsed += len(chunk)
                    yield chunk
        except UnicodeDecodeError as e:
            raise UnreadableLogError(
                f"{self.file_path} is not valid UTF-8 text: {e}"
            ) from e
        self.lines_skipped = self.lines_read - parsed

    def iter_entries(self) -> Iterator[LogEntry]:
        """Iterate over all entries in file order."""
        for chunk in self.iter_chunks():
            yield from chunk

    def read_entries(self) -> list[LogEntry]:
        """Read every entry into a list."""
        return list(self.iter_entries())
