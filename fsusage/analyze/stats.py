# Copyright (c) fsusage-analyzer Contributors.

"""
Summary statistics over a collection of trace entries.

Computes time span, frequency rankings (operation, file descriptor, path)
and duration statistics. Durations are kept in seconds; the *_ms
properties are the only place they are converted for display.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import timedelta
from typing import Hashable, Iterable, Optional, Sequence

from fsusage.config import DEFAULT_TOP_N
from fsusage.parsing.entry import LogEntry


class RankedTable:
    """
    Frequency table ranked by descending count.

    Ties keep first-encountered order. The truncated view returned by
    top() is a slice of the one canonical ranking, never a separate table.
    """

    def __init__(self, values: Iterable[Hashable]) -> None:
        # Counter preserves insertion order and sorted() is stable, so
        # equal counts stay in first-seen order.
        counts = Counter(values)
        self._ranked: list[tuple[Hashable, int]] = sorted(
            counts.items(), key=lambda item: -item[1]
        )

    @property
    def ranked(self) -> list[tuple[Hashable, int]]:
        """Full ranking as (value, count) pairs."""
        return list(self._ranked)

    @property
    def unique_count(self) -> int:
        """Number of distinct values, regardless of truncation."""
        return len(self._ranked)

    @property
    def total(self) -> int:
        """Sum of all counts."""
        return sum(count for _, count in self._ranked)

    def top(self, n: Optional[int] = DEFAULT_TOP_N) -> list[tuple[Hashable, int]]:
        """First n rows of the ranking (all rows if n is None)."""
        if n is None:
            return self.ranked
        return self._ranked[: max(n, 0)]

    def as_dict(self) -> dict[Hashable, int]:
        return dict(self._ranked)

    def __len__(self) -> int:
        return len(self._ranked)

    def __repr__(self) -> str:
        return f"RankedTable({self._ranked!r})"


@dataclass(frozen=True)
class SummaryStats:
    """Read-only snapshot of an entry collection."""

    total_entries: int
    min_time: timedelta
    max_time: timedelta
    operation_counts: RankedTable
    fd_counts: RankedTable
    path_counts: RankedTable
    min_duration: float
    max_duration: float
    mean_duration: float

    @property
    def duration_seconds(self) -> float:
        """Time span covered by the entries."""
        return (self.max_time - self.min_time).total_seconds()

    @property
    def min_duration_ms(self) -> float:
        return self.min_duration * 1000

    @property
    def max_duration_ms(self) -> float:
        return self.max_duration * 1000

    @property
    def mean_duration_ms(self) -> float:
        return self.mean_duration * 1000


def get_summary_stats(entries: Sequence[LogEntry]) -> Optional[SummaryStats]:
    """
    Summarize an entry collection.

    Args:
        entries: Entries to summarize

    Returns:
        SummaryStats, or None when there is nothing to summarize. An empty
        collection never produces a zeroed summary.
    """
    if not entries:
        return None

    min_time = max_time = entries[0].timestamp
    min_duration = max_duration = entries[0].duration
    total_duration = 0.0

    for entry in entries:
        if entry.timestamp < min_time:
            min_time = entry.timestamp
        elif entry.timestamp > max_time:
            max_time = entry.timestamp
        if entry.duration < min_duration:
            min_duration = entry.duration
        elif entry.duration > max_duration:
            max_duration = entry.duration
        total_duration += entry.duration

    return SummaryStats(
        total_entries=len(entries),
        min_time=min_time,
        max_time=max_time,
        operation_counts=RankedTable(e.operation for e in entries),
        fd_counts=RankedTable(
            e.file_descriptor for e in entries if e.file_descriptor is not None
        ),
        path_counts=RankedTable(e.path for e in entries if e.path is not None),
        min_duration=min_duration,
        max_duration=max_duration,
        mean_duration=total_duration / len(entries),
    )
