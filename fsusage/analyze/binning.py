# Copyright (c) fsusage-analyzer Contributors.

"""
Fixed-width time binning of trace entries.

Bins are anchored at the earliest timestamp in the collection and only
non-empty bins are returned. All arithmetic is done on timedelta values
(exact integer microseconds), so a width such as 0.1 s does not
accumulate floating-point drift and entries with equal timestamps always
share a bin.
"""

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, NamedTuple, Sequence

from fsusage.parsing.entry import LogEntry


@dataclass(frozen=True)
class TimeBin:
    """A non-empty time bin: [start, start + width)."""

    start: timedelta
    width: timedelta
    entries: tuple[LogEntry, ...]

    @property
    def end(self) -> timedelta:
        return self.start + self.width

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def total_duration(self) -> float:
        """Sum of entry durations in seconds."""
        return sum(e.duration for e in self.entries)


def to_bin_width(bin_width: float) -> timedelta:
    """
    Convert a width in seconds to a timedelta.

    Raises:
        ValueError: If the width is not positive, not finite, or rounds to
            zero at microsecond resolution
    """
    if not bin_width > 0 or math.isinf(bin_width):
        raise ValueError(
            f"Bin width must be a positive number of seconds, got {bin_width}"
        )
    try:
        width = timedelta(seconds=bin_width)
    except OverflowError as e:
        raise ValueError(f"Bin width {bin_width} is too large") from e
    if width <= timedelta(0):
        raise ValueError(f"Bin width {bin_width} is below microsecond resolution")
    return width


def bin_by_time(
    entries: Sequence[LogEntry], bin_width: float
) -> dict[timedelta, list[LogEntry]]:
    """
    Group entries into fixed-width time bins.

    Args:
        entries: Entries to bin (any order)
        bin_width: Bin width in seconds, fractional allowed

    Returns:
        Mapping from bin start to the entries in that bin, ordered by bin
        start. Entries keep their input order within a bin. Empty input
        gives an empty mapping.

    Raises:
        ValueError: If bin_width is not positive

    Example:
        >>> bins = bin_by_time(entries, 0.5)
        >>> for start, members in bins.items():
        ...     print(format_time_of_day(start), len(members))
    """
    width = to_bin_width(bin_width)
    if not entries:
        return {}

    t0 = min(e.timestamp for e in entries)

    bins: dict[timedelta, list[LogEntry]] = defaultdict(list)
    for entry in entries:
        index = (entry.timestamp - t0) // width
        # Derived from the integer index, never by accumulating widths
        bins[t0 + index * width].append(entry)

    return {start: bins[start] for start in sorted(bins)}


class BinSummary(NamedTuple):
    """Series point for one bin."""

    start: timedelta
    count: int
    total_duration: float


def time_bins(entries: Sequence[LogEntry], bin_width: float) -> list[TimeBin]:
    """Same grouping as bin_by_time, as a list of TimeBin objects."""
    width = to_bin_width(bin_width)
    return [
        TimeBin(start=start, width=width, entries=tuple(members))
        for start, members in bin_by_time(entries, bin_width).items()
    ]


def summarize_bins(bins: Iterable[TimeBin]) -> list[BinSummary]:
    """Reduce bins to (start, count, total duration in seconds) points."""
    return [BinSummary(b.start, b.count, b.total_duration) for b in bins]
