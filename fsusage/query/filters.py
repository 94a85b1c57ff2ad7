# Copyright (c) fsusage-analyzer Contributors.

"""
Entry filters: file descriptor equality and path substring.

Filters never modify their input. Callers keep the unfiltered collection
and re-apply an EntryFilter to it whenever a parameter changes, so
filters never compound.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from fsusage.parsing.entry import LogEntry


def filter_by_file_descriptor(
    entries: Iterable[LogEntry], fd: str
) -> list[LogEntry]:
    """
    Keep entries whose file descriptor equals fd.

    Comparison is on the text, so "07" and "7" are different descriptors.
    """
    return [e for e in entries if e.file_descriptor == fd]


def filter_by_path(
    entries: Iterable[LogEntry], pattern: str, case_sensitive: bool = False
) -> list[LogEntry]:
    """
    Keep entries that have a path containing pattern.

    Args:
        entries: Entries to filter
        pattern: Substring to look for
        case_sensitive: Match case exactly (default: case-insensitive)

    Returns:
        Matching entries in input order
    """
    if case_sensitive:
        return [e for e in entries if e.path is not None and pattern in e.path]

    pattern = pattern.lower()
    return [e for e in entries if e.path is not None and pattern in e.path.lower()]


@dataclass(frozen=True)
class EntryFilter:
    """
    Combined descriptor and path filter (AND).

    A None parameter disables that predicate.

    Example:
        >>> active = EntryFilter(file_descriptor="3", path="users")
        >>> visible = active.apply(all_entries)
    """

    file_descriptor: Optional[str] = None
    path: Optional[str] = None
    case_sensitive: bool = False

    @property
    def is_active(self) -> bool:
        return self.file_descriptor is not None or self.path is not None

    def predicate(self) -> Callable[[LogEntry], bool]:
        """Return a single-entry predicate equivalent to apply()."""
        fd = self.file_descriptor
        path = self.path
        if path is not None and not self.case_sensitive:
            path = path.lower()

        def matches(entry: LogEntry) -> bool:
            if fd is not None and entry.file_descriptor != fd:
                return False
            if path is not None:
                if entry.path is None:
                    return False
                haystack = entry.path if self.case_sensitive else entry.path.lower()
                if path not in haystack:
                    return False
            return True

        return matches

    def apply(self, entries: Iterable[LogEntry]) -> list[LogEntry]:
        """Filter a full (unfiltered) collection."""
        result = list(entries)
        if self.file_descriptor is not None:
            result = filter_by_file_descriptor(result, self.file_descriptor)
        if self.path is not None:
            result = filter_by_path(result, self.path, self.case_sensitive)
        return result
