# Copyright (c) fsusage-analyzer Contributors.

"""
Per-descriptor path activity.

File descriptors are only unique within a process, so activity is always
grouped by the (process, descriptor) pair. Two processes that both use
descriptor 5 produce two separate groups.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Optional

from fsusage.parsing.entry import DescriptorKey, LogEntry, split_process


@dataclass
class PathActivity:
    """Usage of one path through one descriptor."""

    path: str
    count: int
    first_seen: timedelta
    last_seen: timedelta


def map_descriptor_paths(
    entries: Iterable[LogEntry],
) -> dict[DescriptorKey, list[PathActivity]]:
    """
    Collect the paths seen through each (process, descriptor) pair.

    Entries without a descriptor or without a path are ignored.

    Args:
        entries: Entries in any order

    Returns:
        Mapping from DescriptorKey to its paths, most used first (ties in
        first-seen order). Keys appear in first-seen order.

    Example:
        >>> mapping = map_descriptor_paths(entries)
        >>> mapping[DescriptorKey("Finder.1234", "5")][0].path
        '/Users/x/file.txt'
    """
    grouped: dict[DescriptorKey, dict[str, PathActivity]] = {}

    for entry in entries:
        key = entry.descriptor_key
        if key is None or entry.path is None:
            continue

        paths = grouped.setdefault(key, {})
        activity = paths.get(entry.path)
        if activity is None:
            paths[entry.path] = PathActivity(
                path=entry.path,
                count=1,
                first_seen=entry.timestamp,
                last_seen=entry.timestamp,
            )
            continue

        activity.count += 1
        if entry.timestamp < activity.first_seen:
            activity.first_seen = entry.timestamp
        if entry.timestamp > activity.last_seen:
            activity.last_seen = entry.timestamp

    return {
        key: sorted(paths.values(), key=lambda a: -a.count)
        for key, paths in grouped.items()
    }


def select_descriptors(
    mapping: dict[DescriptorKey, list[PathActivity]],
    process: Optional[str] = None,
    fd: Optional[str] = None,
) -> dict[DescriptorKey, list[PathActivity]]:
    """
    Narrow a descriptor mapping by process and/or descriptor.

    The process filter matches either the full token ("Finder.1234") or
    the name without its PID suffix ("Finder").
    """
    selected = {}
    for key, activities in mapping.items():
        if fd is not None and key.file_descriptor != fd:
            continue
        if process is not None and process not in (
            key.process,
            split_process(key.process)[0],
        ):
            continue
        selected[key] = activities
    return selected

