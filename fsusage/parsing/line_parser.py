# Copyright (c) fsusage-analyzer Contributors.

"""
Line parser for fs_usage trace output.

A trace line looks like::

    12:00:00.123456  open  F=3  (R_____)  /Users/x/My File.txt  0.000050  Finder.1234

Fields are pulled out by a fixed sequence of extractors, each working on
what the previous one left over:

1. timestamp   ``HH:MM:SS.<digits>`` at the start of the line (required)
2. operation   next whitespace-delimited token (required)
3. key fields  ``F=``, ``B=``, ``D=`` anywhere in the remainder (optional)
4. tail        ``<seconds> <process>`` anchored at the end of the line
5. path        from the first ``/`` up to the tail (or, without one, up to
               the last duration-like number)

Lines missing a timestamp or an operation are rejected with None. A
missing tail is not a rejection: the entry gets a zero duration and the
"unknown" process.
"""

import re
from datetime import timedelta
from typing import NamedTuple, Optional

from fsusage.config import UNKNOWN_PROCESS
from fsusage.parsing.entry import LogEntry

TIMESTAMP_PATTERN = re.compile(r"^(\d{2}):(\d{2}):(\d{2})\.(\d+)")

# Order matters only for documentation; each pattern is searched independently.
FIELD_PATTERNS = (
    ("file_descriptor", re.compile(r"F=(\d+)")),
    ("bytes", re.compile(r"B=(0x[0-9a-fA-F]+|\d+)")),
    ("device", re.compile(r"D=(0x[0-9a-fA-F]+)")),
)

# Rightmost "<decimal> <token>" pair; the decimal is the duration in seconds.
TAIL_PATTERN = re.compile(r"(\d+\.\d+)\s+(\S+)\s*$")

# Duration column followed by more text; ends the path when there is no tail.
DURATION_MARKER_PATTERN = re.compile(r"\s+\d+\.\d+\s+")


class Tail(NamedTuple):
    """Duration/process pair and where it starts in the remainder."""

    duration: float
    process: str
    start: int


def extract_timestamp(line: str) -> Optional[tuple[timedelta, str]]:
    """
    Pull the leading timestamp off a stripped line.

    Only the first three fractional digits are kept, as milliseconds;
    further digits are dropped, not rounded.

    Returns:
        (time-of-day offset, remaining text) or None if there is no timestamp
    """
    match = TIMESTAMP_PATTERN.match(line)
    if not match:
        return None

    hours, minutes, seconds, fraction = match.groups()
    offset = timedelta(
        hours=int(hours),
        minutes=int(minutes),
        seconds=int(seconds),
        milliseconds=int(fraction[:3]),
    )
    return offset, line[match.end() :].strip()


def extract_operation(remainder: str) -> Optional[tuple[str, str]]:
    """Split off the operation token. Returns None if nothing is left."""
    parts = remainder.split(None, 1)
    if not parts:
        return None
    rest = parts[1] if len(parts) > 1 else ""
    return parts[0], rest


def extract_fields(remainder: str) -> dict[str, Optional[str]]:
    """Find the optional F=, B= and D= values."""
    fields: dict[str, Optional[str]] = {}
    for name, pattern in FIELD_PATTERNS:
        match = pattern.search(remainder)
        fields[name] = match.group(1) if match else None
    return fields


def extract_tail(remainder: str) -> Optional[Tail]:
    """Locate the trailing duration and process token."""
    match = TAIL_PATTERN.search(remainder)
    if not match:
        return None
    return Tail(float(match.group(1)), match.group(2), match.start())


def extract_path(remainder: str, tail: Optional[Tail]) -> Optional[str]:
    """
    Take everything from the first "/" up to the trailing duration.

    Paths may contain spaces, so no tokenizing happens inside this span.
    Without a tail (e.g. a "W" wait marker after the duration) the path
    ends at the last duration-like number instead; with neither there is
    no path.
    """
    if tail is not None:
        end = tail.start
    else:
        markers = list(DURATION_MARKER_PATTERN.finditer(remainder))
        if not markers:
            return None
        end = markers[-1].start()
    head = remainder[:end]
    slash = head.find("/")
    if slash < 0:
        return None
    return head[slash:].strip() or None


def parse_line(line: str) -> Optional[LogEntry]:
    """
    Parse a single trace line.

    Args:
        line: One line of fs_usage output (trailing newline allowed)

    Returns:
        LogEntry, or None if the line has no timestamp or no operation
    """
    line = line.strip()
    if not line:
        return None

    stamped = extract_timestamp(line)
    if stamped is None:
        return None
    timestamp, remainder = stamped

    split = extract_operation(remainder)
    if split is None:
        return None
    operation, remainder = split

    fields = extract_fields(remainder)
    tail = extract_tail(remainder)

    return LogEntry(
        timestamp=timestamp,
        operation=operation,
        file_descriptor=fields["file_descriptor"],
        bytes=fields["bytes"],
        device=fields["device"],
        path=extract_path(remainder, tail),
        duration=tail.duration if tail else 0.0,
        process=tail.process if tail else UNKNOWN_PROCESS,
    )
