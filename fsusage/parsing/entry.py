# Copyright (c) fsusage-analyzer Contributors.

"""
Structured record for a single fs_usage trace line.
"""

from dataclasses import dataclass
from datetime import time, timedelta
from typing import Any, NamedTuple, Optional


class DescriptorKey(NamedTuple):
    """Process-scoped file descriptor identity."""

    process: str
    file_descriptor: str


def format_time_of_day(offset: timedelta) -> str:
    """
    Render a time-of-day offset as HH:MM:SS.mmm.

    Example:
        timedelta(hours=12, milliseconds=123) -> "12:00:00.123"
    """
    total_ms = offset // timedelta(milliseconds=1)
    seconds, ms = divmod(total_ms, 1000)
    minutes, sec = divmod(seconds, 60)
    hours, minute = divmod(minutes, 60)
    return f"{hours:02d}:{minute:02d}:{sec:02d}.{ms:03d}"


def split_process(process: str) -> tuple[str, Optional[int]]:
    """
    Split a trailing ".<pid>" off a process token.

    Example:
        "Finder.1234" -> ("Finder", 1234); "kernel_task" -> ("kernel_task", None)
    """
    name, sep, suffix = process.rpartition(".")
    if sep and name and suffix.isdigit():
        return name, int(suffix)
    return process, None


@dataclass(frozen=True)
class LogEntry:
    """
    One parsed trace line.

    The timestamp is the offset since midnight of the (implicit) capture
    day, with millisecond resolution. Logs spanning midnight are not
    supported.

    Attributes:
        timestamp: Time-of-day offset
        operation: Syscall or operation name (e.g. "open", "stat64")
        file_descriptor: Descriptor number as text, scoped to ``process``
        bytes: Raw byte count token (decimal or 0x hex)
        device: Raw device token (0x hex)
        path: Filesystem path, may contain spaces
        duration: Latency in seconds
        process: Process token, "unknown" when the line had none
    """

    timestamp: timedelta
    operation: str
    file_descriptor: Optional[str]
    bytes: Optional[str]
    device: Optional[str]
    path: Optional[str]
    duration: float
    process: str

    @property
    def time_of_day(self) -> time:
        """Timestamp as a datetime.time."""
        ms = self.timestamp // timedelta(milliseconds=1)
        seconds, ms = divmod(ms, 1000)
        minutes, sec = divmod(seconds, 60)
        hours, minute = divmod(minutes, 60)
        return time(hours % 24, minute, sec, ms * 1000)

    @property
    def process_name(self) -> str:
        """Process token without a trailing ".<pid>" suffix."""
        return split_process(self.process)[0]

    @property
    def pid(self) -> Optional[int]:
        """PID appended to the process token, if any."""
        return split_process(self.process)[1]

    @property
    def descriptor_key(self) -> Optional[DescriptorKey]:
        if self.file_descriptor is None:
            return None
        return DescriptorKey(self.process, self.file_descriptor)

    def to_record(self) -> dict[str, Any]:
        """Plain dict view used by the formatters."""
        return {
            "timestamp": format_time_of_day(self.timestamp),
            "operation": self.operation,
            "fd": self.file_descriptor,
            "bytes": self.bytes,
            "device": self.device,
            "path": self.path,
            "duration": self.duration,
            "process": self.process,
        }
