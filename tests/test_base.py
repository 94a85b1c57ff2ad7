# Copyright (c) fsusage-analyzer Contributors.

"""
Base test class and shared test data for fsusage tests.
"""

import shutil
import tempfile
import unittest
from datetime import timedelta
from pathlib import Path
from typing import Optional

from fsusage.parsing.entry import LogEntry

# fs_usage output with two unparseable lines (garbage and blank)
SAMPLE_LINES = [
    "12:00:00.123456  open              F=3        (R_____)  /Users/x/file.txt         0.000050   processA",
    "12:00:00.150000  read              F=3    B=0x1000                                  0.000020   processA",
    "12:00:00.900000  stat64                     /Users/x/My Documents/report.pdf        0.000100   Finder.1234",
    "garbage text",
    "",
    "12:00:01.250000  write             F=5    B=512    /private/tmp/out.log             0.000300   processB",
    "12:00:01.300000  close             F=3                                              0.000010   processA",
    "12:00:02.700000  getattrlist                /Users/x/file.txt                       0.000040   Finder.1234",
    "12:00:02.800000  open              F=5        (R_____)  /Users/x/other.txt         0.000060   processA",
]
SAMPLE_LOG = "\n".join(SAMPLE_LINES) + "\n"

SAMPLE_LINE_COUNT = 9
SAMPLE_ENTRY_COUNT = 7

# Undecodable as UTF-8
INVALID_UTF8 = b"12:00:00.000000 open \xff\xfe /tmp/x 0.1 proc\n"


def ts(hours: int = 12, minutes: int = 0, seconds: int = 0, ms: int = 0) -> timedelta:
    """Time-of-day offset helper."""
    return timedelta(hours=hours, minutes=minutes, seconds=seconds, milliseconds=ms)


def make_entry(
    timestamp: timedelta = timedelta(hours=12),
    operation: str = "open",
    file_descriptor: Optional[str] = None,
    path: Optional[str] = None,
    duration: float = 0.0,
    process: str = "proc",
    bytes: Optional[str] = None,
    device: Optional[str] = None,
) -> LogEntry:
    """Build a LogEntry with defaults for the fields a test does not care about."""
    return LogEntry(
        timestamp=timestamp,
        operation=operation,
        file_descriptor=file_descriptor,
        bytes=bytes,
        device=device,
        path=path,
        duration=duration,
        process=process,
    )


class BaseLogTest(unittest.TestCase):
    """Base class for tests that need files on disk."""

    def setUp(self):
        """Create a temporary directory for test files."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Remove the temporary directory."""
        shutil.rmtree(self.temp_dir)

    def create_temp_file(self, filename: str, content: str) -> Path:
        """Create a temporary file with given content."""
        filepath = self.temp_dir / filename
        filepath.write_text(content, encoding="utf-8")
        return filepath

    def create_sample_log(self, filename: str = "capture.log") -> Path:
        return self.create_temp_file(filename, SAMPLE_LOG)
