# Copyright (c) fsusage-analyzer Contributors.

"""
fs_usage trace parsing.

This module turns raw trace text into LogEntry records:
- parse_line: Parse a single line (None when unparseable)
- parse_log_content / iter_entry_chunks: Parse whole traces in chunks
- open_log_file: Read plain or Zstd-compressed trace files
"""

from .compression import compress_text, is_zstd_file, open_log_file
from .entry import DescriptorKey, format_time_of_day, LogEntry, split_process
from .file_parser import (
    decode_content,
    iter_entry_chunks,
    parse_log_content,
    parse_log_lines,
    UnreadableLogError,
)
from .line_parser import parse_line

__all__ = [
    "compress_text",
    "decode_content",
    "DescriptorKey",
    "format_time_of_day",
    "is_zstd_file",
    "iter_entry_chunks",
    "LogEntry",
    "open_log_file",
    "parse_line",
    "parse_log_content",
    "parse_log_lines",
    "split_process",
    "UnreadableLogError",
]
