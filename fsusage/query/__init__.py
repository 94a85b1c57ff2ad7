# Copyright (c) fsusage-analyzer Contributors.

"""
fsusage query module.

This module provides entry access functions for trace files:
- LogReader: Read and iterate over parsed entries
- select_entries: Head/tail selection over an entry stream
- EntryFilter, filter_by_file_descriptor, filter_by_path: Entry filtering
"""

from .filters import EntryFilter, filter_by_file_descriptor, filter_by_path
from .reader import LogReader, select_entries

__all__ = [
    "EntryFilter",
    "filter_by_file_descriptor",
    "filter_by_path",
    "LogReader",
    "select_entries",
]
