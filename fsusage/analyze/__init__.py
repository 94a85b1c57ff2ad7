# Copyright (c) fsusage-analyzer Contributors.

"""
fsusage analyze module.

Provides aggregations over parsed entries:
- bin_by_time: Fixed-width time bins anchored at the earliest entry
- get_summary_stats: Totals, rankings and duration statistics
- map_descriptor_paths: Paths per (process, file descriptor) pair
"""

from .binning import bin_by_time, BinSummary, summarize_bins, time_bins, TimeBin
from .descriptors import map_descriptor_paths, PathActivity, select_descriptors
from .stats import get_summary_stats, RankedTable, SummaryStats

__all__ = [
    # Time binning
    "bin_by_time",
    "BinSummary",
    "summarize_bins",
    "time_bins",
    "TimeBin",
    # Statistics
    "get_summary_stats",
    "RankedTable",
    "SummaryStats",
    # Descriptor activity
    "map_descriptor_paths",
    "PathActivity",
    "select_descriptors",
]
