# Copyright (c) fsusage-analyzer Contributors.

"""
fsusage: parsing and aggregation tools for fs_usage filesystem traces.
"""
