# Copyright (c) fsusage-analyzer Contributors.

"""
Pytest configuration and shared fixtures for fsusage tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from fsusage.parsing import compress_text, LogEntry, parse_log_content
from tests.test_base import SAMPLE_LOG


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_log_file(temp_dir: Path) -> Path:
    """Plain-text fs_usage capture."""
    filepath = temp_dir / "capture.log"
    filepath.write_text(SAMPLE_LOG, encoding="utf-8")
    return filepath


@pytest.fixture
def sample_zst_file(temp_dir: Path) -> Path:
    """Zstd-compressed copy of the sample capture."""
    filepath = temp_dir / "capture.log.zst"
    filepath.write_bytes(compress_text(SAMPLE_LOG))
    return filepath


@pytest.fixture
def sample_entries() -> list[LogEntry]:
    """Parsed entries of the sample capture."""
    return parse_log_content(SAMPLE_LOG)
