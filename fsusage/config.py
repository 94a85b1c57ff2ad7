# Copyright (c) fsusage-analyzer Contributors.

"""
Analyzer configuration and logging setup.

Collects the tunables shared by the parser, the aggregators and the CLI.
"""

import logging
import sys
from dataclasses import dataclass

DEFAULT_CHUNK_SIZE = 5000  # input lines per parse chunk
DEFAULT_TOP_N = 10
DEFAULT_BIN_WIDTH = 1.0  # seconds
UNKNOWN_PROCESS = "unknown"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class AnalyzerConfig:
    """
    Tunables for a single analysis run.

    Attributes:
        chunk_size: Number of input lines parsed between yields
        bin_width: Width of a time bin in seconds (fractional allowed)
        top_n: Number of rows shown in truncated ranking views
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    bin_width: float = DEFAULT_BIN_WIDTH
    top_n: int = DEFAULT_TOP_N

    def validate(self) -> "AnalyzerConfig":
        """
        Check that every value is usable.

        Returns:
            self, so the call can be chained

        Raises:
            ValueError: If any value is out of range
        """
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if not self.bin_width > 0:
            raise ValueError(f"bin_width must be positive, got {self.bin_width}")
        if self.top_n < 0:
            raise ValueError(f"top_n must be >= 0, got {self.top_n}")
        return self


def configure_logging(verbose: bool = False) -> None:
    """Route fsusage log records to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
