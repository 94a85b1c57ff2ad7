# Copyright (c) fsusage-analyzer Contributors.

"""
Zstd support for archived fs_usage captures.

Captures are recognized by content, not by file name, so a renamed
``capture.log`` that holds a Zstd frame still reads as text.
"""

import io
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO, Union

import zstandard as zstd

# Zstd frame magic number, little-endian 0xFD2FB528
ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


def is_zstd_file(filepath: Union[str, Path]) -> bool:
    """
    Check whether a capture starts with a Zstd frame.

    Raises:
        FileNotFoundError: If file does not exist
    """
    with open(filepath, "rb") as f:
        return f.read(len(ZSTD_MAGIC)) == ZSTD_MAGIC


@contextmanager
def open_log_file(filepath: Union[str, Path]) -> Iterator[TextIO]:
    """
    Open a capture as UTF-8 text, decompressing Zstd captures on the fly.

    Captures appended to over time (``fs_usage | zstd >> capture.zst``)
    hold several frames; all of them are read.

    Example:
        >>> with open_log_file("capture.log.zst") as f:
        ...     entries = parse_log_lines(f)
    """
    filepath = Path(filepath)
    if not is_zstd_file(filepath):
        with open(filepath, "r", encoding="utf-8") as f:
            yield f
        return

    with open(filepath, "rb") as raw:
        reader = zstd.ZstdDecompressor().stream_reader(raw, read_across_frames=True)
        with io.TextIOWrapper(reader, encoding="utf-8") as text:
            yield text


def compress_text(text: str) -> bytes:
    """Compress text as a single Zstd frame."""
    return zstd.ZstdCompressor().compress(text.encode("utf-8"))
