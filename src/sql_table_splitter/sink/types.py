"""Shared constants and metadata structures for table output."""

from dataclasses import dataclass

# Flush once this much statement text is pending across all tables.
DEFAULT_FLUSH_BYTES = 16 * 1024 * 1024

# Extension of every table file.
TABLE_FILE_SUFFIX = ".sql"


@dataclass
class SinkStats:
    """Statistics from a TableSink's lifetime."""

    files_opened: int = 0
    flushes: int = 0
    bytes_written: int = 0
