"""Configuration and run-state structures for splitting."""

import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from sql_table_splitter.sink.types import DEFAULT_FLUSH_BYTES
from sql_table_splitter.stream.splitter import check_encoding

# 16MB read buffer.
DEFAULT_CHUNK_SIZE = 16 * 1024 * 1024

# Log progress every 64MB read.
DEFAULT_PROGRESS_STEP = 64 * 1024 * 1024


@dataclass(frozen=True)
class SplitConfig:
    """Tunables for one split run."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    flush_bytes: int = DEFAULT_FLUSH_BYTES
    flush_statements: int | None = None
    progress_step: int = DEFAULT_PROGRESS_STEP
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        for name in ("chunk_size", "flush_bytes", "progress_step"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.flush_statements is not None and self.flush_statements <= 0:
            raise ValueError(f"flush_statements must be positive, got {self.flush_statements}")
        check_encoding(self.encoding)


@dataclass
class RunContext:
    """Mutable state of one split run, passed explicitly through the pipeline."""

    input_path: Path
    output_dir: Path
    total_bytes: int = 0
    bytes_processed: int = 0
    statements: int = 0
    tables: Counter[str] = field(default_factory=Counter)
    start_time: float = field(default_factory=time.perf_counter)
    next_progress: int = 0

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.start_time

    def record(self, table: str) -> None:
        self.statements += 1
        self.tables[table] += 1
