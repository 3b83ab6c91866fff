"""Buffered per-table output files."""

import logging
from pathlib import Path
from typing import BinaryIO

from sql_table_splitter.errors import WriteError
from sql_table_splitter.sink.types import DEFAULT_FLUSH_BYTES, TABLE_FILE_SUFFIX, SinkStats

logger = logging.getLogger(__name__)

# Characters that would let a table name escape the output directory.
_UNSAFE_CHARS = str.maketrans({"/": "_", "\\": "_", "\0": "_"})


def table_file_stem(table: str) -> str:
    """Map a table name to its output file stem."""
    return table.translate(_UNSAFE_CHARS)


class TableSink:
    """
    Route statements to one output file per table.

    Files are created lazily on the first statement for a table and stay open
    until close_all(). Statements are buffered per table and written in bulk
    once the pending size or count crosses its threshold.
    """

    def __init__(
        self,
        output_dir: Path,
        flush_bytes: int = DEFAULT_FLUSH_BYTES,
        flush_statements: int | None = None,
        encoding: str = "utf-8",
    ):
        self._output_dir = output_dir
        self._flush_bytes = flush_bytes
        self._flush_statements = flush_statements
        self._encoding = encoding
        self._handles: dict[str, BinaryIO] = {}
        self._paths: dict[str, Path] = {}
        self._buffers: dict[str, list[str]] = {}
        # Pending size is counted in characters, which matches bytes for ASCII dumps.
        self._pending_bytes = 0
        self._pending_statements = 0
        self.stats = SinkStats()

    def __enter__(self) -> "TableSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close_all()
            return

        # Already failing: report close errors but let the original error propagate.
        try:
            self.close_all()
        except WriteError as close_error:
            logger.error("%s", close_error)

    @property
    def paths(self) -> list[Path]:
        """Paths of every table file opened so far, in creation order."""
        return list(self._paths.values())

    def _get_path(self, stem: str) -> Path:
        return self._output_dir / f"{stem}{TABLE_FILE_SUFFIX}"

    def _open(self, stem: str) -> None:
        path = self._get_path(stem)
        try:
            handle = open(path, "wb")  # noqa: SIM115
        except OSError as exc:
            raise WriteError(f"Failed to create table file {path}: {exc}") from exc

        self._handles[stem] = handle
        self._paths[stem] = path
        self._buffers[stem] = []
        self.stats.files_opened += 1
        logger.debug("Opened %s", path)

    def _should_flush(self) -> bool:
        if self._pending_bytes > self._flush_bytes:
            return True
        return self._flush_statements is not None and self._pending_statements >= self._flush_statements

    def write(self, table: str, statement: str) -> None:
        """Buffer a statement for a table, flushing everything if a threshold is crossed."""
        stem = table_file_stem(table)
        if stem not in self._handles:
            self._open(stem)

        self._buffers[stem].append(statement)
        self._pending_bytes += len(statement) + 1
        self._pending_statements += 1

        if self._should_flush():
            self.flush()

    def flush(self) -> None:
        """Write every non-empty buffer to its file in one call and clear it."""
        written = 0
        for stem, buffer in self._buffers.items():
            if not buffer:
                continue

            data = ("\n".join(buffer) + "\n").encode(self._encoding, "surrogateescape")
            handle = self._handles[stem]
            try:
                handle.write(data)
                handle.flush()
            except OSError as exc:
                raise WriteError(f"Failed to write {self._paths[stem]}: {exc}") from exc

            # Clear in place so the list keeps its capacity.
            buffer.clear()
            written += len(data)

        self._pending_bytes = 0
        self._pending_statements = 0
        if written:
            self.stats.flushes += 1
            self.stats.bytes_written += written
            logger.debug("Flushed %d bytes", written)

    def close_all(self) -> None:
        """Close every open table file exactly once."""
        error: WriteError | None = None
        for stem, handle in self._handles.items():
            try:
                handle.close()
            except OSError as exc:
                if error is None:
                    error = WriteError(f"Failed to close {self._paths[stem]}: {exc}")
                    error.__cause__ = exc
        self._handles.clear()
        self._buffers.clear()
        self._pending_bytes = 0
        self._pending_statements = 0

        if error is not None:
            raise error
