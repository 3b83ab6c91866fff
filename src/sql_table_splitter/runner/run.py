import logging
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from sql_table_splitter.classify import classify
from sql_table_splitter.errors import ReadError, SetupError
from sql_table_splitter.runner.types import RunContext, SplitConfig
from sql_table_splitter.sink import TableSink
from sql_table_splitter.stream import Statement, StatementSplitter, iter_chunks

logger = logging.getLogger(__name__)

GIB = 1024 * 1024 * 1024


def _read_chunks(handle: BinaryIO, chunk_size: int, path: Path) -> Iterator[bytes]:
    """Yield input chunks, turning I/O failures into ReadError."""
    try:
        yield from iter_chunks(handle, chunk_size)
    except OSError as exc:
        raise ReadError(f"Failed to read {path}: {exc}") from exc


def _report_progress(ctx: RunContext, step: int) -> None:
    if ctx.bytes_processed < ctx.next_progress:
        return

    percentage = 100 * ctx.bytes_processed / ctx.total_bytes if ctx.total_bytes else 100.0
    logger.info(
        "Progress: %.2f%% (%d statements, %.0fs elapsed)",
        percentage,
        ctx.statements,
        ctx.elapsed,
    )
    ctx.next_progress = (ctx.bytes_processed // step + 1) * step


def _route(statement: Statement, sink: TableSink, ctx: RunContext) -> None:
    table = classify(statement.text)
    sink.write(table, statement.render())
    ctx.record(table)


def split_file(
    input_path: str | Path,
    output_dir: str | Path,
    config: SplitConfig | None = None,
) -> RunContext:
    """
    Split a SQL dump into one file per table.

    Single pass over the input:
    1. Read fixed-size chunks
    2. Split each chunk into statements, carrying the unterminated tail
    3. Classify every statement and buffer it for its table file

    Table files are always closed, even when the run fails part way.
    """
    config = config or SplitConfig()
    ctx = RunContext(
        input_path=Path(input_path),
        output_dir=Path(output_dir),
        next_progress=config.progress_step,
    )

    try:
        ctx.total_bytes = ctx.input_path.stat().st_size
    except OSError as exc:
        raise SetupError(f"Failed to stat input file {ctx.input_path}: {exc}") from exc

    try:
        ctx.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SetupError(f"Failed to create output directory {ctx.output_dir}: {exc}") from exc

    try:
        handle = open(ctx.input_path, "rb")  # noqa: SIM115
    except OSError as exc:
        raise SetupError(f"Failed to open input file {ctx.input_path}: {exc}") from exc

    logger.info(
        "Starting: file=%s (%.2f GB), output=%s, chunk_size=%d",
        ctx.input_path.name,
        ctx.total_bytes / GIB,
        ctx.output_dir,
        config.chunk_size,
    )

    splitter = StatementSplitter(config.encoding)
    sink = TableSink(
        ctx.output_dir,
        flush_bytes=config.flush_bytes,
        flush_statements=config.flush_statements,
        encoding=config.encoding,
    )

    with handle, sink:
        for chunk in _read_chunks(handle, config.chunk_size, ctx.input_path):
            ctx.bytes_processed += len(chunk)
            _report_progress(ctx, config.progress_step)
            for statement in splitter.feed(chunk):
                _route(statement, sink, ctx)

        for statement in splitter.finish():
            _route(statement, sink, ctx)

        sink.flush()

    logger.info(
        "Done: %d statements into %d table files in %.2fs",
        ctx.statements,
        len(ctx.tables),
        ctx.elapsed,
    )
    return ctx


def main_split(
    input_path: str | Path,
    output_dir: str | Path,
    config: SplitConfig | None = None,
) -> None:
    """Main entry point that prints the completion summary to stdout."""
    ctx = split_file(input_path, output_dir, config)
    print(f"Split {ctx.statements} statements into {len(ctx.tables)} tables in {ctx.elapsed:.2f}s")
