"""Command-line interface for the SQL table splitter."""

import argparse
import logging
import sys

from sql_table_splitter.errors import SplitError
from sql_table_splitter.runner import SplitConfig, main_split
from sql_table_splitter.runner.types import DEFAULT_CHUNK_SIZE, DEFAULT_PROGRESS_STEP
from sql_table_splitter.sink import DEFAULT_FLUSH_BYTES

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def positive_int(value: str) -> int:
    """Argparse type for strictly positive integers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sql-table-splitter",
        description="Split a large SQL dump into one file per table.",
        epilog="Example: sql-table-splitter -i database.sql -o split_files",
    )

    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Path to the input SQL file",
    )

    parser.add_argument(
        "-o",
        "--output",
        default="output",
        help="Output directory, created if missing (default: output)",
    )

    parser.add_argument(
        "--chunk-size",
        type=positive_int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Bytes read per chunk (default: {DEFAULT_CHUNK_SIZE})",
    )

    parser.add_argument(
        "--flush-bytes",
        type=positive_int,
        default=DEFAULT_FLUSH_BYTES,
        help=f"Flush table buffers once this much text is pending (default: {DEFAULT_FLUSH_BYTES})",
    )

    parser.add_argument(
        "--flush-statements",
        type=positive_int,
        default=None,
        help="Also flush once this many statements are pending (default: off)",
    )

    parser.add_argument(
        "--progress-step",
        type=positive_int,
        default=DEFAULT_PROGRESS_STEP,
        help=f"Log progress every this many bytes read (default: {DEFAULT_PROGRESS_STEP})",
    )

    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Text encoding of the dump, must be ASCII-compatible (default: utf-8)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    try:
        config = SplitConfig(
            chunk_size=args.chunk_size,
            flush_bytes=args.flush_bytes,
            flush_statements=args.flush_statements,
            progress_step=args.progress_step,
            encoding=args.encoding,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        main_split(args.input, args.output, config)
    except SplitError as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
