"""Chunked reading and statement splitting."""

from sql_table_splitter.stream.chunks import iter_chunks
from sql_table_splitter.stream.splitter import (
    StatementSplitter,
    is_valid_statement,
    split_statements,
)
from sql_table_splitter.stream.types import Statement

__all__ = [
    "Statement",
    "StatementSplitter",
    "is_valid_statement",
    "iter_chunks",
    "split_statements",
]
