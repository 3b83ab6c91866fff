"""Per-table output routing."""

from sql_table_splitter.sink.sink import TableSink, table_file_stem
from sql_table_splitter.sink.types import DEFAULT_FLUSH_BYTES, SinkStats

__all__ = ["DEFAULT_FLUSH_BYTES", "SinkStats", "TableSink", "table_file_stem"]
