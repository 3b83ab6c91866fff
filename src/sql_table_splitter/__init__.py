"""SQL Table Splitter - Split large SQL dumps into one file per table."""

from sql_table_splitter.runner import main_split, split_file

__all__ = ["split_file", "main_split"]
