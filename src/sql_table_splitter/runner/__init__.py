"""Single-pass split orchestration."""

from sql_table_splitter.runner.run import main_split, split_file
from sql_table_splitter.runner.types import RunContext, SplitConfig

__all__ = ["RunContext", "SplitConfig", "main_split", "split_file"]
