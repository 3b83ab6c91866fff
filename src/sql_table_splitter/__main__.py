import sys

from sql_table_splitter.cli import main

sys.exit(main())
