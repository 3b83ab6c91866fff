#!/usr/bin/env python3
"""
Synthetic SQL dump generator for splitter benchmarks.

Generates a large dump with many tables: a DROP/CREATE preamble per table,
then INSERT rows interleaved across tables with occasional UPDATE, DELETE and
comment lines. Statements are written one per line like a mysqldump file.
"""

import argparse
import random
import sys

# Large buffer for efficient streaming writes
BUFFER_SIZE = 1024 * 1024  # 1MB


def table_name(idx: int) -> str:
    return f"table_{idx:04d}"


def write_schema(f, tables: int) -> int:
    """Write DROP and CREATE statements for every table. Returns statement count."""
    for t in range(tables):
        name = table_name(t)
        f.write(f"DROP TABLE IF EXISTS `{name}`;\n")
        f.write(
            f"CREATE TABLE `{name}` (\n"
            "  `id` int NOT NULL,\n"
            "  `payload` varchar(255) DEFAULT NULL,\n"
            "  PRIMARY KEY (`id`)\n"
            ");\n"
        )
    return tables * 2


def generate_synthetic_dump(
    output_path: str,
    tables: int,
    rows: int,
    mutation_rate: float,
    seed: int,
) -> int:
    """
    Generate a synthetic dump and return the number of statements written.

    Streams output statement-by-statement to avoid memory issues.
    """
    rng = random.Random(seed)
    alphabet = "abcdefghijklmnopqrstuvwxyz "

    with open(output_path, "w", encoding="utf-8", buffering=BUFFER_SIZE) as f:
        # Comment-only header, dropped by the splitter and not counted.
        f.write("-- Synthetic dump\n/*!40101 SET NAMES utf8 */;\n")
        total = write_schema(f, tables)

        for row in range(rows):
            name = table_name(rng.randrange(tables))
            payload = "".join(rng.choice(alphabet) for _ in range(rng.randint(8, 64)))
            f.write(f"INSERT INTO `{name}` VALUES ({row},'{payload}');\n")
            total += 1

            if rng.random() < mutation_rate:
                if rng.random() < 0.5:
                    f.write(f"UPDATE `{name}` SET `payload` = NULL WHERE `id` = {row};\n")
                else:
                    f.write(f"DELETE FROM `{name}` WHERE `id` = {row};\n")
                total += 1

            # Progress indicator every 1M rows
            if (row + 1) % 1_000_000 == 0:
                print(f"  Generated {row + 1}/{rows} rows...", file=sys.stderr)

    return total


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic SQL dump.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # ~1GB dump across 50 tables
  python generate_synthetic_dump.py --out data/synthetic.sql --tables 50 --rows 12000000

  # Few tables, many mutations
  python generate_synthetic_dump.py --out data/mutations.sql --tables 3 --mutation-rate 0.3
""",
    )

    parser.add_argument(
        "--out",
        required=True,
        help="Output file path",
    )
    parser.add_argument(
        "--tables",
        type=int,
        default=50,
        help="Number of tables (default: 50)",
    )
    parser.add_argument(
        "--rows",
        type=int,
        default=1_000_000,
        help="Number of INSERT rows across all tables (default: 1000000)",
    )
    parser.add_argument(
        "--mutation-rate",
        type=float,
        default=0.05,
        help="Chance of an UPDATE or DELETE after each insert (default: 0.05)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    if args.tables < 1:
        parser.error("--tables must be at least 1")
    if args.rows < 0:
        parser.error("--rows must not be negative")
    if not 0.0 <= args.mutation_rate <= 1.0:
        parser.error("--mutation-rate must be between 0 and 1")

    print(f"Output: {args.out}", file=sys.stderr)
    print(f"Tables: {args.tables:,}", file=sys.stderr)
    print(f"Rows: {args.rows:,}", file=sys.stderr)

    total = generate_synthetic_dump(
        output_path=args.out,
        tables=args.tables,
        rows=args.rows,
        mutation_rate=args.mutation_rate,
        seed=args.seed,
    )

    print(f"Done! Wrote {total:,} statements to {args.out}", file=sys.stderr)


if __name__ == "__main__":
    main()
