"""Clean a raw CSV or JSON export and write the result next to the other cleaned files."""
from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from record_cleaner.cleaning import (
    CleaningConfig,
    CleaningError,
    DateFormat,
    MissingValuePolicy,
    MissingValueStrategy,
    clean_all,
    suggest_date_columns,
)
from record_cleaner.files import EXPORT_FORMATS, cleaned_filename, read_table, write_table
from record_cleaner.settings import CLEAN_OUTPUT_DIR, ensure_directories


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Clean a CSV or JSON table and export the result.")
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to the CSV, TXT or JSON file to clean.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Destination file. Defaults to data/clean/<name>_cleaned_<date>.<format>.",
    )
    parser.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default="csv",
        help="Export format (default: csv).",
    )
    parser.add_argument(
        "--remove-duplicates",
        action="store_true",
        help="Drop rows that exactly repeat an earlier row.",
    )
    parser.add_argument(
        "--trim-whitespace",
        action="store_true",
        help="Strip leading and trailing whitespace from text cells.",
    )
    parser.add_argument(
        "--date-column",
        action="append",
        default=[],
        dest="date_columns",
        help="Column to standardise as a date. Repeat for several columns.",
    )
    parser.add_argument(
        "--auto-date-columns",
        action="store_true",
        help="Also standardise columns whose names look like dates (date, time, created, dob).",
    )
    parser.add_argument(
        "--date-format",
        default=DateFormat.ISO.value,
        help="Output date format: one of "
        + ", ".join(fmt.value for fmt in DateFormat)
        + " or a custom pattern using YYYY, MM and DD (default: YYYY-MM-DD).",
    )
    parser.add_argument(
        "--missing-strategy",
        choices=[strategy.value for strategy in MissingValueStrategy],
        default=MissingValueStrategy.FLAG.value,
        help="How to treat empty cells (default: flag).",
    )
    parser.add_argument(
        "--fill-value",
        default="",
        help="Replacement for empty cells when --missing-strategy=fill.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level (default: INFO)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='[%(asctime)s] %(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    )
    logger = logging.getLogger(__name__)

    if not args.input.exists():
        logger.error(f"Input file does not exist: {args.input}")
        return 1

    start_time = time.time()
    try:
        rows = read_table(args.input)

        date_columns = list(args.date_columns)
        if args.auto_date_columns:
            columns: dict[str, None] = {}
            for row in rows:
                columns.update(dict.fromkeys(row))
            suggested = [column for column in suggest_date_columns(columns) if column not in date_columns]
            logger.info(f"Suggested date columns: {', '.join(suggested) or 'none'}")
            date_columns.extend(suggested)

        config = CleaningConfig(
            remove_duplicates=args.remove_duplicates,
            trim_whitespace=args.trim_whitespace,
            date_columns=date_columns,
            date_format=args.date_format,
            missing_values=MissingValuePolicy(args.missing_strategy, args.fill_value),
        )
        logger.info(f"Input file: {args.input}")
        logger.info(f"Remove duplicates: {config.remove_duplicates}")
        logger.info(f"Trim whitespace: {config.trim_whitespace}")
        logger.info(f"Date columns: {', '.join(sorted(config.date_columns)) or 'none'} ({config.date_format})")
        logger.info(f"Missing values: {config.missing_values.strategy.value}")

        cleaned, stats = clean_all(rows, config)

        ensure_directories()
        output = args.output or CLEAN_OUTPUT_DIR / cleaned_filename(args.input, args.format)
        write_table(cleaned, output, args.format)
    except CleaningError as e:
        elapsed = time.time() - start_time
        logger.error(f"Cleaning failed after {elapsed:.1f} seconds: {e}")
        raise

    elapsed = time.time() - start_time
    logger.info(f"Cleaning completed successfully in {elapsed:.1f} seconds")
    logger.info(f"Rows: {stats.original_rows:,} → {stats.final_rows:,}")
    logger.info(f"Duplicates removed: {stats.duplicates_removed:,}")
    logger.info(f"Cells trimmed: {stats.cells_trimmed:,}")
    logger.info(f"Dates fixed: {stats.dates_fixed:,}")
    unit = "rows" if config.missing_values.strategy is MissingValueStrategy.REMOVE else "cells"
    logger.info(f"Missing values handled: {stats.missing_values_handled:,} {unit}")
    logger.info(f"Output file: {output}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
