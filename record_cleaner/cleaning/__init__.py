"""Cleaning pipeline entry points."""

from .batch import BatchJob, BatchOutcome, clean_batch
from .config import (
    CleaningConfig,
    CleaningError,
    ConfigurationError,
    DateFormat,
    InvalidTableError,
    MissingValuePolicy,
    MissingValueStrategy,
)
from .dates import format_date, parse_date, standardize_dates, suggest_date_columns
from .pipeline import CleaningResult, CleaningStats, clean, clean_all, clean_dataframe
from .transforms import handle_missing_values, remove_duplicate_rows, trim_whitespace

__all__ = [
    "BatchJob",
    "BatchOutcome",
    "CleaningConfig",
    "CleaningError",
    "CleaningResult",
    "CleaningStats",
    "ConfigurationError",
    "DateFormat",
    "InvalidTableError",
    "MissingValuePolicy",
    "MissingValueStrategy",
    "clean",
    "clean_all",
    "clean_batch",
    "clean_dataframe",
    "format_date",
    "handle_missing_values",
    "parse_date",
    "remove_duplicate_rows",
    "standardize_dates",
    "suggest_date_columns",
    "trim_whitespace",
]
