"""Orchestrates the cleaning stages and collects run statistics."""
from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any, NamedTuple
import logging
import time

import pandas as pd

from .config import CleaningConfig, ConfigurationError, InvalidTableError
from .dates import standardize_dates
from .transforms import handle_missing_values, remove_duplicate_rows, trim_whitespace

logger = logging.getLogger(__name__)

Table = Sequence[Mapping[str, Any]]


@dataclass
class CleaningStats:
    """Counts describing what a pipeline run changed.

    ``missing_values_handled`` counts rows when the ``remove`` strategy ran
    and cells for ``flag`` and ``fill``.
    """

    original_rows: int = 0
    final_rows: int = 0
    duplicates_removed: int = 0
    dates_fixed: int = 0
    cells_trimmed: int = 0
    missing_values_handled: int = 0

    def as_dict(self) -> dict[str, int]:
        """Return the stats keyed the way configuration sources name them."""
        return {_camel_case(name): value for name, value in asdict(self).items()}


class CleaningResult(NamedTuple):
    data: list[dict[str, Any]]
    stats: CleaningStats


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _validate_table(table: Any) -> None:
    if not isinstance(table, (list, tuple)):
        raise InvalidTableError(f"Expected a list of rows, got {type(table).__name__}")
    for index, row in enumerate(table):
        if not isinstance(row, Mapping):
            raise InvalidTableError(f"Row {index} is a {type(row).__name__}, expected a mapping")
        for column in row:
            if not isinstance(column, str):
                raise InvalidTableError(f"Row {index} has a non-string column name: {column!r}")


# (enabled, stats field, stage) in execution order. The missing value stage
# has no toggle and always runs.
_Stage = tuple[
    Callable[[CleaningConfig], bool],
    str,
    Callable[[list[dict[str, Any]], CleaningConfig], tuple[list[dict[str, Any]], int]],
]

_STAGES: tuple[_Stage, ...] = (
    (
        lambda cfg: cfg.remove_duplicates,
        "duplicates_removed",
        lambda rows, cfg: remove_duplicate_rows(rows),
    ),
    (
        lambda cfg: cfg.trim_whitespace,
        "cells_trimmed",
        lambda rows, cfg: trim_whitespace(rows),
    ),
    (
        lambda cfg: bool(cfg.date_columns),
        "dates_fixed",
        lambda rows, cfg: standardize_dates(rows, cfg.date_columns, cfg.date_format),
    ),
    (
        lambda cfg: True,
        "missing_values_handled",
        lambda rows, cfg: handle_missing_values(rows, cfg.missing_values.strategy, cfg.missing_values.fill_value),
    ),
)


def clean_all(table: Table, config: CleaningConfig | None = None) -> CleaningResult:
    """Run every configured cleaning stage over ``table``.

    Parameters
    ----------
    table:
        Sequence of rows, each a mapping of column name to scalar value. The
        caller's rows are never modified.
    config:
        Optional :class:`CleaningConfig` or a mapping accepted by
        :meth:`CleaningConfig.from_dict`. Defaults flag missing values only.

    Returns
    -------
    CleaningResult:
        The cleaned rows and a :class:`CleaningStats`. Unpacks as
        ``(rows, stats)``.

    Raises
    ------
    InvalidTableError:
        If ``table`` is not a list or tuple of string-keyed mappings.
    ConfigurationError:
        If ``config`` is neither a :class:`CleaningConfig` nor a valid
        mapping of options.
    """
    cfg = config or CleaningConfig()
    if not isinstance(cfg, CleaningConfig):
        if isinstance(cfg, Mapping):
            cfg = CleaningConfig.from_dict(cfg)
        else:
            raise ConfigurationError(f"Expected a CleaningConfig, got {type(cfg).__name__}")
    _validate_table(table)

    start_time = time.time()
    stats = CleaningStats(original_rows=len(table))
    rows: list[dict[str, Any]] = list(table)

    for enabled, stat_field, stage in _STAGES:
        if not enabled(cfg):
            continue
        rows, count = stage(rows, cfg)
        setattr(stats, stat_field, count)
        logger.debug(f"Stage {stat_field}: {count:,} ({len(rows):,} rows remaining)")

    stats.final_rows = len(rows)
    elapsed = time.time() - start_time
    logger.info(
        f"Cleaned {stats.original_rows:,} rows → {stats.final_rows:,} in {elapsed:.3f}s "
        f"(duplicates={stats.duplicates_removed:,}, trimmed={stats.cells_trimmed:,}, "
        f"dates={stats.dates_fixed:,}, missing={stats.missing_values_handled:,})"
    )
    return CleaningResult(rows, stats)


clean = clean_all


def clean_dataframe(frame: pd.DataFrame, config: CleaningConfig | None = None) -> tuple[pd.DataFrame, CleaningStats]:
    """Clean a DataFrame by round-tripping it through row records."""
    records = frame.to_dict(orient="records")
    # DataFrame column labels are not always strings.
    records = [{str(column): value for column, value in record.items()} for record in records]
    rows, stats = clean_all(records, config)
    columns = [str(column) for column in frame.columns]
    return pd.DataFrame(rows, columns=columns), stats
