"""Export cleaned tables to CSV, JSON or parquet."""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from pathlib import Path
from typing import Any
import json
import logging
import re

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

EXPORT_FORMATS = ("csv", "json", "parquet")

# Spreadsheet applications evaluate cells starting with these characters.
_FORMULA_PREFIXES = ("=", "+", "@")
_SOURCE_SUFFIX = re.compile(r"\.(csv|txt)$", re.IGNORECASE)


def sanitize_for_export(table: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Prefix formula-like string cells with a quote so they are shown as text."""
    return [
        {
            column: f"'{value}" if isinstance(value, str) and value.startswith(_FORMULA_PREFIXES) else value
            for column, value in row.items()
        }
        for row in table
    ]


def _to_frame(table: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    # Rows may not share a column set; keep columns in first-seen order.
    columns: dict[str, None] = {}
    for row in table:
        columns.update(dict.fromkeys(row))
    return pd.DataFrame(list(table), columns=list(columns))


def _to_parquet_table(frame: pd.DataFrame) -> pa.Table:
    """Store every column as a string so mixed cells serialise reliably."""
    return pa.Table.from_pandas(frame.astype("string"), preserve_index=False)


def cleaned_filename(original: str | Path, fmt: str, today: date | None = None) -> str:
    """Derive ``<name>_cleaned_<YYYY-MM-DD>.<fmt>`` from the uploaded file name."""
    stamp = (today or date.today()).isoformat()
    base = _SOURCE_SUFFIX.sub("", Path(original).name)
    return f"{base}_cleaned_{stamp}.{fmt}"


def write_table(table: Sequence[Mapping[str, Any]], path: Path, fmt: str | None = None) -> Path:
    """Write ``table`` to ``path``.

    ``fmt`` defaults to the file suffix. CSV and parquet output is passed
    through :func:`sanitize_for_export`; JSON is written as-is.
    """
    logger = logging.getLogger(__name__)
    path = Path(path)
    fmt = (fmt or path.suffix.lstrip(".")).lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt!r} (expected one of {', '.join(EXPORT_FORMATS)})")

    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "csv":
        _to_frame(sanitize_for_export(table)).to_csv(path, index=False)
    elif fmt == "json":
        rows = [dict(row) for row in table]
        path.write_text(json.dumps(rows, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
    else:
        pq.write_table(_to_parquet_table(_to_frame(sanitize_for_export(table))), path)

    logger.info(f"Wrote {len(table):,} rows to {path} ({fmt})")
    return path
