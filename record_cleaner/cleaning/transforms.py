"""Row-level transforms used by the cleaning pipeline.

Every function here takes a table (a sequence of row mappings) and returns a
new list of rows together with a count. Input rows are never modified: a row
is copied before any of its cells change.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
import json

import pandas as pd

from .config import MissingValueStrategy

MISSING_MARKER = "[MISSING]"

# Unicode White_Space characters plus the byte order mark.
_WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)

Row = Mapping[str, Any]


def is_missing(value: Any) -> bool:
    """Return ``True`` for null, pandas NA-like scalars and the empty string.

    Whitespace-only strings are not missing.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def _tagged(value: Any) -> str:
    return f"{type(value).__name__}:{value}"


def _row_key(row: Row) -> str:
    # Sorting keys makes column insertion order irrelevant to equality. Values
    # JSON cannot encode are tagged with their type so Decimal("1") != "1".
    return json.dumps(dict(row), sort_keys=True, default=_tagged, ensure_ascii=False)


def remove_duplicate_rows(table: Sequence[Row]) -> tuple[list[dict[str, Any]], int]:
    """Drop exact duplicate rows, keeping the first occurrence of each."""
    seen: set[str] = set()
    unique_rows: list[dict[str, Any]] = []
    removed = 0

    for row in table:
        key = _row_key(row)
        if key in seen:
            removed += 1
            continue
        seen.add(key)
        unique_rows.append(dict(row))

    return unique_rows, removed


def trim_whitespace(table: Sequence[Row]) -> tuple[list[dict[str, Any]], int]:
    """Strip leading and trailing whitespace from every string cell."""
    trimmed_count = 0
    cleaned: list[dict[str, Any]] = []

    for row in table:
        new_row = dict(row)
        for column, value in new_row.items():
            if not isinstance(value, str):
                continue
            trimmed = value.strip(_WHITESPACE)
            if trimmed != value:
                new_row[column] = trimmed
                trimmed_count += 1
        cleaned.append(new_row)

    return cleaned, trimmed_count


def handle_missing_values(
    table: Sequence[Row],
    strategy: MissingValueStrategy | str,
    fill_value: str = "",
) -> tuple[list[dict[str, Any]], int]:
    """Apply a missing value strategy.

    The returned count is measured in rows for ``remove`` (rows dropped) and
    in cells for ``flag`` and ``fill`` (cells replaced).
    """
    strategy = MissingValueStrategy(strategy)

    if strategy is MissingValueStrategy.REMOVE:
        kept: list[dict[str, Any]] = []
        removed = 0
        for row in table:
            if any(is_missing(value) for value in row.values()):
                removed += 1
            else:
                kept.append(dict(row))
        return kept, removed

    replacement = MISSING_MARKER if strategy is MissingValueStrategy.FLAG else fill_value
    affected = 0
    cleaned: list[dict[str, Any]] = []
    for row in table:
        new_row = dict(row)
        for column, value in new_row.items():
            if is_missing(value):
                new_row[column] = replacement
                affected += 1
        cleaned.append(new_row)

    return cleaned, affected
