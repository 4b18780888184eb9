"""Load delimited or JSON files into the row/table model."""
from __future__ import annotations

from pathlib import Path
from typing import Any
import json
import logging

import pandas as pd

from record_cleaner.cleaning.config import InvalidTableError

_CSV_SUFFIXES = {".csv", ".txt"}
_JSON_SUFFIXES = {".json"}


def _read_csv(path: Path) -> list[dict[str, Any]]:
    try:
        # Every cell stays a string and empty cells stay "" so the missing
        # value stage sees exactly what the file contained.
        frame = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        raise InvalidTableError(f"{path} is empty") from None
    except pd.errors.ParserError as exc:
        raise InvalidTableError(f"Could not parse {path}: {exc}") from exc
    return frame.to_dict(orient="records")


def _read_json(path: Path) -> list[dict[str, Any]]:
    with path.open(encoding="utf-8") as fh:
        try:
            payload = json.load(fh)
        except json.JSONDecodeError as exc:
            raise InvalidTableError(f"Could not parse {path}: {exc}") from exc

    if not isinstance(payload, list):
        raise InvalidTableError(f"{path} must contain a JSON array of objects")
    for index, row in enumerate(payload):
        if not isinstance(row, dict):
            raise InvalidTableError(f"Entry {index} in {path} is not a JSON object")
    return payload


def read_table(path: Path) -> list[dict[str, Any]]:
    """Read ``path`` into a list of row dictionaries.

    CSV and TXT files must have a header row. JSON files must hold an array of
    objects.
    """
    logger = logging.getLogger(__name__)
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in _CSV_SUFFIXES:
        rows = _read_csv(path)
    elif suffix in _JSON_SUFFIXES:
        rows = _read_json(path)
    else:
        raise InvalidTableError(f"Unsupported input file type: {path.suffix or path.name}")

    logger.info(f"Loaded {len(rows):,} rows from {path}")
    return rows
