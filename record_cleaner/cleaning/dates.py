"""Date parsing heuristics and date column standardisation."""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, NamedTuple
import functools
import re

import pandas as pd

from .config import DateFormat
from .transforms import is_missing

INVALID_DATE_MARKER = "[INVALID DATE] "

_DATE_COLUMN_HINTS = ("date", "time", "created", "dob")

_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)

# Tried in order after the ISO check; the first pattern that matches decides
# the outcome. Matches are anchored at the start only, so trailing time
# components are ignored.
_DATE_PATTERNS = (
    (re.compile(r"^(\d{4})[/-](\d{1,2})[/-](\d{1,2})", re.ASCII), ("year", "month", "day")),
    (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})", re.ASCII), ("month", "day", "year")),
    (re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})", re.ASCII), ("day", "month", "year")),
)

_FORMAT_TOKENS = re.compile(r"YYYY|MM|DD")

# Free-form strings pandas resolves relative to the clock.
_RELATIVE_WORDS = frozenset({"now", "today"})


class DateParts(NamedTuple):
    year: int
    month: int
    day: int


def _validated(year: int, month: int, day: int) -> DateParts | None:
    # Day-of-month is not checked against the month length or leap years.
    if not 1 <= month <= 12:
        return None
    if not 1 <= day <= 31:
        return None
    return DateParts(year, month, day)


def _parse_free_form(text: str) -> DateParts | None:
    if text.casefold() in _RELATIVE_WORDS:
        return None
    # Without a four digit year the parser would fill in the current one.
    if not re.search(r"\d{4}", text, re.ASCII):
        return None
    try:
        parsed = pd.Timestamp(text)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return _validated(parsed.year, parsed.month, parsed.day)


@functools.lru_cache(maxsize=4096)
def parse_date(text: str) -> DateParts | None:
    """Extract year, month and day from ``text``.

    Recognised shapes, in priority order: ``YYYY-MM-DD``, year-first
    ``YYYY/M/D`` or ``YYYY-M-D``, US ``M/D/YYYY``, European ``D-M-YYYY`` or
    ``D/M/YYYY``, then anything :class:`pandas.Timestamp` understands.
    Returns ``None`` when nothing matches or the month/day are out of range.
    """
    text = text.strip()
    if not text:
        return None

    iso = _ISO_DATE.fullmatch(text)
    if iso:
        year, month, day = (int(group) for group in iso.groups())
        return _validated(year, month, day)

    for pattern, fields in _DATE_PATTERNS:
        match = pattern.match(text)
        if match:
            values = dict(zip(fields, (int(group) for group in match.groups())))
            return _validated(values["year"], values["month"], values["day"])

    return _parse_free_form(text)


def format_date(year: int, month: int, day: int, date_format: DateFormat | str = DateFormat.ISO) -> str:
    """Render a date using ``YYYY``, ``MM`` and ``DD`` tokens.

    ``date_format`` is either a :class:`DateFormat` or a custom pattern such as
    ``"DD.MM.YYYY"``; text around the tokens is kept verbatim.
    """
    if _validated(year, month, day) is None:
        raise ValueError(f"Invalid date parts: year={year}, month={month}, day={day}")

    pattern = date_format.value if isinstance(date_format, DateFormat) else date_format
    values = {"YYYY": f"{year:04d}", "MM": f"{month:02d}", "DD": f"{day:02d}"}
    return _FORMAT_TOKENS.sub(lambda match: values[match.group(0)], pattern)


def standardize_dates(
    table: Sequence[Mapping[str, Any]],
    date_columns: Iterable[str],
    date_format: DateFormat | str = DateFormat.ISO,
) -> tuple[list[dict[str, Any]], int]:
    """Rewrite the configured date columns into ``date_format``.

    Null and blank cells are left alone. Cells that cannot be parsed are
    prefixed with ``[INVALID DATE]`` and never counted as fixed.
    """
    columns = tuple(date_columns)
    fixed_count = 0
    cleaned: list[dict[str, Any]] = []

    for row in table:
        new_row = dict(row)
        for column in columns:
            if column not in new_row:
                continue
            value = new_row[column]
            if is_missing(value):
                continue

            original = str(value)
            if not original.strip():
                continue

            parts = parse_date(original)
            if parts is None:
                new_row[column] = INVALID_DATE_MARKER + original
                continue

            rendered = format_date(*parts, date_format)
            if rendered != original:
                new_row[column] = rendered
                fixed_count += 1
        cleaned.append(new_row)

    return cleaned, fixed_count


def suggest_date_columns(columns: Iterable[str]) -> list[str]:
    """Guess which columns hold dates from their names."""
    return [column for column in columns if any(hint in column.casefold() for hint in _DATE_COLUMN_HINTS)]
