"""Configuration objects and error types for the cleaning engine."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CleaningError(Exception):
    """Base class for invocation-level cleaning failures."""


class ConfigurationError(CleaningError, ValueError):
    """Raised when a configuration cannot drive a pipeline run."""


class InvalidTableError(CleaningError, TypeError):
    """Raised when the input is not a sequence of string-keyed rows."""


DATE_TOKENS = ("YYYY", "MM", "DD")


class DateFormat(str, Enum):
    """Output formats offered out of the box. Anything else is a custom pattern."""

    ISO = "YYYY-MM-DD"
    DAY_FIRST = "DD/MM/YYYY"
    MONTH_FIRST = "MM/DD/YYYY"
    YEAR_FIRST = "YYYY/MM/DD"


class MissingValueStrategy(str, Enum):
    FLAG = "flag"
    REMOVE = "remove"
    FILL = "fill"


def _normalise_date_format(value: Any) -> str:
    if value is None:
        return DateFormat.ISO.value
    if isinstance(value, DateFormat):
        return value.value
    if not isinstance(value, str):
        raise ConfigurationError(f"Date format must be a string, got {type(value).__name__}")
    if not any(token in value for token in DATE_TOKENS):
        raise ConfigurationError(
            f"Date format {value!r} is not a known format and contains none of the tokens {', '.join(DATE_TOKENS)}"
        )
    return value


def _normalise_date_columns(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    # A bare string would otherwise be split into single-character column names.
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ConfigurationError("Date columns must be an iterable of column names")
    columns = list(value)
    for column in columns:
        if not isinstance(column, str):
            raise ConfigurationError(f"Date column names must be strings, got {column!r}")
    return frozenset(columns)


@dataclass(frozen=True)
class MissingValuePolicy:
    """How the always-on missing value stage treats null and empty cells."""

    strategy: MissingValueStrategy = MissingValueStrategy.FLAG
    fill_value: str = ""

    def __post_init__(self) -> None:
        try:
            strategy = MissingValueStrategy(self.strategy)
        except ValueError:
            raise ConfigurationError(f"Unknown missing value strategy: {self.strategy!r}") from None
        object.__setattr__(self, "strategy", strategy)

        fill_value = "" if self.fill_value is None else self.fill_value
        if not isinstance(fill_value, str):
            raise ConfigurationError(f"Fill value must be a string, got {type(fill_value).__name__}")
        object.__setattr__(self, "fill_value", fill_value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MissingValuePolicy":
        unknown = set(data) - {"strategy", "fillValue", "fill_value"}
        if unknown:
            raise ConfigurationError(f"Unknown missing value options: {', '.join(sorted(unknown))}")
        fill_value = data.get("fill_value", data.get("fillValue", ""))
        return cls(strategy=data.get("strategy", MissingValueStrategy.FLAG), fill_value=fill_value)


_CONFIG_KEYS = {
    "removeDuplicates": "remove_duplicates",
    "trimWhitespace": "trim_whitespace",
    "dateColumns": "date_columns",
    "dateFormat": "date_format",
    "missingValues": "missing_values",
}


@dataclass(frozen=True)
class CleaningConfig:
    """Configuration for the cleaning pipeline.

    Instances are immutable and validated on construction, so a pipeline run
    never starts with a configuration it cannot honour.
    """

    remove_duplicates: bool = False
    trim_whitespace: bool = False
    date_columns: frozenset[str] = frozenset()
    date_format: str = DateFormat.ISO.value
    missing_values: MissingValuePolicy = field(default_factory=MissingValuePolicy)

    def __post_init__(self) -> None:
        object.__setattr__(self, "date_columns", _normalise_date_columns(self.date_columns))
        object.__setattr__(self, "date_format", _normalise_date_format(self.date_format))

        policy = self.missing_values
        if policy is None:
            policy = MissingValuePolicy()
        elif isinstance(policy, Mapping):
            policy = MissingValuePolicy.from_dict(policy)
        elif not isinstance(policy, MissingValuePolicy):
            raise ConfigurationError("Missing value options must be a MissingValuePolicy or a mapping")
        object.__setattr__(self, "missing_values", policy)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CleaningConfig":
        """Build a configuration from camelCase or snake_case option names."""
        options: dict[str, Any] = {}
        for key, value in data.items():
            name = _CONFIG_KEYS.get(key, key)
            if name not in _CONFIG_KEYS.values():
                raise ConfigurationError(f"Unknown cleaning option: {key!r}")
            options[name] = value
        return cls(**options)
