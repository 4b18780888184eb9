"""Record cleaning package."""

from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "__version__",
]

try:
    __version__ = version("record-cleaner")
except PackageNotFoundError:  # pragma: no cover - distribution not installed
    __version__ = "0.0.0"
