"""Reading raw tables and exporting cleaned ones."""

from .readers import read_table
from .writers import EXPORT_FORMATS, cleaned_filename, sanitize_for_export, write_table

__all__ = ["EXPORT_FORMATS", "cleaned_filename", "read_table", "sanitize_for_export", "write_table"]
