"""CSV / XLSX input reading."""

from .reader import InputFileError, TableData, read_table

__all__ = [
    "InputFileError",
    "TableData",
    "read_table",
]
