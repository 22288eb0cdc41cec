from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

"""Tabular input reader (.csv / .xlsx) built on pandas.

Produces the shape the matcher and transformer work on: a header list plus
rows of column -> raw string. Every cell is read as text; pandas' NA
coercion is turned off so values like 'NA' or 'null' survive unchanged and
empty cells become ''.

Rows whose cells are all blank are dropped.
"""

__all__ = [
    "InputFileError",
    "TableData",
    "SUPPORTED_SUFFIXES",
    "read_table",
]

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


class InputFileError(Exception):
    """Raised when the input file is missing, empty or cannot be parsed."""


@dataclass
class TableData:
    headers: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def _load_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    # .xlsx: 1 行目をヘッダとする
    return pd.read_excel(path, dtype=str, keep_default_na=False)


def _cell(value: object) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value)


def read_table(path: Path) -> TableData:
    """Read a CSV or XLSX file into headers + string rows.

    Raises:
        InputFileError: file missing, unsupported extension, no header or unparsable
    """
    if not path.exists():
        raise InputFileError(f"input file not found: {path}")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise InputFileError(f"unsupported file type '{path.suffix}' (expected one of {SUPPORTED_SUFFIXES})")
    try:
        df = _load_frame(path)
    except pd.errors.EmptyDataError as e:
        raise InputFileError(f"input file has no header row: {path}") from e
    except (pd.errors.ParserError, ValueError) as e:
        raise InputFileError(f"cannot parse {path.name}: {e}") from e

    headers = [str(c).strip() for c in df.columns]
    collisions = sorted({h for h in headers if headers.count(h) > 1})
    if collisions:
        raise InputFileError(f"duplicate column header(s) after trimming whitespace: {', '.join(collisions)}")
    rows: list[dict[str, str]] = []
    for raw in df.itertuples(index=False, name=None):
        values = [_cell(v) for v in raw]
        if all(v.strip() == "" for v in values):
            continue
        rows.append(dict(zip(headers, values, strict=False)))
    return TableData(headers=headers, rows=rows)
