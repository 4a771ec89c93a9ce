"""
app/services/sheet_reader.py

Parses uploaded CSV and XLSX files into headers plus fully materialized rows.
"""

from __future__ import annotations

import math
import string
from dataclasses import dataclass
from io import BytesIO
from pathlib import PurePath
from typing import Any

import pandas as pd

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".csv", ".xlsx")
MAX_SHEET_COLUMNS = 26


class SheetParseError(ValueError):
    """
    Raised when an uploaded file cannot be read as a parts sheet.
    """


@dataclass(frozen=True)
class ParsedSheet:
    """
    Header row and data rows of one uploaded sheet.
    """

    headers: list[str]
    rows: list[dict[str, Any]]

    @property
    def row_count(self) -> int:
        return len(self.rows)


def sheet_extension(filename: str | None) -> str:
    suffix = PurePath(filename or "").suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise SheetParseError("Only .csv and .xlsx files are supported.")
    return suffix


def read_sheet(content: bytes, filename: str | None) -> ParsedSheet:
    """
    Dispatch on the file extension and parse the whole file.
    """

    extension = sheet_extension(filename)
    if extension == ".csv":
        return read_csv_bytes(content)
    return read_xlsx_bytes(content)


def read_csv_bytes(content: bytes) -> ParsedSheet:
    """
    Read a UTF-8 CSV (BOM tolerated). Every cell is kept as a string.
    """

    try:
        frame = pd.read_csv(
            BytesIO(content),
            dtype=str,
            encoding="utf-8-sig",
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except UnicodeDecodeError as exc:
        raise SheetParseError("CSV must be UTF-8 encoded.") from exc
    except pd.errors.EmptyDataError as exc:
        raise SheetParseError("CSV file is empty.") from exc
    except pd.errors.ParserError as exc:
        raise SheetParseError(f"Invalid CSV format: {exc}") from exc

    headers = [str(column).strip() for column in frame.columns]
    frame.columns = headers
    rows = [
        {header: _cell_value(value) for header, value in record.items()}
        for record in frame.to_dict(orient="records")
    ]
    rows = [row for row in rows if not _is_blank_row(row)]
    if not rows:
        raise SheetParseError("Sheet has no data rows.")
    return ParsedSheet(headers=headers, rows=rows)


def read_xlsx_bytes(content: bytes) -> ParsedSheet:
    """
    Read the first worksheet, columns A to Z. The first row holds the headers.
    """

    try:
        frame = pd.read_excel(
            BytesIO(content),
            sheet_name=0,
            header=None,
            engine="openpyxl",
        )
    except Exception as exc:  # noqa: BLE001  openpyxl raises zipfile/XML errors for corrupt files
        raise SheetParseError(f"Invalid XLSX file: {exc}") from exc

    frame = frame.iloc[:, :MAX_SHEET_COLUMNS]
    if frame.empty:
        raise SheetParseError("Sheet has no data rows.")

    headers = _excel_headers(frame.iloc[0].tolist())
    rows: list[dict[str, Any]] = []
    for values in frame.iloc[1:].itertuples(index=False, name=None):
        row = {header: _cell_value(value) for header, value in zip(headers, values)}
        if not _is_blank_row(row):
            rows.append(row)

    if not rows:
        raise SheetParseError("Sheet has no data rows.")
    return ParsedSheet(headers=headers, rows=rows)


def _excel_headers(raw_headers: list[Any]) -> list[str]:
    headers: list[str] = []
    seen: set[str] = set()
    for position, raw in enumerate(raw_headers):
        text = _cell_value(raw)
        header = str(text).strip() if text != "" else ""
        if not header:
            header = f"column_{string.ascii_uppercase[position]}"
        candidate = header
        suffix = 2
        while candidate in seen:
            candidate = f"{header}_{suffix}"
            suffix += 1
        seen.add(candidate)
        headers.append(candidate)
    return headers


def _cell_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if hasattr(value, "item"):
        value = value.item()
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return int(value)
    return value


def _is_blank_row(row: dict[str, Any]) -> bool:
    return all(str(value).strip() == "" for value in row.values())
