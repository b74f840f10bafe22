"""Read uploaded ``.xls`` / ``.xlsx`` exports into a grid of trimmed strings."""

from __future__ import annotations

import io
from pathlib import Path

import pandas as pd

from totem.core.exceptions import SpreadsheetError


def excel_engine(filename: str) -> str:
    """Legacy ``.xls`` goes through xlrd; everything else is treated as OOXML."""
    if Path(filename or "").suffix.lower() == ".xls":
        return "xlrd"
    return "openpyxl"


def read_spreadsheet_rows(data: bytes, filename: str) -> list[list[str]]:
    """Return every row of the single relevant worksheet; row 0 is the header.

    ``.xls`` workbooks must contain exactly one sheet. Other workbooks are read
    from their first sheet.
    """
    engine = excel_engine(filename)
    try:
        if engine == "xlrd":
            sheets = pd.read_excel(
                io.BytesIO(data), sheet_name=None, header=None, dtype=str, engine=engine,
            )
            if not sheets:
                raise SpreadsheetError("no worksheet found")
            if len(sheets) > 1:
                raise SpreadsheetError(
                    "multiple worksheets found; please upload a file with a single sheet"
                )
            frame = next(iter(sheets.values()))
        else:
            workbook = pd.ExcelFile(io.BytesIO(data), engine=engine)
            if not workbook.sheet_names:
                raise SpreadsheetError("no worksheet found")
            frame = workbook.parse(workbook.sheet_names[0], header=None, dtype=str)
    except SpreadsheetError:
        raise
    except Exception as exc:
        raise SpreadsheetError(f"could not read spreadsheet {filename!r}: {exc}") from exc

    rows = [
        [str(cell).strip() for cell in row]
        for row in frame.fillna("").itertuples(index=False, name=None)
    ]
    rows = [row for row in rows if any(row)]
    if not rows:
        raise SpreadsheetError("worksheet is empty")
    return rows


def header_index(header: list[str]) -> dict[str, int]:
    """Map lowercased, trimmed header names to column positions (last duplicate wins)."""
    return {normalize_header(name): i for i, name in enumerate(header)}


def normalize_header(header: str) -> str:
    return (header or "").strip().lower()


def cell_value(row: list[str], idx: int) -> str:
    if idx < 0 or idx >= len(row):
        return ""
    return row[idx].strip()
