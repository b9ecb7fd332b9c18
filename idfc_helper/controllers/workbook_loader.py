"""
XLSX (or CSV export) → worksheet row-array.

A row-array is a list of rows, each a list of cell values (str, int/float or
None), positioned relative to the first used cell of the sheet. Trailing empty
cells are trimmed from every row; blank rows in the middle are kept as `[]` so
row indices line up with the sheet.
"""

# idfc_helper/controllers/workbook_loader.py
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence
from zipfile import BadZipFile

import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from idfc_helper.utilities.core_util import open_for_read
from idfc_helper.utilities.errors import WorkbookLoadError

log = logging.getLogger(__name__)

Row = List[Any]

DATE_CELL_FORMAT = "%d-%b-%Y"
CSV_SUFFIXES = {".csv"}


@dataclass(frozen=True)
class SheetRows:
    name: str
    rows: List[Row]
    dimensions: str = ""


def _normalize_cell(value: Any) -> Any:
    """Render date cells the way the bank prints them; keep everything else."""
    if isinstance(value, (datetime, date)):
        return value.strftime(DATE_CELL_FORMAT)
    if isinstance(value, time):
        return value.isoformat()
    return value


def _trim_row(values: Iterable[Any]) -> Row:
    row = [_normalize_cell(v) for v in values]
    while row and (row[-1] is None or row[-1] == ""):
        row.pop()
    return row


def _open(path: Path):
    path = Path(path)
    if not path.is_file():
        raise WorkbookLoadError(f"Workbook not found: {path}")
    try:
        return load_workbook(path, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
        raise WorkbookLoadError(f"Could not read workbook {path}: {e}") from e


def _sheet_rows(ws) -> SheetRows:
    rows = [
        _trim_row(values)
        for values in ws.iter_rows(
            min_row=ws.min_row, min_col=ws.min_column, values_only=True
        )
    ]
    while rows and not rows[-1]:
        rows.pop()
    return SheetRows(name=ws.title, rows=rows, dimensions=ws.dimensions)


def select_statement_sheet(
    names: Sequence[str], preferred: str = "Account Statement"
) -> str:
    """
    Choose the sheet holding the statement.

    Order: exact `preferred` name, then the first name containing "account" or
    "statement" (case-insensitive), then the first sheet.
    """
    if not names:
        raise WorkbookLoadError("Workbook has no sheets")
    if preferred in names:
        return preferred
    for name in names:
        low = name.lower()
        if "account" in low or "statement" in low:
            return name
    return names[0]


def load_sheet_rows(
    path: Path,
    sheet_name: Optional[str] = None,
    preferred: str = "Account Statement",
) -> SheetRows:
    """Load one sheet as a row-array; `sheet_name=None` picks the statement sheet."""
    wb = _open(path)
    try:
        name = sheet_name or select_statement_sheet(wb.sheetnames, preferred)
        if name not in wb.sheetnames:
            raise WorkbookLoadError(
                f"Sheet {name!r} not found in {Path(path).name}; "
                f"available: {wb.sheetnames}"
            )
        sheet = _sheet_rows(wb[name])
    finally:
        wb.close()
    log.debug("Loaded %d rows from %s [%s]", len(sheet.rows), path, sheet.name)
    return sheet


def load_workbook_rows(path: Path) -> List[SheetRows]:
    """Every sheet of the workbook, in workbook order; a CSV export is one sheet."""
    if Path(path).suffix.lower() in CSV_SUFFIXES:
        return [load_csv_rows(path)]
    wb = _open(path)
    try:
        sheets = [_sheet_rows(ws) for ws in wb.worksheets]
    finally:
        wb.close()
    log.debug("Loaded %d sheets from %s", len(sheets), path)
    return sheets


def _csv_cell(value: Any) -> Any:
    if isinstance(value, str):
        return value or None
    return None if pd.isna(value) else value


def load_csv_rows(path: Path) -> SheetRows:
    """
    A CSV statement export as a single-sheet row-array.

    Cells are kept as text (account and cheque numbers keep leading zeros);
    empty cells become None and blank lines stay in place as `[]`.
    """
    path = Path(path)
    if not path.is_file():
        raise WorkbookLoadError(f"Statement file not found: {path}")
    try:
        # rows are ragged; read_csv needs the widest one up front
        with open_for_read(path, binary=False, encoding="utf-8-sig", newline="") as f:
            width = max((len(r) for r in csv.reader(f)), default=0)
        if width == 0:
            return SheetRows(name=path.stem, rows=[])
        df = pd.read_csv(
            path,
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding="utf-8-sig",
        )
    except (csv.Error, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise WorkbookLoadError(f"Could not read CSV {path}: {e}") from e

    rows = [
        _trim_row(_csv_cell(v) for v in values)
        for values in df.itertuples(index=False, name=None)
    ]
    while rows and not rows[-1]:
        rows.pop()
    log.debug("Loaded %d rows from %s", len(rows), path)
    return SheetRows(
        name=path.stem, rows=rows, dimensions=f"A1:{get_column_letter(width)}{len(df)}"
    )


def load_statement_rows(
    path: Path,
    sheet_name: Optional[str] = None,
    preferred: str = "Account Statement",
) -> SheetRows:
    """Statement rows from an XLSX workbook or a CSV export (`sheet_name` is ignored for CSV)."""
    if Path(path).suffix.lower() in CSV_SUFFIXES:
        return load_csv_rows(path)
    return load_sheet_rows(path, sheet_name, preferred)


def find_statement_files(
    directory: Path, pattern: str = "IDFCFIRSTBankstatement_*.xlsx"
) -> List[Path]:
    """Statement exports in `directory` matching `pattern`, newest first."""
    files = [p for p in Path(directory).glob(pattern) if p.is_file()]
    files.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    return files
