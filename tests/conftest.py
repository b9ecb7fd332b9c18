from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List

import pandas as pd
import pytest
from openpyxl import Workbook


def statement_rows() -> List[List[Any]]:
    """
    Row-array shaped like an IDFC FIRST 'Account Statement' sheet:
    metadata on top, summary labels/values in rows 18/19, header in row 23,
    three transactions in rows 24-26 and a footer without dated cells.
    """
    rows: List[List[Any]] = [[] for _ in range(24)]
    rows[0] = ["ACCOUNT STATEMENT"]
    rows[2] = ["Customer Name", "RAVI KUMAR"]
    rows[3] = ["Account Number", "10001193553"]
    rows[4] = ["Statement Period", "01-Jan-2025 to 31-Jan-2025"]
    rows[18] = ["Opening Balance", "Total Debit", "Total Credit", "Closing Balance"]
    rows[19] = ["10,000.00", "1,750.00", "50,000.00", "58,250.00"]
    rows[23] = [
        "Transaction Date",
        "Value Date",
        "Particulars",
        "Cheque No.",
        "Debit",
        "Credit",
        "Balance",
    ]
    rows += [
        ["02-Jan-2025", "02-Jan-2025", "UPI/DR/501234/ZOMATO/food order", None,
         "1,250.00", None, "8,750.00"],
        ["05-Jan-2025", "05-Jan-2025", "NEFT/CR/SALARY ACME CORP", None,
         None, "50,000.00", "58,750.00"],
        ["10-Jan-2025", "10-Jan-2025", "ATM CASH WITHDRAWAL MG ROAD", "000123",
         "500.00", None, "58,250.00"],
        [],
        ["End of Statement"],
    ]
    return rows


def write_workbook(path: Path, sheets: dict[str, List[List[Any]]]) -> Path:
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(row)
    wb.save(path)
    return path


@pytest.fixture
def workbook_factory() -> Callable[[Path, Dict[str, List[List[Any]]]], Path]:
    return write_workbook


@pytest.fixture
def rows() -> List[List[Any]]:
    return statement_rows()


@pytest.fixture
def statement_xlsx(tmp_path: Path) -> Path:
    """Statement workbook; the last transaction's date is a real date cell."""
    data = statement_rows()
    data[26] = list(data[26])
    data[26][0] = datetime(2025, 1, 10)
    path = tmp_path / "IDFCFIRSTBankstatement_10001193553_173158314.xlsx"
    return write_workbook(path, {"Cover": [["IDFC FIRST Bank"]], "Account Statement": data})


@pytest.fixture(autouse=True)
def _log_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    # keep the rotating log file out of the working tree
    monkeypatch.setenv("IDFC_HELPER_LOG_DIR", str(tmp_path / "logs"))
    yield
    # handlers installed by configure_logging point at this test's captured streams
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.name in ("console", "file")]:
        root.removeHandler(handler)
        handler.close()


@pytest.fixture
def statement_csv(tmp_path: Path) -> Path:
    """The statement rows saved as a CSV export (rows padded to a common width)."""
    path = tmp_path / "IDFCFIRSTBankstatement_10001193553_173158314.csv"
    pd.DataFrame(statement_rows()).to_csv(path, header=False, index=False)
    return path
