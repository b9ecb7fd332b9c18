from __future__ import annotations

from datetime import date

import pytest

from idfc_helper.controllers import text_statement_parser as tsp
from idfc_helper.data_model.interfaces import TransactionType
from idfc_helper.utilities.errors import StatementError

STATEMENT_TEXT = """IDFC FIRST Bank
Customer Name : RAVI KUMAR
Account Number 10001193553
Statement Period : 01-Jan-2025 to 31-Jan-2025
Opening Balance 10,000.00
Total Debit 1,750.00
Total Credit 50,000.00
Closing Balance 58,250.00
Transaction Date Value Date Particulars Cheque No Debit Credit Balance
02-Jan-2025 02-Jan-2025 UPI/DR/501234/ZOMATO 1,250.00 8,750.00
Page 1 of 2
05-Jan-2025 05-Jan-2025 NEFT/CR/SALARY ACME 50,000.00 58,750.00
10-Jan-2025 10-Jan-2025 ATM CASH WDL 500.00 58,250.00
End of statement
02-Feb-2025 02-Feb-2025 AFTER FOOTER 1.00 2.00
"""


def test_extract_summary_from_text():
    summary = tsp.extract_summary_from_text(STATEMENT_TEXT.split("\n"))

    assert summary.customer_name == "RAVI KUMAR"
    assert summary.account_number == "10001193553"
    assert summary.statement_period == "01-Jan-2025 to 31-Jan-2025"
    assert summary.opening_balance == 10000.0
    assert summary.total_debit == 1750.0
    assert summary.total_credit == 50000.0
    assert summary.closing_balance == 58250.0


def test_parse_transaction_line_debit_and_credit():
    debit = tsp.parse_transaction_line(
        "02-Jan-2025 02-Jan-2025 UPI/DR/501234/ZOMATO 1,250.00 8,750.00", idx=9
    )
    credit = tsp.parse_transaction_line(
        "05-Jan-2025 05-Jan-2025 NEFT/CR/SALARY ACME 50,000.00 58,750.00"
    )

    assert debit.type is TransactionType.EXPENSE
    assert debit.amount == 1250.0 and debit.balance == 8750.0
    assert debit.date == date(2025, 1, 2)
    assert debit.category == "Food & Dining"
    assert debit.id == "txn_20250102_0009"

    assert credit.type is TransactionType.INCOME
    assert credit.amount == 50000.0
    assert credit.category == "Salary"


@pytest.mark.parametrize(
    "line",
    [
        "Page 1 of 2",
        "02-Jan-2025 UPI 1,250.00 8,750.00",  # too few tokens
        "no date here at all 1,250.00 8,750.00",
        "02-Jan-2025 02-Jan-2025 UPI/DR/1 ZOMATO 1,250.00",  # only one amount
    ],
)
def test_parse_transaction_line_rejects(line):
    assert tsp.parse_transaction_line(line) is None


def test_parse_statement_text_section_bounds_and_validation():
    result = tsp.parse_statement_text(STATEMENT_TEXT)

    assert [t.amount for t in result.transactions] == [1250.0, 50000.0, 500.0]
    assert result.validation.is_valid
    assert result.summary.closing_balance == 58250.0


def test_parse_statement_text_without_header_finds_nothing():
    result = tsp.parse_statement_text("02-Jan-2025 02-Jan-2025 UPI/DR/1 X 1.00 2.00")
    assert result.transactions == []


# --------------------------- text sources ------------------------------------


class _Page:
    def __init__(self, text):
        self._text = text

    def extract_text(self):
        return self._text


class _Pdf:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_extract_pdf_text_joins_pages(monkeypatch, tmp_path):
    seen = {}

    def fake_open(path, password=""):
        seen["path"], seen["password"] = path, password
        return _Pdf([_Page("page one"), _Page(None), _Page("page two")])

    monkeypatch.setattr(tsp.pdfplumber, "open", fake_open)

    text = tsp.extract_pdf_text(tmp_path / "s.pdf", password="pw")

    assert text == "page one\npage two"
    assert seen["password"] == "pw"


def test_extract_pdf_text_wraps_reader_errors(monkeypatch, tmp_path):
    def fake_open(path, password=""):
        raise RuntimeError("PDF is encrypted")

    monkeypatch.setattr(tsp.pdfplumber, "open", fake_open)

    with pytest.raises(StatementError) as ei:
        tsp.extract_pdf_text(tmp_path / "s.pdf")
    assert "encrypted" in str(ei.value)


def test_read_statement_text_plain_file(tmp_path):
    p = tmp_path / "statement.txt"
    p.write_text(STATEMENT_TEXT, encoding="utf-8")

    assert tsp.read_statement_text(p) == STATEMENT_TEXT
