# idfc_helper/controllers/text_statement_parser.py
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Final, List, Optional, Sequence

import pdfplumber

from idfc_helper.controllers.statement_parser import build_transaction
from idfc_helper.controllers.statement_validation import validate_transactions
from idfc_helper.data_model.statement import (
    ParseResult,
    StatementRow,
    StatementSummary,
    StatementTransaction,
)
from idfc_helper.utilities.config_layout import DEFAULT_LAYOUT, StatementLayout
from idfc_helper.utilities.converters_scalar import parse_amount
from idfc_helper.utilities.core_util import open_for_read
from idfc_helper.utilities.errors import StatementError

log = logging.getLogger(__name__)

_DATE_RE: Final = re.compile(r"(\d{2}-[A-Za-z]{3}-\d{4})")
_AMOUNT_RE: Final = re.compile(r"([\d,]+\.\d{2})")
_PARTICULARS_RE: Final = re.compile(r"\d{4}\s+(.+?)\s+([\d,]+\.\d{2})")
_ACCOUNT_RE: Final = re.compile(r"(\d{10,})")
_SECTION_END_MARKERS: Final = ("REGISTERED OFFICE", "End of statement")


def extract_pdf_text(path: Path, password: Optional[str] = None) -> str:
    """Concatenate the text of every page of a statement PDF."""
    chunks: List[str] = []
    try:
        with pdfplumber.open(str(path), password=password or "") as pdf:
            for page in pdf.pages:
                page_text = page.extract_text() or ""
                if page_text:
                    chunks.append(page_text)
    except FileNotFoundError:
        raise
    except Exception as e:
        raise StatementError(f"Could not read PDF {path}: {e}") from e
    log.debug("Extracted %d pages of text from %s", len(chunks), path)
    return "\n".join(chunks)


def read_statement_text(path: Path, password: Optional[str] = None) -> str:
    """Text of a statement: PDFs go through pdfplumber, anything else is read as UTF-8."""
    path = Path(path)
    if path.suffix.lower() == ".pdf":
        return extract_pdf_text(path, password)
    with open_for_read(path, binary=False, encoding="utf-8", errors="replace") as f:
        return f.read()


def _first_amount(line: str) -> Optional[float]:
    m = _AMOUNT_RE.search(line)
    return parse_amount(m.group(1)) if m else None


def extract_summary_from_text(lines: Sequence[str]) -> StatementSummary:
    """Summary totals and account metadata from labelled lines of statement text."""
    summary = StatementSummary()
    for line in lines:
        low = line.lower()

        if "account" in low:
            m = _ACCOUNT_RE.search(line)
            if m:
                summary.account_number = m.group(1)

        if "customer name" in low and ":" in line:
            summary.customer_name = line.split(":")[1].strip()

        if "statement period" in low and ":" in line:
            summary.statement_period = line.split(":")[1].strip()

        amount = _first_amount(line)
        if amount is None:
            continue
        if "opening balance" in low:
            summary.opening_balance = amount
        if "total" in low and "debit" in low:
            summary.total_debit = amount
        if "total" in low and "credit" in low:
            summary.total_credit = amount
        if "closing balance" in low:
            summary.closing_balance = amount
    return summary


def parse_transaction_line(
    line: str, idx: int = 0, layout: StatementLayout = DEFAULT_LAYOUT
) -> Optional[StatementTransaction]:
    """
    One transaction from a text line such as
    ``05-Jan-2025 05-Jan-2025 UPI/DR/1234/ZOMATO 1,250.00 10,000.00``.

    The last amount on the line is the running balance and the one before it
    the transaction amount. Lines are debits unless the particulars carry
    ``/CR/`` and not ``/DR/``.
    """
    if len(line.split()) < 5:
        return None

    date_match = _DATE_RE.search(line)
    if not date_match:
        return None

    amounts = _AMOUNT_RE.findall(line)
    if len(amounts) < 2:
        return None
    balance = amounts[-1]
    txn_amount = amounts[-2]

    m = _PARTICULARS_RE.search(line)
    particulars = m.group(1) if m else ""
    is_debit = "/DR/" in particulars or "/CR/" not in particulars

    row = StatementRow(
        idx=idx,
        txn_date=date_match.group(1),
        value_date=date_match.group(1),
        particulars=particulars,
        debit=txn_amount if is_debit else None,
        credit=None if is_debit else txn_amount,
        balance=balance,
    )
    return build_transaction(row, layout.source_name)


def parse_statement_text(
    text: str, layout: StatementLayout = DEFAULT_LAYOUT
) -> ParseResult:
    """
    Parse statement text (e.g. extracted from the PDF statement).

    The transaction section starts after the column header line (mentions
    "Transaction", "Date" and "Particulars") and ends at the bank's footer.
    """
    lines = text.split("\n")
    summary = extract_summary_from_text(lines)
    transactions: List[StatementTransaction] = []

    in_section = False
    for i, raw in enumerate(lines):
        line = raw.strip()
        if "Transaction" in line and "Date" in line and "Particulars" in line:
            in_section = True
            continue
        if any(marker in line for marker in _SECTION_END_MARKERS):
            break
        if not in_section:
            continue
        txn = parse_transaction_line(line, i, layout)
        if txn is not None:
            transactions.append(txn)

    validation = validate_transactions(
        transactions, summary, tolerance=layout.balance_tolerance
    )
    log.info("Parsed %d transactions from statement text", len(transactions))
    return ParseResult(transactions=transactions, summary=summary, validation=validation)
