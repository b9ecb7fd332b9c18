"""
IDFC FIRST account statement (XLSX) → typed transactions.

Accuracy rules carried by this module:
• Debit column = expense (money out), credit column = income (money in).
• Every parsed statement is checked against the statement's own summary totals.
• Rows without a parseable transaction date, or with neither a debit nor a
  credit amount, are not transactions and are skipped silently.
"""

# idfc_helper/controllers/statement_parser.py
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

import pandas as pd

from idfc_helper.controllers.categorizer import (
    categorize,
    clean_description,
    detect_payment_method,
    extract_metadata,
)
from idfc_helper.controllers.row_scanner import (
    Rows,
    find_header_row,
    find_summary_rows,
    rows_after,
)
from idfc_helper.controllers.statement_validation import validate_transactions
from idfc_helper.controllers.workbook_loader import load_statement_rows
from idfc_helper.data_model.interfaces import TransactionType
from idfc_helper.data_model.statement import (
    ParseResult,
    StatementRow,
    StatementSummary,
    StatementTransaction,
)
from idfc_helper.utilities.config_layout import DEFAULT_LAYOUT, StatementLayout
from idfc_helper.utilities.converters_scalar import parse_amount, parse_statement_date
from idfc_helper.utilities.core_util import cell_text, open_for_write
from idfc_helper.utilities.errors import StatementFormatError

log = logging.getLogger(__name__)

_ACCOUNT_NUMBER_RE = re.compile(r"^\d{10,}$")

CSV_COLUMNS = [
    "id",
    "date",
    "valueDate",
    "description",
    "amount",
    "type",
    "category",
    "paymentMethod",
    "notes",
    "tags",
    "balance",
    "chequeNumber",
    "source",
    "rawParticulars",
    "rawDebit",
    "rawCredit",
]


def _metadata_text(value: Any) -> str:
    """Cell text with integral floats shown without '.0' (account numbers read as numbers)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return cell_text(value).strip()


# --- Summary ----------------------------------------------------------------


def extract_summary(
    rows: Rows, layout: StatementLayout = DEFAULT_LAYOUT
) -> StatementSummary:
    """
    Read the bank's summary block and the account metadata above it.

    The values row is located via its labels ("Opening Balance", "Total
    Debit", ...) within the first `summary_search_rows` rows; when the labels
    are absent the fixed `summary_value_row` is used. Columns 0-3 hold
    opening balance, total debit, total credit and closing balance.
    """
    summary = StatementSummary()

    label_row, value_row = find_summary_rows(rows, layout.summary_search_rows)
    if value_row < 0:
        value_row = layout.summary_value_row
        log.debug("Summary labels not found; using fixed row %d", value_row)
    else:
        log.debug("Summary rows found - labels: %d values: %d", label_row, value_row)

    values = rows[value_row] if 0 <= value_row < len(rows) else None
    if values:
        cells = list(values) + [None] * 4
        summary.opening_balance = parse_amount(cells[0])
        summary.total_debit = parse_amount(cells[1])
        summary.total_credit = parse_amount(cells[2])
        summary.closing_balance = parse_amount(cells[3])

    for row in rows[: layout.metadata_search_rows]:
        if not row or len(row) < 2 or not row[1]:
            continue
        text = " ".join(cell_text(c) for c in row).lower()
        second = _metadata_text(row[1])
        if "account" in text and _ACCOUNT_NUMBER_RE.match(second):
            summary.account_number = second
        if "customer name" in text:
            summary.customer_name = second
        if "statement period" in text:
            summary.statement_period = second

    return summary


# --- Transactions -----------------------------------------------------------


def _transaction_id(txn_date, idx: int) -> str:
    return f"txn_{txn_date:%Y%m%d}_{idx:04d}"


def build_transaction(
    row: StatementRow, source: str = DEFAULT_LAYOUT.source_name
) -> Optional[StatementTransaction]:
    """
    Turn one statement row into a transaction, or None when it is not one.

    A debit amount makes the row an expense; otherwise a credit amount makes it
    income. Rows with neither are skipped.
    """
    txn_date = parse_statement_date(row.txn_date)
    if txn_date is None:
        return None

    debit = parse_amount(row.debit)
    credit = parse_amount(row.credit)
    if debit > 0:
        txn_type, amount = TransactionType.EXPENSE, debit
    elif credit > 0:
        txn_type, amount = TransactionType.INCOME, credit
    else:
        return None

    particulars = cell_text(row.particulars)
    description = clean_description(particulars)
    notes, tags = extract_metadata(description)
    cheque = cell_text(row.cheque_no).strip()

    return StatementTransaction(
        id=_transaction_id(txn_date, row.idx),
        date=txn_date,
        description=description,
        amount=amount,
        type=txn_type,
        category=categorize(description, txn_type),
        payment_method=detect_payment_method(description),
        notes=notes,
        tags=tags,
        balance=parse_amount(row.balance),
        value_date=parse_statement_date(row.value_date),
        cheque_number=cheque or None,
        source=source,
        raw_particulars=particulars,
        raw_debit=debit,
        raw_credit=credit,
    )


def parse_transaction(
    idx: int, cells: Sequence[Any], layout: StatementLayout = DEFAULT_LAYOUT
) -> Optional[StatementTransaction]:
    return build_transaction(StatementRow.from_cells(idx, cells, layout), layout.source_name)


def parse_rows(rows: Rows, layout: StatementLayout = DEFAULT_LAYOUT) -> ParseResult:
    """
    Parse a statement row-array.

    Raises
    ------
    StatementFormatError
        If no row mentions the "Transaction Date" header.
    """
    summary = extract_summary(rows, layout)

    header_idx = find_header_row(rows, layout.header_needle)
    if header_idx < 0:
        raise StatementFormatError(
            'Could not find transaction header row. Expected "Transaction Date" column.'
        )
    log.debug(
        "Header row %d: %s",
        header_idx,
        " | ".join(cell_text(c) for c in list(rows[header_idx])[:7]),
    )

    transactions: List[StatementTransaction] = []
    for idx, row in rows_after(rows, header_idx):
        if len(row) < layout.min_transaction_cells:
            continue
        txn = parse_transaction(idx, row, layout)
        if txn is not None:
            transactions.append(txn)

    validation = validate_transactions(
        transactions, summary, tolerance=layout.balance_tolerance
    )
    log.info("Parsed %d transactions", len(transactions))
    for msg in validation.errors:
        log.warning(msg)
    for msg in validation.warnings:
        log.info(msg)
    return ParseResult(transactions=transactions, summary=summary, validation=validation)


def parse_statement_file(
    path: Path,
    layout: StatementLayout = DEFAULT_LAYOUT,
    sheet_name: Optional[str] = None,
) -> ParseResult:
    """Load the statement sheet of an XLSX (or CSV) export and parse it."""
    sheet = load_statement_rows(Path(path), sheet_name, preferred=layout.preferred_sheet)
    log.info("Parsing %s [%s]", path, sheet.name)
    return parse_rows(sheet.rows, layout)


# --- Export -----------------------------------------------------------------


def transactions_to_frame(transactions: Iterable[StatementTransaction]) -> pd.DataFrame:
    """One row per transaction, columns as in `StatementTransaction.to_dict`."""
    return pd.DataFrame([t.to_dict() for t in transactions], columns=CSV_COLUMNS)


def write_transactions_csv(
    transactions: Iterable[StatementTransaction], path: Path
) -> int:
    """Write transactions to CSV; returns the number of rows written."""
    df = transactions_to_frame(transactions)
    with open_for_write(Path(path), encoding="utf-8", newline="") as f:
        df.to_csv(f, index=False)
    log.info("Wrote %d transactions to %s", len(df), path)
    return len(df)
