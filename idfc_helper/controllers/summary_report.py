"""
Positional statement summaries and dashboard comparison.

`build_report` reads the summary block at its fixed position and counts the
transaction rows below it; `export_summary` saves the result next to the
workbook as `<file>.summary.json`, and `compare_summaries` checks such a file
against a dashboard export of the same figures.
"""

# idfc_helper/controllers/summary_report.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional

from idfc_helper.controllers.row_scanner import Rows, is_transaction_row
from idfc_helper.controllers.statement_validation import nearly_equal, verify_balance
from idfc_helper.data_model.statement import (
    ComparisonResult,
    FieldCheck,
    StatementReport,
    StatementSummary,
)
from idfc_helper.utilities.config_layout import DEFAULT_LAYOUT, StatementLayout
from idfc_helper.utilities.converters_scalar import is_numeric_cell, parse_amount
from idfc_helper.utilities.core_util import open_for_read, open_for_write

log = logging.getLogger(__name__)

SUMMARY_SUFFIX = ".summary.json"

# (label, json key) pairs compared between dashboard and statement summaries
COMPARED_FIELDS = (
    ("Opening Balance", "openingBalance"),
    ("Total Debit", "totalDebit"),
    ("Total Credit", "totalCredit"),
    ("Closing Balance", "closingBalance"),
    ("Transaction Count", "transactionCount"),
)


def positional_summary(
    rows: Rows, layout: StatementLayout = DEFAULT_LAYOUT
) -> StatementSummary:
    """Opening/debit/credit/closing from the fixed summary value row."""
    idx = layout.summary_value_row
    values = list(rows[idx] or []) if 0 <= idx < len(rows) else []
    values += [None] * 4
    return StatementSummary(
        opening_balance=parse_amount(values[0]),
        total_debit=parse_amount(values[1]),
        total_credit=parse_amount(values[2]),
        closing_balance=parse_amount(values[3]),
    )


def build_report(
    rows: Rows, file_name: str, layout: StatementLayout = DEFAULT_LAYOUT
) -> StatementReport:
    """Summary, balance check and transaction counts for one statement sheet."""
    summary = positional_summary(rows, layout)
    report = StatementReport(
        file=file_name,
        summary=summary,
        balance=verify_balance(summary, layout.balance_tolerance),
    )
    for row in rows[layout.transaction_start_row :]:
        if not is_transaction_row(row):
            continue
        report.transaction_count += 1
        cells = list(row) + [None] * (layout.col_credit + 1)
        if is_numeric_cell(cells[layout.col_debit]):
            report.debit_count += 1
        if is_numeric_cell(cells[layout.col_credit]):
            report.credit_count += 1
    log.debug(
        "%s: %d transactions (%d debit, %d credit)",
        file_name,
        report.transaction_count,
        report.debit_count,
        report.credit_count,
    )
    return report


def summary_path_for(workbook: Path) -> Path:
    workbook = Path(workbook)
    return workbook.with_name(workbook.name + SUMMARY_SUFFIX)


def export_summary(report: StatementReport, path: Path) -> Path:
    """Write the report's summary JSON (indent 2) and return the path written."""
    with open_for_write(Path(path), encoding="utf-8") as f:
        json.dump(report.to_summary_json(), f, indent=2)
    log.info("Summary exported to %s", path)
    return Path(path)


def load_summary(path: Path) -> Mapping[str, Any]:
    with open_for_read(Path(path), binary=False, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Summary file must contain a JSON object: {path}")
    return data


def find_summary_files(
    directory: Path, pattern: str = DEFAULT_LAYOUT.file_pattern
) -> List[Path]:
    """Exported statement summaries (`<statement>.xlsx.summary.json`) in `directory`."""
    return sorted(p for p in Path(directory).glob(pattern + SUMMARY_SUFFIX) if p.is_file())


def _number(value: Any) -> Optional[float]:
    """Numeric JSON value; numeric strings ("1234.50") are coerced, anything else is missing."""
    if isinstance(value, str):
        return parse_amount(value) if is_numeric_cell(value) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def compare_summaries(
    dashboard: Mapping[str, Any],
    statement: Mapping[str, Any],
    file: str,
    tol: float = DEFAULT_LAYOUT.balance_tolerance,
) -> ComparisonResult:
    """Field-by-field comparison of a dashboard summary with a statement summary."""
    result = ComparisonResult(file=file)
    for label, key in COMPARED_FIELDS:
        dash_val = _number(dashboard.get(key))
        stmt_val = _number(statement.get(key))
        result.checks.append(
            FieldCheck(
                label=label,
                dashboard=dash_val,
                statement=stmt_val,
                passed=nearly_equal(dash_val, stmt_val, tol),
            )
        )
    return result
