#!/usr/bin/env python3
"""
IDFC FIRST statement toolkit (console)

Commands:
- inspect  : dump every sheet of a workbook (row counts, first/last rows, summary-looking rows)
- summary  : summary block, balance verification and transaction counts; exports .summary.json
- last     : the last transactions of a statement, found from the end of the sheet
- parse    : full parse into transactions (XLSX, CSV, PDF or text) with validation and CSV export
- compare  : compare a dashboard summary export with the statement summaries
"""

# idfc_helper/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, List, Optional, Sequence

from idfc_helper.controllers.row_scanner import (
    find_exact_header_row,
    find_header_row,
    is_candidate_row,
    rows_after,
    rows_mentioning,
    transaction_block_bounds,
)
from idfc_helper.controllers.statement_parser import (
    parse_rows,
    write_transactions_csv,
)
from idfc_helper.controllers.summary_report import (
    build_report,
    compare_summaries,
    export_summary,
    find_summary_files,
    load_summary,
    summary_path_for,
)
from idfc_helper.controllers.text_statement_parser import (
    parse_statement_text,
    read_statement_text,
)
from idfc_helper.controllers.workbook_loader import (
    find_statement_files,
    load_statement_rows,
    load_workbook_rows,
)
from idfc_helper.data_model.statement import ParseResult
from idfc_helper.utilities.config_layout import StatementLayout, load_layout
from idfc_helper.utilities.config_logging import configure_logging
from idfc_helper.utilities.converters_scalar import format_amount, parse_amount
from idfc_helper.utilities.core_util import cell_text, render_row, truncate
from idfc_helper.utilities.errors import StatementError

log = logging.getLogger(__name__)

PREVIEW_ROWS = 15
SAMPLE_TXNS = 3
SUMMARY_TERMS = ("opening", "closing", "debit", "credit", "balance")
TEXT_SUFFIXES = {".pdf", ".txt"}


def _num(value: Any) -> str:
    """Numbers printed without a trailing '.0' for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _cell(row: Sequence[Any], col: int) -> Any:
    return row[col] if row is not None and 0 <= col < len(row) else None


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


# ------------------------ inspect ------------------------


def cmd_inspect(args: argparse.Namespace, layout: StatementLayout) -> int:
    sheets = load_workbook_rows(args.file)

    print("\n=== EXCEL FILE ANALYSIS ===\n")
    print("SHEET NAMES:", [s.name for s in sheets])
    print(f"Total sheets: {len(sheets)}\n")

    for sheet in sheets:
        rows = sheet.rows
        print(f"\n--- SHEET: {sheet.name} ---")
        print(f"Total rows (including headers): {len(rows)}")

        print(f"\nFirst {PREVIEW_ROWS} rows of data:")
        for idx, row in enumerate(rows[:PREVIEW_ROWS]):
            print(f"Row {idx}: {render_row(row)}")

        print(f"\nLast {PREVIEW_ROWS} rows of data:")
        tail_start = max(0, len(rows) - PREVIEW_ROWS)
        for idx, row in enumerate(rows[tail_start:], start=tail_start):
            print(f"Row {idx}: {render_row(row)}")

        print("\nSearching for summary information...")
        print(f"\nWorksheet dimensions: {sheet.dimensions}")
        for idx, row in rows_mentioning(rows, *SUMMARY_TERMS):
            print(f"Summary row {idx}: {render_row(row)}")
    return 0


# ------------------------ summary ------------------------


def _print_txn(label: str, row: Sequence[Any], layout: StatementLayout) -> None:
    print(
        f"{label}: Date: {cell_text(_cell(row, layout.col_txn_date))}, "
        f"Desc: {truncate(_cell(row, layout.col_particulars), 50)}..., "
        f"Debit: {cell_text(_cell(row, layout.col_debit))}, "
        f"Credit: {cell_text(_cell(row, layout.col_credit))}, "
        f"Balance: {cell_text(_cell(row, layout.col_balance))}"
    )


def _print_raw_summary(rows: Sequence[Any], layout: StatementLayout) -> None:
    print(f"\nFirst {layout.transaction_start_row + 1} rows:")
    for idx, row in enumerate(rows[: layout.transaction_start_row + 1]):
        print(f"Row {idx}: {render_row(row)}")
    print(f"\nTransaction header row: {find_exact_header_row(rows)}")

    values = _cell(rows, layout.summary_value_row)
    if not values:
        return
    print("\n=== PARSED AMOUNTS ===")
    for col, label in enumerate(
        ("Opening Balance", "Total Debit", "Total Credit", "Closing Balance")
    ):
        raw = _cell(values, col)
        print(f"{label} raw: {cell_text(raw)} => parsed: {_num(parse_amount(raw))}")


def _summarize_file(
    path: Path, layout: StatementLayout, export: bool, raw: bool
) -> bool:
    """Print the summary report for one workbook; True when its balance matches."""
    sheet = load_statement_rows(path, preferred=layout.preferred_sheet)
    rows = sheet.rows

    print(f"ROW {layout.summary_label_row} (Summary Headers):")
    print(render_row(_cell(rows, layout.summary_label_row)))
    print(f"ROW {layout.summary_value_row} (Summary Values):")
    print(render_row(_cell(rows, layout.summary_value_row)))
    if raw:
        _print_raw_summary(rows, layout)

    report = build_report(rows, path.name, layout)
    if export:
        target = summary_path_for(path)
        try:
            export_summary(report, target)
            print(f"Summary exported to {target}")
        except OSError as e:
            log.error("Failed to export summary: %s", e)

    s, bal = report.summary, report.balance
    print("--- SUMMARY EXTRACTED ---")
    print(f"Opening Balance: {_num(s.opening_balance)}")
    print(f"Total Debit: {_num(s.total_debit)}")
    print(f"Total Credit: {_num(s.total_credit)}")
    print(f"Closing Balance: {_num(s.closing_balance)}")

    print("--- BALANCE VERIFICATION ---")
    print("Formula: Opening + Credits - Debits = Closing")
    print(
        f"{_num(s.opening_balance)} + {_num(s.total_credit)} - "
        f"{_num(s.total_debit)} = {_num(bal.calculated)}"
    )
    print(f"Expected Closing: {_num(bal.expected)}")
    print(f"Calculated Closing: {_num(bal.calculated)}")
    print(f"Match: {str(bal.matches).lower()}")
    print(f"Difference: {_num(bal.difference)}")

    print("--- TRANSACTION COUNT ---")
    print(f"Total transactions found: {report.transaction_count}")
    print(f"Debit transactions: {report.debit_count}")
    print(f"Credit transactions: {report.credit_count}")

    print(f"--- FIRST {SAMPLE_TXNS} TRANSACTIONS ---")
    start = layout.transaction_start_row
    for i, row in enumerate(rows[start : start + SAMPLE_TXNS], start=1):
        if row:
            _print_txn(f"Txn {i}", row, layout)

    print(f"--- LAST {SAMPLE_TXNS} TRANSACTIONS ---")
    tail = rows[-SAMPLE_TXNS:] if rows else []
    for i, row in zip(range(len(tail), 0, -1), tail):
        if row:
            _print_txn(f"Txn {i}", row, layout)

    if bal.matches:
        print(f"✅ Balance matches for file: {path.name}")
    else:
        print(f"❌ Balance mismatch in file: {path.name}", file=sys.stderr)
    return bal.matches


def cmd_summary(args: argparse.Namespace, layout: StatementLayout) -> int:
    files: List[Path] = list(args.files) or find_statement_files(
        args.dir, layout.file_pattern
    )
    if not files:
        print(
            f"No {layout.file_pattern} file found in directory {args.dir}.",
            file=sys.stderr,
        )
        return 1

    ok = True
    for path in files:
        print("\n==============================")
        print(f"Analyzing file: {path.name}")
        print("==============================\n")
        try:
            ok = _summarize_file(path, layout, not args.no_export, args.raw) and ok
        except StatementError as e:
            log.debug("Summary failed for %s", path, exc_info=True)
            print(f"Error in file {path.name}: {e}", file=sys.stderr)
            ok = False
    return 0 if ok else 1


# ------------------------ last ------------------------


def cmd_last(args: argparse.Namespace, layout: StatementLayout) -> int:
    layout = replace(layout, tail_window=args.count)
    rows = load_statement_rows(args.file, preferred=layout.preferred_sheet).rows

    bounds = transaction_block_bounds(rows, layout)
    print(f"\n=== LAST {layout.tail_window} TRANSACTIONS ===")
    if not bounds.found:
        print("No transaction rows found.", file=sys.stderr)
        return 1

    offset = layout.transaction_start_row - 1
    for i in bounds.indices():
        row = rows[i]
        if not row:
            continue
        print(
            f"{i - offset}. {cell_text(_cell(row, layout.col_txn_date))} | "
            f"{cell_text(_cell(row, layout.col_value_date))} | "
            f"{truncate(_cell(row, layout.col_particulars), 45)} | "
            f"Debit: {format_amount(_cell(row, layout.col_debit))} | "
            f"Credit: {format_amount(_cell(row, layout.col_credit))} | "
            f"Balance: {format_amount(_cell(row, layout.col_balance))}"
        )
    return 0


# ------------------------ parse ------------------------


def _diagnose(rows: Sequence[Any], layout: StatementLayout) -> bool:
    """Print header detection details; False when the header row is missing."""
    print("Testing statement parser logic...")
    print("Total rows:", len(rows))
    header_idx = find_header_row(rows, layout.header_needle)
    print("Header row index:", header_idx)

    if header_idx < 0:
        print("ERROR: Header row not found!", file=sys.stderr)
        print('Checking all rows for "transaction"...')
        for i, row in rows_mentioning(rows, "transaction"):
            print("Row", i, ":", " | ".join(cell_text(c) for c in list(row)[:7]))
        return False

    print("✅ Header found")
    print("Headers:", " | ".join(cell_text(c) for c in list(rows[header_idx])[:7]))
    candidates = [row for _, row in rows_after(rows, header_idx) if is_candidate_row(row)]
    print("Transaction rows found:", len(candidates))
    print(f"First {SAMPLE_TXNS} transactions:")
    for i, row in enumerate(candidates[:SAMPLE_TXNS], start=1):
        print(
            i, "|",
            "Date:", cell_text(_cell(row, layout.col_txn_date)),
            "| Desc:", truncate(_cell(row, layout.col_particulars), 30),
            "| Debit:", cell_text(_cell(row, layout.col_debit)),
            "| Credit:", cell_text(_cell(row, layout.col_credit)),
            "| Balance:", cell_text(_cell(row, layout.col_balance)),
        )
    return True


def _print_parse_result(result: ParseResult) -> None:
    s = result.summary
    print("--- STATEMENT ---")
    if s.customer_name:
        print(f"Customer: {s.customer_name}")
    if s.account_number:
        print(f"Account: {s.account_number}")
    if s.statement_period:
        print(f"Period: {s.statement_period}")
    print(
        f"Opening: {s.opening_balance:.2f} | Debit: {s.total_debit:.2f} | "
        f"Credit: {s.total_credit:.2f} | Closing: {s.closing_balance:.2f}"
    )
    print(f"--- TRANSACTIONS ({len(result.transactions)}) ---")
    print(f"Parsed debits: {result.total_debit:.2f} | credits: {result.total_credit:.2f}")
    for t in result.transactions[:SAMPLE_TXNS]:
        print(
            f"{t.date.isoformat()} | {t.type.value:<7} | {t.amount:>12.2f} | "
            f"{t.category} | {t.payment_method} | {t.description[:40]}"
        )
    print("--- VALIDATION ---")
    print("✅ Valid" if result.validation.is_valid else "❌ Invalid")
    for msg in result.validation.errors:
        print(f"Error: {msg}")
    for msg in result.validation.warnings:
        print(f"Warning: {msg}")


def cmd_parse(args: argparse.Namespace, layout: StatementLayout) -> int:
    path: Path = args.file
    if path.suffix.lower() in TEXT_SUFFIXES:
        result = parse_statement_text(read_statement_text(path, args.password), layout)
    else:
        sheet = load_statement_rows(path, args.sheet, preferred=layout.preferred_sheet)
        if args.diagnose and not _diagnose(sheet.rows, layout):
            return 1
        result = parse_rows(sheet.rows, layout)

    _print_parse_result(result)
    if args.csv:
        count = write_transactions_csv(result.transactions, args.csv)
        print(f"Wrote {count} transactions to {args.csv}")
    return 0 if result.validation.is_valid else 1


# ------------------------ compare ------------------------


def cmd_compare(args: argparse.Namespace, layout: StatementLayout) -> int:
    dashboard_path: Path = args.dashboard
    if not dashboard_path.is_file():
        print(
            f"{dashboard_path.name} not found. Export it from the app first.",
            file=sys.stderr,
        )
        return 1
    dashboard = load_summary(dashboard_path)

    files = find_summary_files(args.dir, layout.file_pattern)
    if not files:
        print(
            "No statement summary files found. Run `summary` to export a "
            ".summary.json for each statement.",
            file=sys.stderr,
        )
        return 1

    all_pass = True
    for f in files:
        result = compare_summaries(
            dashboard, load_summary(f), f.name, layout.balance_tolerance
        )
        print(f"\nComparing dashboard vs statement: {f.name}")
        for check in result.checks:
            mark = "✅" if check.passed else "❌"
            print(
                f"{check.label:<18}: Dashboard = {_num(check.dashboard)} | "
                f"Statement = {_num(check.statement)} | {mark}"
            )
        if result.passed:
            print("Result: ✅ All fields match!")
        else:
            print("Result: ❌ Mismatch detected!")
            all_pass = False

    if all_pass:
        print("\nAll dashboard summaries match the statement summaries.")
        return 0
    print("\nSome mismatches found. Please review the details above.")
    return 1


# ------------------------ CLI ------------------------


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="idfc-helper",
        description="Inspect and parse IDFC FIRST Bank account statement exports.",
    )
    ap.add_argument("--layout", type=Path,
                    help="JSON file overriding row/column positions of the export")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging on the console")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("inspect", help="Dump sheets, first/last rows and summary-looking rows")
    p.add_argument("file", type=Path)
    p.set_defaults(func=cmd_inspect)

    p = sub.add_parser("summary", help="Summary block, balance check and transaction counts")
    p.add_argument("files", type=Path, nargs="*",
                   help="Statement workbooks (default: every export in --dir, newest first)")
    p.add_argument("--dir", type=Path, default=Path("."), help="Directory searched for exports")
    p.add_argument("--no-export", action="store_true", help="Do not write <file>.summary.json")
    p.add_argument("--raw", action="store_true", help="Also print leading rows and raw summary cells")
    p.set_defaults(func=cmd_summary)

    p = sub.add_parser("last", help="Last transactions, found from the end of the sheet")
    p.add_argument("file", type=Path)
    p.add_argument("--count", type=_positive_int, default=10,
                   help="Number of rows to show (default: 10)")
    p.set_defaults(func=cmd_last)

    p = sub.add_parser("parse", help="Parse transactions (XLSX, CSV, PDF or text) and validate totals")
    p.add_argument("file", type=Path)
    p.add_argument("--sheet", help="Sheet name (default: the account statement sheet)")
    p.add_argument("--password", help="Password for an encrypted PDF statement")
    p.add_argument("--csv", type=Path, help="Write parsed transactions to this CSV file")
    p.add_argument("--diagnose", action="store_true",
                   help="Print header detection details before parsing")
    p.set_defaults(func=cmd_parse)

    p = sub.add_parser("compare", help="Compare dashboard_summary.json with statement summaries")
    p.add_argument("--dashboard", type=Path, default=Path("dashboard_summary.json"))
    p.add_argument("--dir", type=Path, default=Path("."),
                   help="Directory holding <statement>.xlsx.summary.json files")
    p.set_defaults(func=cmd_compare)
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        layout = load_layout(args.layout)
        return args.func(args, layout)
    except (StatementError, OSError, ValueError) as e:
        log.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
