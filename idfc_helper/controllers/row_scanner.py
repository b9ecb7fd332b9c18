"""
Row classification heuristics for the IDFC FIRST statement export.

The export has no machine-readable structure: the header row is found by
fuzzy text match, the end of the transaction block by looking for date-like
strings, and the bank's summary block by its labels (or, failing that, by its
fixed position). All functions are pure and work on a worksheet row-array.
"""

# idfc_helper/controllers/row_scanner.py
from __future__ import annotations

from typing import Any, Iterator, List, Optional, Sequence, Tuple

from idfc_helper.data_model.statement import BlockBounds
from idfc_helper.utilities.config_layout import DEFAULT_LAYOUT, StatementLayout
from idfc_helper.utilities.core_util import cell_text, is_null_or_whitespace, render_row

Rows = Sequence[Optional[Sequence[Any]]]


def _first_cell(row: Optional[Sequence[Any]]) -> Any:
    return row[0] if row else None


def has_dated_first_cell(row: Optional[Sequence[Any]]) -> bool:
    """First cell is a string containing '-' (the date separator in DD-Mon-YYYY)."""
    first = _first_cell(row)
    return isinstance(first, str) and "-" in first


def find_last_transaction_index(rows: Rows) -> int:
    """
    Scan from the end of the sheet backward and return the index of the first
    row whose first cell is a dash-bearing string. -1 if there is none.
    """
    for i in range(len(rows) - 1, -1, -1):
        if has_dated_first_cell(rows[i]):
            return i
    return -1


def transaction_block_bounds(
    rows: Rows, layout: StatementLayout = DEFAULT_LAYOUT
) -> BlockBounds:
    """
    The trailing window of the transaction block.

    End is the last dated row; start is the fixed first transaction row or
    `tail_window - 1` rows before the end, whichever is later.
    """
    end = find_last_transaction_index(rows)
    start = max(layout.transaction_start_row, end - (layout.tail_window - 1))
    return BlockBounds(start=start, end=end)


def find_header_row(rows: Rows, needle: str = "transaction date") -> int:
    """First row having any cell whose lower-cased text contains `needle`; -1 if absent."""
    needle = needle.lower()
    for i, row in enumerate(rows):
        if not row:
            continue
        if any(cell and needle in cell_text(cell).lower() for cell in row):
            return i
    return -1


def find_exact_header_row(rows: Rows, label: str = "Transaction Date") -> int:
    """First row whose first cell is exactly `label`; -1 if absent."""
    for i, row in enumerate(rows):
        if _first_cell(row) == label:
            return i
    return -1


def find_summary_rows(rows: Rows, search_rows: int = 30) -> Tuple[int, int]:
    """
    Locate the bank's summary block by its labels.

    Returns (label_row, value_row): the first row within `search_rows` whose
    text mentions both "opening balance" and "total debit", and the row after
    it. (-1, -1) when the labels are absent.
    """
    for i in range(min(search_rows, len(rows))):
        row = rows[i]
        if not row:
            continue
        text = " | ".join(cell_text(c) for c in row).lower()
        if "opening balance" in text and "total debit" in text:
            return i, i + 1
    return -1, -1


def is_transaction_row(row: Optional[Sequence[Any]]) -> bool:
    """Row counted as a transaction: first cell is a dated string or a number."""
    first = _first_cell(row)
    if not first:
        return False
    if isinstance(first, str):
        return "-" in first
    return isinstance(first, (int, float)) and not isinstance(first, bool)


def is_candidate_row(row: Optional[Sequence[Any]], min_cells: int = 4) -> bool:
    """Loose check used by the diagnostic parser: enough cells and a non-blank first cell."""
    if not row or len(row) < min_cells:
        return False
    first = row[0]
    return bool(first) and not is_null_or_whitespace(cell_text(first))


def rows_mentioning(
    rows: Rows, *terms: str
) -> Iterator[Tuple[int, Sequence[Any]]]:
    """(index, row) pairs whose rendered text contains any of `terms` (case-insensitive)."""
    lowered = [t.lower() for t in terms]
    for i, row in enumerate(rows):
        if row is None:
            continue
        text = render_row(row).lower()
        if any(t in text for t in lowered):
            yield i, row


def rows_after(rows: Rows, index: int) -> List[Tuple[int, Sequence[Any]]]:
    """(index, row) pairs after `index`, skipping missing rows."""
    return [(i, rows[i]) for i in range(index + 1, len(rows)) if rows[i] is not None]
