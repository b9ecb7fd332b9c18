# idfc_helper/utilities/config_layout.py
from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from idfc_helper.utilities.core_util import open_for_read


@dataclass(frozen=True)
class StatementLayout:
    """
    Positional assumptions about the IDFC FIRST account-statement export.

    Row indices are 0-based positions in the worksheet row-array (relative to
    the first used row of the sheet); column indices are 0-based cell
    positions within a row.
    """

    # transaction columns
    col_txn_date: int = 0
    col_value_date: int = 1
    col_particulars: int = 2
    col_cheque_no: int = 3
    col_debit: int = 4
    col_credit: int = 5
    col_balance: int = 6

    # fixed positions observed in the export
    transaction_start_row: int = 24
    summary_label_row: int = 18
    summary_value_row: int = 19
    tail_window: int = 10

    # search windows / thresholds
    header_needle: str = "transaction date"
    summary_search_rows: int = 30
    metadata_search_rows: int = 20
    min_transaction_cells: int = 6
    balance_tolerance: float = 0.01

    # sources
    preferred_sheet: str = "Account Statement"
    file_pattern: str = "IDFCFIRSTBankstatement_*.xlsx"
    source_name: str = "IDFC FIRST Bank"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StatementLayout":
        """Build a layout from a mapping, ignoring keys that are not layout fields."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, raw in data.items():
            if key not in known:
                continue
            # coerce to the default's type; JSON may give 1 for 1.0
            kind = type(getattr(DEFAULT_LAYOUT, key))
            bad = f"Layout key {key!r} must be {kind.__name__}, got {raw!r}"
            if raw is None or isinstance(raw, (list, dict)):
                raise ValueError(bad)
            try:
                values[key] = kind(raw)
            except (TypeError, ValueError) as e:
                raise ValueError(bad) from e
        return replace(DEFAULT_LAYOUT, **values)


DEFAULT_LAYOUT = StatementLayout()


def load_layout(path: Optional[Path]) -> StatementLayout:
    """Read a JSON layout override; `None` gives the default layout."""
    if path is None:
        return DEFAULT_LAYOUT
    with open_for_read(Path(path), binary=False, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Layout file must contain a JSON object: {path}")
    return StatementLayout.from_dict(data)
