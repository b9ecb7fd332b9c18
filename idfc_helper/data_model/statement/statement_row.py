from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from idfc_helper.utilities.config_layout import DEFAULT_LAYOUT, StatementLayout


def _cell(row: Sequence[Any], col: int) -> Any:
    return row[col] if 0 <= col < len(row) else None


@dataclass(frozen=True)
class StatementRow:
    """One transaction row of the sheet, cells kept exactly as read."""

    idx: int  # position in the row-array
    txn_date: Any = None
    value_date: Any = None
    particulars: Any = None
    cheque_no: Any = None
    debit: Any = None
    credit: Any = None
    balance: Any = None

    @classmethod
    def from_cells(
        cls, idx: int, row: Sequence[Any], layout: StatementLayout = DEFAULT_LAYOUT
    ) -> "StatementRow":
        return cls(
            idx=idx,
            txn_date=_cell(row, layout.col_txn_date),
            value_date=_cell(row, layout.col_value_date),
            particulars=_cell(row, layout.col_particulars),
            cheque_no=_cell(row, layout.col_cheque_no),
            debit=_cell(row, layout.col_debit),
            credit=_cell(row, layout.col_credit),
            balance=_cell(row, layout.col_balance),
        )
