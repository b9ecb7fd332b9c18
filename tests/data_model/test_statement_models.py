from __future__ import annotations

import dataclasses
from datetime import date

import pytest

from idfc_helper.data_model.interfaces import IToDict, TransactionType
from idfc_helper.data_model.statement import (
    BalanceCheck,
    BlockBounds,
    ComparisonResult,
    FieldCheck,
    StatementReport,
    StatementRow,
    StatementSummary,
    StatementTransaction,
)
from idfc_helper.utilities.config_layout import StatementLayout


def test_statement_row_from_cells_full_row():
    row = ["02-Jan-2025", "03-Jan-2025", "UPI", "000123", "1.00", None, "9.00"]

    sr = StatementRow.from_cells(24, row)

    assert sr.idx == 24
    assert (sr.txn_date, sr.value_date, sr.particulars) == ("02-Jan-2025", "03-Jan-2025", "UPI")
    assert (sr.cheque_no, sr.debit, sr.credit, sr.balance) == ("000123", "1.00", None, "9.00")


def test_statement_row_from_cells_short_row_pads_with_none():
    sr = StatementRow.from_cells(3, ["02-Jan-2025", "02-Jan-2025"])
    assert sr.particulars is None and sr.balance is None


def test_statement_row_from_cells_honours_layout():
    layout = StatementLayout(col_particulars=1, col_value_date=2)

    sr = StatementRow.from_cells(0, ["d", "desc", "vd"], layout)

    assert (sr.particulars, sr.value_date) == ("desc", "vd")


def test_statement_row_is_frozen():
    sr = StatementRow(idx=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        sr.idx = 2  # type: ignore[misc]


def test_summary_computed_closing():
    assert StatementSummary(100.0, 30.0, 50.0, 120.0).computed_closing() == 120.0
    assert StatementSummary(0.0, 10.0, 0.0, 0.0).computed_closing() == -10.0


def test_transaction_to_dict():
    t = StatementTransaction(
        id="txn_20250102_0024",
        date=date(2025, 1, 2),
        description="UPI ZOMATO",
        amount=250.0,
        type=TransactionType.EXPENSE,
        tags=["digital", "transfer"],
    )

    assert t.is_expense
    d = t.to_dict()
    assert d["date"] == "2025-01-02"
    assert d["valueDate"] == ""
    assert d["type"] == "expense"
    assert d["tags"] == "digital;transfer"
    assert d["chequeNumber"] == ""
    assert d["source"] == "IDFC FIRST Bank"
    assert (d["rawParticulars"], d["rawDebit"], d["rawCredit"]) == ("", 0.0, 0.0)


@pytest.mark.parametrize(
    "bounds,found,indices",
    [
        (BlockBounds(24, 26), True, [24, 25, 26]),
        (BlockBounds(24, 24), True, [24]),
        (BlockBounds(24, -1), False, []),
    ],
)
def test_block_bounds(bounds, found, indices):
    assert bounds.found is found
    assert list(bounds.indices()) == indices


def test_report_summary_json():
    report = StatementReport(
        file="f.xlsx",
        summary=StatementSummary(1.0, 2.0, 3.0, 2.0),
        balance=BalanceCheck(2.0, 2.0, 0.0, True),
        transaction_count=5,
    )

    assert report.to_summary_json() == {
        "openingBalance": 1.0,
        "totalDebit": 2.0,
        "totalCredit": 3.0,
        "closingBalance": 2.0,
        "transactionCount": 5,
        "period": "All Time",
        "file": "f.xlsx",
    }


def test_comparison_result_passed():
    ok = FieldCheck("Opening Balance", 1.0, 1.0, True)
    bad = FieldCheck("Total Debit", 1.0, 2.0, False)

    assert ComparisonResult("f", [ok]).passed
    assert not ComparisonResult("f", [ok, bad]).passed
    assert ComparisonResult("f").passed  # nothing compared


def test_transaction_satisfies_to_dict_protocol():
    t = StatementTransaction("t", date(2025, 1, 1), "d", 1.0, TransactionType.INCOME)
    assert isinstance(t, IToDict)
    assert not isinstance(StatementSummary(), IToDict)
