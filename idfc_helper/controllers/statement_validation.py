# idfc_helper/controllers/statement_validation.py
from __future__ import annotations

from typing import Iterable, List, Optional

from idfc_helper.data_model.statement import (
    BalanceCheck,
    StatementSummary,
    StatementTransaction,
    ValidationResult,
)

DEFAULT_TOLERANCE = 0.01


def nearly_equal(
    a: Optional[float], b: Optional[float], tol: float = DEFAULT_TOLERANCE
) -> bool:
    """|a - b| < tol; a missing value never matches."""
    if a is None or b is None:
        return False
    return abs(a - b) < tol


def verify_balance(
    summary: StatementSummary, tolerance: float = DEFAULT_TOLERANCE
) -> BalanceCheck:
    """Check Opening + Credits - Debits against the printed closing balance."""
    calculated = summary.computed_closing()
    difference = abs(calculated - summary.closing_balance)
    return BalanceCheck(
        calculated=calculated,
        expected=summary.closing_balance,
        difference=difference,
        matches=difference < tolerance,
    )


def _mismatch(label: str, expected: float, got: float) -> str:
    return (
        f"{label} mismatch: Expected ₹{expected:.2f}, "
        f"got ₹{got:.2f} (difference: ₹{abs(got - expected):.2f})"
    )


def validate_transactions(
    transactions: Iterable[StatementTransaction],
    summary: StatementSummary,
    tolerance: float = DEFAULT_TOLERANCE,
) -> ValidationResult:
    """
    Cross-check parsed transactions against the statement's own totals.

    Errors:
      • debit total differs from the printed total debit (when one is printed)
      • credit total differs from the printed total credit (when one is printed)
    Warnings:
      • opening + parsed credits - parsed debits does not reach the printed
        closing balance
    """
    errors: List[str] = []
    warnings: List[str] = []

    total_debit = 0.0
    total_credit = 0.0
    for t in transactions:
        if t.is_expense:
            total_debit += t.amount
        else:
            total_credit += t.amount

    if summary.total_debit and abs(total_debit - summary.total_debit) > tolerance:
        errors.append(_mismatch("Debit", summary.total_debit, total_debit))

    if summary.total_credit and abs(total_credit - summary.total_credit) > tolerance:
        errors.append(_mismatch("Credit", summary.total_credit, total_credit))

    calculated_closing = summary.opening_balance + total_credit - total_debit
    if (
        summary.closing_balance
        and abs(calculated_closing - summary.closing_balance) > tolerance
    ):
        warnings.append(
            "Balance calculation off by "
            f"₹{abs(calculated_closing - summary.closing_balance):.2f}"
        )

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
