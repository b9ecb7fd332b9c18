from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from ..interfaces import RecursiveDict
from .parse_result import BalanceCheck
from .statement_summary import StatementSummary

SUMMARY_PERIOD = "All Time"


@dataclass
class StatementReport:
    """Positional summary and transaction counts for one statement file."""

    file: str
    summary: StatementSummary
    balance: BalanceCheck
    transaction_count: int = 0
    debit_count: int = 0
    credit_count: int = 0

    def to_summary_json(self) -> RecursiveDict:
        """The `.summary.json` document compared against the dashboard export."""
        return {
            "openingBalance": self.summary.opening_balance,
            "totalDebit": self.summary.total_debit,
            "totalCredit": self.summary.total_credit,
            "closingBalance": self.summary.closing_balance,
            "transactionCount": self.transaction_count,
            "period": SUMMARY_PERIOD,
            "file": self.file,
        }


@dataclass(frozen=True)
class FieldCheck:
    label: str
    dashboard: Union[float, int, None]
    statement: Union[float, int, None]
    passed: bool


@dataclass
class ComparisonResult:
    file: str
    checks: List[FieldCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)
