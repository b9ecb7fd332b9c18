from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .statement_summary import StatementSummary
from .statement_transaction import StatementTransaction


@dataclass(frozen=True)
class BlockBounds:
    """Inclusive row range of a transaction block; `end == -1` when none was found."""

    start: int
    end: int

    @property
    def found(self) -> bool:
        return self.end >= 0

    def indices(self) -> range:
        return range(self.start, self.end + 1)


@dataclass(frozen=True)
class BalanceCheck:
    """Opening + Credits - Debits compared with the printed closing balance."""

    calculated: float
    expected: float
    difference: float
    matches: bool


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class ParseResult:
    transactions: List[StatementTransaction]
    summary: StatementSummary
    validation: ValidationResult

    @property
    def total_debit(self) -> float:
        return sum(t.amount for t in self.transactions if t.is_expense)

    @property
    def total_credit(self) -> float:
        return sum(t.amount for t in self.transactions if not t.is_expense)
