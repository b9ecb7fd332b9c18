from __future__ import annotations

from dataclasses import dataclass


@dataclass
class StatementSummary:
    """
    Totals printed by the bank in the statement header block, plus the account
    metadata found above it. Amounts default to 0.0 when the block is missing.
    """

    opening_balance: float = 0.0
    total_debit: float = 0.0
    total_credit: float = 0.0
    closing_balance: float = 0.0
    account_number: str = ""
    statement_period: str = ""
    customer_name: str = ""

    def computed_closing(self) -> float:
        """Opening + Credits - Debits."""
        return self.opening_balance + self.total_credit - self.total_debit
