from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, List, Optional

from ..interfaces import IToDict, RecursiveDict, TransactionType


@dataclass
class StatementTransaction:
    """A parsed statement line: positive amount with its direction and derived labels."""

    id: str
    date: date
    description: str
    amount: float
    type: TransactionType
    category: str = "Other"
    payment_method: str = "Other"
    notes: str = ""
    tags: List[str] = field(default_factory=list)
    balance: float = 0.0
    value_date: Optional[date] = None
    cheque_number: Optional[str] = None
    source: str = "IDFC FIRST Bank"
    raw_particulars: str = ""
    raw_debit: float = 0.0
    raw_credit: float = 0.0

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    def to_dict(self) -> RecursiveDict:
        """Flat mapping, one column per field; dates as ISO strings."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "valueDate": self.value_date.isoformat() if self.value_date else "",
            "description": self.description,
            "amount": self.amount,
            "type": self.type.value,
            "category": self.category,
            "paymentMethod": self.payment_method,
            "notes": self.notes,
            "tags": ";".join(self.tags),
            "balance": self.balance,
            "chequeNumber": self.cheque_number or "",
            "source": self.source,
            "rawParticulars": self.raw_particulars,
            "rawDebit": self.raw_debit,
            "rawCredit": self.raw_credit,
        }


if TYPE_CHECKING:
    _is_idict: type[IToDict] = StatementTransaction
