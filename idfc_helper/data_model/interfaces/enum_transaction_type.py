from enum import Enum


class TransactionType(Enum):
    """
    Direction of money for a statement line: debit column = expense, credit column = income.
    """
    INCOME = "income"
    EXPENSE = "expense"
