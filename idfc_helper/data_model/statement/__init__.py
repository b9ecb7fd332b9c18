# idfc_helper/data_model/statement/__init__.py
from .parse_result import BalanceCheck, BlockBounds, ParseResult, ValidationResult
from .statement_report import (
    SUMMARY_PERIOD,
    ComparisonResult,
    FieldCheck,
    StatementReport,
)
from .statement_row import StatementRow
from .statement_summary import StatementSummary
from .statement_transaction import StatementTransaction

__all__ = [
    "BalanceCheck",
    "BlockBounds",
    "ParseResult",
    "ValidationResult",
    "SUMMARY_PERIOD",
    "ComparisonResult",
    "FieldCheck",
    "StatementReport",
    "StatementRow",
    "StatementSummary",
    "StatementTransaction",
]
