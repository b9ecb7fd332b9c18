# idfc_helper/data_model/__init__.py
from .interfaces import IToDict, RecursiveDict, TransactionType
from .statement import (
    SUMMARY_PERIOD,
    BalanceCheck,
    BlockBounds,
    ComparisonResult,
    FieldCheck,
    ParseResult,
    StatementReport,
    StatementRow,
    StatementSummary,
    StatementTransaction,
    ValidationResult,
)

__all__ = [
    "IToDict", "RecursiveDict", "TransactionType", "SUMMARY_PERIOD",
    "BalanceCheck", "BlockBounds", "ComparisonResult", "FieldCheck",
    "ParseResult", "StatementReport", "StatementRow", "StatementSummary",
    "StatementTransaction", "ValidationResult"]
