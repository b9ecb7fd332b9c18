# idfc_helper/utilities/errors.py
from __future__ import annotations


class StatementError(Exception):
    """Base class for failures reading or interpreting a bank statement."""


class WorkbookLoadError(StatementError):
    """The workbook (or the requested sheet) could not be opened."""


class StatementFormatError(StatementError, ValueError):
    """The sheet was read but does not have the expected statement layout."""
