# idfc_helper/utilities/converters_scalar.py
from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Final, Optional


def _float_prefix(text: str) -> Optional[float]:
    """Return the float value of the longest numeric prefix of `text`, or None."""
    m = _FLOAT_PREFIX_RE.match(text)
    if not m:
        return None
    return float(m.group(0))


def parse_amount(value: Any) -> float:
    """
    Convert a statement cell into a float amount.

    Rules:
      • None, "", 0 and other falsy cells → 0.0
      • booleans are not amounts → 0.0
      • numbers are returned as floats (NaN → 0.0)
      • strings: thousands-separator commas and surrounding whitespace are
        stripped, then the leading numeric part is parsed
        ("1,234.56" → 1234.56, "12.50 Cr" → 12.5)
      • anything that still does not parse → 0.0

    Examples:
        parse_amount("1,234.56")  -> 1234.56
        parse_amount("")          -> 0.0
        parse_amount(None)        -> 0.0
        parse_amount("N/A")       -> 0.0
    """
    if not value or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        out = float(value)
        return 0.0 if math.isnan(out) else out
    cleaned = str(value).replace(",", "").strip()
    parsed = _float_prefix(cleaned)
    if parsed is None or math.isnan(parsed):
        return 0.0
    return parsed


def is_numeric_cell(value: Any) -> bool:
    """True when the cell is non-empty and starts with a parseable number."""
    if not value or isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return not math.isnan(float(value))
    return _float_prefix(str(value).replace(",", "").strip()) is not None


def format_amount(value: Any) -> str:
    """Two-decimal display string for an amount cell; blank cells stay blank."""
    if not value:
        return ""
    return f"{parse_amount(value):.2f}"


def parse_statement_date(value: Any) -> Optional[date]:
    """
    Parse the date encodings seen in IDFC statements.

    Supported examples:
      - 05-Jan-2025, 05-JAN-2025  (statement export, also found inside longer text)
      - 05/01/2025                (D/M/Y)
      - 2025-01-05                (ISO)
      - 05 Jan 2025, 05-01-2025, 05-Jan-25
      - date / datetime objects

    Returns:
        datetime.date if recognized; otherwise None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    txt = str(value).strip()
    if not txt:
        return None

    m = _DD_MMM_YYYY_RE.search(txt)
    if m:
        day, mon, year = m.groups()
        month = _MONTHS.get(mon.lower())
        if month is not None:
            try:
                return date(int(year), month, int(day))
            except ValueError:
                return None

    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(txt, fmt).date()
        except ValueError:
            continue
    return None


_FLOAT_PREFIX_RE: Final[re.Pattern[str]] = re.compile(
    r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)
_DD_MMM_YYYY_RE: Final[re.Pattern[str]] = re.compile(r"(\d{2})-([A-Za-z]{3})-(\d{4})")
_MONTHS: Final[dict[str, int]] = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}
_FALLBACK_FORMATS: Final[tuple[str, ...]] = (
    "%d/%m/%Y",
    "%Y-%m-%d",
    "%d %b %Y",
    "%d-%m-%Y",
    "%d-%b-%y",
)
