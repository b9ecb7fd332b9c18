# idfc_helper/controllers/categorizer.py
from __future__ import annotations

import re
from typing import Final, List, Sequence, Tuple

from idfc_helper.data_model.interfaces import TransactionType

# Ordered (category, keywords) tables; the first table entry with a keyword
# contained in the lower-cased description wins.
_TRANSFER_WORDS: Final = ("neft", "rtgs", "imps", "ift")

INCOME_RULES: Final[Tuple[Tuple[str, Tuple[str, ...]], ...]] = (
    ("Salary", ("salary", "payroll")),
    ("Investment Returns", ("dividend", "mutual fund", "mf")),
    ("Interest Income", ("interest",)),
    ("Refunds", ("refund", "reversal")),
    ("Transfers In", _TRANSFER_WORDS),
)

EXPENSE_RULES: Final[Tuple[Tuple[str, Tuple[str, ...]], ...]] = (
    ("Food & Dining", ("zomato", "swiggy", "food", "restaurant")),
    ("Groceries", ("blinkit", "zepto", "grocery", "bigbasket")),
    ("Transportation", ("uber", "ola", "metro", "petrol", "fuel")),
    ("Shopping", ("amazon", "flipkart", "shopping", "myntra")),
    ("Entertainment", ("netflix", "spotify", "prime", "google play")),
    ("Utilities", ("electricity", "water", "gas", "broadband")),
    ("Housing", ("rent", "lease")),
    ("Healthcare", ("hospital", "pharmacy", "doctor", "medical")),
    ("Transfers Out", _TRANSFER_WORDS),
    ("Cash Withdrawal", ("atm", "cash withdrawal")),
    ("Insurance", ("insurance",)),
    ("Loans & EMI", ("emi", "loan")),
    ("Investments", ("mutual fund", "mf", "stock", "invest")),
)

# checked against the upper-cased description, in order
PAYMENT_METHOD_RULES: Final[Tuple[Tuple[str, Tuple[str, ...]], ...]] = (
    ("UPI", ("UPI",)),
    ("NEFT", ("NEFT",)),
    ("RTGS", ("RTGS",)),
    ("IMPS", ("IMPS",)),
    ("Internal Transfer", ("IFT",)),
    ("Cheque", ("CHQ", "CHEQUE")),
    ("ATM", ("ATM",)),
    ("Card (POS)", ("POS", "CARD")),
)

_UPI_ID_RE: Final = re.compile(r"UPI[/\-]([A-Z0-9]+)", re.IGNORECASE)
_WHITESPACE_RE: Final = re.compile(r"\s+")
_DISALLOWED_RE: Final = re.compile(r"[^\w\s\-/]", re.ASCII)


def _first_match(
    text: str, rules: Sequence[Tuple[str, Tuple[str, ...]]], default: str
) -> str:
    for label, keywords in rules:
        if any(k in text for k in keywords):
            return label
    return default


def categorize(description: str, txn_type: TransactionType) -> str:
    """Keyword category for a transaction; income and expense use separate tables."""
    desc = description.lower()
    if txn_type is TransactionType.INCOME:
        return _first_match(desc, INCOME_RULES, "Other Income")
    return _first_match(desc, EXPENSE_RULES, "Other")


def detect_payment_method(description: str) -> str:
    return _first_match(description.upper(), PAYMENT_METHOD_RULES, "Other")


def extract_metadata(description: str) -> Tuple[str, List[str]]:
    """(notes, tags) derived from the description text."""
    tags: List[str] = []
    if "UPI" in description:
        tags.append("digital")
    if "NEFT" in description or "RTGS" in description:
        tags.append("transfer")
    if "ATM" in description:
        tags.append("cash")

    m = _UPI_ID_RE.search(description)
    notes = f"UPI ID: {m.group(1)}" if m else ""
    return notes, tags


def clean_description(text: str) -> str:
    """Collapse whitespace and drop punctuation other than '-' and '/'."""
    text = _WHITESPACE_RE.sub(" ", text)
    text = _DISALLOWED_RE.sub("", text)
    return text.strip()
