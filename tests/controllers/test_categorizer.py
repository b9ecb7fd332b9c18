from __future__ import annotations

import pytest

from idfc_helper.controllers import categorizer as cat
from idfc_helper.data_model.interfaces import TransactionType


@pytest.mark.parametrize(
    "description,expected",
    [
        ("NEFT/SALARY/ACME", "Salary"),
        ("DIVIDEND HDFC LTD", "Investment Returns"),
        ("Interest credited", "Interest Income"),
        ("Refund from merchant", "Refunds"),
        ("IMPS/CR/FRIEND", "Transfers In"),
        ("Cashback", "Other Income"),
    ],
)
def test_categorize_income(description, expected):
    assert cat.categorize(description, TransactionType.INCOME) == expected


@pytest.mark.parametrize(
    "description,expected",
    [
        ("UPI/SWIGGY", "Food & Dining"),
        ("BLINKIT ORDER", "Groceries"),
        ("UBER TRIP", "Transportation"),
        ("AMAZON PAY", "Shopping"),
        ("NETFLIX.COM", "Entertainment"),
        ("BESCOM ELECTRICITY", "Utilities"),
        ("HOUSE RENT MARCH", "Housing"),
        ("APOLLO PHARMACY", "Healthcare"),
        ("RTGS/VENDOR", "Transfers Out"),
        ("ATM WDL", "Cash Withdrawal"),
        ("LIC INSURANCE PREMIUM", "Insurance"),
        ("HOME LOAN EMI", "Loans & EMI"),
        ("ZERODHA STOCK", "Investments"),
        ("MISC", "Other"),
    ],
)
def test_categorize_expense(description, expected):
    assert cat.categorize(description, TransactionType.EXPENSE) == expected


def test_categorize_first_rule_wins():
    # matches both Food & Dining (zomato) and Transfers Out (neft); food comes first
    assert cat.categorize("NEFT ZOMATO", TransactionType.EXPENSE) == "Food & Dining"


@pytest.mark.parametrize(
    "description,expected",
    [
        ("upi/dr/123", "UPI"),
        ("NEFT-HDFC", "NEFT"),
        ("RTGS HDFC", "RTGS"),
        ("IMPS P2A", "IMPS"),
        ("IFT TO SAVINGS", "Internal Transfer"),
        ("CHQ DEP 1234", "Cheque"),
        ("ATM WDL", "ATM"),
        ("POS 4321 DMART", "Card (POS)"),
        ("DEBIT CARD ANNUAL FEE", "Card (POS)"),
        ("SMS CHARGES", "Other"),
    ],
)
def test_detect_payment_method(description, expected):
    assert cat.detect_payment_method(description) == expected


def test_extract_metadata_tags_and_upi_id():
    notes, tags = cat.extract_metadata("UPI-SHOP42 NEFT ATM")
    assert notes == "UPI ID: SHOP42"
    assert tags == ["digital", "transfer", "cash"]


def test_extract_metadata_nothing_found():
    assert cat.extract_metadata("cash deposit") == ("", [])


def test_clean_description():
    assert cat.clean_description("  UPI/DR/12 \t ZOMATO*Order  (Blr)! ") == "UPI/DR/12 ZOMATOOrder Blr"
    assert cat.clean_description("Café – Bandra") == "Caf  Bandra"
