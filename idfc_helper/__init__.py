"""
idfc_helper: read IDFC FIRST Bank statement exports, extract transactions and
check them against the statement's own summary totals.
"""

__version__ = "0.1.0"
