# idfc_helper/data_model/interfaces/__init__.py
"""
Interfaces and Enums for the statement data model.
"""

from .enum_transaction_type import TransactionType
from .i_to_dict import IToDict, RecursiveDict

__all__ = ["TransactionType", "IToDict", "RecursiveDict"]
