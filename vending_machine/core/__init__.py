"""
Core module - Foundation layer with no external dependencies.

Contains:
- Exceptions
- Value Objects
- Denomination table
"""

from .denominations import DenominationTable
from .exceptions import (
    ErrorKind,
    VendingError,
    InvalidAmountError,
    UnknownDenominationError,
    ExactChangeImpossibleError,
    ItemNotFoundError,
    OutOfStockError,
    InsufficientFundsError,
)
from .value_objects import (
    CashBreakdown,
    TillReport,
    OperationResult,
    PurchaseResult,
)


__all__ = [
    # Denominations
    "DenominationTable",
    # Exceptions
    "ErrorKind",
    "VendingError",
    "InvalidAmountError",
    "UnknownDenominationError",
    "ExactChangeImpossibleError",
    "ItemNotFoundError",
    "OutOfStockError",
    "InsufficientFundsError",
    # Value Objects
    "CashBreakdown",
    "TillReport",
    "OperationResult",
    "PurchaseResult",
]
