"""
Cash vending machine.

Tracks a catalog of items, a till of currency denominations and the cash
inserted by the current customer, and resolves purchases into either a
dispensed item with exact change or a refusal with nothing changed.
"""

from vending_machine.application import CommandHandler, VendingMachine
from vending_machine.core import (
    CashBreakdown,
    DenominationTable,
    ErrorKind,
    OperationResult,
    PurchaseResult,
    TillReport,
)


__version__ = "1.0.0"

__all__ = [
    "CashBreakdown",
    "CommandHandler",
    "DenominationTable",
    "ErrorKind",
    "OperationResult",
    "PurchaseResult",
    "TillReport",
    "VendingMachine",
]
