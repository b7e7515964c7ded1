"""
Custom exceptions for the vending machine.

Every recoverable failure of the purchase flow has its own exception type
carrying an ``ErrorKind``. Domain components raise these; the application
layer turns them into result objects.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Kinds of expected, recoverable failures."""

    UNKNOWN_DENOMINATION = "unknown_denomination"
    ITEM_NOT_FOUND = "item_not_found"
    OUT_OF_STOCK = "out_of_stock"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    EXACT_CHANGE_IMPOSSIBLE = "exact_change_impossible"
    INVALID_AMOUNT = "invalid_amount"


class VendingError(Exception):
    """Base exception for all vending machine errors."""

    kind: ErrorKind = ErrorKind.INVALID_AMOUNT

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            code: Optional error code for programmatic handling.
            details: Optional additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for command responses."""
        return {
            "error": self.code,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Cash Errors
# =============================================================================


class InvalidAmountError(VendingError):
    """Amount or count outside the accepted range."""

    kind = ErrorKind.INVALID_AMOUNT


class UnknownDenominationError(VendingError):
    """Denomination is not part of the legal set."""

    kind = ErrorKind.UNKNOWN_DENOMINATION

    def __init__(self, denomination: int, **kwargs: Any) -> None:
        super().__init__(f"Unknown denomination: {denomination}", **kwargs)
        self.denomination = denomination
        self.details["denomination"] = denomination


class ExactChangeImpossibleError(VendingError):
    """The available cash cannot produce the exact change amount."""

    kind = ErrorKind.EXACT_CHANGE_IMPOSSIBLE

    def __init__(self, amount: int, remaining: int = 0, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot give exact change of {amount}",
            **kwargs,
        )
        self.amount = amount
        self.remaining = remaining
        self.details["amount"] = amount
        self.details["remaining"] = remaining


# =============================================================================
# Purchase Errors
# =============================================================================


class ItemNotFoundError(VendingError):
    """No item with the requested code."""

    kind = ErrorKind.ITEM_NOT_FOUND

    def __init__(self, code: str, **kwargs: Any) -> None:
        super().__init__(f"Item not found: {code}", **kwargs)
        self.item_code = code
        self.details["item_code"] = code


class OutOfStockError(VendingError):
    """The requested item has no stock left."""

    kind = ErrorKind.OUT_OF_STOCK

    def __init__(self, code: str, **kwargs: Any) -> None:
        super().__init__(f"Item out of stock: {code}", **kwargs)
        self.item_code = code
        self.details["item_code"] = code


class InsufficientFundsError(VendingError):
    """Inserted cash does not cover the price."""

    kind = ErrorKind.INSUFFICIENT_FUNDS

    def __init__(
        self,
        price: int,
        inserted: int,
        **kwargs: Any,
    ) -> None:
        self.price = price
        self.inserted = inserted
        self.shortfall = price - inserted
        super().__init__(
            f"Insufficient funds: {self.shortfall} more required",
            **kwargs,
        )
        self.details["price"] = price
        self.details["inserted"] = inserted
        self.details["shortfall"] = self.shortfall
