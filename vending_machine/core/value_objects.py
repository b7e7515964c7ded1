"""
Value Objects for the vending machine.

Immutable objects that represent values in the domain.
Value objects are compared by value, not by identity.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .exceptions import ErrorKind, InvalidAmountError, VendingError


# =============================================================================
# Cash Breakdown Value Object
# =============================================================================


CountsLike = Union[Mapping[int, int], Iterable[tuple[int, int]]]


class CashBreakdown(Mapping[int, int]):
    """
    Immutable mapping of denomination -> number of units.

    Used for change breakdowns, returned cash and read-only views of the
    till. Zero counts are dropped, so an absent denomination and a zero
    count are the same thing; entries iterate largest denomination first.

    Amounts are integers in the smallest currency unit (kopecks).
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Optional[CountsLike] = None) -> None:
        raw = dict(counts or {})
        for denomination, count in raw.items():
            if count < 0:
                raise InvalidAmountError(
                    f"Negative count {count} for denomination {denomination}"
                )
        self._counts: dict[int, int] = {
            denomination: count
            for denomination, count in sorted(raw.items(), reverse=True)
            if count > 0
        }

    def __getitem__(self, denomination: int) -> int:
        return self._counts[denomination]

    def __iter__(self) -> Iterator[int]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __add__(self, other: Mapping[int, int]) -> "CashBreakdown":
        if not isinstance(other, Mapping):
            return NotImplemented
        merged = dict(self._counts)
        for denomination, count in other.items():
            merged[denomination] = merged.get(denomination, 0) + count
        return CashBreakdown(merged)

    def __repr__(self) -> str:
        return f"CashBreakdown({self._counts!r})"

    @property
    def total(self) -> int:
        """Total value in the smallest currency unit."""
        return sum(denomination * count for denomination, count in self._counts.items())

    @property
    def units(self) -> int:
        """Number of physical units (coins and notes)."""
        return sum(self._counts.values())

    def count(self, denomination: int) -> int:
        """Get the number of units of a denomination (zero when absent)."""
        return self._counts.get(denomination, 0)

    def to_dict(self) -> dict[int, int]:
        """Convert to a plain dictionary."""
        return dict(self._counts)


# =============================================================================
# Till Report Value Object
# =============================================================================


@dataclass(frozen=True)
class TillReport:
    """
    Read-only snapshot of the till for the admin.

    Attributes:
        counts: (denomination, count) pairs for every legal denomination,
            largest first, zero counts included.
        collected: Cumulative price of items sold since the last collection.
    """

    counts: tuple[tuple[int, int], ...] = field(default_factory=tuple)
    collected: int = 0

    @property
    def cash_total(self) -> int:
        """Total value of the cash held in the till."""
        return sum(denomination * count for denomination, count in self.counts)

    def count(self, denomination: int) -> int:
        """Get the count of a denomination (zero when absent)."""
        return dict(self.counts).get(denomination, 0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for command responses."""
        return {
            "counts": {str(denomination): count for denomination, count in self.counts},
            "cash_total": self.cash_total,
            "collected": self.collected,
        }


# =============================================================================
# Operation Result Value Objects
# =============================================================================


@dataclass(frozen=True)
class OperationResult:
    """
    Result of a simple machine operation (insert, replenish, catalog update).

    Attributes:
        success: Whether the operation succeeded.
        message: Human-readable message.
        error: Failure kind when unsuccessful.
        details: Additional failure details.
        data: Optional payload.
    """

    success: bool
    message: str = ""
    error: Optional[ErrorKind] = None
    details: dict[str, Any] = field(default_factory=dict)
    data: Any = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "OperationResult":
        """Create a successful result."""
        return cls(success=True, message=message, data=data)

    @classmethod
    def failed(cls, error: VendingError) -> "OperationResult":
        """Create a failed result from a vending error."""
        return cls(
            success=False,
            message=error.message,
            error=error.kind,
            details=dict(error.details),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for command responses."""
        result: dict[str, Any] = {
            "success": self.success,
            "message": self.message,
        }
        if self.error is not None:
            result["error"] = self.error.value
            result["details"] = self.details
        if self.data is not None:
            result["data"] = self.data
        return result


@dataclass(frozen=True)
class PurchaseResult:
    """
    Result of a purchase attempt.

    Attributes:
        success: Whether the item was dispensed.
        item_code: Requested item code.
        item_name: Name of the dispensed item.
        price: Item price.
        inserted: Cash inserted by the customer for this purchase.
        change: Units returned to the customer.
        message: Human-readable message.
        error: Failure kind when unsuccessful.
        details: Additional failure details (e.g. ``shortfall``).
    """

    success: bool
    item_code: str = ""
    item_name: str = ""
    price: int = 0
    inserted: int = 0
    change: CashBreakdown = field(default_factory=CashBreakdown)
    message: str = ""
    error: Optional[ErrorKind] = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def completed(
        cls,
        item_code: str,
        item_name: str,
        price: int,
        inserted: int,
        change: CashBreakdown,
        message: str,
    ) -> "PurchaseResult":
        """Create a result for a completed purchase."""
        return cls(
            success=True,
            item_code=item_code,
            item_name=item_name,
            price=price,
            inserted=inserted,
            change=change,
            message=message,
        )

    @classmethod
    def failed(
        cls,
        item_code: str,
        error: VendingError,
        message: Optional[str] = None,
    ) -> "PurchaseResult":
        """Create a failed result from a vending error."""
        return cls(
            success=False,
            item_code=item_code,
            message=message or error.message,
            error=error.kind,
            details=dict(error.details),
        )

    @property
    def change_amount(self) -> int:
        """Total value of the change returned."""
        return self.change.total

    @property
    def shortfall(self) -> int:
        """Amount still missing for an insufficient funds failure."""
        return int(self.details.get("shortfall", 0))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for command responses."""
        result: dict[str, Any] = {
            "success": self.success,
            "message": self.message,
            "item_code": self.item_code,
        }
        if self.success:
            result["item_name"] = self.item_name
            result["price"] = self.price
            result["inserted"] = self.inserted
            result["change_amount"] = self.change_amount
            result["change"] = {
                str(denomination): count for denomination, count in self.change.items()
            }
        else:
            result["error"] = self.error.value if self.error else None
            result["details"] = self.details
        return result
