"""
Pending transaction - cash inserted by the current customer.
"""

from __future__ import annotations

from vending_machine.core.denominations import DenominationTable
from vending_machine.core.value_objects import CashBreakdown


class PendingTransaction:
    """
    Accumulates the denominations inserted for the current purchase.

    Cleared after a successful purchase or a cancellation. One instance
    exists per machine.
    """

    def __init__(self, denominations: DenominationTable) -> None:
        self._denominations = denominations
        self._inserted: dict[int, int] = {}

    def __len__(self) -> int:
        return sum(self._inserted.values())

    @property
    def is_empty(self) -> bool:
        """Check if nothing has been inserted."""
        return not self._inserted

    def insert(self, denomination: int) -> None:
        """
        Record one inserted unit.

        Raises:
            UnknownDenominationError: If the denomination is not legal.
        """
        self._denominations.validate(denomination)
        self._inserted[denomination] = self._inserted.get(denomination, 0) + 1

    def total(self) -> int:
        """Get the total inserted value."""
        return sum(denomination * count for denomination, count in self._inserted.items())

    def clear(self) -> None:
        """Forget everything inserted."""
        self._inserted.clear()

    def snapshot(self) -> CashBreakdown:
        """Get a read-only copy of the inserted units."""
        return CashBreakdown(self._inserted)
