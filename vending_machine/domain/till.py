"""
Till - the machine's reserve of physical cash.

Holds one count per legal denomination. The same cash is used for
absorbing payments and for dispensing change.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from vending_machine.core.denominations import DenominationTable
from vending_machine.core.exceptions import InvalidAmountError
from vending_machine.core.value_objects import CashBreakdown
from vending_machine.loggers import logger


class Till:
    """
    Authoritative record of the cash the machine can dispense.

    Every legal denomination has an entry (possibly zero) and counts
    never go below zero.
    """

    def __init__(
        self,
        denominations: DenominationTable,
        initial: Optional[Mapping[int, int]] = None,
    ) -> None:
        """
        Initialize the till.

        Args:
            denominations: Legal denomination table.
            initial: Optional starting counts per denomination.

        Raises:
            UnknownDenominationError: If ``initial`` has an illegal denomination.
            InvalidAmountError: If ``initial`` has a negative count.
        """
        self._denominations = denominations
        self._counts: dict[int, int] = {denomination: 0 for denomination in denominations}

        for denomination, count in (initial or {}).items():
            denominations.validate(denomination)
            if count < 0:
                raise InvalidAmountError(f"Negative till count for {denomination}: {count}")
            self._counts[denomination] = count

    @property
    def denominations(self) -> DenominationTable:
        """Get the denomination table."""
        return self._denominations

    @property
    def total(self) -> int:
        """Total value held in the till."""
        return sum(denomination * count for denomination, count in self._counts.items())

    def available(self, denomination: int) -> int:
        """Get the number of units held for a denomination (zero if unknown)."""
        return self._counts.get(denomination, 0)

    def credit(self, denomination: int, count: int = 1) -> None:
        """
        Add units of a denomination.

        Args:
            denomination: Legal denomination.
            count: Number of units to add (at least one).

        Raises:
            UnknownDenominationError: If the denomination is not legal.
            InvalidAmountError: If count is below one.
        """
        self._denominations.validate(denomination)
        if count < 1:
            raise InvalidAmountError(f"Credit count must be at least 1, got {count}")
        self._counts[denomination] += count

    def debit(self, denomination: int, count: int = 1) -> None:
        """
        Remove units of a denomination, clamping at zero.

        Callers must never request more than ``available``; the clamp only
        keeps the till consistent if they do.

        Raises:
            UnknownDenominationError: If the denomination is not legal.
            InvalidAmountError: If count is below one.
        """
        self._denominations.validate(denomination)
        if count < 1:
            raise InvalidAmountError(f"Debit count must be at least 1, got {count}")
        held = self._counts[denomination]
        if count > held:
            logger.warning(
                f"Till debit of {count} x {denomination} exceeds available {held}, clamping to zero"
            )
        self._counts[denomination] = max(0, held - count)

    def snapshot(self) -> CashBreakdown:
        """Get a read-only copy of the non-zero counts."""
        return CashBreakdown(self._counts)

    def snapshot_plus(self, other: Mapping[int, int]) -> CashBreakdown:
        """
        Get a read-only view of the till combined with other cash.

        Neither the till nor ``other`` is modified.
        """
        return CashBreakdown(self._counts) + other

    def counts(self) -> tuple[tuple[int, int], ...]:
        """Get (denomination, count) for every legal denomination, largest first."""
        return tuple((denomination, self._counts[denomination]) for denomination in self._denominations)
