"""
Change Engine - decides how to pay out an exact change amount.

Uses a greedy pass over the denominations, largest first, without
backtracking. The greedy pass is not a complete change-making solver:
for some denomination sets and pools an exact combination exists that
it does not find (e.g. denominations 4, 3, 1 with pool {4: 1, 3: 2} and
target 6 fails although 3 + 3 works). That outcome is reported as
``ExactChangeImpossibleError`` like any other shortage.
"""

from __future__ import annotations

from collections.abc import Mapping

from vending_machine.core.denominations import DenominationTable
from vending_machine.core.exceptions import ExactChangeImpossibleError, InvalidAmountError
from vending_machine.core.value_objects import CashBreakdown


def make_change(
    amount: int,
    pool: Mapping[int, int],
    denominations: DenominationTable,
) -> CashBreakdown:
    """
    Compute the units to hand out for an exact change amount.

    The pool is only read, never modified.

    Args:
        amount: Change to give, in the smallest currency unit.
        pool: Units available per denomination.
        denominations: Table giving the iteration order.

    Returns:
        Breakdown whose total equals ``amount`` and whose counts do not
        exceed the pool.

    Raises:
        InvalidAmountError: If amount is negative.
        ExactChangeImpossibleError: If the greedy pass cannot reach the amount.
    """
    if amount < 0:
        raise InvalidAmountError(f"Change amount cannot be negative: {amount}")
    if amount == 0:
        return CashBreakdown()

    breakdown: dict[int, int] = {}
    remaining = amount

    for denomination in denominations:
        if denomination > remaining:
            continue
        take = min(remaining // denomination, pool.get(denomination, 0))
        if take > 0:
            breakdown[denomination] = take
            remaining -= denomination * take
        if remaining == 0:
            break

    if remaining != 0:
        raise ExactChangeImpossibleError(amount, remaining=remaining)

    return CashBreakdown(breakdown)
