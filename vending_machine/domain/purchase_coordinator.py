"""
Purchase Coordinator - resolves one purchase attempt as a single unit.

A purchase is validated and its change computed against a hypothetical
pool (till plus the customer's inserted cash) before anything is touched.
Only when every check has passed is the precomputed delta applied to the
catalog, the till and the pending transaction in one step.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from vending_machine.core.exceptions import (
    ExactChangeImpossibleError,
    InsufficientFundsError,
    OutOfStockError,
    VendingError,
)
from vending_machine.core.value_objects import CashBreakdown, PurchaseResult
from vending_machine.domain.catalog import Catalog, Item
from vending_machine.domain.change_engine import make_change
from vending_machine.domain.pending_transaction import PendingTransaction
from vending_machine.domain.till import Till
from vending_machine.formatting import format_amount
from vending_machine.infrastructure.settings import MachineSettings
from vending_machine.loggers import logger


# =============================================================================
# Purchase Phases
# =============================================================================


class PurchasePhase(Enum):
    """Phases of a purchase attempt."""

    IDLE = auto()           # No purchase in progress
    VALIDATING = auto()     # Looking up item, stock and funds
    COMPUTING = auto()      # Working out the change breakdown
    COMMITTING = auto()     # Applying the purchase delta
    RESOLVED = auto()       # Outcome decided


# =============================================================================
# Purchase Delta
# =============================================================================


@dataclass(frozen=True)
class PurchaseDelta:
    """
    Every state change of a successful purchase, computed up front.

    Attributes:
        item: Item to dispense (stock goes down by one).
        credit: Inserted cash absorbed into the till.
        debit: Change paid out of the till.
        collected: Amount added to the collected funds.
    """

    item: Item
    credit: CashBreakdown
    debit: CashBreakdown
    collected: int

    @property
    def inserted(self) -> int:
        """Cash inserted by the customer."""
        return self.credit.total

    @property
    def change_amount(self) -> int:
        """Change paid out."""
        return self.debit.total


# =============================================================================
# Purchase Coordinator
# =============================================================================


class PurchaseCoordinator:
    """
    Couples the catalog, till and pending transaction for purchases.

    Guarantees all-or-nothing semantics: a failed attempt leaves the
    till, the pending transaction and the item stock untouched.
    """

    def __init__(
        self,
        catalog: Catalog,
        till: Till,
        pending: PendingTransaction,
        settings: Optional[MachineSettings] = None,
    ) -> None:
        """
        Initialize the coordinator.

        Args:
            catalog: Items offered by the machine.
            till: Cash reserve used for change.
            pending: Cash inserted by the current customer.
            settings: Machine settings used for messages.
        """
        self._catalog = catalog
        self._till = till
        self._pending = pending
        self._settings = settings
        self._collected = 0
        self._phase = PurchasePhase.IDLE

    @property
    def phase(self) -> PurchasePhase:
        """Get the phase of the last purchase attempt."""
        return self._phase

    @property
    def collected(self) -> int:
        """Cumulative price of items sold since the last collection."""
        return self._collected

    def purchase(self, item_code: str) -> PurchaseResult:
        """
        Attempt to buy one unit of an item with the inserted cash.

        Args:
            item_code: Code of the item to buy.

        Returns:
            PurchaseResult with the change breakdown on success, or the
            failure kind with no state changed.
        """
        try:
            self._phase = PurchasePhase.VALIDATING
            item, inserted = self._validate(item_code)
            self._phase = PurchasePhase.COMPUTING
            delta = self._compute(item, inserted)
        except VendingError as e:
            self._phase = PurchasePhase.RESOLVED
            logger.info(f"Purchase of {item_code} refused: {e.message}")
            return PurchaseResult.failed(item_code, e, message=self._failure_message(e))

        self._commit(delta)

        message = (
            f"Dispensed: {delta.item.name}. "
            f"Change: {format_amount(delta.change_amount, self._settings)}."
        )
        logger.info(
            f"Purchase of {delta.item.code} completed. "
            f"Inserted: {format_amount(delta.inserted, self._settings)}, "
            f"change: {format_amount(delta.change_amount, self._settings)}"
        )
        return PurchaseResult.completed(
            item_code=delta.item.code,
            item_name=delta.item.name,
            price=delta.collected,
            inserted=delta.inserted,
            change=delta.debit,
            message=message,
        )

    def prepare(self, item_code: str) -> PurchaseDelta:
        """
        Validate a purchase and compute its delta without changing anything.

        The coordinator phase is left alone; it only follows ``purchase``.

        Raises:
            ItemNotFoundError: If no item has that code.
            OutOfStockError: If the item has no stock.
            InsufficientFundsError: If the inserted cash is below the price.
            ExactChangeImpossibleError: If the change cannot be paid exactly.
        """
        return self._compute(*self._validate(item_code))

    def _validate(self, item_code: str) -> tuple[Item, CashBreakdown]:
        item = self._catalog.require(item_code)
        if not item.in_stock:
            raise OutOfStockError(item_code)

        inserted = self._pending.snapshot()
        if inserted.total < item.price:
            raise InsufficientFundsError(price=item.price, inserted=inserted.total)
        return item, inserted

    def _compute(self, item: Item, inserted: CashBreakdown) -> PurchaseDelta:
        change_amount = inserted.total - item.price
        pool = self._till.snapshot_plus(inserted)
        change = make_change(change_amount, pool, self._till.denominations)

        return PurchaseDelta(
            item=item,
            credit=inserted,
            debit=change,
            collected=item.price,
        )

    def _commit(self, delta: PurchaseDelta) -> None:
        """Apply a prepared delta; nothing here can fail validation."""
        self._phase = PurchasePhase.COMMITTING

        delta.item.stock -= 1
        for denomination, count in delta.credit.items():
            self._till.credit(denomination, count)
        for denomination, count in delta.debit.items():
            self._till.debit(denomination, count)
        self._collected += delta.collected
        self._pending.clear()

        self._phase = PurchasePhase.RESOLVED

    def collect_funds(self) -> int:
        """
        Take the collected funds.

        Returns:
            The amount taken; the counter is reset to zero.
        """
        taken = self._collected
        self._collected = 0
        return taken

    def _failure_message(self, error: VendingError) -> str:
        if isinstance(error, InsufficientFundsError):
            return (
                f"Insufficient funds. Price: {format_amount(error.price, self._settings)}, "
                f"need {format_amount(error.shortfall, self._settings)} more."
            )
        if isinstance(error, ExactChangeImpossibleError):
            return (
                f"Cannot give exact change of {format_amount(error.amount, self._settings)}. "
                "Purchase cancelled."
            )
        return error.message
