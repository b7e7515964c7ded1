"""
Vending Machine - the public interface of one machine.

Owns the denomination table, till, pending transaction, catalog and
purchase coordinator. Every state-touching call is serialized behind a
single lock so purchases and admin operations never interleave.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Optional

from vending_machine.configs import SAMPLE_ITEMS, SAMPLE_TILL
from vending_machine.core.denominations import DenominationTable
from vending_machine.core.exceptions import InvalidAmountError, VendingError
from vending_machine.core.value_objects import (
    CashBreakdown,
    OperationResult,
    PurchaseResult,
    TillReport,
)
from vending_machine.domain.catalog import Catalog, Item
from vending_machine.domain.pending_transaction import PendingTransaction
from vending_machine.domain.purchase_coordinator import PurchaseCoordinator
from vending_machine.domain.till import Till
from vending_machine.formatting import format_amount, format_denomination
from vending_machine.infrastructure.settings import MachineSettings, get_settings
from vending_machine.loggers import logger


class VendingMachine:
    """
    A single cash vending machine serving one customer at a time.

    Instances share nothing, so several machines can coexist.
    """

    def __init__(
        self,
        denominations: Optional[Iterable[int]] = None,
        till: Optional[Mapping[int, int]] = None,
        settings: Optional[MachineSettings] = None,
    ) -> None:
        """
        Initialize the machine.

        Args:
            denominations: Legal denominations (defaults to the settings).
            till: Starting till counts per denomination.
            settings: Machine settings (defaults to the global settings).
        """
        self._settings = settings or get_settings().machine
        self._denominations = DenominationTable(
            denominations if denominations is not None else self._settings.denominations
        )
        self._till = Till(self._denominations, till)
        self._pending = PendingTransaction(self._denominations)
        self._catalog = Catalog()
        self._coordinator = PurchaseCoordinator(
            self._catalog, self._till, self._pending, settings=self._settings
        )
        self._lock = threading.RLock()

    @classmethod
    def with_sample_stock(cls, settings: Optional[MachineSettings] = None) -> "VendingMachine":
        """Create a machine loaded with the demo items and till."""
        machine = cls(till=SAMPLE_TILL, settings=settings)
        for code, name, price, stock in SAMPLE_ITEMS:
            machine.add_or_update_item(code, name, price, stock)
        return machine

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def settings(self) -> MachineSettings:
        """Get the machine settings."""
        return self._settings

    @property
    def denominations(self) -> DenominationTable:
        """Get the legal denominations."""
        return self._denominations

    @property
    def inserted_total(self) -> int:
        """Get the cash inserted by the current customer."""
        with self._lock:
            return self._pending.total()

    @property
    def inserted(self) -> CashBreakdown:
        """Get the units inserted by the current customer."""
        with self._lock:
            return self._pending.snapshot()

    # =========================================================================
    # Customer Operations
    # =========================================================================

    def insert_denomination(self, value: int) -> OperationResult:
        """
        Insert one coin or note.

        Args:
            value: Denomination in the smallest currency unit.

        Returns:
            OperationResult; fails with UNKNOWN_DENOMINATION for illegal values.
        """
        with self._lock:
            try:
                self._pending.insert(value)
            except VendingError as e:
                logger.warning(f"Rejected insert of {value}: {e.message}")
                return OperationResult.failed(e)

            total = self._pending.total()

        message = (
            f"Inserted {format_denomination(value, self._settings)}. "
            f"Total inserted: {format_amount(total, self._settings)}"
        )
        logger.info(message)
        return OperationResult.ok(
            message,
            data={"denomination": value, "inserted_total": total},
        )

    def purchase(self, item_code: str) -> PurchaseResult:
        """
        Buy one unit of an item with the inserted cash.

        Args:
            item_code: Item code.

        Returns:
            PurchaseResult with the item and change, or the failure kind.
        """
        with self._lock:
            return self._coordinator.purchase(item_code)

    def cancel_transaction(self) -> CashBreakdown:
        """
        Return all inserted cash to the customer.

        Returns:
            The returned units (empty if nothing was inserted).
        """
        with self._lock:
            returned = self._pending.snapshot()
            self._pending.clear()

        if returned:
            logger.info(f"Transaction cancelled. Returned: {format_amount(returned.total, self._settings)}")
        return returned

    # =========================================================================
    # Admin Operations
    # =========================================================================

    def replenish_till(self, denomination: int, count: int) -> OperationResult:
        """
        Load units of a denomination into the till.

        Args:
            denomination: Legal denomination.
            count: Number of units (at least one).

        Returns:
            OperationResult; fails for illegal denominations or counts.
        """
        with self._lock:
            try:
                self._till.credit(denomination, count)
            except VendingError as e:
                logger.warning(f"Till replenishment refused: {e.message}")
                return OperationResult.failed(e)

            available = self._till.available(denomination)

        logger.info(f"Till replenished: {format_denomination(denomination, self._settings)} x {count}")
        return OperationResult.ok(
            f"Till replenished: {format_denomination(denomination, self._settings)} x {count}",
            data={"denomination": denomination, "count": available},
        )

    def collect_funds(self) -> int:
        """
        Take the collected funds and reset the counter.

        Returns:
            Amount taken.
        """
        with self._lock:
            taken = self._coordinator.collect_funds()

        logger.info(f"Funds collected: {format_amount(taken, self._settings)}")
        return taken

    def till_report(self) -> TillReport:
        """Get a snapshot of the till counts and the collected funds."""
        with self._lock:
            return TillReport(
                counts=self._till.counts(),
                collected=self._coordinator.collected,
            )

    # =========================================================================
    # Catalog Operations
    # =========================================================================

    def add_or_update_item(
        self,
        code: str,
        name: str,
        price: int,
        stock: int,
    ) -> OperationResult:
        """
        Add an item or restock an existing one.

        An existing code keeps its entry: stock is added, name and price
        are replaced.
        """
        with self._lock:
            try:
                item = self._catalog.add_or_update(Item(code=code, name=name, price=price, stock=stock))
            except InvalidAmountError as e:
                logger.warning(f"Item {code} refused: {e.message}")
                return OperationResult.failed(e)

            data = item.to_dict()

        logger.info(f"Item {code} stored: {name}, {format_amount(price, self._settings)}, stock {data['stock']}")
        return OperationResult.ok(f"Item {code} stored", data=data)

    def get_item(self, code: str) -> Optional[Item]:
        """Get a copy of an item by code."""
        with self._lock:
            item = self._catalog.get(code)
            return replace(item) if item else None

    def list_items(self) -> list[Item]:
        """Get copies of all items in insertion order."""
        with self._lock:
            return [replace(item) for item in self._catalog.items()]
