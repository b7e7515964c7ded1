#!/usr/bin/env python3
"""
Vending Machine Shell - interactive text menu.

Usage:
    vending-machine [--debug] [--empty]

Features:
    - Customer menu: list items, insert cash, buy, cancel
    - Password protected admin menu: restock items, till report,
      fund collection, till replenishment
"""

import argparse
import logging
import sys
from typing import Any, Callable, Optional

from vending_machine.application.command_handler import CommandHandler
from vending_machine.application.machine import VendingMachine
from vending_machine.configs import UNITS_PER_MAJOR
from vending_machine.core.value_objects import TillReport
from vending_machine.formatting import (
    format_amount,
    format_breakdown,
    format_denomination,
    format_till_report,
)
from vending_machine.loggers import logger


InputFunc = Callable[[str], str]
OutputFunc = Callable[[str], None]


MAIN_MENU = (
    "",
    "1) Show items",
    "2) Insert coin or note",
    "3) Buy item",
    "4) Cancel (return inserted cash)",
    "5) Admin mode",
    "0) Exit",
)

ADMIN_MENU = (
    "",
    "ADMIN MODE:",
    "1) Show items and stock",
    "2) Add or restock item",
    "3) Show till and collect funds",
    "4) Replenish till",
    "0) Leave admin mode",
)


class VendingShell:
    """
    Text menu around a vending machine.

    All machine access goes through a CommandHandler. Input and output
    functions are injectable and default to input/print.
    """

    def __init__(
        self,
        machine: VendingMachine,
        input_func: Optional[InputFunc] = None,
        output_func: Optional[OutputFunc] = None,
    ) -> None:
        self._machine = machine
        self._handler = CommandHandler(machine)
        self._input = input_func or input
        self._output = output_func or print
        self._settings = machine.settings
        self._command_id = 0

    # =========================================================================
    # Helpers
    # =========================================================================

    def _say(self, *lines: str) -> None:
        for line in lines:
            self._output(line)

    def _ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def _ask_int(self, prompt: str) -> Optional[int]:
        raw = self._ask(prompt)
        try:
            return int(raw)
        except ValueError:
            self._say("Invalid number.")
            return None

    def _execute(self, command: str, is_admin: bool = False, **data: Any) -> dict[str, Any]:
        self._command_id += 1
        return self._handler.execute(
            {"command": command, "command_id": self._command_id, "data": data},
            is_admin=is_admin,
        )

    def _choose_denomination(self) -> Optional[int]:
        denominations = self._machine.denominations
        for index, denomination in enumerate(denominations, start=1):
            self._say(f"{index}) {format_denomination(denomination, self._settings)}")
        index = self._ask_int("Denomination number (0 to go back): ")
        if index is None or index == 0:
            return None
        if not 1 <= index <= len(denominations):
            self._say("Invalid choice.")
            return None
        return denominations[index - 1]

    # =========================================================================
    # Customer Menu
    # =========================================================================

    def run(self) -> int:
        """
        Run the main menu until the user exits.

        Returns:
            Exit code.
        """
        self._say("=== VENDING MACHINE ===")
        try:
            return self._main_loop()
        except EOFError:
            self._say("", "Goodbye!")
            return 0

    def _main_loop(self) -> int:
        while True:
            self._say(*MAIN_MENU)
            choice = self._ask("Choose an action: ")

            if choice == "1":
                self.show_items()
                self._say(f"Inserted: {format_amount(self._machine.inserted_total, self._settings)}")
            elif choice == "2":
                self.insert_money()
            elif choice == "3":
                self.buy()
            elif choice == "4":
                self.cancel()
            elif choice == "5":
                self.admin()
            elif choice == "0":
                self._say("Goodbye!")
                return 0
            else:
                self._say("Unknown command.")

    def show_items(self) -> None:
        """Print the item table."""
        response = self._execute("list_items")
        self._say("Code | Name         | Price      | Stock", "-" * 42)
        for item in response["data"]["items"]:
            price = format_amount(item["price"], self._settings)
            self._say(f"{item['code']:<4} | {item['name']:<12} | {price:<10} | {item['stock']}")

    def insert_money(self) -> None:
        """Let the customer insert one coin or note."""
        denomination = self._choose_denomination()
        if denomination is None:
            return
        response = self._execute("insert_denomination", value=denomination)
        self._say(response["message"])

    def buy(self) -> None:
        """Let the customer buy an item by code."""
        code = self._ask("Item code: ").upper()
        response = self._execute("purchase", item_code=code)
        self._say(response["message"])
        change = response["data"].get("change") if response["success"] else None
        if change:
            self._say("Change:")
            breakdown = {int(denomination): count for denomination, count in change.items()}
            self._say(*(f"  {line}" for line in format_breakdown(breakdown, self._settings)))

    def cancel(self) -> None:
        """Return all inserted cash."""
        response = self._execute("cancel_transaction")
        returned = response["data"]["returned"]
        if not returned:
            self._say("Nothing was inserted.")
            return
        self._say("Returned:")
        breakdown = {int(denomination): count for denomination, count in returned.items()}
        self._say(*(f"  {line}" for line in format_breakdown(breakdown, self._settings)))

    # =========================================================================
    # Admin Menu
    # =========================================================================

    def admin(self) -> None:
        """Ask for the admin password and run the admin menu."""
        password = self._ask("Admin password: ")
        if password != self._settings.admin_password:
            logger.warning("Admin login failed")
            self._say("Wrong password.")
            return

        logger.info("Admin logged in")
        while True:
            self._say(*ADMIN_MENU)
            choice = self._ask("Choose: ")
            if choice == "1":
                self.show_items()
            elif choice == "2":
                self.restock()
            elif choice == "3":
                self.till()
            elif choice == "4":
                self.replenish()
            elif choice == "0":
                return
            else:
                self._say("Unknown command.")

    def restock(self) -> None:
        """Add an item or restock an existing one."""
        code = self._ask("Item code: ").upper()
        name = self._ask("Name: ")
        price = self._ask_int(f"Price (whole {self._settings.currency}): ")
        if price is None:
            return
        stock = self._ask_int("Quantity: ")
        if stock is None:
            return
        response = self._execute(
            "add_or_update_item",
            is_admin=True,
            code=code,
            name=name,
            price=price * UNITS_PER_MAJOR,
            stock=stock,
        )
        self._say(response["message"])

    def till(self) -> None:
        """Show the till and optionally collect the funds."""
        response = self._execute("till_report", is_admin=True)
        data = response["data"]
        report = TillReport(
            counts=tuple((int(denomination), count) for denomination, count in data["counts"].items()),
            collected=data["collected"],
        )
        self._say(format_till_report(report, self._settings))

        answer = self._ask("Collect the funds? (y/n): ").lower()
        if answer == "y":
            taken = self._execute("collect_funds", is_admin=True)["data"]["taken"]
            self._say(f"Collected {format_amount(taken, self._settings)}.")

    def replenish(self) -> None:
        """Load coins or notes into the till."""
        denomination = self._choose_denomination()
        if denomination is None:
            return
        count = self._ask_int("Number of units: ")
        if count is None:
            return
        response = self._execute("replenish_till", is_admin=True, denomination=denomination, count=count)
        self._say(response["message"])


# =============================================================================
# Entry Point
# =============================================================================


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Interactive cash vending machine")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--empty", action="store_true", help="Start without the demo items and till")
    return parser.parse_args(argv)


def run(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code.
    """
    args = parse_args(argv)
    if args.debug:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)

    machine = VendingMachine() if args.empty else VendingMachine.with_sample_stock()
    try:
        return VendingShell(machine).run()
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 0


if __name__ == "__main__":
    sys.exit(run())
