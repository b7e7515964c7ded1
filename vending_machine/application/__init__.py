"""
Application layer - Application services and use cases.

Contains:
- Vending machine facade
- Command handler
"""

from .machine import VendingMachine
from .command_handler import CommandHandler, CommandResponse


__all__ = [
    "VendingMachine",
    "CommandHandler",
    "CommandResponse",
]
