"""
Domain layer - Business logic and domain models.

Contains:
- Till and pending transaction
- Change engine
- Catalog
- Purchase coordinator
"""

from .catalog import Catalog, Item
from .change_engine import make_change
from .pending_transaction import PendingTransaction
from .purchase_coordinator import (
    PurchaseCoordinator,
    PurchaseDelta,
    PurchasePhase,
)
from .till import Till


__all__ = [
    # Cash
    "Till",
    "PendingTransaction",
    "make_change",
    # Catalog
    "Catalog",
    "Item",
    # Purchase
    "PurchaseCoordinator",
    "PurchaseDelta",
    "PurchasePhase",
]
