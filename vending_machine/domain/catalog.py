"""
Catalog - purchasable items keyed by code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional

from vending_machine.core.exceptions import InvalidAmountError, ItemNotFoundError


@dataclass
class Item:
    """
    A purchasable item.

    Attributes:
        code: Unique item code, e.g. ``A1``.
        name: Display name.
        price: Price in the smallest currency unit.
        stock: Units left in the machine.
    """

    code: str
    name: str
    price: int
    stock: int = 0

    def __post_init__(self) -> None:
        """Validate price and stock."""
        if self.price <= 0:
            raise InvalidAmountError(f"Price must be positive: {self.price}")
        if self.stock < 0:
            raise InvalidAmountError(f"Stock cannot be negative: {self.stock}")

    @property
    def in_stock(self) -> bool:
        """Check if at least one unit is left."""
        return self.stock > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "name": self.name,
            "price": self.price,
            "stock": self.stock,
        }


class Catalog:
    """Items offered by the machine, in the order they were added."""

    def __init__(self) -> None:
        self._items: dict[str, Item] = {}

    def __contains__(self, code: object) -> bool:
        return code in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items.values())

    def add_or_update(self, item: Item) -> Item:
        """
        Add a new item or restock an existing one.

        For an existing code the incoming stock is added to the current
        stock and the name and price are replaced.

        Returns:
            The stored item.
        """
        existing = self._items.get(item.code)
        if existing is None:
            self._items[item.code] = item
            return item

        existing.stock += item.stock
        existing.name = item.name
        existing.price = item.price
        return existing

    def get(self, code: str) -> Optional[Item]:
        """Get an item by code."""
        return self._items.get(code)

    def require(self, code: str) -> Item:
        """
        Get an item by code.

        Raises:
            ItemNotFoundError: If no item has that code.
        """
        item = self._items.get(code)
        if item is None:
            raise ItemNotFoundError(code)
        return item

    def items(self) -> list[Item]:
        """Get all items in insertion order."""
        return list(self._items.values())
