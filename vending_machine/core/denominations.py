"""
Denomination table - the fixed set of legal currency units.
"""

from collections.abc import Iterable, Iterator

from .exceptions import InvalidAmountError, UnknownDenominationError


class DenominationTable:
    """
    Legal denominations, sorted largest first.

    Values are positive, distinct integers in the smallest currency unit.
    The table never changes after construction.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[int]) -> None:
        """
        Initialize the table.

        Args:
            values: Denomination values in any order.

        Raises:
            InvalidAmountError: If the set is empty, contains duplicates or
                non-positive values.
        """
        values = list(values)
        if not values:
            raise InvalidAmountError("Denomination table cannot be empty")
        if any(type(value) is not int or value <= 0 for value in values):
            raise InvalidAmountError(f"Denominations must be positive integers: {values}")
        if len(set(values)) != len(values):
            raise InvalidAmountError(f"Denominations must be distinct: {values}")
        self._values: tuple[int, ...] = tuple(sorted(values, reverse=True))

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, value: object) -> bool:
        # 5000.0 == 5000, so membership alone would let floats through
        return type(value) is int and value in self._values

    def __getitem__(self, index: int) -> int:
        return self._values[index]

    def __repr__(self) -> str:
        return f"DenominationTable({list(self._values)!r})"

    @property
    def values(self) -> tuple[int, ...]:
        """Denominations, largest first."""
        return self._values

    @property
    def smallest(self) -> int:
        """Smallest legal denomination."""
        return self._values[-1]

    def validate(self, value: int) -> int:
        """
        Check that a value is a legal denomination.

        Returns:
            The value itself.

        Raises:
            UnknownDenominationError: If the value is not an integer in the table.
        """
        if value not in self:
            raise UnknownDenominationError(value)
        return value
