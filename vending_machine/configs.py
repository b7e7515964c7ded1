"""
Configuration constants for the vending machine.

This module provides the fixed defaults used to build the machine:
the legal denomination set, the admin password, logging endpoints
and the demo stock loaded by the interactive shell.
"""

from typing import Final


# =============================================================================
# Currency Configuration
# =============================================================================

# Legal denominations in kopecks, largest first
DENOMINATIONS: Final[tuple[int, ...]] = (
    500000,  # 5000 RUB
    200000,  # 2000 RUB
    100000,  # 1000 RUB
    50000,   # 500 RUB
    20000,   # 200 RUB
    10000,   # 100 RUB
    5000,    # 50 RUB
    1000,    # 10 RUB
    500,     # 5 RUB
    200,     # 2 RUB
    100,     # 1 RUB
)

CURRENCY: Final[str] = "RUB"
MINOR_CURRENCY: Final[str] = "kop."
UNITS_PER_MAJOR: Final[int] = 100


# =============================================================================
# Admin Configuration
# =============================================================================

ADMIN_PASSWORD: Final[str] = "admin123"


# =============================================================================
# Logging Configuration
# =============================================================================

LOG_APP_NAME: Final[str] = "vending_machine"


# =============================================================================
# Demo Machine
# =============================================================================

# (code, name, price in kopecks, stock)
SAMPLE_ITEMS: Final[tuple[tuple[str, str, int, int], ...]] = (
    ("A1", "Chocolate bar", 4500, 10),
    ("A2", "Crisps", 6000, 8),
    ("B1", "Water 0.5L", 3500, 20),
    ("B2", "Hot coffee", 8000, 10),
    ("C1", "Sandwich", 9500, 5),
)

# denomination -> count loaded into the till
SAMPLE_TILL: Final[dict[int, int]] = {
    100: 20,
    200: 10,
    500: 10,
    1000: 10,
    10000: 5,
    50000: 2,
    500000: 1,
}
