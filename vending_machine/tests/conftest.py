"""
Pytest configuration for vending machine tests.

Adds the project root to sys.path so the package imports without an
editable install, and provides shared fixtures.
"""

import sys
from pathlib import Path

import pytest


project_root = Path(__file__).resolve().parents[2]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


from vending_machine.application.machine import VendingMachine  # noqa: E402
from vending_machine.core.denominations import DenominationTable  # noqa: E402
from vending_machine.infrastructure.settings import MachineSettings  # noqa: E402


RUB_DENOMINATIONS = (500000, 200000, 100000, 50000, 20000, 10000, 5000, 1000, 500, 200, 100)


@pytest.fixture
def table():
    """Default kopeck denomination table."""
    return DenominationTable(RUB_DENOMINATIONS)


@pytest.fixture
def machine_settings():
    """Machine settings independent of the environment."""
    return MachineSettings(denominations=RUB_DENOMINATIONS)


@pytest.fixture
def machine(machine_settings):
    """Machine with one item per price used in the scenarios and some change."""
    vm = VendingMachine(
        till={500: 10, 1000: 5, 100: 20},
        settings=machine_settings,
    )
    vm.add_or_update_item("A1", "Chocolate bar", 4500, 10)
    vm.add_or_update_item("B1", "Water 0.5L", 3500, 20)
    vm.add_or_update_item("Z9", "Sold out", 1000, 0)
    return vm


@pytest.fixture
def sample_machine(machine_settings):
    """Machine loaded with the demo stock."""
    return VendingMachine.with_sample_stock(settings=machine_settings)
