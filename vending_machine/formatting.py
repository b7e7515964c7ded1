"""
Display helpers for amounts, denominations and till reports.

All arithmetic is done on integers; nothing here touches machine state.
"""

from collections.abc import Mapping
from typing import Optional

from vending_machine.configs import UNITS_PER_MAJOR
from vending_machine.core.value_objects import TillReport
from vending_machine.infrastructure.settings import MachineSettings, get_settings


def _machine_settings(settings: Optional[MachineSettings]) -> MachineSettings:
    return settings or get_settings().machine


def format_amount(units: int, settings: Optional[MachineSettings] = None) -> str:
    """
    Format an amount in the smallest currency unit, e.g. ``4500 -> "45.00 RUB"``.
    """
    currency = _machine_settings(settings).currency
    sign = "-" if units < 0 else ""
    major, minor = divmod(abs(units), UNITS_PER_MAJOR)
    return f"{sign}{major}.{minor:02d} {currency}"


def format_denomination(units: int, settings: Optional[MachineSettings] = None) -> str:
    """
    Format a single denomination: ``50000 -> "500 RUB"``, ``50 -> "50 kop."``.
    """
    machine = _machine_settings(settings)
    if units >= UNITS_PER_MAJOR:
        major, minor = divmod(units, UNITS_PER_MAJOR)
        if minor:
            return f"{major}.{minor:02d} {machine.currency}"
        return f"{major} {machine.currency}"
    return f"{units} {machine.minor_currency}"


def format_breakdown(
    breakdown: Mapping[int, int],
    settings: Optional[MachineSettings] = None,
) -> list[str]:
    """Format a denomination -> count mapping as lines, largest first."""
    return [
        f"{format_denomination(denomination, settings)} x {count}"
        for denomination, count in sorted(breakdown.items(), reverse=True)
        if count > 0
    ]


def format_till_report(
    report: TillReport,
    settings: Optional[MachineSettings] = None,
) -> str:
    """Format the admin view of the till."""
    lines = [
        f"Collected funds: {format_amount(report.collected, settings)}",
        f"Cash in till: {format_amount(report.cash_total, settings)}",
    ]
    lines.extend(
        f"  {format_denomination(denomination, settings)} x {count}"
        for denomination, count in report.counts
    )
    return "\n".join(lines)
