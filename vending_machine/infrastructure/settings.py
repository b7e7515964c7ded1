"""
Application settings.

Provides typed, frozen configuration sections with environment variable support.
"""

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from vending_machine.configs import (
    ADMIN_PASSWORD,
    CURRENCY,
    DENOMINATIONS,
    LOG_APP_NAME,
    MINOR_CURRENCY,
)


ENV_PREFIX = "VENDING_"


# =============================================================================
# Configuration Classes
# =============================================================================


@dataclass(frozen=True)
class MachineSettings:
    """Vending machine settings."""

    denominations: tuple[int, ...] = DENOMINATIONS
    currency: str = CURRENCY
    minor_currency: str = MINOR_CURRENCY
    admin_password: str = ADMIN_PASSWORD


@dataclass(frozen=True)
class LoggingSettings:
    """
    Logging settings.

    File and Loki handlers are only attached when a path/URL is configured.
    """

    level: int = logging.INFO
    app: str = LOG_APP_NAME
    log_file: Optional[str] = None
    loki_url: Optional[str] = None


# =============================================================================
# Main Settings
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """
    Main application settings.

    Aggregates all configuration sections.
    """

    machine: MachineSettings = field(default_factory=MachineSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from ``VENDING_*`` environment variables.

        Recognised variables:
            VENDING_DENOMINATIONS: Comma separated denominations.
            VENDING_CURRENCY: Currency label.
            VENDING_ADMIN_PASSWORD: Admin shell password.
            VENDING_LOG_LEVEL: Level name, e.g. ``DEBUG``.
            VENDING_LOG_FILE: Path of the rotating log file.
            VENDING_LOKI_URL: Loki push endpoint.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``).

        Returns:
            Settings instance.

        Raises:
            ValueError: If a variable cannot be parsed.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(f"{ENV_PREFIX}{name}")
            return value.strip() if value and value.strip() else None

        machine = MachineSettings()
        raw_denominations = get("DENOMINATIONS")
        if raw_denominations:
            machine = replace(
                machine,
                denominations=tuple(
                    int(part) for part in raw_denominations.split(",") if part.strip()
                ),
            )
        machine = replace(
            machine,
            currency=get("CURRENCY") or machine.currency,
            admin_password=get("ADMIN_PASSWORD") or machine.admin_password,
        )

        level = LoggingSettings.level
        level_name = get("LOG_LEVEL")
        if level_name:
            level = logging.getLevelName(level_name.upper())
            if not isinstance(level, int):
                raise ValueError(f"Unknown log level: {level_name}")

        log_settings = LoggingSettings(
            level=level,
            log_file=get("LOG_FILE"),
            loki_url=get("LOKI_URL"),
        )

        return cls(machine=machine, logging=log_settings)


# =============================================================================
# Settings Singleton
# =============================================================================


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
