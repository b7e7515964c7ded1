"""
Command Handler - Routes named commands to vending machine operations.

Provides command routing with argument validation, admin checks and
error handling. Used by the interactive shell and by any embedding
service that speaks dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from vending_machine.application.machine import VendingMachine
from vending_machine.loggers import logger


# Type alias for command handlers
CommandHandlerFunc = Callable[..., Any]


@dataclass
class CommandResponse:
    """
    Standardized response for command execution.

    Attributes:
        command_id: The ID of the executed command.
        success: Whether the command succeeded.
        message: Human-readable message.
        data: Optional response data.
    """

    command_id: Optional[int] = None
    success: bool = False
    message: Optional[str] = None
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the response to a dictionary."""
        return {
            "command_id": self.command_id,
            "success": self.success,
            "message": self.message,
            "data": self.data,
        }


@dataclass
class CommandDefinition:
    """
    Definition of a command.

    Attributes:
        name: Command name.
        handler: Handler function returning a response dictionary.
        required_args: List of required argument names.
        description: Human-readable description.
        admin_only: Whether the caller must be authorised as admin.
    """

    name: str
    handler: CommandHandlerFunc
    required_args: list[str]
    description: str = ""
    admin_only: bool = False


class CommandHandler:
    """
    Routes commands to their appropriate handlers.

    Every handler returns a dictionary with ``success``, ``message`` and
    optional ``data`` keys.
    """

    def __init__(self, machine: VendingMachine) -> None:
        """
        Initialize the command handler.

        Args:
            machine: The vending machine to drive.
        """
        self._machine = machine
        self._commands: dict[str, CommandDefinition] = {}
        self._register_default_commands()

    def _register_default_commands(self) -> None:
        """Register all default command handlers."""
        # Customer commands
        self.register(
            "insert_denomination",
            self._insert_denomination,
            ["value"],
            "Insert a coin or note",
        )
        self.register(
            "purchase",
            self._purchase,
            ["item_code"],
            "Buy an item with the inserted cash",
        )
        self.register(
            "cancel_transaction",
            self._cancel_transaction,
            [],
            "Return the inserted cash",
        )
        self.register(
            "list_items",
            self._list_items,
            [],
            "List items with prices and stock",
        )
        self.register(
            "list_commands",
            self._list_commands,
            [],
            "List available commands",
        )

        # Admin commands
        self.register(
            "replenish_till",
            self._replenish_till,
            ["denomination", "count"],
            "Load coins or notes into the till",
            admin_only=True,
        )
        self.register(
            "add_or_update_item",
            self._add_or_update_item,
            ["code", "name", "price", "stock"],
            "Add an item or restock an existing one",
            admin_only=True,
        )
        self.register(
            "till_report",
            self._till_report,
            [],
            "Show till counts and collected funds",
            admin_only=True,
        )
        self.register(
            "collect_funds",
            self._collect_funds,
            [],
            "Take the collected funds",
            admin_only=True,
        )

    def register(
        self,
        command_name: str,
        handler: CommandHandlerFunc,
        required_args: list[str],
        description: str = "",
        admin_only: bool = False,
    ) -> None:
        """
        Register a command handler.

        Args:
            command_name: The name of the command.
            handler: The handler function.
            required_args: List of required argument names.
            description: Human-readable description.
            admin_only: Whether the command needs admin rights.
        """
        self._commands[command_name] = CommandDefinition(
            name=command_name,
            handler=handler,
            required_args=required_args,
            description=description,
            admin_only=admin_only,
        )

    def get_available_commands(self) -> list[dict[str, Any]]:
        """Get list of available commands with their descriptions."""
        return [
            {
                "name": cmd.name,
                "required_args": cmd.required_args,
                "description": cmd.description,
                "admin_only": cmd.admin_only,
            }
            for cmd in self._commands.values()
        ]

    def execute(self, command_data: dict[str, Any], is_admin: bool = False) -> dict[str, Any]:
        """
        Execute a command based on command data.

        Args:
            command_data: Dictionary containing 'command', 'command_id', and 'data'.
            is_admin: Whether the caller is authorised for admin commands.

        Returns:
            Response dictionary with execution result.
        """
        command = command_data.get("command")
        command_id = command_data.get("command_id")
        data = command_data.get("data", {}) or {}

        response = CommandResponse(command_id=command_id)

        if command not in self._commands:
            logger.warning(f"Unknown command: {command}")
            response.message = f"Unknown command: {command}"
            return response.to_dict()

        definition = self._commands[command]

        if definition.admin_only and not is_admin:
            logger.warning(f"Admin command refused: {command}")
            response.message = f"Admin rights required for: {command}"
            return response.to_dict()

        try:
            kwargs = {arg: data.get(arg) for arg in definition.required_args}

            missing = [arg for arg in definition.required_args if kwargs.get(arg) is None]
            if missing:
                response.message = f"Missing required arguments: {missing}"
                return response.to_dict()

            result = definition.handler(**kwargs)

            response.success = result.get("success", False)
            response.message = result.get("message")
            response.data = result.get("data")
            if not response.success and "error" in result:
                response.data = {"error": result["error"], "details": result.get("details", {})}

        except Exception as e:
            logger.error(f"Error executing command '{command}': {e}")
            response.success = False
            response.message = f"Error: {e}"

        return response.to_dict()

    # =========================================================================
    # Handlers
    # =========================================================================

    def _insert_denomination(self, value: Any) -> dict[str, Any]:
        return self._machine.insert_denomination(int(value)).to_dict()

    def _purchase(self, item_code: Any) -> dict[str, Any]:
        result = self._machine.purchase(str(item_code).strip().upper())
        return {"success": result.success, "message": result.message, "data": result.to_dict()}

    def _cancel_transaction(self) -> dict[str, Any]:
        returned = self._machine.cancel_transaction()
        message = "Cash returned" if returned else "Nothing was inserted"
        return {
            "success": True,
            "message": message,
            "data": {
                "returned": {str(denomination): count for denomination, count in returned.items()},
                "total": returned.total,
            },
        }

    def _list_items(self) -> dict[str, Any]:
        items = self._machine.list_items()
        return {
            "success": True,
            "message": f"{len(items)} items",
            "data": {
                "items": [item.to_dict() for item in items],
                "inserted_total": self._machine.inserted_total,
            },
        }

    def _list_commands(self) -> dict[str, Any]:
        return {"success": True, "message": "Available commands", "data": self.get_available_commands()}

    def _replenish_till(self, denomination: Any, count: Any) -> dict[str, Any]:
        return self._machine.replenish_till(int(denomination), int(count)).to_dict()

    def _add_or_update_item(self, code: Any, name: Any, price: Any, stock: Any) -> dict[str, Any]:
        return self._machine.add_or_update_item(
            str(code).strip().upper(),
            str(name).strip(),
            int(price),
            int(stock),
        ).to_dict()

    def _till_report(self) -> dict[str, Any]:
        return {"success": True, "message": "Till report", "data": self._machine.till_report().to_dict()}

    def _collect_funds(self) -> dict[str, Any]:
        taken = self._machine.collect_funds()
        return {"success": True, "message": "Funds collected", "data": {"taken": taken}}
