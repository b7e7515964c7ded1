"""
Tests for the CommandHandler.
"""

from unittest.mock import MagicMock

import pytest

from vending_machine.application.command_handler import CommandHandler, CommandResponse


@pytest.fixture
def handler(machine):
    """Command handler around the test machine."""
    return CommandHandler(machine)


class TestCommandResponse:
    """Tests for CommandResponse."""

    def test_to_dict(self):
        """Test converting a response to a dict."""
        response = CommandResponse(command_id=7, success=True, message="ok", data={"a": 1})
        assert response.to_dict() == {
            "command_id": 7,
            "success": True,
            "message": "ok",
            "data": {"a": 1},
        }


class TestCommandHandler:
    """Tests for command routing."""

    def test_unknown_command(self, handler):
        """Test unknown commands fail."""
        response = handler.execute({"command": "self_destruct", "command_id": 1})
        assert response["success"] is False
        assert response["command_id"] == 1
        assert "Unknown command" in response["message"]

    def test_missing_arguments(self, handler):
        """Test required arguments are checked."""
        response = handler.execute({"command": "insert_denomination", "data": {}})
        assert response["success"] is False
        assert "value" in response["message"]

    def test_insert_and_purchase(self, handler):
        """Test the customer flow through commands."""
        insert = handler.execute({"command": "insert_denomination", "data": {"value": 5000}})
        assert insert["success"] is True
        assert insert["data"]["inserted_total"] == 5000

        purchase = handler.execute({"command": "purchase", "data": {"item_code": " a1 "}})
        assert purchase["success"] is True
        assert purchase["data"]["change"] == {"500": 1}

    def test_failed_insert_reports_kind(self, handler):
        """Test failures keep their error kind in the data."""
        response = handler.execute({"command": "insert_denomination", "data": {"value": 300}})
        assert response["success"] is False
        assert response["data"]["error"] == "unknown_denomination"

    def test_failed_purchase_reports_shortfall(self, handler):
        """Test insufficient funds details reach the caller."""
        handler.execute({"command": "insert_denomination", "data": {"value": 1000}})
        response = handler.execute({"command": "purchase", "data": {"item_code": "B1"}})
        assert response["success"] is False
        assert response["data"]["error"] == "insufficient_funds"
        assert response["data"]["details"]["shortfall"] == 2500

    def test_cancel(self, handler):
        """Test cancelling returns the inserted cash."""
        handler.execute({"command": "insert_denomination", "data": {"value": 1000}})
        response = handler.execute({"command": "cancel_transaction"})
        assert response["success"] is True
        assert response["data"] == {"returned": {"1000": 1}, "total": 1000}

    def test_admin_command_requires_admin(self, handler, machine):
        """Test admin commands are refused for customers."""
        response = handler.execute({"command": "collect_funds"})
        assert response["success"] is False
        assert "Admin" in response["message"]

    def test_admin_commands(self, handler):
        """Test replenish, report and collect as admin."""
        replenish = handler.execute(
            {"command": "replenish_till", "data": {"denomination": 200, "count": 3}},
            is_admin=True,
        )
        assert replenish["success"] is True

        report = handler.execute({"command": "till_report"}, is_admin=True)
        assert report["data"]["counts"]["200"] == 3

        collect = handler.execute({"command": "collect_funds"}, is_admin=True)
        assert collect["data"] == {"taken": 0}

    def test_add_or_update_item(self, handler, machine):
        """Test catalog updates through commands."""
        response = handler.execute(
            {
                "command": "add_or_update_item",
                "data": {"code": "d1", "name": "Juice", "price": 7000, "stock": 4},
            },
            is_admin=True,
        )
        assert response["success"] is True
        assert machine.get_item("D1").stock == 4

    def test_handler_exception_becomes_failure(self, handler):
        """Test exceptions inside handlers are reported, not raised."""
        response = handler.execute({"command": "insert_denomination", "data": {"value": "abc"}})
        assert response["success"] is False
        assert response["message"].startswith("Error:")

    def test_custom_command(self, handler):
        """Test registering an extra command."""
        custom = MagicMock(return_value={"success": True, "message": "pong"})
        handler.register("ping", custom, [])
        response = handler.execute({"command": "ping"})
        assert response["message"] == "pong"
        custom.assert_called_once_with()

    def test_list_commands(self, handler):
        """Test the command listing flags admin commands."""
        response = handler.execute({"command": "list_commands"})
        commands = {cmd["name"]: cmd for cmd in response["data"]}
        assert commands["collect_funds"]["admin_only"] is True
        assert commands["purchase"]["admin_only"] is False
