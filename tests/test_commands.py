# Area: Tests
"""Tests for inbound command parsing."""

import pytest
from flip6._engine.enums import ActionType
from flip6.commands import (
    DisconnectCommand,
    DrawCommand,
    JoinCommand,
    ResolveActionCommand,
    ShuffleDeckCommand,
    parse_command,
)
from flip6.errors import CommandValidationError


class TestParseCommand:
    """Tests for parse_command."""

    def test_join(self):
        """Test a join payload becomes a JoinCommand."""
        command = parse_command({"command": "join", "session_code": "ab", "name": "Dana"})
        assert isinstance(command, JoinCommand)
        assert command.connection_id is None

    def test_draw(self):
        """Test a draw payload becomes a DrawCommand."""
        command = parse_command({"command": "draw", "session_code": "AB", "player_id": 2})
        assert isinstance(command, DrawCommand)
        assert command.player_id == 2

    def test_shuffle_deck(self):
        """Test a shuffle_deck payload becomes a ShuffleDeckCommand."""
        command = parse_command({"command": "shuffle_deck", "session_code": "AB", "player_id": 1})
        assert isinstance(command, ShuffleDeckCommand)

    def test_resolve_take_three(self):
        """Test action names are parsed into ActionType."""
        command = parse_command({
            "command": "resolve_action", "session_code": "AB", "player_id": 1,
            "action": "Take3", "target_id": 2,
        })
        assert isinstance(command, ResolveActionCommand)
        assert command.action is ActionType.TAKE_THREE

    def test_resolve_second_chance_needs_accept(self):
        """Test a Second Chance answer must say accept or decline."""
        with pytest.raises(CommandValidationError):
            parse_command({
                "command": "resolve_action", "session_code": "AB", "player_id": 1,
                "action": "SecondChance",
            })

    def test_resolve_targeted_needs_target(self):
        """Test Freeze without a target is rejected."""
        with pytest.raises(CommandValidationError):
            parse_command({
                "command": "resolve_action", "session_code": "AB", "player_id": 1,
                "action": "Freeze",
            })

    def test_disconnect_by_connection(self):
        """Test disconnect accepts a bare connection id."""
        command = parse_command({"command": "disconnect", "connection_id": "ws-1"})
        assert isinstance(command, DisconnectCommand)

    def test_disconnect_needs_target(self):
        """Test disconnect without any identifier is rejected."""
        with pytest.raises(CommandValidationError):
            parse_command({"command": "disconnect", "session_code": "AB"})

    def test_unknown_command(self):
        """Test unknown command names are rejected with messages."""
        with pytest.raises(CommandValidationError) as exc:
            parse_command({"command": "shuffle", "session_code": "AB"})
        assert exc.value.errors
        assert "INVALID_COMMAND" in exc.value.format_error_log()

    def test_missing_field(self):
        """Test a missing player id is reported."""
        with pytest.raises(CommandValidationError) as exc:
            parse_command({"command": "stay", "session_code": "AB"})
        assert any("player_id" in e for e in exc.value.errors)
