# Area: Tests
"""Tests for flip6 error classes."""

import sqlite3

from flip6.errors import (
    ConfigError,
    Flip6Error,
    JoinRejectedError,
    PersistenceError,
)


class TestJoinRejectedError:
    """Tests for JoinRejectedError."""

    def test_user_facing_message(self):
        """Test each reason maps to a readable message."""
        error = JoinRejectedError("already_connected", "ROOM", "Alice")
        assert "another device" in error.message
        assert str(error) == error.message
        assert isinstance(error, Flip6Error)

    def test_unknown_reason_falls_back(self):
        """Test unmapped reasons are used as the message."""
        assert JoinRejectedError("odd", "ROOM").message == "odd"

    def test_error_block(self):
        """Test the structured block names type, session and reason."""
        block = JoinRejectedError("session_locked", "ROOM", "Carol").format_error_log()
        assert "JOIN_REJECTED" in block
        assert "ROOM" in block
        assert "session_locked" in block


class TestPersistenceError:
    """Tests for PersistenceError."""

    def test_carries_cause(self):
        """Test the wrapped database error is kept."""
        cause = sqlite3.OperationalError("database is locked")
        error = PersistenceError("save", "ROOM", cause)
        assert error.cause is cause
        assert "database is locked" in error.format_error_log()


class TestConfigError:
    """Tests for ConfigError."""

    def test_is_value_error(self):
        """Test ConfigError doubles as ValueError."""
        assert issubclass(ConfigError, ValueError)
        assert issubclass(ConfigError, Flip6Error)
