"""
flip6.errors — Custom exception classes
=======================================

Defines the exception hierarchy for the engine. Invalid game moves are
never exceptions (they are ignored); these cover rejected joins, bad
inbound payloads, storage failures and bad configuration.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class Flip6Error(Exception):
    """Base exception for all flip6 errors."""
    pass


JOIN_REJECTION_MESSAGES = {
    "missing_fields": "Missing name or room code.",
    "name_in_use": "A player by that name is already in the room.",
    "session_locked": "This game has already started.",
    "already_connected": "This player is already signed in on another device.",
    "unknown_player": "No such player in this room.",
}


class JoinRejectedError(Flip6Error):
    """Raised when a join or connect is refused; never partially applied."""

    def __init__(self, reason: str, session_code: str, name: Optional[str] = None):
        self.reason = reason
        self.session_code = session_code
        self.name = name
        self.message = JOIN_REJECTION_MESSAGES.get(reason, reason)
        super().__init__(self.message)

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="JOIN_REJECTED",
            session_code=self.session_code,
            details={"reason": self.reason, "name": self.name},
            errors=[self.message],
        )


class CommandValidationError(Flip6Error):
    """Raised when an inbound command payload does not match any schema."""

    def __init__(self, payload: Any, errors: List[str]):
        self.payload = payload
        self.errors = errors
        super().__init__(f"Invalid command: {errors}")

    def format_error_log(self) -> str:
        code = self.payload.get("session_code", "") if isinstance(self.payload, dict) else ""
        return _format_error_block(
            error_type="INVALID_COMMAND",
            session_code=code,
            details={"payload": self.payload},
            errors=self.errors,
        )


class PersistenceError(Flip6Error):
    """Raised when a store cannot load or save a session."""

    def __init__(self, operation: str, session_code: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.session_code = session_code
        self.cause = cause
        super().__init__(f"Store {operation} failed for session '{session_code}': {cause}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="PERSISTENCE_FAILURE",
            session_code=self.session_code,
            details={"operation": self.operation},
            errors=[repr(self.cause)] if self.cause else None,
        )


class ConfigError(Flip6Error, ValueError):
    """Raised when engine configuration is invalid."""
    pass


def _format_error_block(
    error_type: str,
    session_code: str,
    details: Dict[str, Any],
    errors: Optional[List[str]],
) -> str:
    """Format a structured error block for logs."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        f" FLIP6 ERROR — {error_type}",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Session:      {session_code or 'N/A'}",
        "",
        " ── DETAILS " + "─" * 52,
        _indent_json(details),
    ]

    if errors:
        lines.append("")
        lines.append(" ── ERRORS " + "─" * 53)
        for error in errors:
            lines.append(f" • {error}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
