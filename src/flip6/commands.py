"""
flip6.commands — Inbound command schemas
========================================

Pydantic models for every command the transport may deliver. Payloads
are dicts with a ``command`` discriminator:

    {"command": "draw", "session_code": "ABCD", "player_id": 2}
    {"command": "resolve_action", "session_code": "ABCD", "player_id": 2,
     "action": "Take3", "target_id": 3}

``parse_command`` validates a payload and returns the matching model.
"""

from __future__ import annotations
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, model_validator

from ._engine.enums import ActionType
from .errors import CommandValidationError


class SessionCommand(BaseModel):
    session_code: str


class PlayerCommand(SessionCommand):
    player_id: int


class JoinCommand(SessionCommand):
    command: Literal["join"]
    name: str
    connection_id: Optional[str] = None


class ConnectCommand(PlayerCommand):
    command: Literal["connect"]
    connection_id: str = Field(min_length=1)


class DisconnectCommand(BaseModel):
    """Disconnect by connection id, or by session code and player id."""
    command: Literal["disconnect"]
    connection_id: Optional[str] = None
    session_code: Optional[str] = None
    player_id: Optional[int] = None

    @model_validator(mode="after")
    def _needs_target(self) -> "DisconnectCommand":
        if self.connection_id is None and (self.session_code is None or self.player_id is None):
            raise ValueError("disconnect needs connection_id or session_code and player_id")
        return self


class DrawCommand(PlayerCommand):
    command: Literal["draw"]


class StayCommand(PlayerCommand):
    command: Literal["stay"]


class PassCommand(PlayerCommand):
    command: Literal["pass"]


class ResolveActionCommand(PlayerCommand):
    """Resolve the open action. Second Chance uses ``accept``; others use ``target_id``."""
    command: Literal["resolve_action"]
    action: ActionType
    target_id: Optional[int] = None
    accept: Optional[bool] = None

    @model_validator(mode="after")
    def _needs_argument(self) -> "ResolveActionCommand":
        if self.action is ActionType.SECOND_CHANCE:
            if self.accept is None:
                raise ValueError("SecondChance resolution needs accept")
        elif self.target_id is None:
            raise ValueError(f"{self.action.value} resolution needs target_id")
        return self


class CancelActionCommand(PlayerCommand):
    command: Literal["cancel_action"]


class EndRoundCommand(PlayerCommand):
    command: Literal["end_round"]


class ShuffleDeckCommand(PlayerCommand):
    command: Literal["shuffle_deck"]


class RemovePlayerCommand(PlayerCommand):
    command: Literal["remove_player"]
    target_id: int


Command = Annotated[
    Union[
        JoinCommand,
        ConnectCommand,
        DisconnectCommand,
        DrawCommand,
        StayCommand,
        PassCommand,
        ResolveActionCommand,
        CancelActionCommand,
        EndRoundCommand,
        RemovePlayerCommand,
        ShuffleDeckCommand,
    ],
    Field(discriminator="command"),
]

_COMMAND_ADAPTER: TypeAdapter = TypeAdapter(Command)


def parse_command(payload: Any) -> Any:
    """
    Validate an inbound payload.

    Returns:
        One of the command models above

    Raises:
        CommandValidationError: If the payload matches no command
    """
    try:
        return _COMMAND_ADAPTER.validate_python(payload)
    except ValidationError as e:
        errors: List[str] = [
            f"{'.'.join(str(part) for part in err['loc']) or 'payload'}: {err['msg']}"
            for err in e.errors()
        ]
        raise CommandValidationError(payload, errors) from e
