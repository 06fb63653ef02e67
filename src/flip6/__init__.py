"""
flip6 — Flip 6 Session Engine
=============================

Authoritative game-state core for real-time multiplayer Flip 6 sessions:
deck construction and shuffling, the turn state machine, action cards,
scoring, and join/reconnect/pause handling.

Quick Start:
    from flip6 import GameEngine, load_config
    engine = GameEngine(load_config())
    engine.subscribe(lambda code, snapshot: print(code, snapshot["phase"]))
    alice = engine.join("ROOM1", "Alice", connection_id="c1").player_id
    engine.draw("ROOM1", alice)

Transport adapters can hand raw payloads to ``engine.dispatch(payload)``.
Clients can fetch card display assets with ``card_meta()``.

Type Definitions
----------------
The snapshot schema is available for import:

    from flip6 import SessionSnapshot, PlayerInfo, HandCard
"""

from .engine import CommandResult, GameEngine
from .config import EngineConfig, load_config
from .commands import parse_command
from ._engine.enums import ActionType, SessionPhase
from ._deck.catalog import card_meta
from ._engine.scoring import ScoringRules, compute_hand_score
from ._shared.logging_config import setup_logging
from .errors import (
    Flip6Error,
    JoinRejectedError,
    CommandValidationError,
    PersistenceError,
    ConfigError,
)
from .types import (
    SessionSnapshot,
    PlayerInfo,
    HandCard,
    PendingActionInfo,
    DisconnectedPlayer,
)

__version__ = "1.0.0"

__all__ = [
    # Engine
    "GameEngine",
    "CommandResult",
    "EngineConfig",
    "load_config",
    "parse_command",
    "setup_logging",
    # Game types
    "ActionType",
    "SessionPhase",
    "ScoringRules",
    "compute_hand_score",
    "card_meta",
    # Errors
    "Flip6Error",
    "JoinRejectedError",
    "CommandValidationError",
    "PersistenceError",
    "ConfigError",
    # Snapshot types
    "SessionSnapshot",
    "PlayerInfo",
    "HandCard",
    "PendingActionInfo",
    "DisconnectedPlayer",
]
