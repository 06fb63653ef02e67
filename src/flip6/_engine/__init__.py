# Area: Engine
"""
Session aggregate and the transitions that change it.

This package handles:
- Turn rotation, draws, busts and round end
- Pending action resolution (Second Chance, Freeze, Swap, Take3)
- Joins, connections, pause and removal
- Round scoring and state snapshots
"""

from .enums import ActionType, DrawOutcome, PlayerStatus, SessionPhase
from .state import PendingAction, Player, RoundScore, Session
from .scoring import ScoringRules, compute_hand_score, score_player
from .turn_coordinator import TurnCoordinator
from .action_resolver import ActionResolver
from .lifecycle import SessionLifecycle
from .snapshot import build_state_snapshot

__all__ = [
    "ActionType",
    "DrawOutcome",
    "PlayerStatus",
    "SessionPhase",
    "PendingAction",
    "Player",
    "RoundScore",
    "Session",
    "ScoringRules",
    "compute_hand_score",
    "score_player",
    "TurnCoordinator",
    "ActionResolver",
    "SessionLifecycle",
    "build_state_snapshot",
]
