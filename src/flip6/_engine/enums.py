# Area: Engine
"""
flip6._engine.enums — Session state machine enums
=================================================

Defines the phases a session moves through, the pending action types,
and the player lifecycle states.

Phase transitions:
    WAITING_FOR_START -> PLAYER_TURN     (first player joins)
    PLAYER_TURN       -> ACTION_PENDING  (Freeze/Swap/Take3 drawn, or a
                                          duplicate with Second Chance held)
    ACTION_PENDING    -> PLAYER_TURN     (action resolved or cancelled)
    PLAYER_TURN       -> ROUND_OVER      (nobody left in the round)
    ROUND_OVER        -> PLAYER_TURN     (end_round scores and redeals)

``paused`` is an orthogonal flag on the session, not a phase.
"""

from enum import Enum


class SessionPhase(Enum):
    WAITING_FOR_START = "WAITING_FOR_START"
    PLAYER_TURN = "PLAYER_TURN"
    ACTION_PENDING = "ACTION_PENDING"
    ROUND_OVER = "ROUND_OVER"


class ActionType(Enum):
    """Pending action types. Values match the card values that open them."""
    FREEZE = "Freeze"
    SWAP = "Swap"
    TAKE_THREE = "Take3"
    SECOND_CHANCE = "SecondChance"


class PlayerStatus(Enum):
    ACTIVE = "active"
    REMOVED = "removed"


class DrawOutcome(Enum):
    """What happened to the card a player just drew."""
    NO_CARD = "no_card"
    ADDED = "added"
    BUST = "bust"
    SECOND_CHANCE = "second_chance"
    ACTION = "action"
