"""
flip6.types — TypedDict schema for session snapshots
====================================================

Documents the exact structure of the snapshot broadcast to every
participant after each applied command. Clients rely on nothing else
to stay in sync.

    from flip6 import SessionSnapshot
"""

from typing import List, Optional, TypedDict


class PendingActionInfo(TypedDict):
    """The open action, if any."""
    type: str                   # "Freeze", "Swap", "Take3", "SecondChance"
    actorId: int
    value: Optional[str]        # duplicate card for "SecondChance"


class PlayerInfo(TypedDict):
    """One seat, in seat order."""
    playerId: int
    name: str
    seat: int
    active: bool
    connected: bool
    stayed: bool
    busted: bool
    totalScore: int


class HandCard(TypedDict):
    """One card in one hand; hands are flattened in seat then hand order."""
    playerId: int
    cardValue: str


class DisconnectedPlayer(TypedDict):
    playerId: int
    name: str


class SessionSnapshot(TypedDict):
    """Full session state.

    Fields
    ------
    code : str
        Join code, upper-case.
    phase : str
        One of WAITING_FOR_START, PLAYER_TURN, ACTION_PENDING, ROUND_OVER.
    currentTurn : Optional[int]
        Player id whose turn it is, or None.
    drawPreview : List[str]
        The next cards of the draw pile (empty unless a preview is enabled).
    templateTotal : int
        Cards in a full deck; always equals drawCount + discardCount + hand cards.
    """
    sessionId: int
    code: str
    phase: str
    locked: bool
    currentTurn: Optional[int]
    roundNumber: int
    roundOver: bool
    paused: bool
    pendingAction: Optional[PendingActionInfo]
    forcedDraws: List[int]
    players: List[PlayerInfo]
    hands: List[HandCard]
    drawCount: int
    discardCount: int
    drawPreview: List[str]
    disconnectedPlayers: List[DisconnectedPlayer]
    templateTotal: int
