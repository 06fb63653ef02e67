# Area: Engine
"""
flip6._engine.state — Session aggregate
=======================================

The in-memory shape of one game session: its players, piles, hands,
pending action and score history. Stores load and save this aggregate
as a whole; only the transition functions in ``turn_coordinator``,
``action_resolver`` and ``lifecycle`` change it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .enums import ActionType, PlayerStatus, SessionPhase


@dataclass
class PendingAction:
    """The single open action of a session, waiting on its actor."""
    action: ActionType
    actor_id: int
    value: Optional[str] = None    # duplicate card value for SECOND_CHANCE


@dataclass(frozen=True)
class RoundScore:
    """One player's score for one finished round. Written once."""
    session_id: int
    player_id: int
    round_number: int
    score: int


@dataclass
class Player:
    """A seat in a session. Removed players keep their row and scores."""
    player_id: int
    name: str
    seat: int
    status: PlayerStatus = PlayerStatus.ACTIVE
    connected: bool = False
    connection_id: Optional[str] = None
    stayed: bool = False
    busted: bool = False
    total_score: int = 0
    hand: List[str] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return self.status is PlayerStatus.ACTIVE

    def in_round(self) -> bool:
        """Still drawing this round: active, not stayed, not busted."""
        return self.active and not self.stayed and not self.busted

    def holds(self, value: str) -> bool:
        return value in self.hand


@dataclass
class Session:
    """
    Full state of one game session.

    ``draw_pile[0]`` is the top of the pile. ``forced_draws`` holds the
    player ids still owed a Take3 draw, front first; ``take_three_open``
    stays set until that sequence has fully completed. While it is open
    and the pointer holder has left the round, the pointer is cleared and
    ``turn_anchor_seat`` keeps the seat the next turn rotates from.
    """
    session_id: int
    code: str
    locked: bool = False
    round_number: int = 1
    round_over: bool = False
    paused: bool = False
    current_player_id: Optional[int] = None
    round_starter_id: Optional[int] = None
    turn_anchor_seat: Optional[int] = None
    pending: Optional[PendingAction] = None
    take_three_open: bool = False
    forced_draws: List[int] = field(default_factory=list)
    players: List[Player] = field(default_factory=list)
    draw_pile: List[str] = field(default_factory=list)
    discard_pile: List[str] = field(default_factory=list)
    round_scores: List[RoundScore] = field(default_factory=list)

    # ── Lookups ──────────────────────────────────────────────

    @property
    def phase(self) -> SessionPhase:
        if self.round_over:
            return SessionPhase.ROUND_OVER
        if self.pending is not None:
            return SessionPhase.ACTION_PENDING
        if self.current_player_id is None:
            return SessionPhase.WAITING_FOR_START
        return SessionPhase.PLAYER_TURN

    def get_player(self, player_id: Optional[int]) -> Optional[Player]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_active_player(self, player_id: Optional[int]) -> Optional[Player]:
        player = self.get_player(player_id)
        if player is None or not player.active:
            return None
        return player

    def seated(self) -> List[Player]:
        """All players, removed included, in seat order."""
        return sorted(self.players, key=lambda p: p.seat)

    def active_players(self) -> List[Player]:
        return [p for p in self.seated() if p.active]

    def find_active_by_name(self, name: str) -> Optional[Player]:
        wanted = name.casefold()
        for player in self.players:
            if player.active and player.name.casefold() == wanted:
                return player
        return None

    def disconnected_players(self) -> List[Player]:
        return [p for p in self.active_players() if not p.connected]

    def card_count(self) -> int:
        """Cards currently in draw pile, discard pile and every hand."""
        return (len(self.draw_pile) + len(self.discard_pile)
                + sum(len(p.hand) for p in self.players))

    def scores_for_round(self, round_number: int) -> List[RoundScore]:
        return [s for s in self.round_scores if s.round_number == round_number]
