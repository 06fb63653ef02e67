# Area: Engine
"""
flip6._engine.snapshot — Session snapshot builder
=================================================

Builds the serializable full-state snapshot broadcast after every
applied command. See ``flip6.types.SessionSnapshot`` for the schema.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from .state import PendingAction, Player, Session


def build_state_snapshot(
    session: Session, template_total: int, preview_count: int = 0
) -> Dict[str, Any]:
    """Build the snapshot for one session."""
    seated = session.seated()
    return {
        "sessionId": session.session_id,
        "code": session.code,
        "phase": session.phase.value,
        "locked": session.locked,
        "currentTurn": session.current_player_id,
        "roundNumber": session.round_number,
        "roundOver": session.round_over,
        "paused": session.paused,
        "pendingAction": _pending_snapshot(session.pending),
        "forcedDraws": list(session.forced_draws),
        "players": [_player_snapshot(p) for p in seated],
        "hands": [
            {"playerId": p.player_id, "cardValue": card}
            for p in seated for card in p.hand
        ],
        "drawCount": len(session.draw_pile),
        "discardCount": len(session.discard_pile),
        "drawPreview": list(session.draw_pile[:max(preview_count, 0)]),
        "disconnectedPlayers": [
            {"playerId": p.player_id, "name": p.name}
            for p in session.disconnected_players()
        ],
        "templateTotal": template_total,
    }


def _pending_snapshot(pending: Optional[PendingAction]) -> Optional[Dict[str, Any]]:
    if pending is None:
        return None
    return {
        "type": pending.action.value,
        "actorId": pending.actor_id,
        "value": pending.value,
    }


def _player_snapshot(player: Player) -> Dict[str, Any]:
    return {
        "playerId": player.player_id,
        "name": player.name,
        "seat": player.seat,
        "active": player.active,
        "connected": player.connected,
        "stayed": player.stayed,
        "busted": player.busted,
        "totalScore": player.total_score,
    }
