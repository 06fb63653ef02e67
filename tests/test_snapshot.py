# Area: Engine Tests
"""Tests for the state snapshot builder."""

from flip6._engine.enums import ActionType
from flip6._engine.snapshot import build_state_snapshot
from flip6._engine.state import PendingAction


EXPECTED_KEYS = {
    "sessionId", "code", "phase", "locked", "currentTurn", "roundNumber",
    "roundOver", "paused", "pendingAction", "forcedDraws", "players", "hands",
    "drawCount", "discardCount", "drawPreview", "disconnectedPlayers",
    "templateTotal",
}


class TestBuildStateSnapshot:
    """Tests for build_state_snapshot."""

    def test_has_every_field(self, make_session):
        """Test the snapshot carries the full schema."""
        snapshot = build_state_snapshot(make_session(players=2), template_total=93)
        assert set(snapshot) == EXPECTED_KEYS
        assert snapshot["phase"] == "PLAYER_TURN"
        assert snapshot["templateTotal"] == 93

    def test_players_in_seat_order(self, make_session):
        """Test the roster follows seats even if stored out of order."""
        session = make_session(players=3)
        session.players.reverse()
        snapshot = build_state_snapshot(session, 93)
        assert [p["seat"] for p in snapshot["players"]] == [0, 1, 2]
        assert snapshot["players"][0] == {
            "playerId": 1, "name": "P1", "seat": 0, "active": True,
            "connected": True, "stayed": False, "busted": False, "totalScore": 0,
        }

    def test_hands_flattened(self, make_session):
        """Test hands are flattened into playerId/cardValue rows."""
        session = make_session(players=2)
        session.get_player(1).hand = ["3", "2x"]
        session.get_player(2).hand = ["9"]
        snapshot = build_state_snapshot(session, 93)
        assert snapshot["hands"] == [
            {"playerId": 1, "cardValue": "3"},
            {"playerId": 1, "cardValue": "2x"},
            {"playerId": 2, "cardValue": "9"},
        ]

    def test_pile_counts_and_preview(self, make_session):
        """Test counts, and preview only when requested."""
        session = make_session(players=1, draw_pile=["1", "2", "3"])
        session.discard_pile = ["4"]

        plain = build_state_snapshot(session, 93)
        preview = build_state_snapshot(session, 93, preview_count=2)

        assert plain["drawCount"] == 3
        assert plain["discardCount"] == 1
        assert plain["drawPreview"] == []
        assert preview["drawPreview"] == ["1", "2"]

    def test_pending_action(self, make_session):
        """Test the open action is reported with type, actor and value."""
        session = make_session(players=2)
        session.pending = PendingAction(ActionType.SECOND_CHANCE, 1, "5")
        snapshot = build_state_snapshot(session, 93)
        assert snapshot["phase"] == "ACTION_PENDING"
        assert snapshot["pendingAction"] == {
            "type": "SecondChance", "actorId": 1, "value": "5",
        }

    def test_disconnected_players(self, make_session):
        """Test disconnected active players are listed."""
        session = make_session(players=2)
        session.get_player(2).connected = False
        snapshot = build_state_snapshot(session, 93)
        assert snapshot["disconnectedPlayers"] == [{"playerId": 2, "name": "P2"}]

    def test_snapshot_is_detached(self, make_session):
        """Test mutating the snapshot does not touch the session."""
        session = make_session(players=1, draw_pile=["1"])
        snapshot = build_state_snapshot(session, 93, preview_count=1)
        snapshot["drawPreview"].append("X")
        snapshot["forcedDraws"].append(1)
        assert session.draw_pile == ["1"]
        assert session.forced_draws == []
