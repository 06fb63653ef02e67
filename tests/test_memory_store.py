# Area: Store Tests
"""Tests for the in-memory session store."""

from flip6._engine.state import Player
from flip6._store.memory_store import MemorySessionStore


class TestMemorySessionStore:
    """Tests for MemorySessionStore."""

    def test_create_and_get(self):
        """Test sessions are created once per code with increasing ids."""
        store = MemorySessionStore()
        first = store.create_session("AAA")
        again = store.create_session("AAA")
        other = store.create_session("BBB")
        assert first.session_id == again.session_id == 1
        assert other.session_id == 2
        assert store.list_codes() == ["AAA", "BBB"]

    def test_get_missing(self):
        """Test unknown codes return None."""
        assert MemorySessionStore().get_session("NOPE") is None

    def test_loaded_copy_is_isolated(self):
        """Test unsaved changes never reach the store."""
        store = MemorySessionStore()
        session = store.create_session("AAA")
        session.players.append(Player(player_id=1, name="A", seat=0))

        assert store.get_session("AAA").players == []

        store.save_session(session)
        session.players[0].hand.append("5")
        assert store.get_session("AAA").players[0].hand == []

    def test_find_connection(self):
        """Test lookup by connection id skips removed players."""
        store = MemorySessionStore()
        session = store.create_session("AAA")
        session.players.append(Player(player_id=1, name="A", seat=0,
                                      connected=True, connection_id="c1"))
        store.save_session(session)
        assert store.find_connection("c1") == ("AAA", 1)
        assert store.find_connection("c2") is None
