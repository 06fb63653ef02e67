# Area: Store
"""
flip6._store.protocol — Session store contract
==============================================

What the engine needs from persistence: load a whole session aggregate,
create one, save one atomically, and find a player by connection id.
"""

from typing import List, Optional, Protocol, Tuple

from .._engine.state import Session


class SessionStore(Protocol):
    """Protocol for session stores."""

    def get_session(self, code: str) -> Optional[Session]:
        """Load a session by join code, or None if it does not exist."""
        ...

    def create_session(self, code: str) -> Session:
        """Create and persist an empty session for ``code``."""
        ...

    def save_session(self, session: Session) -> None:
        """Persist the whole aggregate; all or nothing."""
        ...

    def find_connection(self, connection_id: str) -> Optional[Tuple[str, int]]:
        """Return (session code, player id) for a live connection."""
        ...

    def list_codes(self) -> List[str]:
        ...
