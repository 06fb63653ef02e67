# Area: Store
"""
flip6._store.memory_store — In-process session store
====================================================

Keeps sessions in a dict for tests, simulations and single-process
servers that do not need durability. Loads and saves deep copies so a
command that fails midway never leaks partial state into the store.
"""

import copy
import logging
import threading
from typing import Dict, List, Optional, Tuple

from .._engine.state import Session

logger = logging.getLogger("flip6.store.memory")


class MemorySessionStore:
    """Implements the ``SessionStore`` protocol in memory."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get_session(self, code: str) -> Optional[Session]:
        with self._lock:
            session = self._sessions.get(code)
            return copy.deepcopy(session) if session is not None else None

    def create_session(self, code: str) -> Session:
        with self._lock:
            if code not in self._sessions:
                self._sessions[code] = Session(session_id=self._next_id, code=code)
                self._next_id += 1
                logger.info(f"[{code}] Session created (id {self._sessions[code].session_id})")
            return copy.deepcopy(self._sessions[code])

    def save_session(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.code] = copy.deepcopy(session)

    def find_connection(self, connection_id: str) -> Optional[Tuple[str, int]]:
        with self._lock:
            for code, session in self._sessions.items():
                for player in session.players:
                    if player.active and player.connection_id == connection_id:
                        return code, player.player_id
        return None

    def list_codes(self) -> List[str]:
        with self._lock:
            return list(self._sessions)
