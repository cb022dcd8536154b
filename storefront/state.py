"""
Session and state management for the storefront
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from storefront.cart import Cart
from storefront.integrations.contracts.licenses import License

logger = logging.getLogger(__name__)


@dataclass
class StorefrontState:
    """Everything the storefront page shows for one browser session.

    Passed by reference to the controller and the view; nothing here is
    persisted.
    """

    query: str = ""
    catalog: List[License] = field(default_factory=list)
    cart: Cart = field(default_factory=Cart)
    message: str = ""
    busy: bool = False
    search_ticket: int = 0
    loaded: bool = False

    def find_license(self, sku: str) -> Optional[License]:
        for lic in self.catalog:
            if lic.sku == sku:
                return lic
        return None


class SessionStore:
    """In-memory session_id -> StorefrontState store.

    Sessions idle for longer than ``ttl`` are dropped on the next access. Once
    ``max_sessions`` are live, creating another evicts the least recently seen.
    """

    def __init__(self, ttl: int = 1800, max_sessions: int = 10000) -> None:
        self.ttl = ttl
        self.max_sessions = max_sessions
        self._sessions: Dict[str, StorefrontState] = {}
        self._last_seen: Dict[str, datetime] = {}

    def create_session(self) -> Tuple[str, StorefrontState]:
        """Create new session"""
        self._expire_idle()
        while len(self._sessions) >= self.max_sessions:
            oldest = min(self._last_seen, key=self._last_seen.__getitem__)
            logger.info("Session store full (%d); evicting %s", self.max_sessions, oldest)
            self.end_session(oldest)
        session_id = str(uuid.uuid4())
        state = StorefrontState()
        self._sessions[session_id] = state
        self._last_seen[session_id] = datetime.utcnow()
        logger.info("Created storefront session %s", session_id)
        return session_id, state

    def get_session(self, session_id: Optional[str]) -> Optional[StorefrontState]:
        """Get session state"""
        self._expire_idle()
        if not session_id or session_id not in self._sessions:
            return None
        self._last_seen[session_id] = datetime.utcnow()
        return self._sessions[session_id]

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, StorefrontState, bool]:
        state = self.get_session(session_id)
        if state is not None:
            return session_id, state, False
        new_id, state = self.create_session()
        return new_id, state, True

    def peek(self, session_id: Optional[str]) -> StorefrontState:
        """Session state for read-only callers; unknown ids get a blank, unstored state."""
        state = self.get_session(session_id)
        return state if state is not None else StorefrontState()

    def end_session(self, session_id: str) -> None:
        """End session and clean up"""
        self._sessions.pop(session_id, None)
        self._last_seen.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def _expire_idle(self) -> None:
        cutoff = datetime.utcnow() - timedelta(seconds=self.ttl)
        expired = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for sid in expired:
            logger.debug("Expiring idle storefront session %s", sid)
            self.end_session(sid)
