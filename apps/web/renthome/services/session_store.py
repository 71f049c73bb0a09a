"""In-memory authentication session storage for the web front."""
from __future__ import annotations

import enum
import secrets
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..core.config import settings
from ..schemas.auth import SessionUser
from ..schemas.notices import Notice


class SessionStatus(str, enum.Enum):
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass
class AuthSession:
    """Per-browser state: the signed-in user, the backend token and pending toasts."""

    session_id: str
    user: SessionUser | None = None
    token: str | None = None
    notices: list[Notice] = field(default_factory=list)

    @property
    def status(self) -> SessionStatus:
        if self.user is None:
            return SessionStatus.UNAUTHENTICATED
        return SessionStatus.AUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED

    @property
    def user_id(self) -> str | None:
        return self.user.id if self.user else None

    @property
    def should_persist(self) -> bool:
        return self.user is not None or bool(self.notices)

    def flash(self, notice: Notice) -> None:
        self.notices.append(notice)

    def pop_notices(self) -> list[Notice]:
        notices, self.notices = self.notices, []
        return notices

    def sign_in(self, user: SessionUser, token: str | None) -> None:
        self.user = user
        self.token = token

    def sign_out(self) -> None:
        self.user = None
        self.token = None


@dataclass
class _SessionEntry:
    state: AuthSession
    last_seen: float


class SessionStore:
    """Very small in-memory session registry with TTL eviction."""

    def __init__(self, ttl_seconds: int = 900) -> None:
        self._ttl = ttl_seconds
        self._sessions: Dict[str, _SessionEntry] = {}

    def new(self) -> AuthSession:
        """Return an unsaved anonymous session with a fresh identifier."""

        return AuthSession(session_id=secrets.token_urlsafe(32))

    def get(self, session_id: str) -> Optional[AuthSession]:
        self._evict_expired()
        entry = self._sessions.get(session_id)
        if not entry:
            return None
        entry.last_seen = time.time()
        return entry.state

    def save(self, state: AuthSession) -> None:
        self._evict_expired()
        self._sessions[state.session_id] = _SessionEntry(state=state, last_seen=time.time())

    def clear(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def rotate(self, state: AuthSession) -> None:
        """Give ``state`` a fresh identifier; used whenever the user changes."""

        self.clear(state.session_id)
        state.session_id = secrets.token_urlsafe(32)

    def __len__(self) -> int:
        return len(self._sessions)

    def _evict_expired(self) -> None:
        now = time.time()
        expired = [key for key, entry in self._sessions.items() if now - entry.last_seen > self._ttl]
        for key in expired:
            self._sessions.pop(key, None)


session_store = SessionStore(ttl_seconds=settings.session_ttl_seconds)
