"""
Identity Service

Keeps the auth data handed over by the login sub-flow, per chat session.
"""

import time
from typing import Dict, Optional

from config.settings import AUTH_SESSION_TTL_SECONDS
from models import AuthUser


class IdentityService:
    def __init__(self, ttl_seconds: int = AUTH_SESSION_TTL_SECONDS, clock=time.time):
        self._auth: Dict[str, AuthUser] = {}
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def set_session_auth_data(
        self,
        session_id: str,
        user_id: str,
        access_token: str,
        expires_at: Optional[float] = None,
    ) -> AuthUser:
        """Store auth data for a session. Without *expires_at* the configured TTL applies."""
        self.prune_expired()
        if expires_at is None and self.ttl_seconds > 0:
            expires_at = self._clock() + self.ttl_seconds
        user = AuthUser(user_id=str(user_id), access_token=str(access_token), expires_at=expires_at)
        self._auth[session_id] = user
        return user

    def clear_session_auth_data(self, session_id: str) -> None:
        self._auth.pop(session_id, None)

    def prune_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self._clock()
        expired = [
            session_id for session_id, user in self._auth.items()
            if user.expires_at is not None and user.expires_at <= now
        ]
        for session_id in expired:
            del self._auth[session_id]
        return len(expired)

    def stored_count(self) -> int:
        return len(self._auth)

    def get_session_auth_data(self, session_id: str) -> Optional[AuthUser]:
        """Auth data for the session, or None when absent or expired."""
        user = self._auth.get(session_id)
        if user is None:
            return None
        if user.expires_at is not None and user.expires_at <= self._clock():
            self._auth.pop(session_id, None)
            return None
        return user

    def is_authenticated(self, session_id: str) -> bool:
        return self.get_session_auth_data(session_id) is not None
