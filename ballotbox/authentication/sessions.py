# ballotbox/authentication/sessions.py

import logging
from datetime import timedelta

from ballotbox.database.models import SessionToken, User, utcnow
from ballotbox.errors import InvalidToken, UserVanished

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Bearer-token sessions bound to a user id.

    ``ttl_seconds`` of 0 means tokens live until revoked.
    """

    def __init__(self, state, token_manager, ttl_seconds: int = 0):
        self._state = state
        self._tokens = token_manager
        self.ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None

    def issue_token(self, user_id: int) -> str:
        with self._state.lock.write():
            token = self._tokens.generate_token()
            while token in self._state.tokens:
                token = self._tokens.generate_token()
            self._state.tokens[token] = SessionToken(token=token, user_id=user_id)
        logger.info("Issued session token for user id=%s", user_id)
        return token

    def _expired(self, session: SessionToken) -> bool:
        return self.ttl is not None and utcnow() - session.created_at >= self.ttl

    def resolve_token(self, token: str) -> User:
        with self._state.lock.read():
            session = self._state.tokens.get(token)
            user = self._state.users.get(session.user_id) if session else None

        if session is None:
            raise InvalidToken()
        if self._expired(session):
            self._purge(token)
            raise InvalidToken("Token has expired")
        if user is None:
            logger.warning("Session token bound to missing user id=%s", session.user_id)
            raise UserVanished()
        return user

    def _purge(self, token: str) -> None:
        with self._state.lock.write():
            self._state.tokens.pop(token, None)

    def revoke_token(self, token: str) -> None:
        with self._state.lock.write():
            session = self._state.tokens.pop(token, None)
        if session is not None:
            logger.info("Revoked session token for user id=%s", session.user_id)

    def revoke_all(self, user_id: int) -> int:
        with self._state.lock.write():
            doomed = [t for t, s in self._state.tokens.items() if s.user_id == user_id]
            for token in doomed:
                del self._state.tokens[token]
        logger.info("Revoked %d session token(s) for user id=%s", len(doomed), user_id)
        return len(doomed)

    def active_sessions(self, user_id: int) -> int:
        with self._state.lock.read():
            return sum(1 for s in self._state.tokens.values() if s.user_id == user_id)
