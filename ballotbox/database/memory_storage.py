# ballotbox/database/memory_storage.py

import logging

from ballotbox.authentication.credentials import CredentialStore
from ballotbox.authentication.sessions import SessionStore
from ballotbox.database.state import StoreState
from ballotbox.database.storage import Storage
from ballotbox.encryption.password_hashing import PasswordHashingService
from ballotbox.security.token_manager import TokenManager
from ballotbox.voting.election import ElectionStore

logger = logging.getLogger(__name__)


class MemoryStorage(Storage):
    """In-process backend. Everything is lost when the process exits."""

    def __init__(self, password_service=None, token_manager=None, token_ttl_seconds=0):
        self.state = StoreState()
        self.credentials = CredentialStore(self.state, password_service or PasswordHashingService())
        self.sessions = SessionStore(self.state, token_manager or TokenManager(), ttl_seconds=token_ttl_seconds)
        self.election = ElectionStore(self.state, self.credentials)

    @classmethod
    def from_config(cls, config):
        return cls(
            password_service=PasswordHashingService.from_config(config),
            token_manager=TokenManager(config.get("SESSION_TOKEN_BYTES", 32)),
            token_ttl_seconds=config.get("SESSION_TOKEN_TTL_SECONDS", 0),
        )

    def connect(self):
        logger.info("Using in-memory storage")

    def close(self):
        self.state.clear()
        logger.info("In-memory storage closed")

    # credentials
    def create_user(self, username, email, password):
        return self.credentials.create_user(username, email, password)

    def authenticate(self, username, password):
        return self.credentials.authenticate(username, password)

    def get_user(self, user_id):
        return self.credentials.get_user(user_id)

    def get_user_by_username(self, username):
        return self.credentials.get_user_by_username(username)

    # sessions
    def issue_token(self, user_id):
        return self.sessions.issue_token(user_id)

    def resolve_token(self, token):
        return self.sessions.resolve_token(token)

    def revoke_token(self, token):
        self.sessions.revoke_token(token)

    def revoke_all(self, user_id):
        return self.sessions.revoke_all(user_id)

    def active_sessions(self, user_id):
        return self.sessions.active_sessions(user_id)

    # election
    def seed_candidates(self, candidates):
        return self.election.seed_candidates(candidates)

    def list_candidates(self):
        return self.election.list_candidates()

    def cast_vote(self, user_id, candidate_id):
        return self.election.cast_vote(user_id, candidate_id)

    def tally(self):
        return self.election.tally()

    def results(self):
        return self.election.results()
