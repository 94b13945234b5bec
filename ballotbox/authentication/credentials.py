# ballotbox/authentication/credentials.py

import dataclasses
import logging

from ballotbox.database.models import User
from ballotbox.errors import DuplicateUsername, InvalidCredentials, NotFound

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Owns user records and password verification.

    Argon2 hashing and verification are slow on purpose, so they run outside
    the store lock; only the table lookups and inserts are locked.
    """

    def __init__(self, state, password_service):
        self._state = state
        self._passwords = password_service

    def create_user(self, username: str, email: str, password: str) -> User:
        for field_name, value in (("username", username), ("email", email), ("password", password)):
            if not value:
                raise ValueError(f"{field_name} must not be empty")

        # fail fast before paying for the hash; re-checked under the write lock
        with self._state.lock.read():
            if username in self._state.usernames:
                raise DuplicateUsername()

        password_hash = self._passwords.hash_password(password)

        with self._state.lock.write():
            if username in self._state.usernames:
                raise DuplicateUsername()
            user = User(
                id=self._state.next_user_id(),
                username=username,
                email=email,
                password_hash=password_hash,
            )
            self._state.users[user.id] = user
            self._state.usernames[username] = user.id

        logger.info("Registered user id=%s username=%s", user.id, username)
        return user

    def authenticate(self, username: str, password: str) -> User:
        with self._state.lock.read():
            user_id = self._state.usernames.get(username)
            user = self._state.users.get(user_id) if user_id is not None else None

        if user is None:
            self._passwords.burn_verification(password or "")
            raise InvalidCredentials()
        if not self._passwords.verify_password(password or "", user.password_hash):
            raise InvalidCredentials()

        if self._passwords.needs_rehash(user.password_hash):
            user = self._rehash(user, password)
        return user

    def _rehash(self, user: User, password: str) -> User:
        new_hash = self._passwords.hash_password(password)
        with self._state.lock.write():
            current = self._state.users.get(user.id)
            if current is None:
                raise InvalidCredentials()
            current = dataclasses.replace(current, password_hash=new_hash)
            self._state.users[user.id] = current
        logger.info("Upgraded password hash parameters for user id=%s", user.id)
        return current

    def get_user(self, user_id: int) -> User:
        with self._state.lock.read():
            user = self._state.users.get(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        return user

    def get_user_by_username(self, username: str) -> User:
        with self._state.lock.read():
            user_id = self._state.usernames.get(username)
            user = self._state.users.get(user_id) if user_id is not None else None
        if user is None:
            raise NotFound(f"User {username!r} not found")
        return user

    def mark_voted(self, user_id: int) -> User:
        # Caller must hold the write lock: this is the second half of the
        # check-and-set in ElectionStore.cast_vote.
        user = self._state.users.get(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        user = dataclasses.replace(user, has_voted=True)
        self._state.users[user_id] = user
        return user
