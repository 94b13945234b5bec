# ballotbox/database/storage.py

from abc import ABC, abstractmethod
from typing import Iterable, List

from ballotbox.database.models import Candidate, CandidateResult, User, Vote


class Storage(ABC):
    """
    What the transport layer needs from a backend.

    Any implementation must keep ``cast_vote`` atomic (vote insert and
    has-voted flag together) and raise the error kinds from
    ``ballotbox.errors`` without mutating anything on failure.
    """

    def connect(self) -> None:
        """Prepare the backend. No-op unless the backend needs it."""

    def close(self) -> None:
        """Release the backend's resources."""

    @abstractmethod
    def seed_candidates(self, candidates: Iterable) -> List[Candidate]: ...

    @abstractmethod
    def create_user(self, username: str, email: str, password: str) -> User: ...

    @abstractmethod
    def authenticate(self, username: str, password: str) -> User: ...

    @abstractmethod
    def get_user(self, user_id: int) -> User: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User: ...

    @abstractmethod
    def issue_token(self, user_id: int) -> str: ...

    @abstractmethod
    def resolve_token(self, token: str) -> User: ...

    @abstractmethod
    def revoke_token(self, token: str) -> None: ...

    @abstractmethod
    def revoke_all(self, user_id: int) -> int: ...

    @abstractmethod
    def active_sessions(self, user_id: int) -> int: ...

    @abstractmethod
    def list_candidates(self) -> List[Candidate]: ...

    @abstractmethod
    def cast_vote(self, user_id: int, candidate_id: int) -> Vote: ...

    @abstractmethod
    def tally(self) -> List[Vote]: ...

    @abstractmethod
    def results(self) -> List[CandidateResult]: ...
