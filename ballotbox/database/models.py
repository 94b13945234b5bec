# ballotbox/database/models.py

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone

# Record types held by the in-memory store. All records are frozen; the store
# swaps a whole record when a field changes.


def utcnow():
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class User:
    id: int
    username: str
    email: str
    password_hash: str = field(repr=False)
    has_voted: bool = False
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self):
        # never expose the password hash
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "has_voted": self.has_voted,
        }


@dataclass(frozen=True)
class Candidate:
    id: int
    name: str

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Vote:
    id: int
    user_id: int
    candidate_id: int
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "candidate_id": self.candidate_id,
            "created_at": self.created_at.isoformat(),
        }

    def __repr__(self):
        return f'<Vote {self.id} by User {self.user_id}>'


@dataclass(frozen=True)
class SessionToken:
    token: str = field(repr=False)
    user_id: int
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class CandidateResult:
    candidate: Candidate
    votes: int

    def to_dict(self):
        return {"candidate": self.candidate.to_dict(), "votes": self.votes}
