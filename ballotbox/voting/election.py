# ballotbox/voting/election.py

import logging
from collections import Counter
from typing import Iterable, List, Union

from ballotbox.database.models import Candidate, CandidateResult, Vote
from ballotbox.errors import AlreadyVoted, NotFound, UnknownCandidate

logger = logging.getLogger(__name__)


class ElectionStore:
    """
    Candidates and the append-only vote ledger.

    ``cast_vote`` is the only compound write in the system. It runs entirely
    under the store's write lock, which covers the user table (has-voted
    flag), the candidate table, the vote table and the vote id sequence.
    Readers use the read lock, so none of them can see a vote without its
    flag flip or the other way round.
    """

    def __init__(self, state, credentials):
        self._state = state
        self._credentials = credentials

    def seed_candidates(self, candidates: Iterable[Union[str, Candidate]]) -> List[Candidate]:
        seeded = []
        for index, item in enumerate(candidates, start=1):
            candidate = item if isinstance(item, Candidate) else Candidate(id=index, name=item)
            if not candidate.name:
                raise ValueError("Candidate name must not be empty")
            seeded.append(candidate)
        if len({c.id for c in seeded}) != len(seeded):
            raise ValueError("Candidate ids must be unique")

        with self._state.lock.write():
            if self._state.seeded:
                raise ValueError("Candidates have already been seeded")
            for candidate in seeded:
                self._state.candidates[candidate.id] = candidate
            self._state.seeded = True

        logger.info("Seeded %d candidates", len(seeded))
        return sorted(seeded, key=lambda c: c.id)

    def list_candidates(self) -> List[Candidate]:
        with self._state.lock.read():
            return sorted(self._state.candidates.values(), key=lambda c: c.id)

    def cast_vote(self, user_id: int, candidate_id: int) -> Vote:
        with self._state.lock.write():
            user = self._state.users.get(user_id)
            if user is None:
                raise NotFound(f"User {user_id} not found")
            if user.has_voted:
                raise AlreadyVoted()
            if candidate_id not in self._state.candidates:
                raise UnknownCandidate()

            vote = Vote(
                id=self._state.next_vote_id(),
                user_id=user_id,
                candidate_id=candidate_id,
            )
            self._state.votes[vote.id] = vote
            self._credentials.mark_voted(user_id)

        logger.info("Recorded vote id=%s for user id=%s", vote.id, user_id)
        return vote

    def tally(self) -> List[Vote]:
        with self._state.lock.read():
            return sorted(self._state.votes.values(), key=lambda v: v.id)

    def results(self) -> List[CandidateResult]:
        with self._state.lock.read():
            candidates = sorted(self._state.candidates.values(), key=lambda c: c.id)
            counts = Counter(v.candidate_id for v in self._state.votes.values())
        return [CandidateResult(candidate=c, votes=counts.get(c.id, 0)) for c in candidates]
