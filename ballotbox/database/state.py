# ballotbox/database/state.py

from ballotbox.database.locking import ReadWriteLock


class StoreState:
    """
    The shared tables behind every store.

    Lock coverage: ``lock`` guards all four tables, the username index and
    both id sequences. Readers take ``lock.read()``, anything that touches a
    table or a sequence takes ``lock.write()``. Only the store classes in
    ``ballotbox.authentication`` and ``ballotbox.voting`` reach in here.
    """

    def __init__(self):
        self.users = {}           # id -> User
        self.usernames = {}       # username -> id
        self.candidates = {}      # id -> Candidate
        self.votes = {}           # id -> Vote
        self.tokens = {}          # token string -> SessionToken
        self.user_id_seq = 0
        self.vote_id_seq = 0
        self.seeded = False       # candidates are seeded once per store, even across clear()
        self.lock = ReadWriteLock()

    def next_user_id(self):
        # caller holds the write lock
        self.user_id_seq += 1
        return self.user_id_seq

    def next_vote_id(self):
        # caller holds the write lock
        self.vote_id_seq += 1
        return self.vote_id_seq

    def clear(self):
        with self.lock.write():
            self.users.clear()
            self.usernames.clear()
            self.candidates.clear()
            self.votes.clear()
            self.tokens.clear()
