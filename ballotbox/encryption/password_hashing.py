# ballotbox/encryption/password_hashing.py

import logging
from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHashError, HashingError

logger = logging.getLogger(__name__)

# Password hashing and verification using Argon2id. Cost parameters are
# tunable so deployments (and the test suite) can trade speed for strength.

class PasswordHashingService:
    def __init__(self, time_cost=3, memory_cost=65536, parallelism=4):
        self.ph = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=32,
            salt_len=16,
        )
        # Verified against when the username is unknown, so a miss costs the
        # same as a wrong password.
        self._dummy_hash = self.ph.hash("ballotbox-dummy-password")

    @classmethod
    def from_config(cls, config):
        return cls(
            time_cost=config.get("ARGON2_TIME_COST", 3),
            memory_cost=config.get("ARGON2_MEMORY_COST", 65536),
            parallelism=config.get("ARGON2_PARALLELISM", 4),
        )

    def hash_password(self, password: str) -> str:
        if not password:
            raise ValueError("Password must not be empty")
        try:
            return self.ph.hash(password)
        except HashingError as e:
            raise ValueError(f"Password hashing failed: {str(e)}")

    def verify_password(self, password: str, hash_value: str) -> bool:
        try:
            self.ph.verify(hash_value, password)
            return True
        except VerifyMismatchError:
            return False
        except (VerificationError, InvalidHashError):
            logger.warning("Stored password hash could not be verified")
            return False

    def burn_verification(self, password: str) -> None:
        self.verify_password(password, self._dummy_hash)

    def needs_rehash(self, hash_value: str) -> bool:
        return self.ph.check_needs_rehash(hash_value)
