# ballotbox/security/token_manager.py
import secrets

from ballotbox.errors import EntropyUnavailable

MIN_TOKEN_BYTES = 32

# Opaque bearer tokens drawn from the OS CSPRNG. There is no fallback source:
# if the CSPRNG fails the request fails.
class TokenManager:
    def __init__(self, token_bytes: int = 32):
        if token_bytes < MIN_TOKEN_BYTES:
            raise ValueError(f"Tokens need at least {MIN_TOKEN_BYTES} bytes of randomness")
        self.token_bytes = token_bytes

    def generate_token(self) -> str:
        try:
            return secrets.token_hex(self.token_bytes)
        except (OSError, NotImplementedError) as e:
            raise EntropyUnavailable() from e

    @staticmethod
    def extract_from_header(auth_header):
        # Accepts "Token <t>" and "Bearer <t>"; anything else yields None.
        if not auth_header:
            return None
        parts = auth_header.split(" ")
        if len(parts) != 2 or parts[0] not in ("Token", "Bearer") or not parts[1]:
            return None
        return parts[1]
