"""Password and refresh token hashing with bcrypt.

Raw passwords and raw refresh tokens are never stored. Refresh tokens are
longer than bcrypt's 72-byte input limit, so they are reduced to their
SHA-256 hex digest (64 bytes) before hashing; otherwise two tokens sharing
a 72-byte prefix would verify against each other's hash.
"""

import hashlib

import bcrypt

BCRYPT_MAX_BYTES = 72


def _token_digest(token: str) -> bytes:
    return hashlib.sha256(token.encode("utf-8")).hexdigest().encode("ascii")


class PasswordHasher:
    """Salted, cost-factored one-way hashing."""

    def __init__(self, work_factor: int = 12):
        """
        Args:
            work_factor: bcrypt log rounds (4-31)
        """
        self.work_factor = work_factor

    def _hash(self, secret: bytes) -> str:
        salt = bcrypt.gensalt(rounds=self.work_factor)
        return bcrypt.hashpw(secret, salt).decode("utf-8")

    @staticmethod
    def _check(secret: bytes, digest: str) -> bool:
        # checkpw compares in constant time; malformed digests count as mismatch
        if len(secret) > BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(secret, digest.encode("utf-8"))
        except ValueError:
            return False

    def hash(self, password: str) -> str:
        """Hash a password.

        Raises:
            ValueError: If the password exceeds 72 UTF-8 bytes
        """
        secret = password.encode("utf-8")
        if len(secret) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
        return self._hash(secret)

    def verify(self, password: str, digest: str) -> bool:
        """Check a password against a stored hash."""
        return self._check(password.encode("utf-8"), digest)

    def hash_token(self, token: str) -> str:
        """Hash a refresh token for storage."""
        return self._hash(_token_digest(token))

    def verify_token(self, token: str, digest: str) -> bool:
        """Check a presented refresh token against its stored hash."""
        return self._check(_token_digest(token), digest)
