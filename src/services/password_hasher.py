"""bcrypt password hashing."""

import logging
from functools import cached_property

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt cost factor: 2^12 = 4096 iterations
BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes; bcrypt>=5 raises on longer input
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way hashing of passwords with bcrypt."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash password with a fresh random salt.

        Args:
            password: Plain text password. Bytes past the 72nd are ignored.

        Returns:
            Bcrypt hashed password as string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode('utf-8')

    def verify(self, password: str, hashed_password: str | None) -> bool:
        """Verify password against hash.

        Returns False for a wrong password and for a malformed hash.
        """
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(_encode(password), hashed_password.encode('utf-8'))
        except ValueError as e:
            logger.warning("Malformed password hash", extra={"error": str(e)})
            return False

    @cached_property
    def _dummy_hash(self) -> str:
        return self.hash("not-a-real-password")

    def burn(self, password: str) -> None:
        """Run a verify against a throwaway hash.

        Used when no account matches so a failed login costs the same
        whether or not the email exists.
        """
        self.verify(password, self._dummy_hash)
