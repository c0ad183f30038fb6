"""JWT session tokens: issue and verify."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt

from utils.settings import Settings

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies signed, expiring session tokens.

    Tokens carry the user ID in the ``sub`` claim and expire
    ``settings.jwt_expiration_days`` after issuance. There is no
    revocation list: a token stays valid until it expires.
    """

    def __init__(self, settings: Settings, now: Callable[[], datetime] = _utcnow):
        if not settings.jwt_secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._lifetime = timedelta(days=settings.jwt_expiration_days)
        self._now = now

    def issue(self, user_id: str) -> str:
        """Create JWT access token for user."""
        issued_at = self._now()
        payload = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[str]:
        """Verify JWT token and extract user_id.

        Returns:
            User ID if signature and expiry check out, None otherwise
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            return None
        return user_id
