"""Client-side session state: who is logged in and with which token."""

import logging

from client.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


class AuthSession:
    """Tracks the signed-in user and keeps the stored token in sync.

    The token is written on login/register, removed on logout, and removed
    when restoring a saved session fails for any reason.
    """

    def __init__(self, api: ApiClient):
        self.api = api
        self.user: dict | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def restore(self) -> dict | None:
        """Re-validate a stored token at startup."""
        if not self.api.token_store.get():
            return None
        try:
            self.user = self.api.get_me()
        except ApiError as e:
            logger.info("Stored session rejected, clearing token", extra={"status_code": e.status_code})
            self.api.token_store.remove()
            self.user = None
        return self.user

    def login(self, email: str, password: str) -> dict:
        result = self.api.login(email, password)
        self.api.token_store.set(result["token"])
        self.user = result["user"]
        return self.user

    def register(self, email: str, password: str, **profile) -> dict:
        result = self.api.register(email, password, **profile)
        self.api.token_store.set(result["token"])
        self.user = result["user"]
        return self.user

    def update_profile(self, **changes) -> dict:
        self.user = self.api.update_profile(**changes)
        return self.user

    def logout(self) -> None:
        self.api.token_store.remove()
        self.user = None
