"""HTTP client for the auth and profile endpoints.

Attaches ``Authorization: Bearer <token>`` whenever a token is stored and
surfaces the server's error message verbatim, falling back to a generic
one per call.
"""

import logging
from typing import Any

import httpx
from pydantic.alias_generators import to_camel
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from client.token_store import TokenStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"
API_TIMEOUT_SECONDS = 10.0


class ApiError(Exception):
    """Request failed; ``message`` is safe to show to the user."""

    def __init__(self, message: str, status_code: int | None = None, errors: list[dict] | None = None):
        self.message = message
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


def _camelize(data: dict[str, Any]) -> dict[str, Any]:
    return {to_camel(key): value for key, value in data.items()}


class ApiClient:
    def __init__(
        self,
        token_store: TokenStore,
        base_url: str = DEFAULT_BASE_URL,
        http: httpx.Client | None = None,
    ):
        self.token_store = token_store
        self.http = http or httpx.Client(base_url=base_url, timeout=API_TIMEOUT_SECONDS)

    def close(self) -> None:
        self.http.close()

    # ── auth ─────────────────────────────────────────────────

    def register(self, email: str, password: str, **profile) -> dict:
        """POST /api/auth/register. Returns ``{"user": ..., "token": ...}``."""
        payload = {"email": email, "password": password, **_camelize(profile)}
        return self._request("POST", "/api/auth/register", "Registration failed", json=payload, auth=False)

    def login(self, email: str, password: str) -> dict:
        """POST /api/auth/login. Returns ``{"user": ..., "token": ...}``."""
        payload = {"email": email, "password": password}
        return self._request("POST", "/api/auth/login", "Login failed", json=payload, auth=False)

    def get_me(self) -> dict:
        return self._request("GET", "/api/auth/me", "Failed to get user")

    # ── profile ──────────────────────────────────────────────

    def get_profile(self) -> dict:
        return self._request("GET", "/api/profile", "Failed to get profile")

    def update_profile(self, **changes) -> dict:
        """PUT /api/profile with only the given fields (snake_case keys)."""
        return self._request("PUT", "/api/profile", "Failed to update profile", json=_camelize(changes))

    # ── transport ────────────────────────────────────────────

    def _request(
        self,
        method: str,
        path: str,
        fallback_message: str,
        json: dict | None = None,
        auth: bool = True,
    ) -> dict:
        headers = {"Content-Type": "application/json"}
        if auth:
            token = self.token_store.get()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        try:
            response = _send_with_retry(self.http, method, path, headers, json)
        except httpx.RequestError as e:
            logger.warning("API request error", extra={"path": path, "error_type": type(e).__name__})
            raise ApiError(fallback_message) from e

        if response.is_success:
            return response.json()

        message, errors = _error_details(response)
        logger.debug("API request failed", extra={"path": path, "status_code": response.status_code})
        raise ApiError(message or fallback_message, status_code=response.status_code, errors=errors)


def _error_details(response: httpx.Response) -> tuple[str | None, list[dict]]:
    try:
        body = response.json()
    except ValueError:
        return None, []
    if not isinstance(body, dict):
        return None, []
    message = body.get("message")
    return (message if isinstance(message, str) and message else None), body.get("errors") or []


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
def _send_with_retry(
    http: httpx.Client, method: str, path: str, headers: dict, json: dict | None,
) -> httpx.Response:
    """Send request with automatic retry on transient failures."""
    return http.request(method, path, headers=headers, json=json)
