"""Python client for the taxi booking API."""

from client.api_client import ApiClient, ApiError
from client.session import AuthSession
from client.token_store import TOKEN_KEY, TokenStore

__all__ = ["ApiClient", "ApiError", "AuthSession", "TOKEN_KEY", "TokenStore"]
