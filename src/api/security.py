"""Bearer-token auth gate for protected routes."""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_token_service
from domain.model.errors import UnauthorizedError
from services.token_service import TokenService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def require_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """Resolve the caller's user ID from ``Authorization: Bearer <token>``.

    Only proves the token is well-formed, correctly signed and unexpired;
    it does not look the user up. Handlers must still confirm the record
    exists. The ID is also bound to ``request.state.user_id``.

    Raises:
        UnauthorizedError: header missing, or token invalid or expired
    """
    if not credentials:
        raise UnauthorizedError("Authentication required")

    user_id = tokens.verify(credentials.credentials)
    if not user_id:
        logger.debug("Rejected bearer token", extra={"path": request.url.path})
        raise UnauthorizedError("Invalid or expired token")

    request.state.user_id = user_id
    return user_id
