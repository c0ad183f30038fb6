"""Profile service: read and update the caller's own record."""

import logging

from domain.model.errors import NotFoundError
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


def get_self(repo: UserRepository, user_id: str) -> User:
    """Return the user bound to the session.

    Raises:
        NotFoundError: the ID no longer resolves to a record
    """
    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def update_self(repo: UserRepository, user_id: str, changes: dict) -> User:
    """Apply a partial profile update.

    ``changes`` holds only the fields the caller sent; everything else
    stays as it is. Only the sent fields are written back to the store.

    Raises:
        NotFoundError: the ID no longer resolves to a record
        ValidationError: a field was set to None or is not updatable
    """
    user = get_self(repo, user_id)
    user.apply_update(changes)

    updated = repo.update(user_id, changes, user.updated_at)
    if not updated:
        raise NotFoundError("User not found")

    logger.info("Profile updated", extra={"userId": user_id, "fields": sorted(changes)})
    return updated
