from datetime import datetime
from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Adapters raise DuplicateError when an insert violates email uniqueness
    and StorageError when the backing store fails.
    """
    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email (exact match). Return User or None if not found."""
        ...

    def insert(self, user: User) -> User:
        """Persist a new user and return it."""
        ...

    def update(self, user_id: str, changes: dict, updated_at: datetime) -> User | None:
        """Set only the keys in ``changes`` plus updated_at on an existing user.

        Fields not named in ``changes`` keep whatever the store holds now.
        Return the stored User, or None if no record has that ID.
        """
        ...
