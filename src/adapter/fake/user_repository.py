"""In-memory implementation of UserRepository for testing."""

from dataclasses import replace
from datetime import datetime

from domain.model.errors import DuplicateError
from domain.model.user import UPDATABLE_FIELDS, User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def insert(self, user: User) -> User:
        if user.id in self.store:
            raise DuplicateError("User already exists")
        if self.get_by_email(user.email):
            raise DuplicateError("User with this email already exists")

        self.store[user.id] = replace(user)
        return replace(user)

    def update(self, user_id: str, changes: dict, updated_at: datetime) -> User | None:
        current = self.store.get(user_id)
        if not current:
            return None

        values = {name: value for name, value in changes.items() if name in UPDATABLE_FIELDS}
        stored = replace(current, updated_at=updated_at, **values)
        self.store[user_id] = stored
        return replace(stored)

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return replace(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None
