import uuid
from dataclasses import dataclass, fields
from datetime import datetime, timedelta, timezone

from domain.model.errors import ValidationError


# Optional, user-editable attributes. Null until set; never set back to null.
PROFILE_FIELDS = (
    'first_name',
    'last_name',
    'phone',
    'address',
    'city',
    'postal_code',
    'avatar_url',
)

# Defaulted scalars. Never null.
SETTINGS_FIELDS = (
    'loyalty_points',
    'marketing_consent',
    'push_notifications',
)

UPDATABLE_FIELDS = PROFILE_FIELDS + SETTINGS_FIELDS


@dataclass
class User:
    """Domain model representing a registered user."""
    id: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    avatar_url: str | None = None
    loyalty_points: str = '0'
    marketing_consent: str = 'false'
    push_notifications: str = 'true'

    @staticmethod
    def create(email: str, password_hash: str, **attributes) -> 'User':
        """Factory for a new account.

        Unknown keys in ``attributes`` are ignored; ``None`` values for the
        defaulted scalars fall back to their defaults.
        """
        now = datetime.now(timezone.utc)
        values = {
            name: value
            for name, value in attributes.items()
            if name in UPDATABLE_FIELDS and not (name in SETTINGS_FIELDS and value is None)
        }
        return User(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
            **values,
        )

    def apply_update(self, changes: dict) -> None:
        """Apply a partial profile update in place.

        Only keys present in ``changes`` are touched. Email and password
        are not updatable here.
        """
        errors = {}
        for name, value in changes.items():
            if name not in UPDATABLE_FIELDS:
                errors[name] = "Field cannot be updated"
            elif value is None:
                errors[name] = "Field cannot be null"
        if errors:
            raise ValidationError("Validation error", errors=errors)

        for name, value in changes.items():
            setattr(self, name, value)
        self.touch()

    def touch(self) -> None:
        """Refresh updated_at, keeping it strictly increasing."""
        now = datetime.now(timezone.utc)
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def to_public_dict(self) -> dict:
        """All attributes except the password hash."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != 'password_hash'}
