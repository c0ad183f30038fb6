"""Domain-level exceptions.

Services raise these errors to express business rule violations.
The API boundary (api.errors) maps them to HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class UnauthorizedError(DomainError):
    """Credentials or session token were rejected."""


class ValidationError(DomainError):
    """Input violates a validation rule.

    ``errors`` maps field name to a human-readable message.
    """

    def __init__(self, message: str = "Validation error", errors: dict[str, str] | None = None):
        self.errors = errors or {}
        super().__init__(message)


class StorageError(DomainError):
    """The credential store failed to complete an operation."""


class StorageUnavailableError(StorageError):
    """The credential store cannot be reached at all."""
