"""Auth service: registration and login business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API boundary maps to HTTP status codes.
"""

import logging

from email_validator import EmailNotValidError, validate_email

from domain.model.errors import DuplicateError, UnauthorizedError, ValidationError
from domain.model.user import User
from port.user_repository import UserRepository
from services.password_hasher import PasswordHasher
from services.token_service import TokenService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Invalid email or password"


def _is_valid_email(email: str) -> bool:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _validate_registration(email: str, password: str) -> None:
    errors = {}
    if not _is_valid_email(email):
        errors['email'] = "Invalid email address"
    if len(password) < MIN_PASSWORD_LENGTH:
        errors['password'] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if errors:
        raise ValidationError("Validation error", errors=errors)


def _validate_login(email: str, password: str) -> None:
    errors = {}
    if not _is_valid_email(email):
        errors['email'] = "Invalid email address"
    if not password:
        errors['password'] = "Password is required"
    if errors:
        raise ValidationError("Validation error", errors=errors)


def register(
    repo: UserRepository,
    hasher: PasswordHasher,
    tokens: TokenService,
    email: str,
    password: str,
    **attributes,
) -> tuple[User, str]:
    """Register a new user.

    ``attributes`` may carry the optional profile fields and the
    defaulted scalars (loyalty_points, marketing_consent, push_notifications).

    Returns the created User and a fresh session token.

    Raises:
        ValidationError: malformed email or short password (before any store access)
        DuplicateError: email already registered
    """
    _validate_registration(email, password)

    if repo.get_by_email(email):
        raise DuplicateError("User with this email already exists")

    user = User.create(email=email, password_hash=hasher.hash(password), **attributes)
    user = repo.insert(user)
    token = tokens.issue(user.id)

    logger.info("User registered", extra={"userId": user.id})
    return user, token


def authenticate(
    repo: UserRepository,
    hasher: PasswordHasher,
    tokens: TokenService,
    email: str,
    password: str,
) -> tuple[User, str]:
    """Authenticate a user by email and password.

    Returns the User and a fresh session token. Doesn't reveal whether
    the email exists: unknown email and wrong password raise the same error.

    Raises:
        ValidationError: malformed email or empty password
        UnauthorizedError: invalid credentials (deliberately vague)
    """
    _validate_login(email, password)

    user = repo.get_by_email(email)
    if not user:
        hasher.burn(password)
        logger.warning("Login failed")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    if not hasher.verify(password, user.password_hash):
        logger.warning("Login failed")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    token = tokens.issue(user.id)
    logger.info("User logged in", extra={"userId": user.id})
    return user, token
