"""Authentication routes (register, login, me)."""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_password_hasher, get_token_service, get_user_repo
from api.models import AuthResponse, ErrorResponse, LoginRequest, RegisterRequest, UserResponse
from api.security import require_user_id
from port.user_repository import UserRepository
from services import auth_service, profile_service
from services.password_hasher import PasswordHasher
from services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["auth"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """Register a new user and return a session token.

    Errors: 400 on validation failure or when the email is already registered.
    """
    user, token = auth_service.register(
        repo,
        hasher,
        tokens,
        email=request.email,
        password=request.password,
        **request.model_dump(exclude={"email", "password"}),
    )
    return AuthResponse(user=UserResponse.from_domain(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """Login user and return a fresh session token.

    Errors: 401 with the same message for unknown email and wrong password.
    """
    user, token = auth_service.authenticate(
        repo, hasher, tokens, email=request.email, password=request.password,
    )
    return AuthResponse(user=UserResponse.from_domain(user), token=token)


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: str = Depends(require_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get current authenticated user info (without password hash)."""
    return UserResponse.from_domain(profile_service.get_self(repo, user_id))
