"""Profile routes for the authenticated user's own record."""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_user_repo
from api.models import ErrorResponse, UpdateProfileRequest, UserResponse
from api.security import require_user_id
from port.user_repository import UserRepository
from services import profile_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/profile",
    tags=["profile"],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=UserResponse)
def get_profile(
    user_id: str = Depends(require_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    return UserResponse.from_domain(profile_service.get_self(repo, user_id))


@router.put("", response_model=UserResponse)
def update_profile(
    request: UpdateProfileRequest,
    user_id: str = Depends(require_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    """Update profile fields.

    Only fields present in the body change; an explicit null clears an
    optional field.
    """
    changes = request.model_dump(exclude_unset=True)
    user = profile_service.update_self(repo, user_id, changes)
    return UserResponse.from_domain(user)
