"""Pydantic models for API request/response.

JSON keys are camelCase on the wire (``firstName``, ``postalCode``);
Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from domain.model.user import User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileFields(CamelModel):
    """Optional, user-editable attributes shared by registration and update.

    Each key may be omitted, but a key that is sent must carry a string.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    avatar_url: Optional[str] = None
    loyalty_points: Optional[str] = None
    marketing_consent: Optional[str] = None
    push_notifications: Optional[str] = None

    @field_validator("*")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise PydanticCustomError("null_value", "Field cannot be null")
        return value


class RegisterRequest(ProfileFields):
    """Request model for user registration."""
    email: str
    password: str


class LoginRequest(CamelModel):
    """Request model for user login."""
    email: str
    password: str


class UpdateProfileRequest(ProfileFields):
    """Request model for profile update.

    Email and password are not part of this model; if sent they are ignored.
    """


class UserResponse(CamelModel):
    """Public view of a user. Never includes the password hash."""
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    avatar_url: Optional[str] = None
    loyalty_points: str
    marketing_consent: str
    push_notifications: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(**user.to_public_dict())


class AuthResponse(BaseModel):
    """Response model for register and login."""
    user: UserResponse
    token: str


class ErrorResponse(BaseModel):
    """Error payload returned for every failed request."""
    message: str
    errors: Optional[list[dict]] = None
