"""User schema definitions.

This module defines the User data model and the auth/profile request and
response bodies.
"""

import uuid
from datetime import datetime
from typing import List, Optional

import pytz
from pydantic import BaseModel, Field


class User(BaseModel):
    """Internal user record, including the password hash."""

    user_id: str = Field(
        description="The unique identifier for the user.",
        default_factory=lambda: str(uuid.uuid4()),
    )
    name: str = Field(description="Display name.")
    email: str = Field(description="Login email, unique across users.")
    password_hash: str = Field(description="bcrypt hash of the password.")
    role: str = Field(description="'student' or 'admin', fixed at registration.")
    skills: List[str] = Field(default_factory=list)
    availability: str = Field(default="")
    created_at: str = Field(
        default_factory=lambda: datetime.now(pytz.utc).isoformat()
    )
    updated_at: str = Field(
        default_factory=lambda: datetime.now(pytz.utc).isoformat()
    )


class PublicUser(BaseModel):
    """User data safe to return to other users."""

    user_id: str
    name: str
    email: str
    role: str
    skills: List[str] = Field(default_factory=list)
    availability: str = ""

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(**user.model_dump(exclude={"password_hash", "created_at", "updated_at"}))


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    role: str


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    user: PublicUser
    token: str


class CurrentUserResponse(BaseModel):
    user: PublicUser


class UpdateProfileRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    skills: Optional[List[str]] = None
    availability: Optional[str] = None
