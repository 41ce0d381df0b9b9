"""Pydantic schemas for user and auth API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from domain.entities.user import User


class RegisterRequest(BaseModel):
    """Schema for registering a user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    """Schema for logging in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Signed bearer token."""

    token: str


class UserResponse(BaseModel):
    """Schema for the authenticated user. Never carries the password hash."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "avatar": "//www.gravatar.com/avatar/0c1b...?s=200&r=pg&d=mm",
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    email: str
    avatar: str | None
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            created_at=user.created_at,
        )
