"""
User Schemas - Pydantic models for user data validation and serialization.
"""
from typing import Optional
from datetime import datetime
from pydantic import EmailStr, Field, field_validator

from ..core.schemas import CamelModel
from .models import UserRole


class UserLogin(CamelModel):
    """
    User Login Schema - Used for authentication

    Fields:
    - username: Exact username of the account
    - password: User's plain text password
    """
    username: str
    password: str


class UserCreate(CamelModel):
    """
    User Registration Schema

    Fields:
    - username: Unique login name
    - password: Plain text password (hashed before storage)
    - name: Display name
    - email: Unique email address
    - role: Requested role, defaults to ``user``
    """
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: EmailStr
    role: UserRole = UserRole.USER


class UserPublic(CamelModel):
    """
    Public-safe projection of a user, returned by login, registration and update.
    """
    id: int
    username: str
    name: str
    role: UserRole
    email: str


class UserResponse(UserPublic):
    """
    Full user record as exposed to clients. The password hash is never included.
    """
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime


class LoginResponse(CamelModel):
    token: str
    user: UserPublic


class RegisterResponse(CamelModel):
    message: str
    user: UserPublic


class UserUpdate(CamelModel):
    """
    User Update Schema - Partial update, only supplied fields change.

    A supplied ``password`` is re-hashed rather than merged as-is.
    """
    username: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None

    @field_validator("username", "password", "name", "email", "role", "is_active", mode="before")
    @classmethod
    def reject_null(cls, v):
        """Fields may be omitted, but not explicitly cleared."""
        if v is None:
            raise ValueError("field cannot be null")
        return v


class UserStatusUpdate(CamelModel):
    """Body of ``PATCH /users/{id}/status``."""
    is_active: bool
