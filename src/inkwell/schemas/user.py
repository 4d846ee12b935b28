"""User-related Pydantic schemas."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from .common import UserSummary


def _normalize_email(value: object) -> object:
    """Trim and lower-case before the address is validated."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


class RegisterRequest(BaseModel):
    """Schema for password-based account registration."""

    username: str = Field(..., min_length=3, max_length=64, description="Unique public handle")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=6, max_length=128, description="Plain-text password")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        """Trim surrounding whitespace and re-check the minimum length."""
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return _normalize_email(v)


class LoginRequest(BaseModel):
    """Schema for password login submissions."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., description="Plain-text password")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return _normalize_email(v)


class AuthResponse(BaseModel):
    """Token and account summary returned after register or login."""

    token: str = Field(..., description="JWT bearer token")
    user: UserSummary
