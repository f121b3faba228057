"""Pydantic schemas for authentication requests, tokens and responses.

Request bodies use the camelCase keys of the public API (contactNumber,
profilePhoto, refreshToken); Python code uses snake_case attributes.
Both spellings are accepted on input.
"""

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ...schema.types import UserRole, UserStatus

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# bcrypt ignores input past 72 bytes
MAX_PASSWORD_BYTES = 72


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# Request Schemas
# ============================================================================


class IdentityFields(CamelModel):
    """Fields shared by registration and login payloads."""

    name: str | None = None
    email: str | None = None
    contact_number: str | None = None
    profile_photo: str | None = None
    password: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        """Trim, lowercase and check the email shape."""
        if v is None:
            return None
        v = v.strip().lower()
        if not v:
            return None
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Must be a valid email")
        return v

    @field_validator("contact_number", "name", "profile_photo")
    @classmethod
    def strip_blank(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("password")
    @classmethod
    def password_byte_limit(cls, v: str | None) -> str | None:
        if v is not None and len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class RegistrationRequest(IdentityFields):
    """Self-service registration payload.

    email, contactNumber and password are checked by the auth service so
    that a missing field yields a field-level ValidationError. role is free
    text: only "HOST" selects a host account, anything else is a customer.
    """

    role: str | None = None
    provider: str | None = None


class LoginRequest(IdentityFields):
    """Credential or federated login payload.

    provider == "google" marks a trusted federated assertion; any other
    value (or none) is a credential login.
    """

    provider: str | None = None


class AdminCreate(IdentityFields):
    """Admin account creation payload."""


class RefreshRequest(CamelModel):
    """Body of the refresh-token endpoint."""

    refresh_token: str = Field(..., min_length=1)


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPayload(BaseModel):
    """Verified JWT claims."""

    sub: str = Field(..., min_length=1)
    role: UserRole
    typ: Literal["access", "refresh"]
    iat: int
    exp: int
    jti: str | None = None


class TokenPair(CamelModel):
    """Access + refresh tokens handed to the caller in plaintext."""

    access_token: str
    refresh_token: str


class AccessTokenResponse(CamelModel):
    access_token: str


# ============================================================================
# User / Response Schemas
# ============================================================================


class UserResponse(CamelModel):
    """Public view of a user; never includes the password hash."""

    id: str
    email: str | None = None
    contact_number: str | None = None
    role: UserRole
    status: UserStatus
    created_at: str


class ApiResponse(CamelModel):
    """Success envelope returned by every API endpoint."""

    status_code: int
    success: bool = True
    message: str
    data: Any | None = None
