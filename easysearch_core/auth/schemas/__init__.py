"""Authentication Pydantic schemas for API validation."""

from .auth import (
    AccessTokenResponse,
    AdminCreate,
    ApiResponse,
    LoginRequest,
    RefreshRequest,
    RegistrationRequest,
    TokenPair,
    TokenPayload,
    UserResponse,
)

__all__ = [
    "AccessTokenResponse",
    "AdminCreate",
    "ApiResponse",
    "LoginRequest",
    "RefreshRequest",
    "RegistrationRequest",
    "TokenPair",
    "TokenPayload",
    "UserResponse",
]
