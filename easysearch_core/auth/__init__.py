"""Authentication module for Easy Search Core.

This module provides the authentication core:
- Token signing and verification (token.TokenSigner)
- Password and refresh token hashing (hashing.PasswordHasher)
- Registration, login, refresh rotation and logout (service.AuthService)
- Request-time authorization (guard.AccessGuard, decorators.auth_required)
- The persistence contract it consumes (store.CredentialStore)

Auth endpoints (under the API v1 prefix):
- POST /auth/register - Create account, return access + refresh tokens
- POST /auth/login - Credential or Google login
- POST /auth/refresh-token - Rotate refresh token
- POST /auth/logout - End the current session
- GET /users/me - Current user info
- POST /users/create-admin - Create admin account (localhost only)
"""

from . import hashing, result, schemas, store, token

__all__ = ["hashing", "result", "schemas", "store", "token"]
