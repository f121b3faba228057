"""Authentication API endpoints for Easy Search Core.

These endpoints handle accounts and sessions and return the JSON envelope
{statusCode, success, message, data}:

- POST /auth/register       - Create CUSTOMER/HOST account, return token pair
- POST /auth/login          - Credential or Google login, return token pair
- POST /auth/refresh-token  - Rotate refresh token, return new access token
- POST /auth/logout         - End the current session (auth required)
- GET  /users/me            - Current user info (auth required)
- POST /users/create-admin  - Create ADMIN account (localhost only)

Both blueprints are mounted under the API v1 prefix. Refresh tokens are
returned in the body; storing them is the client's job.
"""

import logging

from flask import Blueprint, current_app, g, request

from ..api.responses import send_response
from ..api.validation import validate_request
from .decorators import auth_required, localhost_only
from .schemas import AccessTokenResponse, AdminCreate, LoginRequest, RefreshRequest, RegistrationRequest
from .service import AuthService
from .store import Provenance

logger = logging.getLogger(__name__)


auth_bp = Blueprint("auth", __name__, url_prefix="/auth")
users_bp = Blueprint("users", __name__, url_prefix="/users")


def get_auth_service() -> AuthService:
    return current_app.extensions["easysearch"]["auth_service"]


def _provenance() -> Provenance:
    return Provenance(
        user_agent=request.headers.get("User-Agent") or "unknown",
        ip=request.remote_addr or "unknown",
    )


# ============================================================================
# Authentication Endpoints
# ============================================================================


@auth_bp.post("/register")
@validate_request
def register(data: RegistrationRequest):
    """
    Create an account and sign it in.

    Example request:
    ```json
    {
        "name": "Ada",
        "email": "a@x.com",
        "contactNumber": "+1000",
        "password": "password1",
        "role": "HOST"
    }
    ```

    Example response:
    ```json
    {
        "statusCode": 200,
        "success": true,
        "message": "Account created successfully",
        "data": {"accessToken": "eyJ...", "refreshToken": "eyJ..."}
    }
    ```

    Raises:
        ValidationError: Missing fields or weak password (400)
        ConflictError: Email or contact number already registered (409)
    """
    tokens = get_auth_service().register(data, _provenance())
    return send_response("Account created successfully", tokens)


@auth_bp.post("/login")
@validate_request
def login(data: LoginRequest):
    """
    Authenticate with credentials, or with provider "google".

    Raises:
        ValidationError: Password missing, or Google sign-up data incomplete (400)
        UnauthorizedError: Invalid credentials (401)
    """
    tokens = get_auth_service().login(data, _provenance())
    return send_response("Login successful", tokens)


@auth_bp.post("/refresh-token")
@validate_request
def refresh_token(data: RefreshRequest):
    """
    Rotate the refresh token and return a fresh access token.

    The rotated refresh token replaces the stored session; the presented
    one stops working immediately.

    Raises:
        UnauthorizedError: "Invalid refresh token" for every failure (401)
    """
    tokens = get_auth_service().refresh(data.refresh_token, _provenance())
    return send_response(
        "Refresh token successful",
        AccessTokenResponse(access_token=tokens.access_token),
    )


@auth_bp.post("/logout")
@auth_required
def logout():
    """
    End the current user's session.

    Raises:
        UnauthorizedError: Missing or invalid access token (401)
        ResourceNotFound: No active session (404)
    """
    get_auth_service().logout(g.user_id)
    return send_response("Logout successful")


# ============================================================================
# User Endpoints
# ============================================================================


@users_bp.get("/me")
@auth_required
def get_me():
    """Return the signed-in user (never the password hash)."""
    user = get_auth_service().get_me(g.user_id)
    return send_response("User retrieved successfully", user)


@users_bp.post("/create-admin")
@localhost_only
@validate_request
def create_admin(data: AdminCreate):
    """
    Create an ADMIN account with its Admin profile.

    Raises:
        ForbiddenError: Request not from localhost (403)
        ValidationError: Missing fields or weak password (400)
        ConflictError: Email or contact number already registered (409)
    """
    user = get_auth_service().create_admin(data)
    return send_response("Admin created successfully", user, status_code=201)
