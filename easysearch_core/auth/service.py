"""Authentication service.

Orchestrates registration, credential and Google login, refresh token
rotation and logout. Holds no state between calls besides the store,
signers and hasher it is constructed with.

Session model: each user has at most one refresh token record. Every
token issuance overwrites it, so logging in on one device ends the
session on any other.
"""

import logging
from datetime import timedelta

from ..exceptions import ConflictError, ResourceNotFound, UnauthorizedError, ValidationError
from ..schema.types import UserRole
from ..utils import isodatetime
from .hashing import PasswordHasher
from .result import AuthFailure, Verdict
from .schemas import AdminCreate, LoginRequest, RegistrationRequest, TokenPair, UserResponse
from .store import CredentialStore, Provenance, UserRecord
from .token import TokenInvalid, TokenSigner

logger = logging.getLogger(__name__)

# Lifetime of the stored session record, independent of the refresh JWT's exp
REFRESH_SESSION_TTL = timedelta(days=7)

MIN_PASSWORD_LENGTH = 8

GOOGLE_PROVIDER = "google"


def to_user_response(user: UserRecord) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        contact_number=user.contact_number,
        role=user.role,
        status=user.status,
        created_at=user.created_at,
    )


class AuthService:
    """Business rules for accounts, tokens and sessions."""

    def __init__(
        self,
        store: CredentialStore,
        access_signer: TokenSigner,
        refresh_signer: TokenSigner,
        hasher: PasswordHasher,
    ):
        self.store = store
        self.access_signer = access_signer
        self.refresh_signer = refresh_signer
        self.hasher = hasher

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require(value: str | None, field: str, message: str) -> str:
        if not value:
            raise ValidationError(message, {"field": field})
        return value

    @staticmethod
    def _validate_password(password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                {"field": "password"}
            )

    def _issue_tokens(
        self, user_id: str, role: UserRole, provenance: Provenance | None = None
    ) -> TokenPair:
        """Sign a token pair and replace the user's stored session with it."""
        access_token = self.access_signer.sign(user_id, role)
        refresh_token = self.refresh_signer.sign(user_id, role)

        self.store.upsert_refresh_token(
            user_id,
            self.hasher.hash_token(refresh_token),
            isodatetime.now_datetime() + REFRESH_SESSION_TTL,
            provenance or Provenance(),
        )
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def _ensure_new_identity(self, email: str, contact_number: str) -> None:
        if self.store.find_user_by_email_or_contact(email, contact_number):
            logger.warning(f"Registration rejected, identity exists: {email}")
            raise ConflictError("User with this email or phone already exists")

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self, payload: RegistrationRequest, provenance: Provenance | None = None
    ) -> TokenPair:
        """Create a CUSTOMER or HOST account and sign it in.

        Raises:
            ValidationError: Missing email/contact number/password, or
                password shorter than 8 characters
            ConflictError: Email or contact number already registered
        """
        email = self._require(payload.email, "email", "Email is required")
        contact_number = self._require(
            payload.contact_number, "contactNumber", "Contact number is required"
        )
        password = self._require(payload.password, "password", "Password is required")
        self._validate_password(password)

        self._ensure_new_identity(email, contact_number)

        role = UserRole.HOST if payload.role == "HOST" else UserRole.CUSTOMER
        user = self.store.create_user_with_profile(
            {
                "email": email,
                "contact_number": contact_number,
                "password_hash": self.hasher.hash(password),
            },
            {
                "name": payload.name,
                "email": email,
                "contact_number": contact_number,
                "profile_photo": payload.profile_photo,
            },
            role,
        )
        logger.info(f"Registered {role.value} account {user.id}")
        return self._issue_tokens(user.id, user.role, provenance)

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    def _google_signup(
        self, payload: LoginRequest, provenance: Provenance | None
    ) -> TokenPair:
        """Create a password-less CUSTOMER from a trusted Google assertion."""
        if not payload.email or not payload.contact_number:
            raise ValidationError(
                "Email and contact number are required for Google sign-up",
                {"fields": ["email", "contactNumber"]}
            )

        user = self.store.create_user_with_profile(
            {"email": payload.email, "contact_number": payload.contact_number},
            {
                "name": payload.name,
                "email": payload.email,
                "contact_number": payload.contact_number,
                "profile_photo": payload.profile_photo,
            },
            UserRole.CUSTOMER,
        )
        logger.info(f"Google sign-up created account {user.id}")
        return self._issue_tokens(user.id, user.role, provenance)

    def login(
        self, payload: LoginRequest, provenance: Provenance | None = None
    ) -> TokenPair:
        """Sign in with credentials, or with a Google assertion.

        Google: existing users get tokens without a password check; unknown
        users are signed up. Credentials: the user must exist and the
        password must match.

        Raises:
            ValidationError: Password missing on the request or on the
                stored account; Google sign-up without email/contact number
            UnauthorizedError: Unknown user or wrong password
        """
        existing = self.store.find_user_by_email_or_contact(
            payload.email, payload.contact_number
        )

        if payload.provider == GOOGLE_PROVIDER:
            if existing is None:
                return self._google_signup(payload, provenance)
            logger.info(f"Google login for {existing.id}")
            return self._issue_tokens(existing.id, existing.role, provenance)

        if existing is None:
            logger.warning("Failed login: no matching account")
            raise UnauthorizedError("Invalid credentials")

        # Federated-only accounts have no password; reported like a missing one
        if not payload.password or not existing.password_hash:
            raise ValidationError("Password is required", {"field": "password"})

        if not self.hasher.verify(payload.password, existing.password_hash):
            logger.warning(f"Failed login: wrong password for {existing.id}")
            raise UnauthorizedError("Invalid credentials")

        logger.info(f"Successful login: {existing.id}")
        return self._issue_tokens(existing.id, existing.role, provenance)

    # ------------------------------------------------------------------
    # Refresh rotation
    # ------------------------------------------------------------------

    def check_refresh_token(self, token: str) -> Verdict:
        """Run every refresh check and report the first failure."""
        try:
            payload = self.refresh_signer.verify(token)
        except TokenInvalid as e:
            return Verdict.reject(e.reason)

        record = self.store.find_refresh_token(payload.sub)
        if record is None:
            return Verdict.reject(AuthFailure.SESSION_NOT_FOUND)

        if not self.hasher.verify_token(token, record.token_hash):
            return Verdict.reject(AuthFailure.SESSION_SUPERSEDED)

        if record.expires_at < isodatetime.now_datetime():
            return Verdict.reject(AuthFailure.SESSION_EXPIRED)

        return Verdict.accept(payload)

    def refresh(self, old_refresh_token: str, provenance: Provenance | None = None) -> TokenPair:
        """Exchange a refresh token for a new pair, invalidating the old one.

        Raises:
            UnauthorizedError: For any failure, always "Invalid refresh token"
        """
        try:
            verdict = self.check_refresh_token(old_refresh_token)
            if verdict.ok:
                pair = self._issue_tokens(
                    verdict.payload.sub, verdict.payload.role, provenance
                )
                logger.info(f"Rotated refresh token for {verdict.payload.sub}")
                return pair
        except Exception:
            logger.exception("Refresh token rotation failed unexpectedly")
            raise UnauthorizedError("Invalid refresh token") from None

        logger.warning(f"Refresh rejected: {verdict.failure.value}")
        raise UnauthorizedError("Invalid refresh token")

    # ------------------------------------------------------------------
    # Logout
    # ------------------------------------------------------------------

    def logout(self, user_id: str) -> dict[str, str]:
        """Delete the user's session.

        Raises:
            ResourceNotFound: If the user has no active session
        """
        self.store.delete_refresh_token(user_id)
        logger.info(f"Logged out {user_id}")
        return {"message": "Logged out successfully"}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_admin(self, payload: AdminCreate) -> UserResponse:
        """Create an ADMIN account with its Admin profile.

        Raises:
            ValidationError: Missing fields or short password
            ConflictError: Email or contact number already registered
        """
        email = self._require(payload.email, "email", "Email is required for Admin creation")
        contact_number = self._require(
            payload.contact_number, "contactNumber", "Contact number is required"
        )
        password = self._require(payload.password, "password", "Password is required")
        self._validate_password(password)

        self._ensure_new_identity(email, contact_number)

        user = self.store.create_user_with_profile(
            {
                "email": email,
                "contact_number": contact_number,
                "password_hash": self.hasher.hash(password),
            },
            {"name": payload.name, "email": email, "contact_number": contact_number},
            UserRole.ADMIN,
        )
        logger.info(f"Admin account created: {user.id}")
        return to_user_response(user)

    def get_me(self, user_id: str) -> UserResponse:
        """Public view of the signed-in user.

        Raises:
            ResourceNotFound: If the user no longer exists
        """
        user = self.store.find_user_by_id(user_id)
        if user is None:
            raise ResourceNotFound("User not found", {"user_id": user_id})
        return to_user_response(user)
