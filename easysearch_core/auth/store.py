"""Credential store contract consumed by the auth core.

The auth service never touches SQL. It talks to a CredentialStore, which
owns durability of users, profiles and refresh token records. The SQLite
implementation lives in easysearch_core.db.store; tests and alternative
backends only need to satisfy this Protocol.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from pydantic import BaseModel

from ..schema.types import UserRole, UserStatus


class UserRecord(BaseModel):
    """User row as seen by the auth core (includes the password hash)."""

    id: str
    email: str | None = None
    contact_number: str | None = None
    password_hash: str | None = None
    role: UserRole
    status: UserStatus = UserStatus.ACTIVE
    created_at: str
    updated_at: str


class RefreshTokenRecord(BaseModel):
    """The single live session of a user."""

    user_id: str
    token_hash: str
    expires_at: datetime
    user_agent: str = "unknown"
    ip: str = "unknown"


@dataclass(frozen=True)
class Provenance:
    """Best-effort origin of a session, recorded with the refresh token."""

    user_agent: str = "unknown"
    ip: str = "unknown"


class CredentialStore(Protocol):
    """Persistence operations required by AuthService and AccessGuard."""

    def find_user_by_email_or_contact(
        self, email: str | None = None, contact_number: str | None = None
    ) -> UserRecord | None:
        """Return the first user matching either identifier, or None.

        Returns None when both identifiers are missing.
        """
        ...

    def create_user_with_profile(
        self,
        user_data: dict[str, Any],
        profile_data: dict[str, Any],
        role: UserRole,
    ) -> UserRecord:
        """Create a user and its role profile in one transaction.

        Raises:
            ConflictError: If email or contact number is already taken
        """
        ...

    def find_user_by_id(self, user_id: str) -> UserRecord | None:
        ...

    def upsert_refresh_token(
        self,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        provenance: Provenance,
    ) -> None:
        """Create or overwrite the refresh token record for a user."""
        ...

    def find_refresh_token(self, user_id: str) -> RefreshTokenRecord | None:
        ...

    def delete_refresh_token(self, user_id: str) -> None:
        """Delete the record for a user.

        Raises:
            ResourceNotFound: If the user has no refresh token record
        """
        ...
