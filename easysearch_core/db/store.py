"""SQLite implementation of the CredentialStore contract.

Every public method opens its own atomic Core, so each call is one
transaction: it commits on success, rolls back on failure and never
leaves a user without its profile.
"""

import logging
import sqlite3
from datetime import datetime
from typing import Any

from ..auth.store import Provenance, RefreshTokenRecord, UserRecord
from ..exceptions import ConflictError, DatabaseError, ResourceNotFound
from ..schema.types import UserRole
from ..utils import isodatetime
from . import get_core, init_db
from .user import PROFILE_FIELDS

logger = logging.getLogger(__name__)


def _row_to_user(row: sqlite3.Row) -> UserRecord:
    return UserRecord(
        id=row["id"],
        email=row["email"],
        contact_number=row["contact_number"],
        password_hash=row["password_hash"],
        role=row["role"],
        status=row["status"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_refresh_token(row: sqlite3.Row) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        user_id=row["user_id"],
        token_hash=row["token_hash"],
        expires_at=isodatetime.to_datetime(row["expires_at"]),
        user_agent=row["user_agent"],
        ip=row["ip"],
    )


class SQLiteCredentialStore:
    """CredentialStore backed by the SQLite file at database_path."""

    def __init__(self, database_path: str, initialize: bool = True):
        """
        Args:
            database_path: SQLite file path
            initialize: Apply schema.sql when the database is fresh
        """
        self.database_path = database_path
        if initialize:
            init_db(database_path)

    def _core(self):
        return get_core(atomic=True, database_path=self.database_path)

    def find_user_by_email_or_contact(
        self, email: str | None = None, contact_number: str | None = None
    ) -> UserRecord | None:
        with self._core() as core:
            row = core.user.find_by_email_or_contact(email, contact_number)
        return _row_to_user(row) if row else None

    def find_user_by_id(self, user_id: str) -> UserRecord | None:
        with self._core() as core:
            row = core.user.get_by_id(user_id)
        return _row_to_user(row) if row else None

    def create_user_with_profile(
        self,
        user_data: dict[str, Any],
        profile_data: dict[str, Any],
        role: UserRole,
    ) -> UserRecord:
        """Create user + role profile atomically.

        Raises:
            ConflictError: If email or contact number is already registered.
                Covers the window between the service's existence check and
                this insert, where a concurrent registration may win.
            DatabaseError: For any other integrity failure
        """
        profile_fields = {
            key: value for key, value in profile_data.items()
            if key in PROFILE_FIELDS and value is not None
        }
        try:
            with self._core() as core:
                user_id = core.user.create(role=role, **user_data)
                core.user.create_profile(user_id, role, **profile_fields)
                row = core.user.get_by_id(user_id)
        except sqlite3.IntegrityError as e:
            message = str(e)
            if "users.email" in message or "users.contact_number" in message:
                logger.warning(f"Duplicate identity rejected by store: {message}")
                raise ConflictError(
                    "User with this email or phone already exists"
                ) from e
            raise DatabaseError("Failed to create user", {"reason": message}) from e

        return _row_to_user(row)

    def upsert_refresh_token(
        self,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        provenance: Provenance,
    ) -> None:
        with self._core() as core:
            core.refresh_token.upsert(
                user_id,
                token_hash,
                expires_at,
                user_agent=provenance.user_agent,
                ip=provenance.ip,
            )

    def find_refresh_token(self, user_id: str) -> RefreshTokenRecord | None:
        with self._core() as core:
            row = core.refresh_token.get_by_user_id(user_id)
        return _row_to_refresh_token(row) if row else None

    def delete_refresh_token(self, user_id: str) -> None:
        with self._core() as core:
            deleted = core.refresh_token.delete(user_id)
        if not deleted:
            raise ResourceNotFound(
                "No active session found",
                {"user_id": user_id}
            )
