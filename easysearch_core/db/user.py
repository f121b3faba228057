"""User and profile operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- NO direct import needed when using Core API

Profiles live in one table per role (customers, hosts, admins). A profile
must always be created in the same atomic Core as its user.
"""

import sqlite3
from typing import Any

from ..schema.types import PROFILE_TABLES, UserRole, UserStatus
from ..utils import isodatetime, uid

# Columns callers may set on a profile row
PROFILE_FIELDS = ("name", "email", "contact_number", "profile_photo")


class UserOperations:
    """User operations.

    Provides lookup by id or identifier, user creation and role profile
    creation.
    """

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def get_by_id(self, user_id: str) -> sqlite3.Row | None:
        return self._conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()

    def find_by_email_or_contact(
        self,
        email: str | None = None,
        contact_number: str | None = None
    ) -> sqlite3.Row | None:
        """Find the first user whose email OR contact number matches.

        Missing identifiers are left out of the condition; with neither
        given, no lookup happens and None is returned.
        """
        conditions = []
        params = []
        if email:
            conditions.append("email = ?")
            params.append(email)
        if contact_number:
            conditions.append("contact_number = ?")
            params.append(contact_number)

        if not conditions:
            return None

        return self._conn.execute(
            f"SELECT * FROM users WHERE {' OR '.join(conditions)} "
            "ORDER BY created_at LIMIT 1",
            params
        ).fetchone()

    def create(
        self,
        role: UserRole,
        email: str | None = None,
        contact_number: str | None = None,
        password_hash: str | None = None,
        status: UserStatus = UserStatus.ACTIVE
    ) -> str:
        """Insert a user row with an auto-generated UUID.

        Returns:
            The new user ID

        Raises:
            sqlite3.IntegrityError: If email or contact number already exists
        """
        user_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO users
               (id, email, contact_number, password_hash, role, status, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (user_id, email, contact_number, password_hash,
             UserRole(role).value, UserStatus(status).value, now, now)
        )
        return user_id

    def create_profile(self, user_id: str, role: UserRole, **fields: Any) -> str:
        """Insert the role-specific profile row for a user.

        Args:
            user_id: Owning user ID
            role: Selects the profile table (customers / hosts / admins)
            **fields: Any of name, email, contact_number, profile_photo

        Returns:
            The new profile ID

        Raises:
            ValueError: If an unknown profile field is passed
        """
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")

        table = PROFILE_TABLES[UserRole(role)]
        profile_id = uid.generate_uuid()
        now = isodatetime.now()
        columns = ["id", "user_id", *fields.keys(), "created_at", "updated_at"]
        values = [profile_id, user_id, *fields.values(), now, now]

        self._conn.execute(
            f"INSERT INTO {table} ({', '.join(columns)}) "
            f"VALUES ({', '.join('?' for _ in columns)})",
            values
        )
        return profile_id

