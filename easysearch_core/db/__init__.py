"""Database module for Easy Search Core.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to the
user and refresh token operations.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- atomic=True: Core is a context manager that commits on clean exit,
  rolls back on any exception and always closes the connection
- Each table group gets an encapsulated class with related operations

COORDINATION PATTERN:
Multi-statement writes that must be observed all-or-nothing (user plus
profile creation) run inside a single atomic Core:

    with get_core(atomic=True) as core:
        user_id = core.user.create(email=..., role=UserRole.HOST)
        core.user.create_profile(user_id, UserRole.HOST, name=...)
        # Both rows commit together on exit, or neither does

ID GENERATION POLICY:
All row IDs are auto-generated UUIDs inside the operations classes.
Callers never pass IDs in.
"""

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import settings

if TYPE_CHECKING:
    from .refresh_token import RefreshTokenOperations
    from .user import UserOperations


class Core:
    """
    Database Core with user and refresh token operations.

    Maintains its own connection and transaction state.
    Provides access to operations through properties.

    Connection Lifecycle:
    - atomic=True: Connection commits/rolls back and closes on __exit__
    - atomic=False: Caller commits and closes (used by tests and tooling)
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None
        self._refresh_token_ops = None

    @property
    def user(self) -> "UserOperations":
        """User and profile operations.

        Lazy-loaded to avoid circular import issues.
        """
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    @property
    def refresh_token(self) -> "RefreshTokenOperations":
        """Refresh token record operations."""
        if self._refresh_token_ops is None:
            from .refresh_token import RefreshTokenOperations
            self._refresh_token_ops = RefreshTokenOperations(self._conn)
        return self._refresh_token_ops

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self.close()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


def _create_connection(database_path: str | None = None) -> sqlite3.Connection:
    """Create a fresh database connection.

    Args:
        database_path: SQLite file path (defaults to settings.database_path)

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.
    """
    db_path = Path(database_path or settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(atomic: bool = False, database_path: str | None = None) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                Use for writes that need to commit together.
        database_path: Optional SQLite path overriding settings.database_path

    Examples:
        >>> with get_core(atomic=True) as core:
        ...     user_id = core.user.create(email="a@x.com", ...)
        ...     core.user.create_profile(user_id, UserRole.CUSTOMER)
    """
    conn = _create_connection(database_path)
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


def init_db(database_path: str | None = None) -> None:
    """Initialize database by running schema.sql if not already initialized."""
    conn = _create_connection(database_path)
    try:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        conn.executescript(SCHEMA_PATH.read_text())
        conn.commit()
    finally:
        conn.close()
