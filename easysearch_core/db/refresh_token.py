"""Refresh token record operations.

One row per user (UNIQUE user_id). Issuing a new refresh token overwrites
the previous row, so a user has at most one live session.
"""

import sqlite3
from datetime import datetime

from ..utils import isodatetime, uid


class RefreshTokenOperations:
    """Refresh token record operations, keyed by user ID."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def get_by_user_id(self, user_id: str) -> sqlite3.Row | None:
        return self._conn.execute(
            "SELECT * FROM refresh_tokens WHERE user_id = ?",
            (user_id,)
        ).fetchone()

    def upsert(
        self,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        user_agent: str = "unknown",
        ip: str = "unknown"
    ) -> None:
        """Create the user's record or overwrite it in a single statement.

        Concurrent upserts for the same user resolve as last writer wins.
        """
        now = isodatetime.now()
        self._conn.execute(
            """INSERT INTO refresh_tokens
               (id, user_id, token_hash, expires_at, user_agent, ip, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(user_id) DO UPDATE SET
                   token_hash = excluded.token_hash,
                   expires_at = excluded.expires_at,
                   user_agent = excluded.user_agent,
                   ip = excluded.ip,
                   updated_at = excluded.updated_at""",
            (uid.generate_uuid(), user_id, token_hash,
             isodatetime.to_timestamp(expires_at), user_agent, ip, now, now)
        )

    def delete(self, user_id: str) -> bool:
        """Delete the user's record.

        Returns:
            True if a row was deleted, False if none existed
        """
        cursor = self._conn.execute(
            "DELETE FROM refresh_tokens WHERE user_id = ?",
            (user_id,)
        )
        return cursor.rowcount > 0
