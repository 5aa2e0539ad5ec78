"""
Key-value stores for learner progress.

The progression engine persists its state as string blobs under fixed keys.
Two implementations are provided:
- SqliteKeyValueStore: durable store in ~/.codemaster/progress.db
- InMemoryKeyValueStore: process-local store for tests and previews
"""

import os
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol


DEFAULT_PROGRESS_DIR = Path(os.environ.get("CODEMASTER_HOME", Path.home() / ".codemaster"))
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"

COMPLETION_STATUS_KEY = "lesson_completion_status"
POINTS_KEY = "points"


class KeyValueStore(Protocol):
    """String-keyed store of string values."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Dictionary-backed store. Contents are lost when the process exits."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class SqliteKeyValueStore:
    """
    Key-value store in a SQLite database.

    Progress is stored separately from course content so that:
    - Content can be updated without losing progress
    - Progress is learner-specific, content is shared
    """

    def __init__(self, db_path: Optional[Path] = None, profile_id: str = "default"):
        """
        Initialize the store.

        Args:
            db_path: Path to progress.db (default: ~/.codemaster/progress.db)
            profile_id: Learner profile identifier for multi-user support
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self.profile_id = profile_id
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS preferences (
                    profile_id TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (profile_id, key)
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: str) -> Optional[str]:
        """Get the value stored under key, or None."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT value FROM preferences
                   WHERE profile_id = ? AND key = ?""",
                (self.profile_id, key)
            )
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            conn.execute(
                """INSERT INTO preferences (profile_id, key, value, updated_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(profile_id, key) DO UPDATE SET
                     value = excluded.value,
                     updated_at = excluded.updated_at""",
                (self.profile_id, key, value, now)
            )
            conn.commit()
        finally:
            conn.close()
