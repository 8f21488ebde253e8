"""SQLite key/value persistence for DragonWatch.

Stores small pieces of state that must survive a process restart, such as
the last ending reached and the set of endings collected so far.

Storage location: ``data/dragonwatch.db`` unless configured otherwise.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Generator

from dragonwatch.core.exceptions import PersistenceError
from dragonwatch.core.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class KeyValueRecord:
    """One stored entry.

    Attributes:
        key: Entry key.
        value: Entry value, always stored as text.
        updated_at: When the entry was last written.
    """

    key: str
    value: str
    updated_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> KeyValueRecord:
        """Create from database row."""
        return cls(
            key=row[0],
            value=row[1],
            updated_at=datetime.fromisoformat(row[2]),
        )


# =============================================================================
# Database Class
# =============================================================================


class Database:
    """SQLite-backed key/value store.

    Every operation opens its own connection, commits on success and rolls
    back on failure. SQLite errors surface as PersistenceError.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize database.

        Args:
            db_path: Path to database file. If None, uses the configured path.
        """
        if db_path is None:
            self.db_path = self._get_default_path()
        else:
            self.db_path = Path(db_path)

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

        logger.info("Database initialized", db_path=str(self.db_path))

    @staticmethod
    def _get_default_path() -> Path:
        from dragonwatch.core.config import get_settings

        return get_settings().storage.database_path

    @contextmanager
    def _get_connection(
        self, key: str | None = None
    ) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup.

        Args:
            key: Store key the operation touches, reported on failure.
        """
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise PersistenceError(
                f"Cannot open database: {exc}",
                key=key,
                details={"db_path": str(self.db_path)},
            ) from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise PersistenceError(
                f"Database operation failed: {exc}",
                key=key,
                details={"db_path": str(self.db_path)},
            ) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute(
                "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )

    # =========================================================================
    # Key/Value Operations
    # =========================================================================

    def get_record(self, key: str) -> KeyValueRecord | None:
        """Get a stored entry with its metadata.

        Args:
            key: Entry key.

        Returns:
            The record, or None if the key is not stored.
        """
        with self._get_connection(key) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT key, value, updated_at FROM kv_store WHERE key = ?",
                (key,),
            )
            row = cursor.fetchone()
            return KeyValueRecord.from_row(row) if row else None

    def get_value(self, key: str, default: str | None = None) -> str | None:
        """Get a stored value.

        Args:
            key: Entry key.
            default: Value returned when the key is not stored.

        Returns:
            The stored text or ``default``.
        """
        record = self.get_record(key)
        return record.value if record else default

    def set_value(self, key: str, value: Any) -> None:
        """Store a value, overwriting any previous one.

        Args:
            key: Entry key.
            value: Value to store; converted with ``str()``.
        """
        self.set_values({key: value})

    def set_values(self, values: Mapping[str, Any]) -> None:
        """Store several values in one transaction.

        Args:
            values: Mapping of keys to values; values converted with ``str()``.
        """
        now = datetime.now().isoformat()
        with self._get_connection(", ".join(sorted(values))) as conn:
            cursor = conn.cursor()
            cursor.executemany(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                [(key, str(value), now) for key, value in values.items()],
            )

        logger.debug("Values stored", keys=sorted(values))

    def delete_value(self, key: str) -> bool:
        """Delete a stored value.

        Args:
            key: Entry key.

        Returns:
            True if an entry was deleted.
        """
        with self._get_connection(key) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            return cursor.rowcount > 0

    def get_keys(self) -> list[str]:
        """Get every stored key, sorted."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT key FROM kv_store ORDER BY key")
            return [row[0] for row in cursor.fetchall()]


# =============================================================================
# Singleton Instance
# =============================================================================


_database_instance: Database | None = None


def get_database() -> Database:
    """Get the global database instance.

    Returns:
        Database singleton instance.
    """
    global _database_instance

    if _database_instance is None:
        _database_instance = Database()

    return _database_instance


def reset_database() -> None:
    """Forget the global database instance so the next call reopens it."""
    global _database_instance
    _database_instance = None


__all__ = [
    "Database",
    "KeyValueRecord",
    "get_database",
    "reset_database",
]
