"""
SQLite-backed token store.

Persists the token mapping in a table with UNIQUE constraints on both the
token and the value, so injectivity holds even across processes sharing the
same database file.
"""

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Optional

from ..core.exceptions import ConfigurationError
from .store import TokenStore

logger = logging.getLogger(__name__)


class SQLiteTokenStore(TokenStore):
    """
    Token store persisted in SQLite.

    Configuration:
        database_url: "sqlite:///path/to/tokens.db" or "sqlite:///:memory:"
        table_name: Table holding the mapping (default: "pii_tokens")

    Examples:
        >>> store = SQLiteTokenStore("sqlite:///:memory:")
        >>> store.put_if_absent("TOK_ab", "alice@example.com")
        'TOK_ab'
    """

    def __init__(self, database_url: str, table_name: str = "pii_tokens"):
        if not database_url.startswith("sqlite://"):
            raise ConfigurationError(
                "database_url must start with sqlite://",
                config_section="token_store",
            )
        if not table_name.isidentifier():
            raise ConfigurationError(
                f"Invalid table name: {table_name!r}", config_section="token_store"
            )

        self.database_url = database_url
        self.table_name = table_name
        self._lock = threading.RLock()
        self._connection = self._create_connection()
        self._create_schema()

    @property
    def store_type(self) -> str:
        return "sqlite"

    def _create_connection(self) -> sqlite3.Connection:
        db_path = self.database_url[len("sqlite://") :]

        # Handle memory databases (remove leading slash if present)
        if db_path in (":memory:", "/:memory:"):
            return sqlite3.connect(":memory:", check_same_thread=False)

        path = Path(db_path).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(path), check_same_thread=False)
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA synchronous = NORMAL")
        return conn

    def _create_schema(self) -> None:
        with self._lock:
            self._connection.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.table_name} (
                    token TEXT PRIMARY KEY,
                    value TEXT NOT NULL UNIQUE,
                    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                )
            """)
            self._connection.commit()
        logger.debug(f"Token table {self.table_name} ready")

    def get_by_value(self, value: str) -> Optional[str]:
        with self._lock:
            row = self._connection.execute(
                f"SELECT token FROM {self.table_name} WHERE value = ?", (value,)
            ).fetchone()
        return row[0] if row else None

    def get_by_token(self, token: str) -> Optional[str]:
        with self._lock:
            row = self._connection.execute(
                f"SELECT value FROM {self.table_name} WHERE token = ?", (token,)
            ).fetchone()
        return row[0] if row else None

    def put_if_absent(self, token: str, value: str) -> Optional[str]:
        with self._lock:
            self._connection.execute(
                f"INSERT OR IGNORE INTO {self.table_name} (token, value) VALUES (?, ?)",
                (token, value),
            )
            self._connection.commit()
            row = self._connection.execute(
                f"SELECT token FROM {self.table_name} WHERE value = ?", (value,)
            ).fetchone()

        # No row for the value means the insert was ignored on a token clash
        return row[0] if row else None

    def delete(self, token: str) -> bool:
        with self._lock:
            cursor = self._connection.execute(
                f"DELETE FROM {self.table_name} WHERE token = ?", (token,)
            )
            self._connection.commit()
        return cursor.rowcount > 0

    def clear(self) -> None:
        with self._lock:
            self._connection.execute(f"DELETE FROM {self.table_name}")
            self._connection.commit()

    def close(self) -> None:
        with self._lock:
            self._connection.close()

    def __len__(self) -> int:
        with self._lock:
            row = self._connection.execute(
                f"SELECT COUNT(*) FROM {self.table_name}"
            ).fetchone()
        return int(row[0])
