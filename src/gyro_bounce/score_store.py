"""
score_store.py: Persistence layer for the best score of each difficulty.
"""

import logging
import sqlite3
from typing import Optional, Protocol

from .constants import DB_FILE
from .errors import StorageError

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    """Key/value store of integers. Both calls may raise StorageError."""

    def get(self, key: str) -> Optional[int]:
        ...

    def set(self, key: str, value: int) -> bool:
        ...


class SQLiteScoreStore:
    """Keeps each best score as a decimal string in a SQLite table."""

    def __init__(self, db_file: str = DB_FILE):
        try:
            # check_same_thread=False lets the client close it from any thread
            self.conn = sqlite3.connect(db_file, check_same_thread=False)
            self.cur = self.conn.cursor()
            self.setup()
        except sqlite3.Error as e:
            raise StorageError(f"cannot open score database {db_file!r}: {e}") from e

    def setup(self):
        """Creates the table if it doesn't exist."""
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS HighScores (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        self.conn.commit()

    def get(self, key: str) -> Optional[int]:
        try:
            self.cur.execute("SELECT value FROM HighScores WHERE key=?", (key,))
            row = self.cur.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"failed to read {key!r}: {e}") from e

        if row is None:
            return None
        try:
            return int(row[0])
        except (TypeError, ValueError) as e:
            raise StorageError(f"stored value for {key!r} is not an integer: {row[0]!r}") from e

    def set(self, key: str, value: int) -> bool:
        try:
            self.cur.execute(
                "INSERT OR REPLACE INTO HighScores (key, value) VALUES (?, ?)",
                (key, str(int(value))))
            self.conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"failed to write {key!r}: {e}") from e
        logger.debug("Stored %s = %d", key, value)
        return True

    def close(self):
        self.conn.close()
