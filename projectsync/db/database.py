"""Core database connection with nested ACID transaction support."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from projectsync.db.schema import SCHEMA_DDL


class Database:
    """
    SQLite database wrapper with explicit ACID transaction support.

    Implements the Unit-of-Work pattern: every mutation goes through
    ``transaction()``, which commits on success and rolls back on failure.
    Transactions nest: only the outermost one commits, inner ones are
    savepoints that roll back with their enclosing transaction.
    """

    def __init__(self, path: Optional[Path | str] = None):
        from projectsync.config import get_db_path
        if path is None:
            self.path: Path = get_db_path()
        elif isinstance(path, str):
            self.path = Path(path)
        else:
            self.path = path
        self._conn: Optional[sqlite3.Connection] = None
        self._depth = 0

    # -- connection lifecycle --------------------------------------------------

    def _ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._ensure_dir()
            # Autocommit mode: BEGIN/SAVEPOINT are issued by transaction().
            self._conn = sqlite3.connect(
                str(self.path), check_same_thread=False, isolation_level=None
            )
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None
            self._depth = 0

    def init(self) -> None:
        """Create all tables (idempotent)."""
        conn = self.connection()
        conn.executescript(SCHEMA_DDL)

    # -- transaction helpers ---------------------------------------------------

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """ACID transaction: commits on success, rolls back on exception."""
        conn = self.connection()
        savepoint = f"sp_{self._depth}" if self._depth else None
        conn.execute(f"SAVEPOINT {savepoint}" if savepoint else "BEGIN")
        self._depth += 1
        try:
            yield conn
        except BaseException:
            self._depth -= 1
            if savepoint:
                conn.execute(f"ROLLBACK TO SAVEPOINT {savepoint}")
                conn.execute(f"RELEASE SAVEPOINT {savepoint}")
            else:
                conn.execute("ROLLBACK")
            raise
        else:
            self._depth -= 1
            conn.execute(f"RELEASE SAVEPOINT {savepoint}" if savepoint else "COMMIT")

    # -- low-level query helpers -----------------------------------------------

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        row = self.connection().execute(sql, params).fetchone()
        return dict(row) if row else None

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        rows = self.connection().execute(sql, params).fetchall()
        return [dict(r) for r in rows]


# -- module singleton ----------------------------------------------------------

_default_db: Optional[Database] = None


def get_db(path: Optional[Path] = None) -> Database:
    """Return (and lazily initialise) the module-level Database singleton."""
    global _default_db
    if _default_db is None:
        _default_db = Database(path)
        _default_db.init()
    return _default_db


def reset_db() -> None:
    """Close and discard the singleton (useful in tests)."""
    global _default_db
    if _default_db is not None:
        _default_db.close()
        _default_db = None
