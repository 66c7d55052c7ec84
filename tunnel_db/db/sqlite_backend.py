"""
SQLite backend for tunnel_db.

Used for:
    - single-node deployments (the default DB_TYPE)
    - local development
    - tests

The canonical SQL surface is SQLite's own, so statements reach sqlite3
untouched.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from .backend_base import DBBackend
from .dialect import Dialect
from ..errors import ConfigurationError


class SQLiteBackend(DBBackend):
    """
    Minimal SQLite backend.

    Parameters
    ----------
    db_path : str
        Path to the SQLite database file. ":memory:" works for the shared
        connection only: every connection sees its own private database,
        so transaction connections are refused.
    """

    def __init__(self, db_path: str):
        self.path = db_path if db_path == ":memory:" else str(Path(db_path))

    @property
    def dialect(self) -> Dialect:
        return Dialect.SQLITE

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------

    def connect(self, autocommit: bool = True) -> sqlite3.Connection:
        """
        Open a sqlite3 connection with dict-like rows and foreign keys on.

        isolation_level=None turns off the module's implicit BEGIN, so
        transactions only start through begin().

        Raises ConfigurationError for a transaction connection
        (autocommit=False) on ":memory:".
        """
        if not autocommit and self.path == ":memory:":
            raise ConfigurationError(
                "transactions need a file-backed SQLite database, not ':memory:'"
            )

        conn = sqlite3.connect(
            self.path,
            check_same_thread=False,
            isolation_level=None,
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def begin(self, conn: sqlite3.Connection) -> None:
        conn.execute("BEGIN")

    def __repr__(self) -> str:
        return f"SQLiteBackend({self.path!r})"


__all__ = ["SQLiteBackend"]
