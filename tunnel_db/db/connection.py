"""
Dialect-aware execution handles.

This file defines:
- Database: shared connection handle, safe for concurrent callers
- Transaction: single-owner transaction handle opened by Database.begin()
- open_database / close_database: construction and idempotent teardown

Both handles expose the same execution API:

    exec(query, *args)               -> ExecResult
    query(query, *args)              -> list of dict rows
    query_row(query, *args)          -> dict row or None
    exec_returning_id(query, *args)  -> generated primary key

Queries are written in the canonical dialect and rewritten for the
handle's engine on every call. Arguments are passed to the driver in the
order given.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Union

from . import helpers
from .backend_base import BackendLike, ensure_backend
from .dialect import Dialect
from .postgres_backend import PostgresBackend
from .returning import execute_returning_id
from .rewrite import rewrite_query
from .sqlite_backend import SQLiteBackend
from ..errors import DatabaseClosedError, TransactionDoneError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Outcome of a statement that returns no rows."""

    rows_affected: int


# ----------------------------------------------------------------------
# Shared execution API
# ----------------------------------------------------------------------

class _Executor:
    """
    Execution methods shared by Database and Transaction.

    Subclasses supply the raw connection through _acquire(); the rewrite
    step is identical for both.
    """

    dialect: Dialect

    def _acquire(self):
        """Context manager yielding the raw connection to run on."""
        raise NotImplementedError

    def rewrite(self, query: str) -> str:
        return rewrite_query(self.dialect, query)

    def exec(self, query: str, *args: Any) -> ExecResult:
        """
        Execute a statement that returns no rows.
        """
        q = self.rewrite(query)
        with self._acquire() as conn:
            cur = helpers.run(conn, q, args)
            try:
                return ExecResult(rows_affected=cur.rowcount)
            finally:
                cur.close()

    def query(self, query: str, *args: Any) -> List[Dict[str, Any]]:
        """
        Execute a SELECT and return every row as a plain dict.
        """
        q = self.rewrite(query)
        with self._acquire() as conn:
            rows = helpers.fetch_all(conn, q, args)
        return [helpers.row_to_dict(r) for r in rows]

    def query_row(self, query: str, *args: Any) -> Optional[Dict[str, Any]]:
        """
        Execute a SELECT and return the first row as a dict, or None.
        """
        q = self.rewrite(query)
        with self._acquire() as conn:
            row = helpers.fetch_one(conn, q, args)
        return helpers.row_to_dict(row) if row is not None else None

    def exec_returning_id(self, query: str, *args: Any) -> int:
        """
        Execute an INSERT and return the auto-generated id.

        The only supported way to obtain a generated key: callers must not
        assume lastrowid or RETURNING.
        """
        with self._acquire() as conn:
            return execute_returning_id(conn, self.dialect, query, args)


# ----------------------------------------------------------------------
# Transaction handle
# ----------------------------------------------------------------------

class Transaction(_Executor):
    """
    Dialect-aware transaction on a dedicated driver connection.

    Exactly one of commit() / rollback() ends it; the connection is closed
    afterwards. Not safe for concurrent use.

    Usage:

        with db.begin() as tx:
            tx.exec("UPDATE user SET flow = ? WHERE id = ?", flow, user_id)
    """

    def __init__(self, raw_conn: Any, dialect: Dialect):
        self.raw = raw_conn
        self.dialect = dialect
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    @contextmanager
    def _acquire(self) -> Iterator[Any]:
        if self._done:
            raise TransactionDoneError("transaction has already been committed or rolled back")
        yield self.raw

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    def commit(self) -> None:
        with self._acquire() as conn:
            self._done = True
            try:
                conn.commit()
            finally:
                conn.close()

    def rollback(self) -> None:
        with self._acquire() as conn:
            self._done = True
            try:
                conn.rollback()
            finally:
                conn.close()

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> "Transaction":
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._done:
            return False

        if exc_type is not None:
            self.rollback()
        else:
            self.commit()

        # Propagate exceptions
        return False


# ----------------------------------------------------------------------
# Connection handle
# ----------------------------------------------------------------------

class Database(_Executor):
    """
    Dialect-aware wrapper around a shared driver connection.

    The shared connection runs in autocommit mode. Calls against it are
    serialised with a lock; transactions get their own connection from
    the backend.

    Safe to close() multiple times.
    """

    def __init__(self, backend: BackendLike):
        self.backend = ensure_backend(backend)
        self.dialect = self.backend.dialect
        self._lock = threading.Lock()
        self.raw: Optional[Any] = self.backend.connect(autocommit=True)
        logger.info("Opened %s database via %r", self.dialect, self.backend)

    @property
    def closed(self) -> bool:
        return self.raw is None

    @contextmanager
    def _acquire(self) -> Iterator[Any]:
        with self._lock:
            if self.raw is None:
                raise DatabaseClosedError(f"{self.dialect} database is closed")
            yield self.raw

    def ping(self) -> None:
        """
        Round-trip a trivial statement to verify the session is alive.
        """
        with self._acquire() as conn:
            helpers.fetch_one(conn, "SELECT 1")

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def begin(self) -> Transaction:
        """
        Open a transaction on a dedicated connection.

        The returned Transaction carries this handle's dialect.
        """
        with self._lock:
            if self.raw is None:
                raise DatabaseClosedError(f"{self.dialect} database is closed")

        raw = self.backend.connect(autocommit=False)
        try:
            self.backend.begin(raw)
        except BaseException:
            raw.close()
            raise
        logger.debug("Began %s transaction", self.dialect)
        return Transaction(raw, self.dialect)

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """
        Context manager form of begin():

            with db.transaction() as tx:
                ...

        Commits on success, rolls back and re-raises on error.
        """
        with self.begin() as tx:
            yield tx

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """
        Close the shared connection. Idempotent.
        """
        with self._lock:
            raw, self.raw = self.raw, None
        if raw is None:
            return
        raw.close()
        logger.info("Closed %s database", self.dialect)

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Database dialect={self.dialect} {state}>"


# ----------------------------------------------------------------------
# Construction / teardown
# ----------------------------------------------------------------------

def create_backend(dialect: Union[str, Dialect], dsn: str) -> BackendLike:
    """
    Build the backend for ``dialect``.

    ``dsn`` is a file path for SQLite and a connection URL for Postgres.

    Raises ConfigurationError for an unsupported dialect.
    """
    d = Dialect.parse(dialect)
    if d is Dialect.POSTGRES:
        return PostgresBackend(dsn)
    return SQLiteBackend(dsn)


def open_database(dialect: Union[str, Dialect], dsn: str) -> Database:
    """
    Open a Database for ``dialect``.

    Raises ConfigurationError for an unsupported dialect; driver
    connection errors propagate unchanged.
    """
    return Database(create_backend(dialect, dsn))


def close_database(db: Optional[Database]) -> None:
    """
    Close ``db``; None or an already-closed handle is a no-op.
    """
    if db is None:
        return
    db.close()


__all__ = [
    "ExecResult",
    "Database",
    "Transaction",
    "create_backend",
    "open_database",
    "close_database",
]
