"""
tunnel_db.db

Dialect-aware SQL execution layer.

This package provides:

- The dialect enumeration:
      * Dialect

- The rewrite engine (canonical SQLite syntax -> engine syntax):
      * rewrite_query
      * quote_user_identifier
      * rewrite_insert_or_ignore
      * number_placeholders

- Generated-key retrieval:
      * execute_returning_id

- Execution handles:
      * Database
      * Transaction
      * ExecResult
      * open_database / close_database / create_backend

- Concrete driver backends:
      * SQLiteBackend
      * PostgresBackend

- Backend contracts:
      * DBBackend
      * BackendLike
      * ensure_backend
"""

from .dialect import Dialect
from .rewrite import (
    rewrite_query,
    quote_user_identifier,
    rewrite_insert_or_ignore,
    number_placeholders,
)
from .returning import execute_returning_id
from .backend_base import DBBackend, BackendLike, ensure_backend
from .sqlite_backend import SQLiteBackend
from .postgres_backend import PostgresBackend
from .connection import (
    Database,
    Transaction,
    ExecResult,
    create_backend,
    open_database,
    close_database,
)

__all__ = [
    # Dialect
    "Dialect",

    # Rewrite engine
    "rewrite_query",
    "quote_user_identifier",
    "rewrite_insert_or_ignore",
    "number_placeholders",

    # Returning id
    "execute_returning_id",

    # Handles
    "Database",
    "Transaction",
    "ExecResult",
    "create_backend",
    "open_database",
    "close_database",

    # Backends
    "SQLiteBackend",
    "PostgresBackend",
    "DBBackend",
    "BackendLike",
    "ensure_backend",
]
