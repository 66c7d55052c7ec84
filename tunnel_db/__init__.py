"""
tunnel_db

Database access layer for the tunnel management backend.

Call sites write SQL once, in SQLite syntax, and run it unchanged against
SQLite or PostgreSQL. Submodules include:
    - db/      dialects, rewrite engine, execution handles, backends
    - config   environment-driven settings
    - core     startup entrypoints
    - errors   error taxonomy
"""

from .config import TunnelDBConfig, load_config
from .errors import (
    TunnelDBError,
    ConfigurationError,
    ScanError,
    TransactionDoneError,
    DatabaseClosedError,
)
from .db import (
    Dialect,
    Database,
    Transaction,
    ExecResult,
    rewrite_query,
    open_database,
    close_database,
)
from .core import open_from_config, open_from_env

__all__ = [
    "TunnelDBConfig",
    "load_config",
    "TunnelDBError",
    "ConfigurationError",
    "ScanError",
    "TransactionDoneError",
    "DatabaseClosedError",
    "Dialect",
    "Database",
    "Transaction",
    "ExecResult",
    "rewrite_query",
    "open_database",
    "close_database",
    "open_from_config",
    "open_from_env",
]
