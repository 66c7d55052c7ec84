"""
Error taxonomy for tunnel_db.

Only failures that originate in this layer get their own type. Driver
errors (sqlite3.Error, psycopg.Error) are never wrapped and reach the
caller exactly as the driver raised them.
"""

from __future__ import annotations


class TunnelDBError(Exception):
    """Base class for errors raised by tunnel_db itself."""


class ConfigurationError(TunnelDBError, ValueError):
    """
    Unsupported dialect or missing connection parameter.

    Raised at construction time, before any connection is opened.
    """


class ScanError(TunnelDBError):
    """
    The RETURNING id row could not be scanned.

    Raised when the statement yields no row, the row has no ``id`` column,
    or the value is not an integer.
    """


class TransactionDoneError(TunnelDBError):
    """The transaction has already been committed or rolled back."""


class DatabaseClosedError(TunnelDBError):
    """The database handle was used after close()."""


__all__ = [
    "TunnelDBError",
    "ConfigurationError",
    "ScanError",
    "TransactionDoneError",
    "DatabaseClosedError",
]
