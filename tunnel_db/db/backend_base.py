"""
Backend base interfaces for tunnel_db.

A backend knows how to open raw driver connections for one engine. It
does not execute application SQL itself; that is the job of
tunnel_db.db.connection.Database, which rewrites every statement for the
backend's dialect first.

Backends must expose:

    backend.dialect                   -> Dialect
    backend.connect(autocommit=True)  -> raw DB-API connection
    backend.begin(raw_conn)           -> start an explicit transaction

This file provides:
- DBBackend: abstract base class
- BackendLike: structural protocol
- ensure_backend: runtime validator
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from .dialect import Dialect


# ---------------------------------------------------------------------------
# Abstract Base Backend
# ---------------------------------------------------------------------------

class DBBackend(ABC):
    """
    Abstract base class for a tunnel_db backend.

    Concrete subclasses pick their own constructor signature
    (SQLiteBackend(db_path), PostgresBackend(dsn)).
    """

    @property
    @abstractmethod
    def dialect(self) -> Dialect:
        raise NotImplementedError

    @abstractmethod
    def connect(self, autocommit: bool = True) -> Any:
        """
        Open a new raw connection.

        autocommit=True is used for the shared connection of a Database;
        transactions get a dedicated connection with autocommit=False.
        Driver connection errors propagate unchanged.
        """
        raise NotImplementedError

    def begin(self, conn: Any) -> None:
        """
        Start an explicit transaction on ``conn``.

        Default: no-op, for drivers that open a transaction implicitly on
        the first statement of a non-autocommit connection.
        """
        return None


# ---------------------------------------------------------------------------
# Structural Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class BackendLike(Protocol):
    """
    Structural protocol for objects usable as a tunnel_db backend.

    Lets tests and alternative drivers plug in without subclassing.
    """

    dialect: Dialect

    def connect(self, autocommit: bool = True) -> Any:
        ...

    def begin(self, conn: Any) -> None:
        ...


# ---------------------------------------------------------------------------
# Runtime Guard
# ---------------------------------------------------------------------------

def ensure_backend(backend: Any) -> BackendLike:
    """
    Validate that an object behaves like a tunnel_db backend.

    Raises:
        TypeError if required attributes are missing or the dialect is
        not a Dialect member.
    """
    if not isinstance(backend, BackendLike):
        missing = [
            name
            for name in ("dialect", "connect", "begin")
            if not hasattr(backend, name)
        ]
        if missing:
            raise TypeError(
                f"Invalid tunnel_db backend {backend!r}: missing attributes {missing}"
            )

    if not isinstance(backend.dialect, Dialect):
        raise TypeError(
            f"Invalid tunnel_db backend {backend!r}: dialect must be a Dialect, "
            f"got {backend.dialect!r}"
        )

    return backend  # type: ignore[return-value]


__all__ = [
    "DBBackend",
    "BackendLike",
    "ensure_backend",
]
