"""
Generated primary key retrieval.

    SQLite   : run the insert, read cursor.lastrowid
    Postgres : run the insert with `` RETURNING id`` appended, scan ``id``

Both strategies take one round trip.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Sequence

from . import helpers
from .dialect import Dialect
from .rewrite import TRAILING_CHARS, rewrite_query
from ..errors import ScanError


def _sqlite_returning_id(conn: Any, query: str, args: Sequence[Any]) -> int:
    cur = helpers.run(conn, rewrite_query(Dialect.SQLITE, query), args)
    try:
        return cur.lastrowid
    finally:
        cur.close()


def _postgres_returning_id(conn: Any, query: str, args: Sequence[Any]) -> int:
    q = rewrite_query(Dialect.POSTGRES, query).rstrip(TRAILING_CHARS) + " RETURNING id"

    row = helpers.fetch_one(conn, q, args)
    if row is None:
        raise ScanError("RETURNING id produced no rows")

    record = helpers.row_to_dict(row)
    if "id" not in record:
        raise ScanError(f"RETURNING id row has no 'id' column: {sorted(record)!r}")

    value = record["id"]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ScanError(f"RETURNING id produced a non-integer value: {value!r}")
    return value


_STRATEGIES: Dict[Dialect, Callable[[Any, str, Sequence[Any]], int]] = {
    Dialect.SQLITE: _sqlite_returning_id,
    Dialect.POSTGRES: _postgres_returning_id,
}


def execute_returning_id(conn: Any, dialect: Dialect, query: str, args: Sequence[Any] = ()) -> int:
    """
    Execute a canonical INSERT on ``conn`` and return the generated id.

    Raises
    ------
    ScanError
        Postgres only: no row, no ``id`` column, or a non-integer id.
    """
    return _STRATEGIES[dialect](conn, query, args)


__all__ = ["execute_returning_id"]
