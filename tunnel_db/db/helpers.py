"""
Shared cursor helpers.

These keep one calling convention across sqlite3 and psycopg:

    - run()        execute on a fresh cursor, return the cursor
    - fetch_all()  list of rows
    - fetch_one()  single row or None
    - row_to_dict  sqlite3.Row / psycopg dict rows -> plain dict

Driver exceptions are not caught here.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence


# ----------------------------------------------------------------------
# Execution helpers
# ----------------------------------------------------------------------

def run(conn: Any, query: str, params: Optional[Sequence[Any]] = None):
    """
    Execute a single SQL statement and return the raw cursor.

    Parameters
    ----------
    conn:
        DB-API style connection (sqlite3, psycopg).
    query:
        SQL already rewritten for the connection's dialect.
    params:
        Positional bind arguments, passed through untouched.
    """
    cur = conn.cursor()
    cur.execute(query, tuple(params or ()))
    return cur


def fetch_all(conn: Any, query: str, params: Optional[Sequence[Any]] = None) -> List[Any]:
    cur = run(conn, query, params)
    try:
        return cur.fetchall()
    finally:
        cur.close()


def fetch_one(conn: Any, query: str, params: Optional[Sequence[Any]] = None) -> Any:
    cur = run(conn, query, params)
    try:
        return cur.fetchone()
    finally:
        cur.close()


# ----------------------------------------------------------------------
# Row mapping
# ----------------------------------------------------------------------

def row_to_dict(row: Any) -> dict:
    """
    Convert sqlite3.Row or a psycopg dict row to a plain Python dict.

    Tuple rows fall back to positional integer keys.
    """
    if row is None:
        return {}

    if hasattr(row, "keys"):
        return {k: row[k] for k in row.keys()}

    return dict(enumerate(row))


__all__ = [
    "run",
    "fetch_all",
    "fetch_one",
    "row_to_dict",
]
