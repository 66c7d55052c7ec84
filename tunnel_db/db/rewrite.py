"""
Canonical SQL -> engine SQL rewriting.

Call sites write every statement once, in the SQLite surface syntax:

    - ``?`` positional placeholders
    - ``INSERT OR IGNORE INTO <table> ...``
    - the bare identifier ``user``

For SQLite that text runs as-is. For Postgres three passes are applied,
in this order:

    1. quote_user_identifier     user       -> "user"
    2. rewrite_insert_or_ignore  INSERT OR IGNORE INTO ... -> INSERT INTO ...
                                 ON CONFLICT DO NOTHING
    3. number_placeholders       ?, ?, ...  -> $1, $2, ...

The passes only track string-literal boundaries; they do not parse SQL.
Input with unbalanced quotes treats the rest of the string as a literal.
"""

from __future__ import annotations

import re
import string

from .dialect import Dialect


_IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")

_INSERT_OR_IGNORE = re.compile(r"INSERT OR IGNORE INTO", re.IGNORECASE | re.ASCII)

# Trimmed before appending a statement suffix.
TRAILING_CHARS = "; \t\r\n"


def rewrite_query(dialect: Dialect, query: str) -> str:
    """
    Rewrite a canonical query for ``dialect``.

    SQLite is the identity transform.
    """
    if dialect is not Dialect.POSTGRES:
        return query

    query = quote_user_identifier(query)
    query = rewrite_insert_or_ignore(query)
    query = number_placeholders(query)
    return query


def quote_user_identifier(query: str) -> str:
    """
    Quote every bare ``user`` token outside string literals.

    Tokens are maximal runs of ``[A-Za-z0-9_]``, so ``username`` and
    ``user_id`` are left alone.
    """
    out = []
    n = len(query)
    in_single = False
    in_double = False
    i = 0

    while i < n:
        ch = query[i]

        if ch == "'" and not in_double:
            if in_single and i + 1 < n and query[i + 1] == "'":
                out.append("''")
                i += 2
                continue
            in_single = not in_single
            out.append(ch)
            i += 1
            continue

        if ch == '"' and not in_single:
            if in_double and i + 1 < n and query[i + 1] == '"':
                out.append('""')
                i += 2
                continue
            in_double = not in_double
            out.append(ch)
            i += 1
            continue

        if in_single or in_double:
            out.append(ch)
            i += 1
            continue

        if ch in _IDENT_CHARS:
            j = i + 1
            while j < n and query[j] in _IDENT_CHARS:
                j += 1
            token = query[i:j]
            out.append('"user"' if token.lower() == "user" else token)
            i = j
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def rewrite_insert_or_ignore(query: str) -> str:
    """
    Translate the first ``INSERT OR IGNORE INTO`` to Postgres syntax.

    Only one occurrence is rewritten; a canonical query holds at most one
    insert statement.
    """
    m = _INSERT_OR_IGNORE.search(query)
    if m is None:
        return query

    result = query[: m.start()] + "INSERT INTO" + query[m.end():]
    return result.rstrip(TRAILING_CHARS) + " ON CONFLICT DO NOTHING"


def number_placeholders(query: str) -> str:
    """
    Replace each ``?`` outside single-quoted literals with ``$1``, ``$2``, ...

    Numbering follows textual order, which is also the order of the
    caller's argument tuple.
    """
    out = []
    n = len(query)
    counter = 0
    in_string = False
    i = 0

    while i < n:
        ch = query[i]

        if ch == "'":
            if in_string and i + 1 < n and query[i + 1] == "'":
                out.append("''")
                i += 2
                continue
            in_string = not in_string
            out.append(ch)
        elif ch == "?" and not in_string:
            counter += 1
            out.append(f"${counter}")
        else:
            out.append(ch)

        i += 1

    return "".join(out)


__all__ = [
    "rewrite_query",
    "quote_user_identifier",
    "rewrite_insert_or_ignore",
    "number_placeholders",
    "TRAILING_CHARS",
]
