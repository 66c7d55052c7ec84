import sys
from collections import deque
from pathlib import Path

import pytest

# Ensure project root on sys.path
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from tunnel_db.db import Database, Dialect, SQLiteBackend  # noqa: E402


# ----------------------------------------------------------------------
# Recording driver used for the Postgres paths (no server required)
# ----------------------------------------------------------------------

class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.rowcount = -1
        self.lastrowid = None
        self.closed = False

    def execute(self, query, params=()):
        if self.conn.fail_with is not None:
            raise self.conn.fail_with
        self.conn.statements.append((query, tuple(params)))
        self.rowcount = self.conn.rowcount
        self.lastrowid = self.conn.lastrowid

    def fetchone(self):
        if not self.conn.rows:
            return None
        return self.conn.rows.popleft()

    def fetchall(self):
        rows = list(self.conn.rows)
        self.conn.rows.clear()
        return rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, autocommit=True):
        self.autocommit = autocommit
        self.statements = []
        self.rows = deque()
        self.rowcount = 1
        self.lastrowid = None
        self.fail_with = None
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def queue_rows(self, *rows):
        self.rows.extend(rows)

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeBackend:
    def __init__(self, dialect=Dialect.POSTGRES):
        self.dialect = dialect
        self.connections = []
        self.begun = []

    def connect(self, autocommit=True):
        conn = FakeConnection(autocommit=autocommit)
        self.connections.append(conn)
        return conn

    def begin(self, conn):
        self.begun.append(conn)


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------

@pytest.fixture()
def sqlite_path(tmp_path):
    return str(tmp_path / "tunnel_test.db")


@pytest.fixture()
def sqlite_db(sqlite_path):
    db = Database(SQLiteBackend(sqlite_path))
    db.exec(
        """
        CREATE TABLE user (
            id    INTEGER PRIMARY KEY AUTOINCREMENT,
            user  TEXT NOT NULL UNIQUE,
            flow  INTEGER NOT NULL DEFAULT 0
        )
        """
    )
    db.exec(
        """
        CREATE TABLE user_group_user (
            user_group_id  INTEGER NOT NULL,
            user_id        INTEGER NOT NULL,
            PRIMARY KEY (user_group_id, user_id)
        )
        """
    )
    yield db
    db.close()


@pytest.fixture()
def fake_backend():
    return FakeBackend(Dialect.POSTGRES)


@pytest.fixture()
def pg_db(fake_backend):
    db = Database(fake_backend)
    yield db
    db.close()


@pytest.fixture()
def pg_conn(pg_db, fake_backend):
    """The shared fake connection behind pg_db."""
    return fake_backend.connections[0]
