import pytest

from tunnel_db import (
    ConfigurationError,
    Dialect,
    TunnelDBConfig,
    load_config,
    open_from_config,
)
from tunnel_db.db import open_database


# ----------------------------------------------------------------------
# Dialect
# ----------------------------------------------------------------------

def test_dialect_string_forms():
    assert str(Dialect.SQLITE) == "sqlite"
    assert str(Dialect.POSTGRES) == "postgres"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("", Dialect.SQLITE),
        (None, Dialect.SQLITE),
        ("sqlite", Dialect.SQLITE),
        ("  SQLite ", Dialect.SQLITE),
        ("postgres", Dialect.POSTGRES),
        ("PostgreSQL", Dialect.POSTGRES),
        (Dialect.POSTGRES, Dialect.POSTGRES),
    ],
)
def test_dialect_parse(name, expected):
    assert Dialect.parse(name) is expected


@pytest.mark.parametrize("name", ["mysql", "pg", "sqlite3", 5, 0, b"sqlite", ["postgres"]])
def test_dialect_parse_rejects_unknown(name):
    with pytest.raises(ConfigurationError, match="unsupported DB_TYPE"):
        Dialect.parse(name)


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


# ----------------------------------------------------------------------
# Config
# ----------------------------------------------------------------------

def test_load_config_defaults(monkeypatch):
    for var in ("DB_TYPE", "DB_PATH", "DATABASE_URL", "TUNNEL_DB_LOGGING"):
        monkeypatch.delenv(var, raising=False)

    cfg = load_config()
    assert cfg == TunnelDBConfig()
    assert cfg.dialect is Dialect.SQLITE
    assert cfg.dsn == "tunnel.db"


def test_load_config_from_env(monkeypatch):
    monkeypatch.setenv("DB_TYPE", "postgresql")
    monkeypatch.setenv("DATABASE_URL", "postgresql://flux:secret@db:5432/flux")
    monkeypatch.setenv("TUNNEL_DB_LOGGING", "yes")

    cfg = load_config()
    assert cfg.dialect is Dialect.POSTGRES
    assert cfg.dsn == "postgresql://flux:secret@db:5432/flux"
    assert cfg.enable_logging is True


def test_postgres_without_url_is_configuration_error():
    cfg = TunnelDBConfig(db_type="postgres", database_url="  ")
    with pytest.raises(ConfigurationError, match="DATABASE_URL"):
        cfg.dsn


def test_open_from_config_sqlite(sqlite_path):
    db = open_from_config(TunnelDBConfig(db_type="sqlite", db_path=sqlite_path))
    try:
        assert db.dialect is Dialect.SQLITE
        db.ping()
    finally:
        db.close()


def test_open_from_config_rejects_unknown_dialect_before_connecting(monkeypatch):
    import tunnel_db.core as core

    def _never(*args, **kwargs):
        raise AssertionError("open_database must not be reached")

    monkeypatch.setattr(core, "open_database", _never)
    with pytest.raises(ConfigurationError):
        open_from_config(TunnelDBConfig(db_type="oracle"))


def test_open_database_rejects_unknown_dialect():
    with pytest.raises(ConfigurationError):
        open_database("mssql", "whatever")
