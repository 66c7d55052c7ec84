"""
Startup entrypoints for tunnel_db.

The application opens one Database at startup from configuration and
closes it at shutdown:

    db = open_from_env()
    try:
        ...
    finally:
        close_database(db)
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import TunnelDBConfig, load_config
from .db import Database, open_database

logger = logging.getLogger(__name__)


def open_from_config(config: Optional[TunnelDBConfig] = None) -> Database:
    """
    Open a Database from a TunnelDBConfig (or the environment if omitted).

    The dialect and DSN are validated before any connection is attempted,
    so an unsupported DB_TYPE never reaches a driver.
    """
    cfg = config or load_config()

    if cfg.enable_logging:
        logging.basicConfig(level=logging.INFO)

    dialect = cfg.dialect
    dsn = cfg.dsn
    logger.info("Opening %s database (DB_TYPE=%r)", dialect, cfg.db_type)
    return open_database(dialect, dsn)


def open_from_env() -> Database:
    """Open a Database using environment variables."""
    return open_from_config(load_config())


__all__ = [
    "open_from_config",
    "open_from_env",
]
