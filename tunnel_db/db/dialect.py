"""
Supported database engines.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from ..errors import ConfigurationError


class Dialect(Enum):
    SQLITE = "sqlite"
    POSTGRES = "postgres"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: Union[str, "Dialect", None]) -> "Dialect":
        """
        Resolve a configured DB type to a Dialect.

        Accepts "" / "sqlite" and "postgres" / "postgresql" (any case,
        surrounding whitespace ignored).

        Raises
        ------
        ConfigurationError
            For any other value.
        """
        if isinstance(name, Dialect):
            return name
        if name is not None and not isinstance(name, str):
            raise ConfigurationError(f"unsupported DB_TYPE {name!r}")

        key = (name or "").strip().lower()
        if key in ("", "sqlite"):
            return cls.SQLITE
        if key in ("postgres", "postgresql"):
            return cls.POSTGRES

        raise ConfigurationError(f"unsupported DB_TYPE {name!r}")


__all__ = ["Dialect"]
