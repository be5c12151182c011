from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    """MySQL connection settings (the DB_CONFIG dict of a settings module)."""

    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "ravisabha_db"
    # Gujarati name columns need the 4-byte charset.
    charset: str = "utf8mb4"
    collation: str = "utf8mb4_unicode_ci"
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(db_config.get("host", defaults.host)),
            port=int(db_config.get("port", defaults.port)),
            user=str(db_config.get("user", defaults.user)),
            password=str(db_config.get("password", defaults.password)),
            database=str(db_config.get("database", defaults.database)),
            charset=str(db_config.get("charset", defaults.charset)),
            collation=str(db_config.get("collation", defaults.collation)),
            connect_timeout=int(db_config.get("connect_timeout", defaults.connect_timeout)),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Shared factory for short-lived MySQL connections (one per repository call)."""

    _shared: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._shared is None or cls._shared.config != config:
            cls._shared = cls(config)
        return cls._shared

    def connect(self, *, with_database: bool = True):
        cfg = self._config
        options = {
            "host": cfg.host,
            "port": cfg.port,
            "user": cfg.user,
            "password": cfg.password,
            "charset": cfg.charset,
            "collation": cfg.collation,
            "connection_timeout": cfg.connect_timeout,
            "use_pure": True,
        }
        if with_database:
            options["database"] = cfg.database
        return mysql.connector.connect(**options)
