from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "academic_ledger"

    @classmethod
    def from_dict(cls, values: Mapping[str, object]) -> "DBConfig":
        """Build from a settings ``DB_CONFIG`` dict; missing keys keep the defaults."""
        defaults = cls()
        return cls(
            host=str(values.get("host") or defaults.host),
            port=int(values.get("port") or defaults.port),
            user=str(values.get("user") or defaults.user),
            password=str(values.get("password") or ""),
            database=str(values.get("database") or defaults.database),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "charset": "utf8mb4",
        }
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Process-wide connection factory.

    Every ``connect()`` opens a fresh connection, so each repository call runs in
    its own transaction and concurrent writers are serialized by the unique keys.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return mysql.connector.connect(**self._config.connect_kwargs())
