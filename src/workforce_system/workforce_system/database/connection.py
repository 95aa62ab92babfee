from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector
from mysql.connector import errors as mysql_errors
from mysql.connector import pooling

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5

    @classmethod
    def from_mapping(cls, db_config: Mapping[str, Any]) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "workforce_db")),
            pool_size=int(db_config.get("pool_size", 5)),
        )


class DatabaseConnection:
    """Connection factory shared by all MySQL repositories.

    Each repository call borrows one connection for a single transaction and
    hands it back when the ``db_cursor`` block ends.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_lock = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        if self._config.pool_size <= 0:
            return mysql.connector.connect(**self._connect_args())

        try:
            return self._get_pool().get_connection()
        except mysql_errors.PoolError:
            # pool exhausted: serve this call with a connection of its own
            logger.warning("Connection pool exhausted, opening a direct connection")
            return mysql.connector.connect(**self._connect_args())

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._pool_lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=f"workforce_{self._config.database}",
                    pool_size=self._config.pool_size,
                    **self._connect_args(),
                )
            return self._pool

    def _connect_args(self) -> dict:
        return {
            "host": self._config.host,
            "port": int(self._config.port),
            "user": self._config.user,
            "password": self._config.password,
            "database": self._config.database,
            "autocommit": False,
        }
