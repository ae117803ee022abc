from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import first_value, transaction
from .repository import KeyValueRepository


class MySQLKeyValueRepository(KeyValueRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        with transaction(self._conn_factory) as cur:
            cur.execute("SELECT v FROM kv_store WHERE k=%s", (key,))
            return first_value(cur, "v")

    def set(self, key: str, value: str) -> None:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO kv_store(k, v) VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE v=VALUES(v)
                """,
                (key, value),
            )
