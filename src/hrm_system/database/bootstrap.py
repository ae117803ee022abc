"""Create the store database and its table from ``schema.sql``."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# The schema file names a database for manual use; the configured one wins.
_DATABASE_DIRECTIVES = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def schema_statements(sql: str) -> list[str]:
    """Split a schema file into statements.

    Only suitable for DDL without string literals holding ';'.
    """
    sql = _LINE_COMMENT.sub("", _DATABASE_DIRECTIVES.sub("", sql))
    return [stmt.strip() for stmt in sql.split(";") if stmt.strip()]


def ensure_database_exists(conn_factory: DatabaseConnection, database: str) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, database: str, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory, database)
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %d schema statement(s) to %s", len(statements), database)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
