from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def transaction(conn_factory: DatabaseConnection) -> Iterator[Any]:
    """Yield a dictionary cursor; commit on success, roll back and re-raise otherwise."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=True)
    try:
        yield cur
        conn.commit()
    except Exception:
        logger.warning("Rolling back store transaction")
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def first_value(cur, column: str) -> Optional[Any]:
    row = cur.fetchone()
    return row[column] if row else None
