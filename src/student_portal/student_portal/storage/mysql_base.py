from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, with_database: bool = True) -> Iterator[tuple[Any, Any]]:
    """Open a connection for one unit of work; commit on success, roll back on error."""
    conn = conn_factory.connect(with_database=with_database)
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        logger.debug("Rolling back MySQL transaction", exc_info=True)
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetch_payload(cur) -> Optional[str]:
    row = cur.fetchone()
    if not row:
        return None
    return row["payload"] if isinstance(row, dict) else row[0]
