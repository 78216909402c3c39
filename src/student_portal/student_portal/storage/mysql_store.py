from __future__ import annotations

from typing import Callable, Optional

import mysql.connector

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetch_payload
from .store import RecordStore, SerializedRecordStore

TABLE_NAME = "record_collections"

SCHEMA_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    collection_key VARCHAR(64) NOT NULL PRIMARY KEY,
    payload LONGTEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
"""


class MySQLRecordStore(SerializedRecordStore):
    """Stores each collection as one row of the ``record_collections`` table."""

    backend_errors = (mysql.connector.Error,)

    def __init__(self, conn_factory: DatabaseConnection, *, seeder: Optional[Callable[[RecordStore], None]] = None):
        super().__init__(seeder=seeder)
        self._conn_factory = conn_factory

    def _read(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT payload FROM {TABLE_NAME} WHERE collection_key=%s", (key,))
            return fetch_payload(cur)

    def _write(self, key: str, payload: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {TABLE_NAME}(collection_key, payload)
                VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (key, payload),
            )

    def _delete(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {TABLE_NAME} WHERE collection_key=%s", (key,))
