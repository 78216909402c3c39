from __future__ import annotations

import logging

from .connection import DatabaseConnection
from .mysql_base import db_cursor
from .mysql_store import SCHEMA_SQL, TABLE_NAME

logger = logging.getLogger(__name__)


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    with db_cursor(conn_factory, dictionary=False, with_database=False) as (_, cur):
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(conn_factory: DatabaseConnection) -> None:
    ensure_database_exists(conn_factory)
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute(SCHEMA_SQL)
    logger.info("Schema ready (table=%s)", TABLE_NAME)


def list_collections(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute(f"SELECT collection_key FROM {TABLE_NAME} ORDER BY collection_key")
        return [row[0] for row in cur.fetchall()]
