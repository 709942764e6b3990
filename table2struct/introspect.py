"""Read table and column metadata from a MySQL server.

Only ``information_schema`` is queried; nothing is ever written.
"""

from __future__ import annotations

from typing import Any

import pymysql
import pymysql.cursors

from .codegen.core.config import GeneratorConfig
from .codegen.core.schema import ColumnDescriptor, column_from_row
from .logging_config import get_logger

logger = get_logger(__name__)


class SchemaReadError(Exception):
    """Raised when the schema cannot be read from the database."""

    pass


TABLES_QUERY = """
    SELECT TABLE_NAME
    FROM information_schema.TABLES
    WHERE TABLE_SCHEMA = %s AND TABLE_TYPE = 'BASE TABLE'
    ORDER BY TABLE_NAME
"""

TABLE_COMMENT_QUERY = """
    SELECT TABLE_COMMENT
    FROM information_schema.TABLES
    WHERE TABLE_SCHEMA = %s AND TABLE_NAME = %s
"""

COLUMNS_QUERY = """
    SELECT COLUMN_NAME, COLUMN_TYPE, IS_NULLABLE, COLUMN_KEY,
           EXTRA, COLUMN_DEFAULT, COLUMN_COMMENT
    FROM information_schema.COLUMNS
    WHERE TABLE_SCHEMA = %s AND TABLE_NAME = %s
    ORDER BY ORDINAL_POSITION
"""


class SchemaReader:
    """Schema source backed by a PyMySQL connection."""

    def __init__(self, config: GeneratorConfig, connect=pymysql.connect) -> None:
        """Prepare a reader; the connection is opened lazily.

        Args:
            config: Run configuration holding the connection parameters.
            connect: Connection factory, replaced in tests.
        """
        if not config.db_name:
            raise SchemaReadError("A database name is required")
        self.database = config.db_name
        self._connect = connect
        self._connection_args = {
            "host": config.db_host,
            "port": config.db_port,
            "user": config.db_user,
            "password": config.db_password,
            "database": config.db_name,
            "charset": config.db_charset,
            "cursorclass": pymysql.cursors.DictCursor,
        }
        self.connection = None

    def __enter__(self) -> "SchemaReader":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def connect(self) -> None:
        """Open the database connection."""
        if self.connection is not None:
            return
        host = self._connection_args["host"]
        port = self._connection_args["port"]
        try:
            self.connection = self._connect(**self._connection_args)
        except pymysql.MySQLError as e:
            logger.error("Connection to %s:%s/%s failed: %s", host, port, self.database, e)
            raise SchemaReadError(
                f"Failed to connect to {host}:{port}/{self.database}: {e}"
            ) from e
        logger.info("Connected to %s:%s/%s", host, port, self.database)

    def close(self) -> None:
        """Close the database connection if open."""
        if self.connection is not None:
            self.connection.close()
            self.connection = None
            logger.debug("Connection to %s closed", self.database)

    def _query(self, sql: str, params: tuple) -> list[dict[str, Any]]:
        if self.connection is None:
            self.connect()
        try:
            with self.connection.cursor() as cursor:
                cursor.execute(sql, params)
                return list(cursor.fetchall())
        except pymysql.MySQLError as e:
            raise SchemaReadError(f"Schema query failed: {e}") from e

    def list_tables(self) -> list[str]:
        """Names of every base table in the database, sorted."""
        rows = self._query(TABLES_QUERY, (self.database,))
        tables = [row["TABLE_NAME"] for row in rows]
        logger.info("Found %d tables in %s", len(tables), self.database)
        return tables

    def table_comment(self, table: str) -> str:
        """Comment of ``table``, empty when absent."""
        rows = self._query(TABLE_COMMENT_QUERY, (self.database, table))
        if not rows:
            raise SchemaReadError(f"Table {table!r} not found in {self.database}")
        return rows[0].get("TABLE_COMMENT") or ""

    def read_columns(self, table: str) -> list[ColumnDescriptor]:
        """Columns of ``table`` in ordinal order."""
        rows = self._query(COLUMNS_QUERY, (self.database, table))
        if not rows:
            raise SchemaReadError(f"Table {table!r} has no columns or does not exist")
        logger.debug("Read %d columns of %s", len(rows), table)
        try:
            return [column_from_row(row) for row in rows]
        except ValueError as e:
            raise SchemaReadError(f"Malformed column of {table}: {e}") from e
