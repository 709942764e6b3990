"""
Tests for introspect.py, with a fake PyMySQL connection.
"""

import pymysql
import pytest

from table2struct.codegen.core.config import GeneratorConfig
from table2struct.introspect import SchemaReadError, SchemaReader


class FakeCursor:
    def __init__(self, connection):
        self.connection = connection
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params):
        self.connection.queries.append((" ".join(sql.split()), params))
        if self.connection.error:
            raise self.connection.error
        for marker, rows in self.connection.responses.items():
            if marker in sql:
                self._rows = rows
                return
        self._rows = []

    def fetchall(self):
        return self._rows


class FakeConnection:
    def __init__(self, responses, error=None):
        self.responses = responses
        self.error = error
        self.queries = []
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def close(self):
        self.closed = True


COLUMN_ROWS = [
    {
        "COLUMN_NAME": "id",
        "COLUMN_TYPE": "bigint(20) unsigned",
        "IS_NULLABLE": "NO",
        "COLUMN_KEY": "PRI",
        "EXTRA": "auto_increment",
        "COLUMN_DEFAULT": None,
        "COLUMN_COMMENT": "",
    },
    {
        "COLUMN_NAME": "email",
        "COLUMN_TYPE": "varchar(128)",
        "IS_NULLABLE": "YES",
        "COLUMN_KEY": "UNI",
        "EXTRA": "",
        "COLUMN_DEFAULT": None,
        "COLUMN_COMMENT": "login email",
    },
]


@pytest.fixture
def connection():
    return FakeConnection(
        {
            "TABLE_TYPE": [{"TABLE_NAME": "orders"}, {"TABLE_NAME": "users"}],
            "TABLE_COMMENT": [{"TABLE_COMMENT": "registered users"}],
            "ORDINAL_POSITION": COLUMN_ROWS,
        }
    )


@pytest.fixture
def reader(connection):
    captured = {}

    def connect(**kwargs):
        captured.update(kwargs)
        return connection

    reader = SchemaReader(GeneratorConfig(db_name="shop", db_port=3307), connect=connect)
    reader.captured = captured
    return reader


def test_connection_arguments(reader):
    with reader:
        pass

    assert reader.captured["database"] == "shop"
    assert reader.captured["port"] == 3307
    assert reader.captured["charset"] == "utf8mb4"
    assert reader.captured["cursorclass"] is pymysql.cursors.DictCursor


def test_list_tables(reader, connection):
    with reader:
        assert reader.list_tables() == ["orders", "users"]

    assert connection.queries[0][1] == ("shop",)
    assert connection.closed


def test_read_columns(reader, connection):
    with reader:
        columns = reader.read_columns("users")

    assert [c.name for c in columns] == ["id", "email"]
    assert columns[0].is_primary_key and columns[0].is_auto_increment
    assert columns[0].is_unsigned
    assert columns[1].nullable
    assert columns[1].comment == "login email"
    assert connection.queries[-1][1] == ("shop", "users")


def test_table_comment(reader):
    with reader:
        assert reader.table_comment("users") == "registered users"


def test_missing_table(reader, connection):
    connection.responses["ORDINAL_POSITION"] = []

    with reader, pytest.raises(SchemaReadError, match="ghost"):
        reader.read_columns("ghost")


def test_malformed_column_row(reader, connection):
    connection.responses["ORDINAL_POSITION"] = [{"COLUMN_NAME": "id", "COLUMN_TYPE": None}]

    with reader, pytest.raises(SchemaReadError, match="Malformed column of users"):
        reader.read_columns("users")


def test_query_errors_are_wrapped(reader, connection):
    connection.error = pymysql.err.ProgrammingError(1146, "Table doesn't exist")

    with reader, pytest.raises(SchemaReadError, match="Schema query failed"):
        reader.list_tables()


def test_connect_errors_are_wrapped():
    def connect(**kwargs):
        raise pymysql.err.OperationalError(2003, "Can't connect to MySQL server")

    reader = SchemaReader(GeneratorConfig(db_name="shop"), connect=connect)

    with pytest.raises(SchemaReadError, match="Failed to connect"):
        reader.connect()


def test_database_name_is_required():
    with pytest.raises(SchemaReadError, match="database name"):
        SchemaReader(GeneratorConfig())
