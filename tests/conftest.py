"""Shared fixtures for table2struct tests."""

import pytest

from table2struct.codegen.core.config import GeneratorConfig
from table2struct.codegen.core.mapping import MappingStore
from table2struct.codegen.core.naming import IdentifierTransliterator
from table2struct.codegen.core.schema import ColumnDescriptor
from table2struct.codegen.languages.go.types import GoTypeConfig, GoTypeResolver


@pytest.fixture
def store():
    return MappingStore()


@pytest.fixture
def transliterator(store):
    return IdentifierTransliterator(store)


@pytest.fixture
def make_resolver(store):
    """Build a resolver sharing the ``store`` fixture."""

    def factory(**options):
        return GoTypeResolver(GoTypeConfig(**options), store)

    return factory


@pytest.fixture
def config():
    return GeneratorConfig(use_gofmt=False)


@pytest.fixture
def user_columns():
    return [
        ColumnDescriptor(
            name="id",
            raw_type="int(11) unsigned",
            is_primary_key=True,
            is_auto_increment=True,
            comment="primary key",
        ),
        ColumnDescriptor(name="user_name", raw_type="varchar(64)"),
        ColumnDescriptor(name="created_at", raw_type="datetime", nullable=True),
    ]


class FakeReader:
    """Stand-in for SchemaReader serving canned tables."""

    def __init__(self, tables, comments=None):
        self.tables = tables
        self.comments = comments or {}
        self.opened = False
        self.closed = False

    def __enter__(self):
        self.opened = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True

    def list_tables(self):
        return sorted(self.tables)

    def read_columns(self, table):
        return self.tables[table]

    def table_comment(self, table):
        return self.comments.get(table, "")


@pytest.fixture
def fake_reader(user_columns):
    return FakeReader(
        {
            "users": user_columns,
            "t_order_items": [
                ColumnDescriptor(name="order_id", raw_type="bigint(20)", is_primary_key=True),
                ColumnDescriptor(name="price", raw_type="decimal(10,2)"),
            ],
        },
        comments={"users": "registered users"},
    )
