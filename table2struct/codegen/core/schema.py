"""
Core schema representation for code generation.

Normalizes the column rows read from the database into immutable
table and field descriptions that generators work with.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from ...logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ColumnDescriptor:
    """Raw column attributes as reported by the schema source."""

    name: str
    raw_type: str  # e.g. "int(11) unsigned"
    nullable: bool = False
    is_primary_key: bool = False
    is_auto_increment: bool = False
    default: Optional[str] = None
    comment: str = ""

    @property
    def is_unsigned(self) -> bool:
        return "unsigned" in self.raw_type.lower().split()


@dataclass(frozen=True)
class FieldDescriptor:
    """A column with its identifier and Go type fully resolved."""

    name: str  # Go identifier
    column_name: str  # original column name, used in tags
    type: str
    raw_type: str
    is_unsigned: bool = False
    nullable: bool = False
    is_primary_key: bool = False
    is_auto_increment: bool = False
    default: Optional[str] = None
    comment: str = ""
    is_std_null_wrapper: bool = False
    is_ext_null_wrapper: bool = False


@dataclass(frozen=True)
class TableDescriptor:
    """One table, ready for the emitter."""

    name: str
    display_name: str
    struct_name: str
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    comment: str = ""
    has_time: bool = False
    imports: Tuple[str, ...] = field(default_factory=tuple)

    def get_field(self, column_name: str) -> Optional[FieldDescriptor]:
        """Get field by its column name."""
        for f in self.fields:
            if f.column_name == column_name:
                return f
        return None

    @property
    def primary_keys(self) -> Tuple[FieldDescriptor, ...]:
        return tuple(f for f in self.fields if f.is_primary_key)


def strip_prefix(table_name: str, prefix: str) -> str:
    """Drop ``prefix`` from ``table_name`` unless nothing would remain."""
    if prefix and table_name.startswith(prefix) and len(table_name) > len(prefix):
        return table_name[len(prefix) :]
    return table_name


def column_from_row(row: Dict[str, Any]) -> ColumnDescriptor:
    """
    Normalize a column row into a ColumnDescriptor.

    Accepts both ``information_schema.COLUMNS`` rows (COLUMN_NAME,
    COLUMN_TYPE, IS_NULLABLE, COLUMN_KEY, EXTRA, COLUMN_DEFAULT,
    COLUMN_COMMENT) and ``SHOW FULL COLUMNS``/``DESC`` rows (Field, Type,
    Null, Key, Extra, Default, Comment).
    """

    def pick(*keys: str) -> Any:
        for key in keys:
            if key in row:
                return row[key]
        return None

    name = pick("COLUMN_NAME", "column_name", "Field")
    raw_type = pick("COLUMN_TYPE", "column_type", "Type")
    if not name or not raw_type:
        raise ValueError(f"Column row lacks name or type: {row!r}")

    nullable = str(pick("IS_NULLABLE", "is_nullable", "Null") or "").upper()
    key = str(pick("COLUMN_KEY", "column_key", "Key") or "").upper()
    extra = str(pick("EXTRA", "extra", "Extra") or "").lower()
    default = pick("COLUMN_DEFAULT", "column_default", "Default")

    return ColumnDescriptor(
        name=str(name),
        raw_type=str(raw_type),
        nullable=nullable in ("YES", "NULL"),
        is_primary_key=key == "PRI",
        is_auto_increment="auto_increment" in extra,
        default=None if default is None else str(default),
        comment=str(pick("COLUMN_COMMENT", "column_comment", "Comment") or ""),
    )


def build_table(
    table_name: str,
    columns: Iterable[ColumnDescriptor],
    type_resolver,
    transliterator,
    comment: str = "",
    prefix: str = "",
) -> TableDescriptor:
    """
    Build the normalized description of one table.

    Args:
        table_name: Raw table name, also the mapping scope
        columns: Column rows in ordinal order
        type_resolver: Object exposing ``resolve_type``
        transliterator: Object exposing ``to_identifier``
        comment: Table comment
        prefix: Table name prefix dropped from the struct name

    Returns:
        TableDescriptor with every field resolved
    """
    display_name = strip_prefix(table_name, prefix)
    struct_name = transliterator.to_identifier(display_name, use_mapping=False)

    fields = []
    imports = set()
    has_time = False

    for column in columns:
        go_type = type_resolver.resolve_type(
            column.raw_type,
            column.is_unsigned,
            column.nullable,
            table_name,
            column.name,
        )
        identifier = transliterator.to_identifier(column.name, table_name)
        logger.debug(
            "%s.%s -> %s %s", table_name, column.name, identifier, go_type.name
        )

        fields.append(
            FieldDescriptor(
                name=identifier,
                column_name=column.name,
                type=go_type.name,
                raw_type=column.raw_type,
                is_unsigned=column.is_unsigned,
                nullable=column.nullable,
                is_primary_key=column.is_primary_key,
                is_auto_increment=column.is_auto_increment,
                default=column.default,
                comment=column.comment,
                is_std_null_wrapper=go_type.is_std_null_wrapper,
                is_ext_null_wrapper=go_type.is_ext_null_wrapper,
            )
        )
        imports.update(go_type.imports_needed)
        has_time = has_time or go_type.is_temporal

    return TableDescriptor(
        name=table_name,
        display_name=display_name,
        struct_name=struct_name,
        fields=tuple(fields),
        comment=comment or "",
        has_time=has_time,
        imports=tuple(sorted(imports)),
    )
