"""
Go-specific type system for code generation.

Maps MySQL column types to Go types, with optional nullable wrappers,
unsigned integers and per-column overrides from the mapping store.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from ....logging_config import get_logger
from ...core.generator import GeneratorError
from ...core.mapping import MappingStore

logger = get_logger(__name__)


class UnknownTypeError(GeneratorError):
    """Raised when a SQL type keyword has no Go counterpart."""

    pass


class NullWrapper(Enum):
    """Wrapper family used for nullable columns."""

    NONE = "none"
    SQL = "sql"  # database/sql Null* types
    NULL = "null"  # gopkg.in/guregu/null.v4


SQL_IMPORT = '"database/sql"'
NULL_IMPORT = '"gopkg.in/guregu/null.v4"'
TIME_IMPORT = '"time"'
JSON_IMPORT = '"encoding/json"'

# package qualifier -> import, for qualified override types
PACKAGE_IMPORTS = {
    "sql": SQL_IMPORT,
    "null": NULL_IMPORT,
    "time": TIME_IMPORT,
    "json": JSON_IMPORT,
}

TIME_TYPE = "time.Time"

INTEGER_TYPES = frozenset({"int", "int8", "int16", "int32", "int64"})

# bare SQL keyword -> (go type, go type in wide-integer mode)
SQL_TYPE_MAP: Dict[str, Tuple[str, str]] = {
    "tinyint": ("int8", "int64"),
    "smallint": ("int", "int64"),
    "mediumint": ("int", "int64"),
    "integer": ("int", "int64"),
    "int": ("int", "int64"),
    "bigint": ("int64", "int64"),
    "float": ("float64", "float64"),
    "double": ("float64", "float64"),
    "decimal": ("float64", "float64"),
    "numeric": ("float64", "float64"),
    "bool": ("bool", "bool"),
    "boolean": ("bool", "bool"),
    "char": ("string", "string"),
    "varchar": ("string", "string"),
    "tinytext": ("string", "string"),
    "text": ("string", "string"),
    "mediumtext": ("string", "string"),
    "longtext": ("string", "string"),
    "date": (TIME_TYPE, TIME_TYPE),
    "datetime": (TIME_TYPE, TIME_TYPE),
    "time": (TIME_TYPE, TIME_TYPE),
    "timestamp": (TIME_TYPE, TIME_TYPE),
}

# scalar family -> wrapper type per family
STD_WRAPPERS = {
    "int": "sql.NullInt64",
    "float": "sql.NullFloat64",
    "bool": "sql.NullBool",
    "string": "sql.NullString",
    "time": "sql.NullTime",
}

EXT_WRAPPERS = {
    "int": "null.Int",
    "float": "null.Float",
    "bool": "null.Bool",
    "string": "null.String",
    "time": "null.Time",
}

# lowercase spelling -> canonical spelling, for override normalization
STD_WRAPPER_SPELLINGS = {name.lower(): name for name in STD_WRAPPERS.values()}
STD_WRAPPER_SPELLINGS.update(
    {
        "sql.nullint32": "sql.NullInt32",
        "sql.nullint16": "sql.NullInt16",
        "sql.nullbyte": "sql.NullByte",
    }
)
EXT_WRAPPER_SPELLINGS = {name.lower(): name for name in EXT_WRAPPERS.values()}

_LENGTH_SUFFIX = re.compile(r"\(.*?\)")


@dataclass(frozen=True)
class GoType:
    """Resolved Go type of one column plus the metadata the emitter needs."""

    name: str
    is_std_null_wrapper: bool = False
    is_ext_null_wrapper: bool = False
    imports_needed: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_temporal(self) -> bool:
        return self.name.lstrip("*") == TIME_TYPE


@dataclass(frozen=True)
class GoTypeConfig:
    """Type mapping switches, fixed for a whole run."""

    use_int64: bool = False
    use_unsigned: bool = False
    null_wrapper: NullWrapper = NullWrapper.NONE
    strict: bool = True

    @classmethod
    def from_generator_config(cls, config) -> "GoTypeConfig":
        return cls(
            use_int64=config.use_int64,
            use_unsigned=config.use_unsigned,
            null_wrapper=NullWrapper(config.null_wrapper),
            strict=config.strict_types,
        )


def normalize_sql_type(raw_sql_type: str) -> Tuple[str, bool]:
    """
    Reduce a column type to its bare keyword.

    ``"INT(10) UNSIGNED ZEROFILL"`` becomes ``("int", True)``.
    """
    base = ""
    unsigned = False
    for attr in _LENGTH_SUFFIX.sub("", raw_sql_type.lower()).split():
        if attr == "unsigned":
            unsigned = True
        elif attr == "zerofill":
            continue
        elif not base:
            base = attr
    return base, unsigned


def _family(go_type: str) -> Optional[str]:
    if go_type in INTEGER_TYPES:
        return "int"
    if go_type.startswith("float"):
        return "float"
    if go_type == "bool":
        return "bool"
    if go_type == "string":
        return "string"
    if go_type == TIME_TYPE:
        return "time"
    return None


def package_qualifier(name: str) -> Optional[str]:
    """
    Package part of a qualified type name.

    ``"*json.RawMessage"`` and ``"[]time.Time"`` give ``"json"`` and
    ``"time"``; unqualified names give None.
    """
    bare = name.lstrip("*[]")
    package, dot, _ = bare.partition(".")
    return package if dot and package else None


def _imports_for(name: str, std_wrapper: bool, ext_wrapper: bool) -> FrozenSet[str]:
    if std_wrapper:
        return frozenset({SQL_IMPORT})
    if ext_wrapper:
        return frozenset({NULL_IMPORT})
    package = package_qualifier(name)
    if package in PACKAGE_IMPORTS:
        return frozenset({PACKAGE_IMPORTS[package]})
    return frozenset()


class GoTypeResolver:
    """
    Maps SQL column types to Go types.

    Pure over its inputs, the configuration and the mapping store.
    """

    def __init__(
        self,
        config: Optional[GoTypeConfig] = None,
        mapping_store: Optional[MappingStore] = None,
    ):
        self.config = config or GoTypeConfig()
        self.mapping_store = (
            mapping_store if mapping_store is not None else MappingStore()
        )

    def resolve_type(
        self,
        raw_sql_type: str,
        is_unsigned: bool,
        is_nullable: bool,
        table: str,
        raw_name: str,
    ) -> GoType:
        """
        Resolve the Go type of a column.

        Args:
            raw_sql_type: Declared type, e.g. ``"varchar(255)"``
            is_unsigned: Column is unsigned
            is_nullable: Column accepts NULL
            table: Owning table, the mapping scope
            raw_name: Column name

        Returns:
            GoType with wrapper flags and required imports

        Raises:
            UnknownTypeError: If the SQL type is unknown and strict mode is on
        """
        keyword, declared_unsigned = normalize_sql_type(raw_sql_type)
        is_unsigned = is_unsigned or declared_unsigned

        name = self._lookup_base(keyword, raw_sql_type, table, raw_name)
        std_wrapper = ext_wrapper = False

        if is_nullable and name and self.config.null_wrapper != NullWrapper.NONE:
            family = _family(name)
            if family is not None:
                if self.config.null_wrapper == NullWrapper.SQL:
                    name, std_wrapper = STD_WRAPPERS[family], True
                else:
                    name, ext_wrapper = EXT_WRAPPERS[family], True

        if (
            self.config.use_unsigned
            and is_unsigned
            and name in INTEGER_TYPES
            and not self.config.use_int64
        ):
            name = "u" + name

        entry = self.mapping_store.lookup(table, raw_name)
        if entry is not None and entry.target_type:
            name, std_wrapper, ext_wrapper = self._apply_override(entry.target_type)
            logger.debug("Type of %s.%s overridden to %s", table, raw_name, name)

        return GoType(
            name=name,
            is_std_null_wrapper=std_wrapper,
            is_ext_null_wrapper=ext_wrapper,
            imports_needed=_imports_for(name, std_wrapper, ext_wrapper),
        )

    def _lookup_base(
        self, keyword: str, raw_sql_type: str, table: str, raw_name: str
    ) -> str:
        if keyword in SQL_TYPE_MAP:
            narrow, wide = SQL_TYPE_MAP[keyword]
            return wide if self.config.use_int64 else narrow

        # an explicit override makes an unknown keyword harmless
        entry = self.mapping_store.lookup(table, raw_name)
        if entry is not None and entry.target_type:
            return ""

        if self.config.strict:
            raise UnknownTypeError(
                f"Unsupported SQL type {raw_sql_type!r} for column {table}.{raw_name}"
            )
        logger.warning(
            "Unsupported SQL type %r for column %s.%s, leaving it untyped",
            raw_sql_type,
            table,
            raw_name,
        )
        return ""

    @staticmethod
    def _apply_override(target_type: str) -> Tuple[str, bool, bool]:
        lowered = target_type.lower()
        if lowered in STD_WRAPPER_SPELLINGS:
            return STD_WRAPPER_SPELLINGS[lowered], True, False
        if lowered in EXT_WRAPPER_SPELLINGS:
            return EXT_WRAPPER_SPELLINGS[lowered], False, True
        return target_type, False, False
