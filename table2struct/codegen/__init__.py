"""
table2struct Code Generation Module

Generates Go structs from MySQL table descriptions.
"""

from typing import Iterable, Optional

from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .core.generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .core.mapping import FormatError, MappingEntry, MappingStore, build_mapping_store
from .core.naming import IdentifierTransliterator, NamingError
from .core.schema import (
    ColumnDescriptor,
    FieldDescriptor,
    TableDescriptor,
    build_table,
    column_from_row,
)
from .languages.go import GoGenerator, GoTypeConfig, GoTypeResolver, UnknownTypeError


class Toolchain:
    """Everything one run needs, built once from a GeneratorConfig."""

    def __init__(
        self, config: GeneratorConfig, mapping_store: Optional[MappingStore] = None
    ):
        self.config = config
        if mapping_store is None:
            mapping_store = build_mapping_store(config)
        self.mapping_store = mapping_store
        self.transliterator = IdentifierTransliterator(self.mapping_store)
        self.type_resolver = GoTypeResolver(
            GoTypeConfig.from_generator_config(config), self.mapping_store
        )
        self.generator = GoGenerator(config)

    def build_table(
        self, table_name: str, columns: Iterable[ColumnDescriptor], comment: str = ""
    ) -> TableDescriptor:
        """Resolve names and types of one table."""
        return build_table(
            table_name,
            columns,
            self.type_resolver,
            self.transliterator,
            comment=comment,
            prefix=self.config.table_prefix,
        )

    def generate_table(
        self, table_name: str, columns: Iterable[ColumnDescriptor], comment: str = ""
    ) -> GenerationResult:
        """Build and render one table."""
        table = self.build_table(table_name, columns, comment)
        return generate_code(self.generator, table)


def quick_generate(table_name: str, columns, **options) -> str:
    """
    Quick code generation from column rows.

    Args:
        table_name: Raw table name
        columns: ColumnDescriptor objects or column row dicts
        **options: GeneratorConfig overrides

    Returns:
        Generated code string
    """
    options.setdefault("use_gofmt", False)
    toolchain = Toolchain(load_config(custom_config=options))
    descriptors = [
        column if isinstance(column, ColumnDescriptor) else column_from_row(column)
        for column in columns
    ]

    result = toolchain.generate_table(table_name, descriptors)
    if result.success:
        return result.code
    raise GeneratorError(result.error_message) from result.exception


__version__ = "0.1.0"

__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "generate_code",
    "ColumnDescriptor",
    "FieldDescriptor",
    "TableDescriptor",
    "build_table",
    "column_from_row",
    "MappingEntry",
    "MappingStore",
    "FormatError",
    "IdentifierTransliterator",
    "NamingError",
    "GoGenerator",
    "GoTypeConfig",
    "GoTypeResolver",
    "UnknownTypeError",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "Toolchain",
    "quick_generate",
]
