"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .schema import (
    ColumnDescriptor,
    FieldDescriptor,
    TableDescriptor,
    build_table,
    column_from_row,
)
from .templates import TemplateEngine, TemplateError, create_template_engine
from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .mapping import (
    GLOBAL_SCOPE,
    FormatError,
    MappingEntry,
    MappingStore,
    build_mapping_store,
)
from .naming import COMMON_INITIALISMS, IdentifierTransliterator, NamingError

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema system
    "ColumnDescriptor",
    "FieldDescriptor",
    "TableDescriptor",
    "build_table",
    "column_from_row",
    # Mapping rules
    "GLOBAL_SCOPE",
    "FormatError",
    "MappingEntry",
    "MappingStore",
    "build_mapping_store",
    # Naming
    "COMMON_INITIALISMS",
    "IdentifierTransliterator",
    "NamingError",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
