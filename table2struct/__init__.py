"""Generate Go structs from MySQL table schemas."""

from .codegen import (
    ColumnDescriptor,
    FormatError,
    GeneratorConfig,
    IdentifierTransliterator,
    MappingStore,
    NamingError,
    Toolchain,
    UnknownTypeError,
    __version__,
    load_config,
    quick_generate,
)

__all__ = [
    "ColumnDescriptor",
    "FormatError",
    "GeneratorConfig",
    "IdentifierTransliterator",
    "MappingStore",
    "NamingError",
    "Toolchain",
    "UnknownTypeError",
    "__version__",
    "load_config",
    "quick_generate",
]
