"""
Go code generator module.

Generates Go structs with struct tags from MySQL table descriptions.
"""

from .generator import GoGenerator
from .naming import GO_RESERVED_WORDS, validate_go_package_name
from .types import (
    GoType,
    GoTypeConfig,
    GoTypeResolver,
    NullWrapper,
    UnknownTypeError,
    normalize_sql_type,
)

__all__ = [
    "GoGenerator",
    "GO_RESERVED_WORDS",
    "validate_go_package_name",
    "GoType",
    "GoTypeConfig",
    "GoTypeResolver",
    "NullWrapper",
    "UnknownTypeError",
    "normalize_sql_type",
]
