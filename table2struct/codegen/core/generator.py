"""
Base generator interface for all code generation targets.

Defines the contract that language generators implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import TableDescriptor
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, table: TableDescriptor) -> str:
        """
        Generate a complete source file for one table.

        Args:
            table: Fully resolved table description

        Returns:
            Generated code as a string
        """
        pass

    def file_name(self, table: TableDescriptor) -> str:
        """Name of the file holding the code for ``table``."""
        return f"{table.name}{self.file_extension}"

    def validate_table(self, table: TableDescriptor) -> List[str]:
        """
        Validate a table for basic structural issues.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not table.fields:
            warnings.append(f"Table '{table.name}' has no columns")

        seen: Dict[str, str] = {}
        for field in table.fields:
            if not field.type:
                warnings.append(
                    f"Unknown SQL type '{field.raw_type}' in {table.name}.{field.column_name}"
                )
            if field.name in seen:
                warnings.append(
                    f"Columns '{seen[field.name]}' and '{field.column_name}' of "
                    f"{table.name} both map to {field.name}"
                )
            else:
                seen[field.name] = field.column_name

        if not any(field.is_primary_key for field in table.fields):
            warnings.append(f"Table '{table.name}' has no primary key")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, table: TableDescriptor) -> GenerationResult:
    """
    Generate code for one table with error handling.

    Args:
        generator: Code generator instance
        table: Table to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_table(table)
        code = generator.generate(table)
        formatted_code = generator.format_code(code)

        metadata = {
            "language": generator.language_name,
            "table": table.name,
            "struct": table.struct_name,
            "file_name": generator.file_name(table),
            "field_count": len(table.fields),
            "has_time": table.has_time,
            "imports": ", ".join(table.imports) or "-",
        }

        return GenerationResult(formatted_code, warnings, metadata)

    except (GeneratorError, TemplateError) as e:
        logger.error("Code generation for %s failed: %s", table.name, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
