"""
Go code generator implementation.

Renders one Go source file per table: the struct with its tags and
a TableName accessor.
"""

import shutil
import subprocess
from typing import Dict, List, Optional, Any
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.schema import FieldDescriptor, TableDescriptor
from .naming import is_valid_go_identifier
from .types import PACKAGE_IMPORTS, package_qualifier

logger = get_logger(__name__)


class GoGenerator(CodeGenerator):
    """Code generator for Go structs with json/db/gorm/xorm tags."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Go generator with configuration."""
        super().__init__(config)
        self._gofmt_path = self._find_gofmt()

    def get_template_directory(self) -> Optional[Path]:
        """Return the Go templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    def _find_gofmt(self) -> Optional[str]:
        if not self.config.use_gofmt:
            return None
        path = shutil.which("gofmt")
        if path is None:
            logger.warning("gofmt not found on PATH, output will not be gofmt-formatted")
        return path

    def generate(self, table: TableDescriptor) -> str:
        """Generate the Go file for one table using templates."""
        context = {
            "package_name": self.config.package_name,
            "imports": list(table.imports),
            "add_comments": self.config.add_comments,
            "struct_name": table.struct_name,
            "table_name": table.name,
            "comment": table.comment,
            "fields": [self._field_context(field) for field in table.fields],
        }

        if not self.template_exists("file.go.j2"):
            raise GeneratorError("file.go.j2 template not found")

        return self.render_template("file.go.j2", context)

    def _field_context(self, field: FieldDescriptor) -> Dict[str, Any]:
        return {
            "name": field.name,
            "type": field.type,
            "tag": " ".join(self.build_tags(field)),
            "comment": field.comment if self.config.add_comments else "",
        }

    def build_tags(self, field: FieldDescriptor) -> List[str]:
        """Struct tags for ``field`` in json, db, gorm, xorm order."""
        column = _tag_value(field.column_name)
        raw_type = _tag_value(field.raw_type)
        tags = []

        if self.config.tag_json:
            tags.append(f'json:"{column}"')

        if self.config.tag_db:
            tags.append(f'db:"{column}"')

        if self.config.tag_gorm:
            options = [f"column:{column}", f"type:{raw_type}"]
            if field.is_primary_key:
                options.append("primaryKey")
            if field.is_auto_increment:
                options.append("autoIncrement")
            if not field.nullable:
                options.append("not null")
            tags.append(f'gorm:"{";".join(options)}"')

        if self.config.tag_xorm:
            options = [f"'{column}'", raw_type]
            if field.is_primary_key:
                options.append("pk")
            if field.is_auto_increment:
                options.append("autoincr")
            if not field.nullable:
                options.append("notnull")
            tags.append(f'xorm:"{" ".join(options)}"')

        return tags

    def validate_table(self, table: TableDescriptor) -> List[str]:
        """Validate a table for Go generation."""
        warnings = super().validate_table(table)

        if not is_valid_go_identifier(table.struct_name):
            warnings.append(
                f"Struct name {table.struct_name!r} of {table.name} is not an exported Go identifier"
            )

        for field in table.fields:
            if not is_valid_go_identifier(field.name):
                warnings.append(
                    f"Field name {field.name!r} of {table.name}.{field.column_name} "
                    f"is not an exported Go identifier"
                )
            package = package_qualifier(field.type)
            if package and package not in PACKAGE_IMPORTS:
                warnings.append(
                    f"Type {field.type} of {table.name}.{field.column_name} needs "
                    f"package {package!r}, add its import by hand"
                )

        return warnings

    def format_code(self, code: str) -> str:
        """Run gofmt when available, otherwise apply basic whitespace cleanup."""
        code = super().format_code(code)
        if not self._gofmt_path:
            return code

        try:
            completed = subprocess.run(
                [self._gofmt_path],
                input=code,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise GeneratorError(f"gofmt failed: {e.stderr.strip()}") from e
        except OSError as e:
            raise GeneratorError(f"Failed to run {self._gofmt_path}: {e}") from e

        return completed.stdout


def _tag_value(value: str) -> str:
    # tag values are read back with strconv.Unquote
    return value.replace("\\", "\\\\").replace('"', '\\"')
