from __future__ import annotations

import argparse
from typing import Any

from rich import box
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from .codegen import Toolchain
from .codegen.core.config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .codegen.core.generator import GeneratorError, GenerationResult
from .codegen.core.mapping import GLOBAL_SCOPE
from .codegen.core.templates import TemplateError
from .introspect import SchemaReadError, SchemaReader
from .logging_config import get_logger
from .utils import OutputError, resolve_output_dir, write_source_file

logger = get_logger(__name__)

EXPECTED_ERRORS = (
    ConfigError,
    GeneratorError,
    TemplateError,
    SchemaReadError,
    OutputError,
)


def create_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="table2struct",
        description="Generate Go structs from MySQL tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  table2struct -d shop -o ./models
  table2struct -d shop --tag-gorm --null-wrapper sql users orders
  table2struct --map orders.qty:Quantity,type:int32 --query orders.qty
        """.strip(),
    )

    parser.add_argument(
        "tables", nargs="*", help="Tables to generate (default: every table)"
    )

    db_group = parser.add_argument_group("database")
    db_group.add_argument("--host", dest="db_host", help="MySQL host (default: 127.0.0.1)")
    db_group.add_argument("--port", dest="db_port", type=int, help="MySQL port (default: 3306)")
    db_group.add_argument("--user", "-u", dest="db_user", help="MySQL user (default: root)")
    db_group.add_argument("--password", "-p", dest="db_password", help="MySQL password")
    db_group.add_argument("--database", "-d", dest="db_name", help="Database name")

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--output", "-o", dest="output_dir", help="Output directory (default: current directory)"
    )
    output_group.add_argument("--package", dest="package_name", help="Go package name (default: models)")
    output_group.add_argument(
        "--prefix", dest="table_prefix", help="Table name prefix left out of struct names"
    )
    output_group.add_argument(
        "--stdout", action="store_true", help="Print generated code instead of writing files"
    )
    output_group.add_argument(
        "--no-gofmt", dest="use_gofmt", action="store_false", default=None,
        help="Don't pipe generated code through gofmt",
    )
    output_group.add_argument(
        "--no-comments", dest="add_comments", action="store_false", default=None,
        help="Don't copy table and column comments",
    )

    tag_group = parser.add_argument_group("struct tags")
    tag_group.add_argument(
        "--tag-json", dest="tag_json", action=argparse.BooleanOptionalAction, default=None,
        help="Generate json tags (default: on)",
    )
    tag_group.add_argument(
        "--tag-db", dest="tag_db", action="store_true", default=None, help="Generate sqlx db tags"
    )
    tag_group.add_argument(
        "--tag-gorm", dest="tag_gorm", action="store_true", default=None, help="Generate gorm tags"
    )
    tag_group.add_argument(
        "--tag-xorm", dest="tag_xorm", action="store_true", default=None, help="Generate xorm tags"
    )

    type_group = parser.add_argument_group("types")
    type_group.add_argument(
        "--int64", dest="use_int64", action="store_true", default=None,
        help="Map every integer column to int64",
    )
    type_group.add_argument(
        "--unsigned", dest="use_unsigned", action="store_true", default=None,
        help="Map unsigned integer columns to unsigned Go types",
    )
    type_group.add_argument(
        "--null-wrapper", dest="null_wrapper", choices=["none", "sql", "null"],
        help="Wrapper types for nullable columns: database/sql or guregu/null",
    )
    type_group.add_argument(
        "--lenient-types", dest="strict_types", action="store_false", default=None,
        help="Leave unknown SQL types untyped instead of failing",
    )

    mapping_group = parser.add_argument_group("mapping")
    mapping_group.add_argument(
        "--map", dest="mappings", action="append", metavar="RULE",
        help="Override rule [table.]column:Name[,type:gotype] (repeatable)",
    )
    mapping_group.add_argument("--map-file", dest="mapping_file", help="File with one mapping rule per line")
    mapping_group.add_argument(
        "--strict-mapping", dest="strict_mapping", action="store_true", default=None,
        help="Reject unknown mapping attributes",
    )
    mapping_group.add_argument(
        "--query", metavar="[TABLE.]NAME",
        help="Print the identifier generated for NAME and exit",
    )
    mapping_group.add_argument(
        "--query-type", metavar="SQLTYPE", help="With --query, also print the Go type of SQLTYPE"
    )

    misc_group = parser.add_argument_group("misc")
    misc_group.add_argument("--config", help="JSON configuration file")
    misc_group.add_argument("--verbose", "-v", action="store_true", help="Show generation metadata")
    misc_group.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )
    misc_group.add_argument("--log-file", help="Also write log records to this file")

    return parser


CONFIG_ARGS = (
    "db_host",
    "db_port",
    "db_user",
    "db_password",
    "db_name",
    "output_dir",
    "package_name",
    "table_prefix",
    "use_gofmt",
    "add_comments",
    "tag_json",
    "tag_db",
    "tag_gorm",
    "tag_xorm",
    "use_int64",
    "use_unsigned",
    "null_wrapper",
    "strict_types",
    "mappings",
    "mapping_file",
    "strict_mapping",
)


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge defaults, the optional config file and command-line options."""
    overrides = {name: getattr(args, name, None) for name in CONFIG_ARGS}
    return load_config(custom_config=overrides, config_file=getattr(args, "config", None))


class CLIHandler:
    """Handle command-line operations: generation runs and name queries."""

    def __init__(self, console: Console | None = None, reader_factory=SchemaReader) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console used for all output.
            reader_factory: Callable building a schema reader from a config.
        """
        self.console = console or Console()
        self.reader_factory = reader_factory
        logger.debug("CLIHandler initialized")

    def run(self, args: argparse.Namespace) -> int:
        """Run the operation selected by ``args``.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        try:
            config = build_config(args)
            if args.query:
                return self._handle_query(config, args.query, args.query_type)
            return self._handle_generate(config, args)
        except EXPECTED_ERRORS as e:
            self.console.print(f"[red]✗ Error:[/red] {e}")
            logger.error("%s: %s", type(e).__name__, e)
            return 1

    def _handle_query(
        self, config: GeneratorConfig, query: str, query_type: str | None
    ) -> int:
        """Resolve one name without touching the database."""
        table, _, raw_name = query.rpartition(".")
        table = table or GLOBAL_SCOPE

        toolchain = Toolchain(config)
        identifier = toolchain.transliterator.to_identifier(raw_name, table)
        logger.info("Query %s.%s -> %s", table, raw_name, identifier)

        if query_type:
            go_type = toolchain.type_resolver.resolve_type(
                query_type, False, False, table, raw_name
            )
            self.console.print(f"{identifier} {go_type.name}", highlight=False)
        else:
            self.console.print(identifier, highlight=False)
        return 0

    def _handle_generate(self, config: GeneratorConfig, args: Any) -> int:
        """Generate one Go file per requested table."""
        for warning in ConfigManager().validate_config(config):
            self.console.print(f"[yellow]⚠️  {warning}[/yellow]")
            logger.warning(warning)

        toolchain = Toolchain(config)
        output_dir = None if args.stdout else resolve_output_dir(config.output_dir)

        results: list[GenerationResult] = []
        with self.reader_factory(config) as reader:
            tables = list(args.tables) or reader.list_tables()
            if not tables:
                self.console.print("[yellow]No tables found.[/yellow]")
                return 0

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=self.console,
                transient=True,
            ) as progress:
                for table_name in tables:
                    task = progress.add_task(f"[cyan]Generating {table_name}...", total=None)
                    columns = reader.read_columns(table_name)
                    comment = reader.table_comment(table_name) if config.add_comments else ""
                    result = toolchain.generate_table(table_name, columns, comment)
                    progress.remove_task(task)

                    if not result.success:
                        self.console.print(
                            f"[red]✗ {table_name}:[/red] {result.error_message}"
                        )
                        return 1
                    results.append(result)

        for result in results:
            self._output(result, output_dir)
            if args.verbose:
                self._print_metadata(result)
            self._print_warnings(result)

        self.console.print(f"[green]✓[/green] Generated {len(results)} file(s)")
        logger.info("Generated %d file(s)", len(results))
        return 0

    def _output(self, result: GenerationResult, output_dir) -> None:
        if output_dir is None:
            self.console.print(f"[green]// {result.metadata['file_name']}[/green]")
            self.console.print(Syntax(result.code, "go", theme="monokai"))
            return

        path = write_source_file(output_dir, result.metadata["file_name"], result.code)
        self.console.print(f"[green]✓[/green] {result.metadata['table']} → [cyan]{path}[/cyan]")

    def _print_metadata(self, result: GenerationResult) -> None:
        metadata_table = Table(
            title=f"📊 {result.metadata['table']}",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        self.console.print(metadata_table)

    def _print_warnings(self, result: GenerationResult) -> None:
        if not result.warnings:
            return
        self.console.print("[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            self.console.print(f"  [yellow]•[/yellow] {warning}")
            logger.warning(warning)
