"""Utility functions for writing generated files.

This module provides helpers for validating the output directory and
saving generated source with proper error handling.
"""

from pathlib import Path

from .logging_config import get_logger

logger = get_logger(__name__)


class OutputError(Exception):
    """Custom exception for output writing errors."""

    pass


def resolve_output_dir(output_dir: str | Path | None) -> Path:
    """Validate and return the directory receiving generated files.

    Args:
        output_dir: Target directory; the current directory when empty.

    Returns:
        Absolute path of the directory.

    Raises:
        OutputError: If the path does not exist or is not a directory.
    """
    path = Path(output_dir) if output_dir else Path.cwd()
    path = path.expanduser().resolve()

    if not path.exists():
        logger.error(f"Output directory not found: {path}")
        raise OutputError(f"Output directory not found: {path}")

    if not path.is_dir():
        logger.error(f"Output path is not a directory: {path}")
        raise OutputError(f"Output path is not a directory: {path}")

    return path


def write_source_file(output_dir: Path, file_name: str, code: str) -> Path:
    """Write generated code to ``output_dir / file_name``.

    Args:
        output_dir: Existing target directory.
        file_name: Name of the file to create or overwrite.
        code: File content.

    Returns:
        Path of the written file.

    Raises:
        OutputError: If the file cannot be written.
    """
    path = output_dir / file_name
    if path.exists():
        logger.debug(f"Overwriting existing file {path}")

    try:
        path.write_text(code, encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing file {path}: {e}", exc_info=True)
        raise OutputError(f"Error writing file {path}: {e}") from e

    logger.info(f"Wrote {path}")
    return path
