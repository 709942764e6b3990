"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, fields, asdict

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


NULL_WRAPPER_MODES = {"none", "sql", "null"}


@dataclass
class GeneratorConfig:
    """Settings for one generation run. Read-only once built."""

    # Database connection
    db_host: str = "127.0.0.1"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = "root"
    db_name: str = ""
    db_charset: str = "utf8mb4"

    # Output settings
    output_dir: Optional[str] = None
    package_name: str = "models"
    table_prefix: str = ""
    use_gofmt: bool = True

    # Tags
    tag_json: bool = True
    tag_db: bool = False
    tag_gorm: bool = False
    tag_xorm: bool = False

    # Type handling
    use_int64: bool = False
    use_unsigned: bool = False
    null_wrapper: str = "none"  # none, sql, null
    strict_types: bool = True

    # Mapping rules
    mappings: List[str] = field(default_factory=list)
    mapping_file: Optional[str] = None
    strict_mapping: bool = False

    # Additional metadata
    add_comments: bool = True

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = asdict(GeneratorConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Build a complete configuration.

        Args:
            custom_config: Overrides applied last (usually from the CLI);
                ``mappings`` are appended rather than replaced
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)

        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)
            logger.debug("Loaded %d settings from %s", len(file_config), config_file)

        # None means "not given"; mapping rules accumulate in load order
        if custom_config:
            for key, value in custom_config.items():
                if value is None:
                    continue
                if key == "mappings":
                    base_config[key] = list(base_config.get(key) or []) + list(value)
                else:
                    base_config[key] = value

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file {path}: {str(e)}"
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to load configuration file {path}: {str(e)}"
            ) from e

        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration file must contain a JSON object: {path}"
            )

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom
            logger.debug("Unrecognized settings kept as custom: %s", sorted(custom_args))

        config_args["mappings"] = list(config_args.get("mappings") or [])

        try:
            config_args["db_port"] = int(config_args.get("db_port", 3306))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid db_port: {config_args.get('db_port')}") from e

        mode = str(config_args.get("null_wrapper") or "none").lower()
        if mode not in NULL_WRAPPER_MODES:
            raise ConfigError(
                f"Invalid null_wrapper: {mode} "
                f"(expected one of {', '.join(sorted(NULL_WRAPPER_MODES))})"
            )
        config_args["null_wrapper"] = mode

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom", {})
        config_dict.update(custom)
        # never persist credentials
        config_dict.pop("db_password", None)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(
                f"Failed to save configuration to {path}: {str(e)}"
            ) from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        from ..languages.go.naming import validate_go_package_name

        warnings = []

        warnings.extend(validate_go_package_name(config.package_name))

        if config.use_int64 and config.use_unsigned:
            warnings.append(
                "use_unsigned has no effect on integer columns while use_int64 is enabled"
            )

        if not any((config.tag_json, config.tag_db, config.tag_gorm, config.tag_xorm)):
            warnings.append("No struct tags enabled")

        if config.output_dir and not Path(config.output_dir).is_dir():
            warnings.append(f"Output directory does not exist: {config.output_dir}")

        return warnings


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return ConfigManager().get_config(custom_config, config_file)
