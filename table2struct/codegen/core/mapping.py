"""
User-declared name and type overrides.

A mapping rule reads ``origin:destination`` where origin is ``raw_name``
(global scope) or ``table.raw_name``, and destination is ``Name`` or
``Name,type:gotype``.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from ...logging_config import get_logger
from .config import ConfigError

logger = get_logger(__name__)

GLOBAL_SCOPE = "global"


class FormatError(ConfigError):
    """Raised for a malformed mapping rule."""

    pass


@dataclass(frozen=True)
class MappingEntry:
    """Override for one raw name within one scope."""

    identifier_name: str
    target_type: Optional[str] = None


class MappingStore:
    """Scoped override table consulted by the transliterator and type resolver."""

    KNOWN_ATTRIBUTES = {"type"}

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Reject unknown destination attributes instead of ignoring them
        """
        self.strict = strict
        self._scopes: Dict[str, Dict[str, MappingEntry]] = {GLOBAL_SCOPE: {}}

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._scopes.values())

    def load(self, rules: Iterable[str]) -> int:
        """
        Parse and register mapping rules in order.

        Args:
            rules: Raw mapping rule strings; blank entries are skipped

        Returns:
            Number of rules registered

        Raises:
            FormatError: If any rule is malformed
        """
        count = 0
        for rule in rules:
            if not rule or not rule.strip():
                continue
            self.add(rule.strip())
            count += 1
        return count

    def load_file(self, path: Union[str, Path]) -> int:
        """
        Load rules from a line-oriented mapping file.

        Blank lines and lines starting with ``#`` are ignored.
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigError(f"Mapping file not found: {path}")

        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise ConfigError(f"Failed to read mapping file {path}: {e}") from e

        count = 0
        for lineno, line in enumerate(lines, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                self.add(line)
            except FormatError as e:
                raise FormatError(f"{path}:{lineno}: {e}") from e
            count += 1

        logger.info("Loaded %d mapping rules from %s", count, path)
        return count

    def add(self, rule: str) -> None:
        """Parse a single rule and register it, replacing any earlier entry."""
        scope, raw_name, entry = self.parse(rule)
        scope_entries = self._scopes.setdefault(scope, {})
        if raw_name in scope_entries:
            logger.debug("Mapping %s.%s overridden by %r", scope, raw_name, rule)
        scope_entries[raw_name] = entry

    def parse(self, rule: str):
        """
        Split a rule into ``(scope, raw_name, MappingEntry)``.

        Raises:
            FormatError: If the rule is malformed
        """
        sep = rule.find(":")
        if sep == -1:
            raise FormatError(f"Missing ':' separator in mapping {rule!r}")
        if sep == 0:
            raise FormatError(f"Empty origin in mapping {rule!r}")
        if sep >= len(rule) - 2:
            raise FormatError(f"Destination too short in mapping {rule!r}")

        origin, destination = rule[:sep], rule[sep + 1 :]

        if "." in origin:
            parts = origin.split(".")
            if len(parts) != 2 or not all(parts):
                raise FormatError(
                    f"Origin must be 'name' or 'table.name', got {origin!r}"
                )
            scope, raw_name = parts
        else:
            scope, raw_name = GLOBAL_SCOPE, origin

        name, *attributes = destination.split(",")
        target_type = None

        for attribute in attributes:
            key, colon, value = attribute.partition(":")
            if not colon:
                raise FormatError(
                    f"Attribute {attribute!r} must read 'key:value' in mapping {rule!r}"
                )
            key = key.strip()
            if key == "type":
                target_type = value.strip() or None
            elif self.strict:
                raise FormatError(f"Unknown attribute {key!r} in mapping {rule!r}")
            else:
                logger.debug("Ignoring unknown attribute %r in mapping %r", key, rule)

        return scope, raw_name, MappingEntry(name.strip(), target_type)

    def lookup(self, scope: str, raw_name: str) -> Optional[MappingEntry]:
        """Return the entry for ``raw_name`` in ``scope``, falling back to global."""
        entry = self._scopes.get(scope, {}).get(raw_name)
        if entry is None:
            entry = self._scopes[GLOBAL_SCOPE].get(raw_name)
        return entry

    def scopes(self):
        """Names of every scope holding at least one entry."""
        return sorted(scope for scope, entries in self._scopes.items() if entries)


def build_mapping_store(config) -> MappingStore:
    """Create a store from a GeneratorConfig: mapping file first, then flags."""
    store = MappingStore(strict=config.strict_mapping)
    if config.mapping_file:
        store.load_file(config.mapping_file)
    store.load(config.mappings)
    logger.debug("Mapping store holds %d rules", len(store))
    return store
