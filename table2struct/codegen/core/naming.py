"""
Naming utilities for code generation.

Turns database snake_case names into exported identifiers, with
initialism normalization and user overrides from the mapping store.
"""

from typing import List, Optional, Tuple

from ...logging_config import get_logger
from .generator import GeneratorError
from .mapping import GLOBAL_SCOPE, MappingStore

logger = get_logger(__name__)


class NamingError(GeneratorError):
    """Raised when a name cannot be turned into an identifier."""

    pass


COMMON_INITIALISMS = [
    "API",
    "ASCII",
    "CPU",
    "CSS",
    "DNS",
    "EOF",
    "GUID",
    "HTML",
    "HTTP",
    "HTTPS",
    "ID",
    "IP",
    "JSON",
    "LHS",
    "QPS",
    "RAM",
    "RHS",
    "RPC",
    "SLA",
    "SMTP",
    "SSH",
    "TLS",
    "TTL",
    "UI",
    "UID",
    "UUID",
    "URI",
    "URL",
    "UTF8",
    "VM",
    "XML",
    "XSRF",
    "XSS",
]

SEPARATORS = ("_", "-")


class InitialismReplacer:
    """
    Single-pass replacer for initialisms.

    At each position the first initialism in list order whose lowercase
    spelling matches wins; matches never overlap. There is no word-boundary
    check, so ``video`` becomes ``vIDeo``.
    """

    def __init__(self, initialisms: List[str]):
        self._pairs: List[Tuple[str, str]] = [
            (initialism.lower(), initialism) for initialism in initialisms
        ]

    def replace(self, value: str) -> str:
        out = []
        i = 0
        while i < len(value):
            for old, new in self._pairs:
                if value.startswith(old, i):
                    out.append(new)
                    i += len(old)
                    break
            else:
                out.append(value[i])
                i += 1
        return "".join(out)


def _is_ascii_letter(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


class IdentifierTransliterator:
    """Converts raw column and table names into exported Go identifiers."""

    def __init__(
        self,
        mapping_store: Optional[MappingStore] = None,
        initialisms: Optional[List[str]] = None,
    ):
        """
        Initialize the transliterator.

        Args:
            mapping_store: Overrides consulted before the algorithm runs
            initialisms: Replacement list, defaults to COMMON_INITIALISMS
        """
        self.mapping_store = (
            mapping_store if mapping_store is not None else MappingStore()
        )
        self._replacer = InitialismReplacer(initialisms or COMMON_INITIALISMS)

    def to_identifier(
        self, raw_name: str, table: str = GLOBAL_SCOPE, use_mapping: bool = True
    ) -> str:
        """
        Convert a raw name to an exported identifier.

        Args:
            raw_name: Column or table name as stored in the database
            table: Mapping scope, the owning table name or "global"
            use_mapping: Consult the mapping store first (False for table names)

        Returns:
            Identifier such as ``UserID`` for ``user_id``

        Raises:
            NamingError: If the name holds no ASCII letter
        """
        if use_mapping:
            entry = self.mapping_store.lookup(table, raw_name)
            if entry is not None and entry.identifier_name:
                return entry.identifier_name

        if len(raw_name) == 1:
            return raw_name.upper()

        start = next(
            (i for i, char in enumerate(raw_name) if _is_ascii_letter(char)), None
        )
        if start is None:
            raise NamingError(f"Cannot derive an identifier from {raw_name!r}")

        value = self._replacer.replace(raw_name[start:])
        return self._build(value)

    @staticmethod
    def _build(value: str) -> str:
        out = [value[0].upper()]
        for i in range(1, len(value)):
            char = value[i]
            if char in SEPARATORS:
                continue
            if value[i - 1] in SEPARATORS:
                out.append(char.upper())
            else:
                out.append(char)
        return "".join(out)
