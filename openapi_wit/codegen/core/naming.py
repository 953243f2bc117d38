"""
Naming utilities for safe code generation.

Handles identifier sanitization, case conversions and reserved word
escaping for the generated interface definitions.
"""

import re
from typing import Dict, FrozenSet, Iterable, Optional
from enum import Enum


EMPTY_NAME = "_empty"

_INVALID_CHARS = re.compile(r"[^a-zA-Z0-9_-]")
_HYPHEN_RUNS = re.compile(r"-{2,}")
_WORD_SEPARATORS = re.compile(r"[-_]+")


class NamingCase(Enum):
    """Different naming case styles."""

    KEBAB_CASE = "kebab"  # user-name
    PASCAL_CASE = "pascal"  # UserName
    CAMEL_CASE = "camel"  # userName
    SNAKE_CASE = "snake"  # user_name


class NameSanitizer:
    """Handles name sanitization and reserved word escaping."""

    def __init__(
        self, reserved_words: Optional[Iterable[str]] = None, escape_suffix: str = "_type"
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Keywords of the target language
            escape_suffix: Suffix appended to names that collide with a keyword
        """
        self.reserved_words: FrozenSet[str] = frozenset(reserved_words or ())
        self.escape_suffix = escape_suffix
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(self, name: Optional[str]) -> str:
        """
        Normalize an arbitrary string into a lowercase, hyphen delimited token.

        Characters outside ``[A-Za-z0-9_-]`` become hyphens, hyphen runs are
        collapsed and stripped from both ends. Missing or empty names map to
        ``_empty``.
        """
        if name is None:
            return EMPTY_NAME

        cached = self._name_cache.get(name)
        if cached is not None:
            return cached

        cleaned = _INVALID_CHARS.sub("-", str(name))
        cleaned = _HYPHEN_RUNS.sub("-", cleaned)
        cleaned = cleaned.strip("-").lower()
        if not cleaned:
            cleaned = EMPTY_NAME

        self._name_cache[name] = cleaned
        return cleaned

    def to_type_name(self, name: Optional[str]) -> str:
        """
        Convert a name into a declared type identifier.

        Reserved words are escaped with the configured suffix, everything
        else is camelized (``pet-store`` -> ``PetStore``).
        """
        if name is None:
            return EMPTY_NAME

        sanitized = self.sanitize_name(name)
        if sanitized == EMPTY_NAME:
            return EMPTY_NAME
        if self.is_reserved(sanitized):
            return self.escape_reserved_word(sanitized)
        return camelize(sanitized)

    def is_reserved(self, name: str) -> bool:
        """Check whether a sanitized token is a keyword."""
        return name in self.reserved_words

    def escape_reserved_word(self, name: str) -> str:
        """Append the escape suffix to a reserved word."""
        return f"{name}{self.escape_suffix}"

    def convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.KEBAB_CASE:
            return self.sanitize_name(to_snake_case(name).replace("_", "-"))
        elif target_case == NamingCase.PASCAL_CASE:
            return camelize(to_snake_case(name))
        elif target_case == NamingCase.CAMEL_CASE:
            pascal = camelize(to_snake_case(name))
            return pascal[:1].lower() + pascal[1:]
        elif target_case == NamingCase.SNAKE_CASE:
            return to_snake_case(name)
        else:
            return name


def camelize(name: str) -> str:
    """Upper camel case: word boundaries are hyphens and underscores."""
    parts = [part for part in _WORD_SEPARATORS.split(name) if part]
    if not parts:
        return name
    return "".join(part[:1].upper() + part[1:] for part in parts)


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    name = re.sub(r"[-\s]+", "_", str(name))
    # Insert underscore before uppercase letters
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    name = re.sub(r"_+", "_", name.lower())
    return name.strip("_")
