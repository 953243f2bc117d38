"""
WIT-specific naming utilities.

Holds the WIT keyword list and the shared sanitizer used by the type
translator, the model enrichment pass and the operation rewriter.
"""

from typing import Optional

from ..core.naming import NameSanitizer


# WIT keywords and primitive type names
WIT_RESERVED_WORDS = frozenset(
    {
        "error",
        "expected",
        "list",
        "option",
        "result",
        "record",
        "variant",
        "enum",
        "flags",
        "type",
        "resource",
        "func",
        "static",
        "interface",
        "tuple",
        "u8",
        "u16",
        "u32",
        "u64",
        "s8",
        "s16",
        "s32",
        "s64",
        "float32",
        "float64",
        "bool",
        "string",
        "world",
        "export",
        "import",
        "package",
        "use",
    }
)

RESERVED_WORD_SUFFIX = "_type"


def create_wit_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for WIT."""
    return NameSanitizer(WIT_RESERVED_WORDS, RESERVED_WORD_SUFFIX)


_default_sanitizer = create_wit_sanitizer()


def sanitize_name(name: Optional[str]) -> str:
    """Sanitize a name into a WIT identifier token."""
    return _default_sanitizer.sanitize_name(name)


def to_type_name(name: Optional[str]) -> str:
    """Convert a name into a WIT type identifier, escaping keywords."""
    return _default_sanitizer.to_type_name(name)


def validate_package_name(name: str) -> list[str]:
    """
    Validate a WIT package name (``namespace:name`` or a single identifier).

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    for part in name.split(":"):
        if not part:
            errors.append(f"'{name}' has an empty namespace segment")
            continue
        if sanitize_name(part) != part:
            errors.append(f"'{part}' is not a lowercase kebab-case identifier")
        elif part in WIT_RESERVED_WORDS:
            errors.append(f"'{part}' is a WIT reserved word")

    return errors
