"""
WIT code generator module.

Generates a WIT package with records, enums, variants and functions
from an OpenAPI description.
"""

from .generator import WitGenerator
from .errors import ErrorModel, generate_error_model
from .naming import WIT_RESERVED_WORDS, create_wit_sanitizer
from .types import WitTypeConfig, WitTypeTranslator, WIT_TYPE_MAPPING

__all__ = [
    "WitGenerator",
    "WitTypeConfig",
    "WitTypeTranslator",
    "WIT_TYPE_MAPPING",
    "WIT_RESERVED_WORDS",
    "ErrorModel",
    "generate_error_model",
    "create_wit_sanitizer",
    # Factory functions
    "create_generator",
    "create_strict_generator",
]


def create_generator(**kwargs):
    """
    Create a WIT generator.

    Args:
        **kwargs: Generator options (package_name, project_name, error_model, ...)

    Returns:
        Configured WitGenerator instance
    """
    from ..core.config import load_config

    return WitGenerator(load_config(custom_config=kwargs))


def create_strict_generator(**kwargs):
    """
    Create generator that rejects lossy translations.

    Features:
    - anyOf compositions raise instead of emitting a placeholder
    - Duplicate enum cases and allOf record fields are dropped
    """
    return create_generator(**{**kwargs, "strict_mode": True})
