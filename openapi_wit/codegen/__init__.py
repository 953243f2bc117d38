"""
OpenAPI to WIT Code Generation Module

Translates OpenAPI schemas and operations into WIT declarations.
"""

from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.schema import SchemaNode, SchemaKind, CompositionKind
from .core.openapi import convert_schema, parse_document
from .core.config import GeneratorConfig, ConfigManager, load_config
from .wit.generator import WitGenerator, create_wit_generator


def get_generator(config=None) -> WitGenerator:
    """
    Get a configured WIT generator.

    Args:
        config: Configuration dict, GeneratorConfig, or path to a JSON config file

    Returns:
        WitGenerator instance
    """
    if isinstance(config, GeneratorConfig):
        return WitGenerator(config)
    if isinstance(config, str):
        return WitGenerator(load_config(config_file=config))
    return create_wit_generator(config)


def generate_from_document(document, config=None) -> GenerationResult:
    """
    Generate a WIT package from a parsed OpenAPI document.

    Args:
        document: Parsed OpenAPI description (dict)
        config: Generator configuration dict, GeneratorConfig or path

    Returns:
        GenerationResult with generated code
    """
    return generate_code(get_generator(config), document)


# Export main interfaces
__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "SchemaNode",
    "SchemaKind",
    "CompositionKind",
    "GeneratorConfig",
    "ConfigManager",
    "WitGenerator",
    "convert_schema",
    "parse_document",
    "load_config",
    "generate_code",
    "generate_from_document",
    "get_generator",
]
