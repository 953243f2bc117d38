"""Translate OpenAPI descriptions into WIT interface definitions."""

from .codegen import (
    GenerationResult,
    GeneratorConfig,
    generate_from_document,
    get_generator,
)

__version__ = "0.1.0"


def generate_wit(document, config=None) -> GenerationResult:
    """
    Translate a parsed OpenAPI document into a WIT package.

    Args:
        document: Parsed OpenAPI description (dict)
        config: Generator configuration dict, GeneratorConfig or config file path

    Returns:
        GenerationResult; ``success`` is False when generation failed
    """
    return generate_from_document(document, config)


__all__ = [
    "GenerationResult",
    "GeneratorConfig",
    "generate_wit",
    "get_generator",
    "__version__",
]
