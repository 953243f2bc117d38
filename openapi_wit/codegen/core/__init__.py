"""
Core code generation components.

Provides base classes, the OpenAPI front end and utilities used by the
WIT generator.
"""

from .generator import (
    CodeGenerator,
    GeneratorError,
    TranslationError,
    CyclicSchemaError,
    UnsupportedCompositionError,
    GenerationResult,
    generate_code,
)
from .schema import SchemaNode, SchemaKind, CompositionKind
from .model import CodegenModel, CodegenOperation, CodegenParameter, CodegenProperty
from .openapi import ApiDocument, convert_schema, parse_document
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "TranslationError",
    "CyclicSchemaError",
    "UnsupportedCompositionError",
    "GenerationResult",
    "generate_code",
    # Schema system - core data structures
    "SchemaNode",
    "SchemaKind",
    "CompositionKind",
    # Generated model representations
    "CodegenModel",
    "CodegenOperation",
    "CodegenParameter",
    "CodegenProperty",
    # OpenAPI front end
    "ApiDocument",
    "convert_schema",
    "parse_document",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
