"""
WIT code generator implementation.

Generates a WIT package (one interface with a record, enum or variant per
schema and a function per operation) from an OpenAPI description.
"""

import re
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple
from pathlib import Path

from ...logging_config import get_logger
from ..core.config import GeneratorConfig, get_config_manager
from ..core.generator import CodeGenerator, GeneratorError
from ..core.model import CodegenModel, CodegenOperation, CodegenParameter
from ..core.naming import NameSanitizer, NamingCase
from ..core.openapi import ApiDocument, parse_document
from ..core.schema import CompositionKind, SchemaKind, SchemaNode
from .errors import ErrorModel, generate_error_model
from .models import ModelEnricher
from .naming import create_wit_sanitizer
from .operations import OperationRewriter
from .types import ANY_OF_PLACEHOLDER, WitTypeConfig, WitTypeTranslator

logger = get_logger(__name__)

# Named declarations produced by the translator
_NAMED_DECLARATION = re.compile(r"^(enum|variant|record) ([A-Za-z0-9_-]+) \{")
_EMBEDDED_DECLARATION = re.compile(
    r"(?<![A-Za-z0-9_-])(enum|variant|record) ([A-Za-z0-9_-]+) \{"
)
_ANONYMOUS_RECORD = "record {"


class WitGenerator(CodeGenerator):
    """Code generator for WIT interface definitions."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize WIT generator with configuration."""
        super().__init__(config)

        self.sanitizer = create_wit_sanitizer()
        self.indent = " " * self.config.indent_size

        # Initialize type system
        self.type_config = WitTypeConfig(
            strict_mode=self.config.strict_mode,
            detect_cycles=self.config.detect_cycles,
            indent=self.indent,
        )
        self.translator = WitTypeTranslator(self.type_config, self.sanitizer)
        self.enricher = ModelEnricher(self.translator)

        self.additional_properties: Dict[str, Any] = {}
        self.error_model: ErrorModel = self.process_options()
        self.rewriter = OperationRewriter(self.error_model, self.sanitizer)

    def process_options(self) -> ErrorModel:
        """Resolve template-wide options and synthesize the error model once."""
        error_model = generate_error_model(self.config.error_model)
        self.additional_properties.update(
            {
                "packageName": self.config.package_name,
                "projectName": self.config.project_name,
                "errorType": error_model.declaration,
            }
        )
        return error_model

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "wit"

    @property
    def file_extension(self) -> str:
        """Return WIT file extension."""
        return ".wit"

    def get_template_directory(self) -> Optional[Path]:
        """Return the WIT templates directory."""
        return Path(__file__).parent / "templates"

    def get_name_sanitizer(self) -> NameSanitizer:
        return create_wit_sanitizer()

    # Model and operation processing

    def get_type_declaration(self, schema: Optional[SchemaNode]) -> str:
        """Translate a schema node into a WIT type expression."""
        return self.translator.translate(schema)

    def from_model(self, name: str, schema: SchemaNode) -> CodegenModel:
        """Build the enriched model for a named schema."""
        return self.enricher.from_model(name, schema)

    def post_process_operations(
        self, operations: List[CodegenOperation]
    ) -> List[CodegenOperation]:
        """Rewrite operations into WIT signatures."""
        return self.rewriter.post_process_operations(operations)

    def parse(self, document: Dict[str, Any]) -> ApiDocument:
        """Extract schemas and operations from a parsed API description."""
        return parse_document(document, self.get_type_declaration, self.sanitizer)

    # Generation

    def generate(self, document: Dict[str, Any]) -> str:
        """Generate the WIT package for an API description."""
        api = self.parse(document)
        context = self.build_context(api)
        return self.render_template("package.wit.j2", context)

    def generate_supporting_files(self, document: Dict[str, Any]) -> Dict[str, str]:
        """Render the README shipped next to the WIT file."""
        if not self.config.generate_readme:
            return {}

        api = self.parse(document)
        models = [self.from_model(name, schema) for name, schema in api.schemas.items()]
        operations = self.post_process_operations(api.operations)
        context = {
            **self._base_context(api),
            "wit_file": self.output_file_name(),
            "models": models,
            "operations": operations,
        }
        return {"README.md": self.render_template("README.md.j2", context)}

    def build_context(self, api: ApiDocument) -> Dict[str, Any]:
        """Build the template context for the WIT package file."""
        declarations = []
        seen_declarations = set()

        def add_declaration(name: str, text: str, description: Optional[str] = None):
            if text in seen_declarations:
                return
            seen_declarations.add(text)
            declarations.append({"name": name, "text": text, "description": description})

        for name, schema in api.schemas.items():
            model = self.from_model(name, schema)
            text, inline = self.declare_model(model)
            for inline_name, inline_text in inline:
                add_declaration(inline_name, inline_text)
            add_declaration(model.class_name, text, model.description)

        functions = []
        for operation in self.post_process_operations(api.operations):
            signature, inline = self.declare_function(operation)
            for inline_name, inline_text in inline:
                add_declaration(inline_name, inline_text)
            functions.append(
                {
                    "name": self.sanitizer.convert_case(
                        operation.operation_id, NamingCase.KEBAB_CASE
                    ),
                    "signature": signature,
                    "summary": operation.summary,
                    "method": operation.http_method,
                    "path": operation.path,
                }
            )

        return {
            **self._base_context(api),
            "declarations": declarations,
            "functions": functions,
        }

    def _base_context(self, api: ApiDocument) -> Dict[str, Any]:
        return {
            "title": api.title,
            "version": api.version,
            "description": api.description,
            "package_name": self.config.package_name,
            "package_version": self.config.package_version,
            "project_name": self.config.project_name,
            "interface_name": self.config.interface_name,
            "error_type": self.additional_properties["errorType"],
            "add_comments": self.config.add_comments,
        }

    def declare_model(self, model: CodegenModel) -> Tuple[str, List[Tuple[str, str]]]:
        """
        Produce the top-level declaration of a model.

        Returns:
            The declaration and any named declarations hoisted out of its fields
        """
        declaration = model.declaration

        if declaration == ANY_OF_PLACEHOLDER:
            return self._record_declaration(model)

        if declaration.startswith(_ANONYMOUS_RECORD):
            named = f"record {model.class_name} {{" + declaration[len(_ANONYMOUS_RECORD):]
            return self._hoist_body(named)

        if _NAMED_DECLARATION.match(declaration):
            return self._hoist_body(declaration)

        alias, inline = self._hoist(declaration)
        return f"type {model.class_name} = {alias};", inline

    def _record_declaration(
        self, model: CodegenModel
    ) -> Tuple[str, List[Tuple[str, str]]]:
        inline = []
        lines = [f"record {model.class_name} {{"]

        for var in model.vars:
            field_type, hoisted = self._hoist(var.data_type)
            inline.extend(hoisted)
            if not var.required or var.vendor_extensions.get("x-is-nullable"):
                field_type = f"option<{field_type}>"
            field_type = field_type.replace("\n", f"\n{self.indent}")
            lines.append(
                f"{self.indent}{self.sanitizer.sanitize_name(var.base_name)}: {field_type},"
            )

        lines.append("}")
        return "\n".join(lines), inline

    def declare_function(
        self, operation: CodegenOperation
    ) -> Tuple[str, List[Tuple[str, str]]]:
        """Render the parameter list and result of a rewritten operation."""
        inline = []
        params = []

        for param in operation.all_params:
            param_type = param.data_type
            if param.is_enum:
                inline.append(
                    (param.data_type, self._parameter_enum_declaration(param))
                )
            else:
                param_type, hoisted = self._hoist(param_type)
                inline.extend(hoisted)
            if not param.required:
                param_type = f"option<{param_type}>"
            params.append(f"{param.param_name}: {param_type}")

        signature = (
            f"func({', '.join(params)}) -> {operation.vendor_extensions['x-wit-return']}"
        )
        return signature, inline

    def _parameter_enum_declaration(self, param: CodegenParameter) -> str:
        # data_type already holds the rewritten type name
        return self.translator.enum_declaration(param.data_type, param.allowable_values)

    def _hoist(self, type_expression: str) -> Tuple[str, List[Tuple[str, str]]]:
        """
        Replace named declarations anywhere in a type expression by their names.

        Returns:
            The rewritten expression and the hoisted (name, declaration) pairs,
            innermost first
        """
        hoisted: List[Tuple[str, str]] = []
        match = _EMBEDDED_DECLARATION.search(type_expression)
        while match is not None:
            name = match.group(2)
            end = _closing_brace(type_expression, match.end() - 1)
            declaration, inner = self._hoist_body(type_expression[match.start():end + 1])
            hoisted.extend(inner)
            hoisted.append((name, declaration))
            type_expression = (
                type_expression[:match.start()] + name + type_expression[end + 1:]
            )
            match = _EMBEDDED_DECLARATION.search(
                type_expression, match.start() + len(name)
            )
        return type_expression, hoisted

    def _hoist_body(self, declaration: str) -> Tuple[str, List[Tuple[str, str]]]:
        """Hoist declarations nested in the body of a declaration, keeping its header."""
        brace = declaration.index("{")
        body, inner = self._hoist(declaration[brace + 1:])
        return declaration[:brace + 1] + body, inner

    # Validation

    def validate_document(self, document: Dict[str, Any]) -> List[str]:
        """Report constructs that are emitted with degradations."""
        warnings = list(get_config_manager().validate_config(self.config))
        api = self.parse(document)

        for name, schema in api.schemas.items():
            sanitized = self.sanitizer.sanitize_name(name)
            if self.sanitizer.is_reserved(sanitized):
                warnings.append(
                    f"Schema '{name}' is a WIT keyword and is declared as "
                    f"'{self.sanitizer.to_type_name(name)}'"
                )

            for node in schema.walk():
                warnings.extend(self._node_warnings(name, node))

        return warnings

    def _node_warnings(self, model_name: str, node: SchemaNode) -> List[str]:
        warnings = []
        label = node.name or model_name

        if node.kind == SchemaKind.COMPOSED:
            if node.composition == CompositionKind.ANY_OF or not node.members:
                warnings.append(
                    f"Schema '{label}' uses "
                    f"{node.composition.value if node.composition else 'composition'}"
                    f" without oneOf/allOf members and is emitted as '{ANY_OF_PLACEHOLDER}'"
                )
            elif node.composition == CompositionKind.ALL_OF:
                field_names = [
                    field_name
                    for field_name, _ in self.translator.flattened_fields(node)
                ]
                for field_name in _duplicates(field_names):
                    warnings.append(
                        f"Schema '{label}' declares field '{field_name}' more than once"
                    )

        if node.is_enum:
            arms = [self.sanitizer.sanitize_name(str(value)) for value in node.enum]
            for arm in _duplicates(arms):
                warnings.append(f"Enum '{label}' declares case '{arm}' more than once")

        return warnings


def _closing_brace(text: str, opening: int) -> int:
    depth = 0
    for index in range(opening, len(text)):
        if text[index] == "{":
            depth += 1
        elif text[index] == "}":
            depth -= 1
            if depth == 0:
                return index
    raise GeneratorError(f"Unbalanced braces in declaration: {text!r}")


def _duplicates(values: List[str]) -> List[str]:
    counts = Counter(values)
    return [value for value, count in counts.items() if count > 1]


def create_wit_generator(config: Optional[Dict[str, Any]] = None) -> WitGenerator:
    """Create a WIT generator from a configuration dictionary."""
    return WitGenerator(get_config_manager().get_config(custom_config=config))
